"""
Reviews Handler - Lambda function for item reviews.

Listing is public and returns the average rating alongside the reviews.
Posting a review requires a bearer token and is limited to one per account and
item.
"""

from typing import Any, Dict

from aws_lambda_powertools.event_handler import Response
from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from marketplace.handlers.utils.errors import ValidationError, create_error_context
from marketplace.handlers.utils.observability import logger, metrics, tracer
from marketplace.handlers.utils.rest_api_resolver import (
    REVIEWS_PATH,
    authorization_header,
    build_resolver,
    handle_service_errors,
    json_response,
    parse_body,
    request_id,
    resolve_request,
)
from marketplace.handlers.utils.services import get_services
from marketplace.logic import MarketplaceServices
from marketplace.models.input import CreateReviewRequest

app = build_resolver()


def _services() -> MarketplaceServices:
    return app.context['services']


@app.get(REVIEWS_PATH)
@tracer.capture_method
@handle_service_errors
def list_reviews() -> Response:
    item_id = app.current_event.get_query_string_value(name='itemId')
    context = create_error_context(request_id=request_id(app), operation="list_reviews", resource_id=item_id)
    if not item_id:
        raise ValidationError(message="itemId query parameter is required", context=context)

    tracer.put_annotation("item_id", item_id)
    output = _services().reviews.list_reviews(item_id, context)
    return json_response(200, output)


@app.post(REVIEWS_PATH)
@tracer.capture_method
@handle_service_errors
def create_review() -> Response:
    context = create_error_context(request_id=request_id(app), operation="create_review")
    services = _services()
    claims = services.authenticator.authenticate(authorization_header(app), context)
    context.user_id = claims.user_id

    request = parse_body(app, CreateReviewRequest, context)
    context.resource_id = request.item_id
    output = services.reviews.create_review(claims, request, context)
    return json_response(201, output)


@tracer.capture_lambda_handler
@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
@metrics.log_metrics(capture_cold_start_metric=True)
def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """Lambda entry point for the reviews API."""
    metrics.add_metric(name="ReviewsRequest", unit=MetricUnit.Count, value=1)
    app.append_context(services=get_services())
    return resolve_request(app, event, context)
