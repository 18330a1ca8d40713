"""
Storefronts Handler - Lambda function for storefront management.

Creating a storefront and listing one's own storefronts require a seller's
bearer token; reading storefronts is public.
"""

from typing import Any, Dict

from aws_lambda_powertools.event_handler import Response
from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from marketplace.handlers.utils.errors import create_error_context
from marketplace.handlers.utils.observability import logger, metrics, tracer
from marketplace.handlers.utils.rest_api_resolver import (
    STOREFRONTS_PATH,
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
from marketplace.models.input import CreateStorefrontRequest

app = build_resolver()


def _services() -> MarketplaceServices:
    return app.context['services']


@app.post(STOREFRONTS_PATH)
@tracer.capture_method
@handle_service_errors
def create_storefront() -> Response:
    context = create_error_context(request_id=request_id(app), operation="create_storefront")
    services = _services()
    claims = services.authenticator.authenticate(authorization_header(app), context)
    context.user_id = claims.user_id

    request = parse_body(app, CreateStorefrontRequest, context)
    output = services.storefronts.create_storefront(claims, request, context)
    return json_response(201, output)


@app.get(f'{STOREFRONTS_PATH}/my')
@tracer.capture_method
@handle_service_errors
def list_my_storefronts() -> Response:
    context = create_error_context(request_id=request_id(app), operation="list_my_storefronts")
    services = _services()
    claims = services.authenticator.authenticate(authorization_header(app), context)
    context.user_id = claims.user_id

    output = services.storefronts.list_owned(claims, context)
    return json_response(200, output)


@app.get(f'{STOREFRONTS_PATH}/<store_id>')
@tracer.capture_method
@handle_service_errors
def get_storefront(store_id: str) -> Response:
    context = create_error_context(request_id=request_id(app), operation="get_storefront", resource_id=store_id)
    tracer.put_annotation("store_id", store_id)

    output = _services().storefronts.get_storefront(store_id, context)
    return json_response(200, output)


@app.get(STOREFRONTS_PATH)
@tracer.capture_method
@handle_service_errors
def list_storefronts() -> Response:
    context = create_error_context(request_id=request_id(app), operation="list_storefronts")

    output = _services().storefronts.list_all(context)
    return json_response(200, output)


@tracer.capture_lambda_handler
@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
@metrics.log_metrics(capture_cold_start_metric=True)
def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """Lambda entry point for the storefronts API."""
    metrics.add_metric(name="StorefrontsRequest", unit=MetricUnit.Count, value=1)
    app.append_context(services=get_services())
    return resolve_request(app, event, context)
