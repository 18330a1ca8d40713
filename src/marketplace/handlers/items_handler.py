"""
Items Handler - Lambda function for catalog items.
"""

from typing import Any, Dict

from aws_lambda_powertools.event_handler import Response
from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from marketplace.handlers.utils.errors import ValidationError, create_error_context
from marketplace.handlers.utils.observability import logger, metrics, tracer
from marketplace.handlers.utils.rest_api_resolver import (
    ITEMS_PATH,
    build_resolver,
    handle_service_errors,
    json_response,
    parse_body,
    request_id,
    resolve_request,
)
from marketplace.handlers.utils.services import get_services
from marketplace.models.input import AddItemRequest

app = build_resolver()


@app.post(ITEMS_PATH)
@tracer.capture_method
@handle_service_errors
def add_item() -> Response:
    """Add an item to the storefront named by ``storeId`` in the body."""
    context = create_error_context(request_id=request_id(app), operation="add_item")
    request = parse_body(app, AddItemRequest, context)
    tracer.put_annotation("store_id", request.store_id)

    output = app.context['services'].catalog.add_item(request, context)
    return json_response(201, output)


@app.get(ITEMS_PATH)
@tracer.capture_method
@handle_service_errors
def list_items() -> Response:
    """List the items of the storefront given by the ``storeId`` query parameter."""
    store_id = app.current_event.get_query_string_value(name='storeId')
    context = create_error_context(request_id=request_id(app), operation="list_items", resource_id=store_id)
    if not store_id:
        raise ValidationError(message="Missing required query parameter: storeId", context=context)

    output = app.context['services'].catalog.list_items(store_id, context)
    return json_response(200, output)


@tracer.capture_lambda_handler
@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
@metrics.log_metrics(capture_cold_start_metric=True)
def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """Lambda entry point for the items API."""
    metrics.add_metric(name="ItemsRequest", unit=MetricUnit.Count, value=1)
    app.append_context(services=get_services())
    return resolve_request(app, event, context)
