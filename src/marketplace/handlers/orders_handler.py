"""
Orders Handler - Lambda function for order management API.

Both routes act on the caller's own orders and require a bearer token.
"""

from typing import Any, Dict

from aws_lambda_powertools.event_handler import Response
from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from marketplace.handlers.utils.errors import create_error_context
from marketplace.handlers.utils.observability import logger, metrics, tracer
from marketplace.handlers.utils.rest_api_resolver import (
    ORDERS_PATH,
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
from marketplace.models.input import CreateOrderRequest

app = build_resolver()


def _services() -> MarketplaceServices:
    return app.context['services']


@app.get(ORDERS_PATH)
@tracer.capture_method
@handle_service_errors
def list_orders() -> Response:
    """
    List the caller's orders.

    Returns:
        Orders whose lines carry the current catalog record of their item
    """
    context = create_error_context(request_id=request_id(app), operation="list_orders")
    services = _services()
    claims = services.authenticator.authenticate(authorization_header(app), context)
    context.user_id = claims.user_id

    output = services.orders.list_orders(claims, context)
    return json_response(200, output)


@app.post(ORDERS_PATH)
@tracer.capture_method
@handle_service_errors
def create_order() -> Response:
    """
    Create a new order.

    Returns:
        Created order information
    """
    logger.info("Create order request received")
    context = create_error_context(request_id=request_id(app), operation="create_order")
    services = _services()
    claims = services.authenticator.authenticate(authorization_header(app), context)
    context.user_id = claims.user_id

    request = parse_body(app, CreateOrderRequest, context)
    output = services.orders.create_order(claims, request, context)

    tracer.put_annotation("order_id", output.order.order_id)
    return json_response(201, output)


@tracer.capture_lambda_handler
@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
@metrics.log_metrics(capture_cold_start_metric=True)
def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """Lambda entry point for the orders API."""
    metrics.add_metric(name="OrdersRequest", unit=MetricUnit.Count, value=1)
    app.append_context(services=get_services())
    return resolve_request(app, event, context)
