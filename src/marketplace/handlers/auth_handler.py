"""
Auth Handler - Lambda function for account registration, login and profile.
"""

from typing import Any, Dict

from aws_lambda_powertools.event_handler import Response
from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from marketplace.handlers.utils.errors import create_error_context
from marketplace.handlers.utils.observability import logger, metrics, tracer
from marketplace.handlers.utils.rest_api_resolver import (
    AUTH_PATH,
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
from marketplace.models.input import LoginRequest, RegisterRequest

app = build_resolver()


def _services() -> MarketplaceServices:
    return app.context['services']


@app.post(f'{AUTH_PATH}/register')
@tracer.capture_method
@handle_service_errors
def register() -> Response:
    """Register an account and return it with a bearer token."""
    context = create_error_context(request_id=request_id(app), operation="register")
    request = parse_body(app, RegisterRequest, context)

    output = _services().accounts.register(request, context)
    return json_response(201, output)


@app.post(f'{AUTH_PATH}/login')
@tracer.capture_method
@handle_service_errors
def login() -> Response:
    """Exchange email and password for a bearer token."""
    context = create_error_context(request_id=request_id(app), operation="login")
    request = parse_body(app, LoginRequest, context)

    output = _services().accounts.login(request, context)
    return json_response(200, output)


@app.get(f'{AUTH_PATH}/profile')
@tracer.capture_method
@handle_service_errors
def profile() -> Response:
    """Return the caller's account."""
    context = create_error_context(request_id=request_id(app), operation="get_profile")
    services = _services()
    claims = services.authenticator.authenticate(authorization_header(app), context)

    output = services.accounts.get_profile(claims, context)
    return json_response(200, output)


@tracer.capture_lambda_handler
@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
@metrics.log_metrics(capture_cold_start_metric=True)
def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """Lambda entry point for the auth API."""
    metrics.add_metric(name="AuthRequest", unit=MetricUnit.Count, value=1)
    app.append_context(services=get_services())
    return resolve_request(app, event, context)
