"""
REST API resolver utility for the marketplace Lambda handlers.

Every function gets its own API Gateway REST resolver from ``build_resolver``.
Responses are JSON and always carry the CORS and content type headers below,
including preflight answers, unknown routes and errors.
"""

import functools
import json
from typing import Any, Callable, Dict, Optional, Type, TypeVar

from aws_lambda_powertools.event_handler import APIGatewayRestResolver, Response, content_types
from aws_lambda_powertools.event_handler.exceptions import NotFoundError
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.data_classes import APIGatewayProxyEvent
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from marketplace.handlers.utils.errors import (
    BaseServiceError,
    ErrorCategory,
    ErrorContext,
    ErrorSeverity,
    ValidationError,
    format_error_response,
    get_http_status_code,
    log_error_metrics,
)
from marketplace.handlers.utils.observability import logger, metrics

ModelT = TypeVar('ModelT', bound=BaseModel)

# API path constants
AUTH_PATH = '/auth'
STOREFRONTS_PATH = '/storefronts'
ITEMS_PATH = '/items'
REVIEWS_PATH = '/reviews'
ORDERS_PATH = '/orders'

CORS_HEADERS: Dict[str, str] = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Headers': 'Content-Type,Authorization,X-Requested-With',
    'Access-Control-Allow-Methods': 'GET,POST,PUT,DELETE,OPTIONS',
    'Access-Control-Max-Age': '86400',
    'X-Content-Type-Options': 'nosniff',
}


def json_response(status_code: int, payload: Any) -> Response:
    """Build a JSON response carrying the CORS headers."""
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(mode='json', by_alias=True)
    return Response(
        status_code=status_code,
        content_type=content_types.APPLICATION_JSON,
        body=json.dumps(payload),
        headers=dict(CORS_HEADERS),
    )


def build_resolver() -> APIGatewayRestResolver:
    """Create a REST resolver whose unknown routes answer 404 with the CORS headers."""
    app = APIGatewayRestResolver()

    @app.not_found
    def handle_not_found(exc: NotFoundError) -> Response:
        logger.info("Route not found", extra={
            "path": app.current_event.path,
            "http_method": app.current_event.http_method,
        })
        return json_response(404, {"error": "Not found"})

    return app


def resolve_request(app: APIGatewayRestResolver, event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """Answer CORS preflight requests directly, route everything else."""
    if APIGatewayProxyEvent(event).http_method == 'OPTIONS':
        logger.debug("Answering CORS preflight")
        return {
            'statusCode': 200,
            'headers': {**CORS_HEADERS, 'Content-Type': content_types.APPLICATION_JSON},
            'body': json.dumps({'message': 'CORS preflight successful'}),
            'isBase64Encoded': False,
        }
    return app.resolve(event, context)


def request_id(app: APIGatewayRestResolver) -> str:
    request_context = app.current_event.request_context
    return (request_context.request_id if request_context else None) or "unknown"


def authorization_header(app: APIGatewayRestResolver) -> Optional[str]:
    headers = app.current_event.headers or {}
    return headers.get('Authorization') or headers.get('authorization')


def parse_body(app: APIGatewayRestResolver, model: Type[ModelT], context: Optional[ErrorContext] = None) -> ModelT:
    """
    Parse the JSON request body into ``model``.

    Raises:
        ValidationError: If the body is not a JSON object
        pydantic.ValidationError: If the object does not fit the model
    """
    try:
        body = json.loads(app.current_event.body or '{}')
    except json.JSONDecodeError:
        raise ValidationError(message="Invalid JSON in request body", context=context)

    if not isinstance(body, dict):
        raise ValidationError(message="Request body must be a JSON object", context=context)

    return model.model_validate(body)


def handle_service_errors(func: Callable[..., Response]) -> Callable[..., Response]:
    """Decorator to handle service errors and convert to HTTP responses."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except BaseServiceError as e:
            log_error_metrics(e)
            return json_response(get_http_status_code(e), format_error_response(e))

        except PydanticValidationError as e:
            logger.info("Request validation failed", extra={
                "validation_errors": str(e),
                "error_count": e.error_count(),
            })
            metrics.add_metric(name="ValidationError", unit=MetricUnit.Count, value=1)

            field_errors = [
                {"field": ".".join(str(loc) for loc in error["loc"]), "message": error["msg"]}
                for error in e.errors()
            ]
            validation_error = ValidationError(
                message="Request validation failed",
                field_errors=field_errors,
            )
            return json_response(400, format_error_response(validation_error))

        except Exception as e:
            logger.exception("Unexpected error in handler", extra={
                "error": str(e),
                "function_name": func.__name__,
            })
            metrics.add_metric(name="UnexpectedError", unit=MetricUnit.Count, value=1)

            unexpected_error = BaseServiceError(
                message="An unexpected error occurred",
                error_code="INTERNAL_SERVER_ERROR",
                severity=ErrorSeverity.CRITICAL,
                category=ErrorCategory.INFRASTRUCTURE,
                user_message="Internal server error",
            )
            return json_response(500, format_error_response(unexpected_error))

    return wrapper
