"""
Error taxonomy and error handling utilities for the marketplace handlers.

Every failure a handler can report is one of the service errors below. Each
error carries an error code that maps to an HTTP status, a user facing message
and an optional context used for structured logging.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from aws_lambda_powertools.metrics import MetricUnit
from pydantic import BaseModel, Field

from marketplace.handlers.utils.observability import logger, metrics, tracer


class ErrorSeverity(str, Enum):
    """Error severity levels for classification."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class ErrorCategory(str, Enum):
    """Error categories for classification."""
    VALIDATION = "VALIDATION"
    BUSINESS_LOGIC = "BUSINESS_LOGIC"
    SECURITY = "SECURITY"
    INFRASTRUCTURE = "INFRASTRUCTURE"


class ErrorContext(BaseModel):
    """Context information for errors."""

    request_id: str = Field(description="Unique request identifier")
    user_id: Optional[str] = Field(default=None, description="User identifier if available")
    operation: str = Field(description="Operation being performed")
    resource_id: Optional[str] = Field(default=None, description="Resource identifier")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    additional_data: Dict[str, Any] = Field(default_factory=dict)


class BaseServiceError(Exception):
    """Base exception class for service errors."""

    def __init__(
        self,
        message: str,
        error_code: str,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        category: ErrorCategory = ErrorCategory.BUSINESS_LOGIC,
        context: Optional[ErrorContext] = None,
        user_message: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.severity = severity
        self.category = category
        self.context = context
        self.user_message = user_message or "An error occurred while processing your request."
        self.error_id = str(uuid.uuid4())


class ValidationError(BaseServiceError):
    """Raised when input is malformed, missing or out of range."""

    def __init__(
        self,
        message: str,
        field_errors: Optional[List[Dict[str, str]]] = None,
        context: Optional[ErrorContext] = None,
    ):
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            severity=ErrorSeverity.LOW,
            category=ErrorCategory.VALIDATION,
            context=context,
            user_message=message,
        )
        self.field_errors = field_errors or []


class AuthenticationError(BaseServiceError):
    """Raised when a credential is missing, invalid or expired."""

    def __init__(self, message: str = "Unauthorized: Invalid or missing token", context: Optional[ErrorContext] = None):
        super().__init__(
            message=message,
            error_code="AUTHENTICATION_ERROR",
            severity=ErrorSeverity.LOW,
            category=ErrorCategory.SECURITY,
            context=context,
            user_message=message,
        )


class AuthorizationError(BaseServiceError):
    """Raised when a valid credential lacks the required role."""

    def __init__(self, message: str, context: Optional[ErrorContext] = None):
        super().__init__(
            message=message,
            error_code="AUTHORIZATION_ERROR",
            severity=ErrorSeverity.LOW,
            category=ErrorCategory.SECURITY,
            context=context,
            user_message=message,
        )


class ResourceNotFoundError(BaseServiceError):
    """Raised when a referenced resource does not exist."""

    def __init__(
        self,
        resource_type: str,
        resource_id: str,
        context: Optional[ErrorContext] = None,
    ):
        message = f"{resource_type} with ID '{resource_id}' not found"
        super().__init__(
            message=message,
            error_code="RESOURCE_NOT_FOUND",
            severity=ErrorSeverity.LOW,
            category=ErrorCategory.BUSINESS_LOGIC,
            context=context,
            user_message=f"{resource_type} not found",
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class ConflictError(BaseServiceError):
    """Raised when a write would duplicate an existing record."""

    def __init__(self, message: str, context: Optional[ErrorContext] = None):
        super().__init__(
            message=message,
            error_code="CONFLICT",
            severity=ErrorSeverity.LOW,
            category=ErrorCategory.BUSINESS_LOGIC,
            context=context,
            user_message=message,
        )


class DownstreamError(BaseServiceError):
    """Raised when a dependency such as the data store fails."""

    def __init__(
        self,
        message: str,
        error_code: str = "DOWNSTREAM_ERROR",
        severity: ErrorSeverity = ErrorSeverity.HIGH,
        context: Optional[ErrorContext] = None,
    ):
        super().__init__(
            message=message,
            error_code=error_code,
            severity=severity,
            category=ErrorCategory.INFRASTRUCTURE,
            context=context,
            user_message="Internal server error",
        )


def create_error_context(
    request_id: str,
    operation: str,
    user_id: Optional[str] = None,
    resource_id: Optional[str] = None,
    **additional_data: Any,
) -> ErrorContext:
    """Create an error context for consistent error handling."""
    return ErrorContext(
        request_id=request_id,
        user_id=user_id,
        operation=operation,
        resource_id=resource_id,
        additional_data=additional_data,
    )


@tracer.capture_method
def log_error_metrics(error: BaseServiceError) -> None:
    """Log error metrics for monitoring and alerting."""
    metrics.add_metric(name="ErrorCount", unit=MetricUnit.Count, value=1)
    metrics.add_metric(name=f"Error{error.category.value}Count", unit=MetricUnit.Count, value=1)

    tracer.put_annotation("error_code", error.error_code)
    tracer.put_annotation("error_category", error.category.value)

    log = logger.error if error.category == ErrorCategory.INFRASTRUCTURE else logger.info
    log(
        "Service error occurred",
        extra={
            "error_id": error.error_id,
            "error_code": error.error_code,
            "error_severity": error.severity.value,
            "error_category": error.category.value,
            "error_message": error.message,
            "context": error.context.model_dump(mode="json") if error.context else None,
        },
    )


def format_error_response(error: BaseServiceError) -> Dict[str, Any]:
    """Format error for API response. Only the user message is exposed."""
    response: Dict[str, Any] = {
        "error": error.user_message,
        "code": error.error_code,
        "error_id": error.error_id,
    }

    if isinstance(error, ValidationError) and error.field_errors:
        response["field_errors"] = error.field_errors

    return response


def get_http_status_code(error: BaseServiceError) -> int:
    """Get appropriate HTTP status code for error."""
    status_mapping = {
        "VALIDATION_ERROR": 400,
        "AUTHENTICATION_ERROR": 401,
        "AUTHORIZATION_ERROR": 403,
        "RESOURCE_NOT_FOUND": 404,
        "CONFLICT": 409,
    }

    return status_mapping.get(error.error_code, 500)
