"""Custom exceptions for the SeagullsFM application.

This module defines all custom exceptions used throughout the application.
All exceptions inherit from SeagullsError for easy catching.

Exception classes include context dictionaries for structured logging
and debugging. Each class also declares the HTTP status the API layer
responds with when the exception escapes a route.
"""

from datetime import datetime
from typing import Any


class SeagullsError(Exception):
    """Base exception for all SeagullsFM errors.

    Attributes:
        context: Dictionary with additional error context
        http_status: Status code used by the API exception handlers
        details: Extra fields merged into the error response body

    Example:
        >>> try:
        ...     raise SeagullsError("Something went wrong", context={"user_id": "123"})
        ... except SeagullsError as e:
        ...     print(f"Error: {e}, Context: {e.context}")
    """

    http_status: int = 500

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        """Initialize SeagullsError.

        Args:
            message: Error message
            context: Optional dictionary with additional context
        """
        self.context = context or {}
        self.message = message
        self.details: dict[str, Any] = {}
        super().__init__(message)

    def with_context(self, **kwargs: Any) -> "SeagullsError":
        """Add additional context to the exception.

        Args:
            **kwargs: Key-value pairs to add to context

        Returns:
            Self for method chaining
        """
        self.context.update(kwargs)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for logging/serialization.

        Returns:
            Dictionary with error type, message, and context
        """
        return {
            "error_type": self.__class__.__name__,
            "message": str(self),
            "context": self.context,
        }


# ============================================
# Request Errors
# ============================================


class InputValidationError(SeagullsError):
    """Raised when request input is missing, malformed or out of range.

    Attributes:
        field: Offending field name, if a single field is at fault
        errors: Per-field error list in ``{"field", "message"}`` form
    """

    http_status = 400

    def __init__(
        self,
        message: str,
        field: str | None = None,
        errors: list[dict[str, str]] | None = None,
        details: dict[str, Any] | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message, context=ctx)
        self.field = field
        self.errors = errors or []
        self.details = details or {}


class AuthenticationError(SeagullsError):
    """Raised when a request carries no valid session."""

    http_status = 401


class PermissionDeniedError(SeagullsError):
    """Raised when an authenticated principal lacks the required role."""

    http_status = 403


class QuotaExceededError(SeagullsError):
    """Raised when a user has already submitted a track this quota week.

    Attributes:
        reset_date: Moment the quota resets (start of the next week)
    """

    http_status = 429

    def __init__(
        self,
        message: str,
        reset_date: datetime,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        ctx["reset_date"] = reset_date.isoformat()
        super().__init__(message, context=ctx)
        self.reset_date = reset_date
        self.details = {"resetDate": reset_date.isoformat()}


# ============================================
# Database Errors
# ============================================


class DatabaseError(SeagullsError):
    """Base exception for database-related errors."""

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        operation: str | None = None,
    ) -> None:
        """Initialize DatabaseError.

        Args:
            message: Error message
            context: Additional context
            operation: Database operation that failed (e.g., "insert", "update")
        """
        ctx = context or {}
        if operation:
            ctx["operation"] = operation
        super().__init__(message, context=ctx)


class RecordNotFoundError(DatabaseError):
    """Raised when a database record is not found.

    Attributes:
        model: The model name that was queried
        record_id: The ID that was not found
    """

    http_status = 404

    def __init__(
        self,
        model: str,
        record_id: Any,
        message: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize RecordNotFoundError.

        Args:
            model: Name of the model class
            record_id: ID that was not found
            message: Client-facing message (defaults to "<model> not found")
            context: Additional context
        """
        ctx = context or {}
        ctx.update({"model": model, "record_id": str(record_id)})
        super().__init__(message or f"{model} not found", context=ctx)
        self.model = model
        self.record_id = record_id


class RecordAlreadyExistsError(DatabaseError):
    """Raised when attempting to create a duplicate record.

    Attributes:
        model: The model name
        field: Field that caused the conflict
        value: Value that already exists
        existing_id: ID of the record already holding the value, if known
    """

    http_status = 409

    def __init__(
        self,
        model: str,
        field: str,
        value: Any,
        message: str | None = None,
        existing_id: Any = None,
        http_status: int | None = None,
        details: dict[str, Any] | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize RecordAlreadyExistsError.

        Args:
            model: Name of the model class
            field: Field that caused the conflict
            value: Value that already exists
            message: Client-facing message
            existing_id: ID of the conflicting record
            http_status: Override for the response status
            details: Extra response fields
            context: Additional context
        """
        ctx = context or {}
        ctx.update({"model": model, "field": field, "value": str(value)})
        super().__init__(message or f"{model} with {field}={value} already exists", context=ctx)
        self.model = model
        self.field = field
        self.value = value
        self.existing_id = existing_id
        self.details = details or {}
        if http_status is not None:
            self.http_status = http_status


# ============================================
# Service Errors
# ============================================


class ServiceError(SeagullsError):
    """Base exception for service-related errors."""

    def __init__(
        self,
        message: str,
        service_name: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize ServiceError.

        Args:
            message: Error message
            service_name: Name of the service
            context: Additional context
        """
        ctx = context or {}
        if service_name:
            ctx["service_name"] = service_name
        super().__init__(message, context=ctx)


class ExternalAPIError(ServiceError):
    """Raised when an external API call fails.

    Attributes:
        service: Name of the external service
        status_code: Upstream HTTP status code (if applicable)
        endpoint: API endpoint that was called
    """

    def __init__(
        self,
        service: str,
        message: str,
        status_code: int | None = None,
        endpoint: str | None = None,
        response_body: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize ExternalAPIError.

        Args:
            service: Name of the external service
            message: Error message
            status_code: HTTP status code (optional)
            endpoint: API endpoint (optional)
            response_body: Response body for debugging (optional)
            context: Additional context
        """
        ctx = context or {}
        ctx["service"] = service
        if status_code is not None:
            ctx["status_code"] = status_code
        if endpoint:
            ctx["endpoint"] = endpoint
        if response_body:
            ctx["response_body"] = response_body[:500]

        self.service = service
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message, service_name=service, context=ctx)


class MediaUploadError(ExternalAPIError):
    """Raised when the media host rejects an upload or cannot be reached."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(service="cloudinary", message=message, **kwargs)


class MailDeliveryError(ExternalAPIError):
    """Raised when an e-mail cannot be handed to the SMTP server."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(service="smtp", message=message, **kwargs)


__all__ = [
    "SeagullsError",
    "InputValidationError",
    "AuthenticationError",
    "PermissionDeniedError",
    "QuotaExceededError",
    "DatabaseError",
    "RecordNotFoundError",
    "RecordAlreadyExistsError",
    "ServiceError",
    "ExternalAPIError",
    "MediaUploadError",
    "MailDeliveryError",
]
