"""Custom exceptions for the studio console.

All exceptions inherit from StudioError for easy catching.

Field-level validation problems are not exceptions: they are reported as
``FieldError`` values (see ``studio.config.errors``). The classes below cover
draft files, the REST persistence service and rejected submissions.

Exception classes include context dictionaries for structured logging
and debugging. Use the `context` property to access additional details.
"""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from studio.services.validation import ValidationReport


class StudioError(Exception):
    """Base exception for all studio errors.

    Attributes:
        context: Dictionary with additional error context

    Example:
        >>> try:
        ...     raise StudioError("Something went wrong", context={"channel_id": 3})
        ... except StudioError as e:
        ...     print(f"Error: {e}, Context: {e.context}")
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        """Initialize StudioError.

        Args:
            message: Error message
            context: Optional dictionary with additional context
        """
        self.context = context or {}
        super().__init__(message)

    def with_context(self, **kwargs: Any) -> "StudioError":
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
# Configuration Errors
# ============================================


class ConfigError(StudioError):
    """Base exception for configuration and draft-file errors."""

    def __init__(
        self,
        message: str,
        config_path: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize ConfigError.

        Args:
            message: Error message
            config_path: Path to the config file/key
            context: Additional context
        """
        ctx = context or {}
        if config_path:
            ctx["config_path"] = config_path
        super().__init__(message, context=ctx)


class ConfigValidationError(ConfigError):
    """Raised when a configuration document has the wrong shape.

    Supports two usage patterns:
    1. Simple: ConfigValidationError("error message")
    2. Structured: ConfigValidationError(field="kind", value="x", reason="unknown")

    Attributes:
        field: Field that failed validation (optional)
        value: Invalid value (optional)
        reason: Validation failure reason (optional)
    """

    def __init__(
        self,
        message: str | None = None,
        *,
        field: str | None = None,
        value: Any = None,
        reason: str | None = None,
        config_path: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize ConfigValidationError.

        Args:
            message: Error message (for simple usage)
            field: Field that failed validation
            value: Invalid value
            reason: Validation failure reason
            config_path: Path to config file
            context: Additional context
        """
        ctx = context or {}

        self.field = field
        self.value = value
        self.reason = reason

        if field and reason:
            ctx.update({"field": field, "reason": reason})
            if value is not None:
                ctx["value"] = str(value)
            final_message = f"Config validation failed for '{field}': {reason}"
        elif message:
            final_message = message
        else:
            final_message = "Configuration validation failed"

        super().__init__(final_message, config_path=config_path, context=ctx)


class ConfigNotFoundError(ConfigError):
    """Raised when a required configuration file is not found.

    Attributes:
        config_key: The configuration key that was not found
    """

    def __init__(
        self,
        config_key: str,
        config_path: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize ConfigNotFoundError.

        Args:
            config_key: Configuration key that was not found
            config_path: Path to config file
            context: Additional context
        """
        ctx = context or {}
        ctx["config_key"] = config_key
        super().__init__(
            f"Configuration '{config_key}' not found",
            config_path=config_path,
            context=ctx,
        )
        self.config_key = config_key


# ============================================
# Service Errors
# ============================================


class ServiceError(StudioError):
    """Base exception for errors coming from external services."""

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
    """Raised when the REST service rejects a request.

    Attributes:
        service: Name of the external service
        status_code: HTTP status code (if applicable)
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
            ctx["response_body"] = response_body[:500]  # Truncate long responses

        self.service = service
        self.status_code = status_code
        self.endpoint = endpoint

        super().__init__(f"{service} API error: {message}", service_name=service, context=ctx)


class TransientServiceError(ExternalAPIError):
    """Raised for network failures and 5xx responses.

    These are distinct from validation errors: the request may succeed if the
    caller retries it. Nothing in this package retries on its own.
    """


class UploadError(TransientServiceError):
    """Raised when an asset upload fails or returns an unusable body."""


class RecordNotFoundError(ExternalAPIError):
    """Raised when the REST service has no record with the requested id.

    Attributes:
        collection: Collection that was queried
        record_id: The id that was not found
    """

    def __init__(
        self,
        collection: str,
        record_id: int | str,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize RecordNotFoundError.

        Args:
            collection: REST collection name
            record_id: Id that was not found
            context: Additional context
        """
        ctx = context or {}
        ctx.update({"collection": collection, "record_id": record_id})
        self.collection = collection
        self.record_id = record_id
        super().__init__(
            service="console-api",
            message=f"{collection} with id={record_id} not found",
            status_code=404,
            endpoint=f"/{collection}/{record_id}",
            context=ctx,
        )


# ============================================
# Submission Errors
# ============================================


class SubmissionRejectedError(StudioError):
    """Raised when a draft is submitted while its validation report has errors.

    Attributes:
        report: The validation report that blocked the submission
    """

    def __init__(
        self,
        report: "ValidationReport",
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize SubmissionRejectedError.

        Args:
            report: Validation report with at least one error
            context: Additional context
        """
        ctx = context or {}
        ctx.update({"entity_kind": report.kind.value, "error_count": len(report.errors)})
        self.report = report
        super().__init__(
            f"{report.kind.value} draft has {len(report.errors)} validation error(s)",
            context=ctx,
        )


__all__ = [
    "StudioError",
    "ConfigError",
    "ConfigValidationError",
    "ConfigNotFoundError",
    "ServiceError",
    "ExternalAPIError",
    "TransientServiceError",
    "UploadError",
    "RecordNotFoundError",
    "SubmissionRejectedError",
]
