"""Custom exceptions for Page Renderer, one per stage of the render pipeline."""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes for structured error responses."""

    # Generic errors
    VIEW_ERROR = "VIEW_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"

    # Cache build errors
    TEMPLATE_DISCOVERY_ERROR = "TEMPLATE_DISCOVERY_ERROR"
    TEMPLATE_COMPILE_ERROR = "TEMPLATE_COMPILE_ERROR"

    # Render errors
    TEMPLATE_NOT_FOUND = "TEMPLATE_NOT_FOUND"
    TEMPLATE_EXECUTION_ERROR = "TEMPLATE_EXECUTION_ERROR"
    TEMPLATE_WRITE_ERROR = "TEMPLATE_WRITE_ERROR"

    # Configuration errors
    CONFIG_ERROR = "CONFIG_ERROR"
    CONFIG_INVALID = "CONFIG_INVALID"


class ViewException(Exception):
    """Base exception for view rendering errors with HTTP status code support.

    Every error raised by the cache builder or the view manager inherits
    from this class, so callers can catch a single type and still tell
    the stages apart through ``code``.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.VIEW_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        """Initialize view exception.

        Args:
            message: Human-readable error message
            code: Error code from ErrorCode enum
            status_code: HTTP status code (default 500)
            details: Additional error context/details
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class TemplateDiscoveryException(ViewException):
    """Globbing the page or layout pattern failed."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.TEMPLATE_DISCOVERY_ERROR,
            status_code=500,
            details=details,
        )


class TemplateCompileException(ViewException):
    """A page or layout could not be read or parsed."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.TEMPLATE_COMPILE_ERROR,
            status_code=500,
            details=details,
        )


class TemplateNotFoundException(ViewException):
    """Requested template name has no cache entry."""

    def __init__(self, template_name: str, details: dict[str, Any] | None = None):
        self.template_name = template_name
        super().__init__(
            f"unable to find {template_name} in template cache",
            code=ErrorCode.TEMPLATE_NOT_FOUND,
            status_code=404,
            details={"template": template_name, **(details or {})},
        )


class TemplateExecutionException(ViewException):
    """Template failed while executing against the supplied data."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.TEMPLATE_EXECUTION_ERROR,
            status_code=500,
            details=details,
        )


class TemplateWriteException(ViewException):
    """Writing the rendered output to the sink failed."""

    def __init__(self, message: str = "error writing template to output", details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.TEMPLATE_WRITE_ERROR,
            status_code=500,
            details=details,
        )


class ConfigurationException(ViewException):
    """Configuration errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONFIG_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, status_code, details)
