"""Standardized error types for the generation flow.

Each error carries a machine-readable code, the user-facing message and the
HTTP status the endpoint answers with, so every layer reports a failure the
same way.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar

from .ai_types import FailureKind, GenerationFailure


# -----------------------------------------------------------------------------
# Error Code Constants
# -----------------------------------------------------------------------------

class ErrorCode:
    """Constants for error codes used in generation responses."""

    VALIDATION_ERROR = "validation_error"
    ADMISSION_REJECTED = "admission_rejected"
    CONFIGURATION_ERROR = "configuration_error"
    UPSTREAM_AUTH = "upstream_auth"
    UPSTREAM_TIMEOUT = "upstream_timeout"
    UPSTREAM_EMPTY_RESPONSE = "upstream_empty_response"
    UPSTREAM_UNKNOWN = "upstream_unknown"


# -----------------------------------------------------------------------------
# Base Error Class
# -----------------------------------------------------------------------------

@dataclass
class GenerationError(Exception):
    """Base exception class for all generation-flow errors.

    Attributes:
        error_code: Machine-readable error identifier.
        message: Human-readable error description shown to the user.
        details: Additional structured error information for logs.
    """

    error_code: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    status_code: ClassVar[int] = 500

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize including the code and details, for logging."""
        result: dict[str, Any] = {
            "error": self.error_code,
            "message": self.message,
            "status": self.status_code,
        }
        if self.details:
            result["details"] = dict(self.details)
        return result

    def response_body(self) -> dict[str, str]:
        """Return the JSON body sent to HTTP callers."""
        return {"error": self.message}

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


# -----------------------------------------------------------------------------
# Caller-side Errors
# -----------------------------------------------------------------------------

@dataclass
class ValidationError(GenerationError):
    """Error raised when a request is malformed before reaching the provider."""

    error_code: str = field(default=ErrorCode.VALIDATION_ERROR)
    message: str = field(default="Invalid request")
    details: dict[str, Any] = field(default_factory=dict)

    status_code: ClassVar[int] = 400


@dataclass
class TopicRequiredError(ValidationError):
    """Error raised when the topic is missing or blank."""

    message: str = field(default="Topic is required")


@dataclass
class AdmissionRejectedError(GenerationError):
    """Error raised when the caller exhausted its request quota."""

    error_code: str = field(default=ErrorCode.ADMISSION_REJECTED)
    message: str = field(default="Too many requests. Please try again later.")
    details: dict[str, Any] = field(default_factory=dict)

    retry_after: float | None = field(default=None)

    status_code: ClassVar[int] = 429

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.retry_after is not None:
            result["retry_after"] = self.retry_after
        return result


@dataclass
class ConfigurationError(GenerationError):
    """Error raised when provider credentials are not configured."""

    error_code: str = field(default=ErrorCode.CONFIGURATION_ERROR)
    message: str = field(default="API key configuration error")
    details: dict[str, Any] = field(default_factory=dict)

    status_code: ClassVar[int] = 500


# -----------------------------------------------------------------------------
# Upstream Errors
# -----------------------------------------------------------------------------

@dataclass
class UpstreamAuthError(GenerationError):
    """Error raised when the provider rejected the configured credentials."""

    error_code: str = field(default=ErrorCode.UPSTREAM_AUTH)
    message: str = field(default="Authentication error")
    details: dict[str, Any] = field(default_factory=dict)

    status_code: ClassVar[int] = 401


@dataclass
class UpstreamTimeoutError(GenerationError):
    """Error raised when the provider call timed out."""

    error_code: str = field(default=ErrorCode.UPSTREAM_TIMEOUT)
    message: str = field(default="Request timed out. Please try again.")
    details: dict[str, Any] = field(default_factory=dict)

    status_code: ClassVar[int] = 504


@dataclass
class UpstreamEmptyResponseError(GenerationError):
    """Error raised when the provider answered without usable text."""

    error_code: str = field(default=ErrorCode.UPSTREAM_EMPTY_RESPONSE)
    message: str = field(default="No content generated")
    details: dict[str, Any] = field(default_factory=dict)

    status_code: ClassVar[int] = 500


@dataclass
class UpstreamUnknownError(GenerationError):
    """Error raised for any other provider failure; the message is passed through."""

    error_code: str = field(default=ErrorCode.UPSTREAM_UNKNOWN)
    message: str = field(default="Failed to generate content")
    details: dict[str, Any] = field(default_factory=dict)

    status_code: ClassVar[int] = 500


_FAILURE_ERRORS: dict[FailureKind, type[GenerationError]] = {
    FailureKind.MISSING_CREDENTIALS: ConfigurationError,
    FailureKind.AUTH_REJECTED: UpstreamAuthError,
    FailureKind.UPSTREAM_TIMEOUT: UpstreamTimeoutError,
    FailureKind.EMPTY_RESPONSE: UpstreamEmptyResponseError,
    FailureKind.UNKNOWN: UpstreamUnknownError,
}


def error_for_failure(failure: GenerationFailure) -> GenerationError:
    """Map a classified gateway failure to the error reported to callers."""
    error_cls = _FAILURE_ERRORS[failure.kind]
    details = {"upstream_message": failure.message} if failure.message else {}
    if failure.kind is FailureKind.UNKNOWN and failure.message:
        return error_cls(message=failure.message, details=details)
    return error_cls(details=details)


__all__ = [
    "ErrorCode",
    "GenerationError",
    "ValidationError",
    "TopicRequiredError",
    "AdmissionRejectedError",
    "ConfigurationError",
    "UpstreamAuthError",
    "UpstreamTimeoutError",
    "UpstreamEmptyResponseError",
    "UpstreamUnknownError",
    "error_for_failure",
]
