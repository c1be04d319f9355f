"""Delivery exceptions shared by every courier.

This module defines the common error taxonomy that provider adapters raise,
so callers can handle failures without knowing which provider was used.
"""

from typing import Any


class CourierException(Exception):
    """Base exception for all delivery errors.

    Attributes:
        code: Machine-readable error code
        message: Human-readable error message
        details: Optional additional error context (dict or list)
    """

    code: str = "COURIER_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | list[Any] | None = None) -> None:
        """Initialize courier exception.

        Args:
            message: Human-readable error description
            details: Optional additional context about the error
        """
        self.message = message
        self.details = details
        super().__init__(self.message)


class UnsupportedContentException(CourierException):
    """Raised when an email carries a content variant the courier cannot map.

    Always raised before any call to the provider.
    """

    code = "UNSUPPORTED_CONTENT"

    def __init__(self, content: Any) -> None:
        self.content = content
        super().__init__(
            f"Unsupported content type: {type(content).__name__}",
            details={"content_type": type(content).__name__},
        )


class ValidationException(CourierException):
    """Raised when the email lacks data that the provider-side setup requires.

    For example, a template declaring a reply-to placeholder while the email
    has no reply-to address.
    """

    code = "VALIDATION_ERROR"


class TransmissionException(CourierException):
    """Raised when the provider call fails or reports a failure.

    Attributes:
        provider: Name of the provider that rejected the call
        error_code: Provider API error code, when the provider supplied one
        status_code: HTTP status code, when a response was received
    """

    code = "TRANSMISSION_ERROR"

    def __init__(
        self,
        message: str,
        provider: str,
        error_code: int | str | None = None,
        status_code: int | None = None,
    ) -> None:
        """Initialize transmission exception.

        Args:
            message: Provider error message
            provider: Provider name (e.g. "postmark")
            error_code: Provider API error code
            status_code: HTTP status code of the failed response
        """
        self.provider = provider
        self.error_code = error_code
        self.status_code = status_code
        super().__init__(
            message,
            details={
                "provider": provider,
                "error_code": error_code,
                "status_code": status_code,
            },
        )
