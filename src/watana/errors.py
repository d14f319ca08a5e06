"""Watana error types."""

from __future__ import annotations

from typing import Any

__all__ = [
    "CommunicationError",
    "CompressionError",
    "ConfigError",
    "EmptyArchiveError",
    "InvalidArchiveError",
    "InvalidEncodingError",
    "RequestTimeoutError",
    "ResponseDecodingError",
    "TransportError",
    "UnexpectedError",
    "UnsupportedContentTypeError",
    "ValidationError",
    "WatanaError",
]


class WatanaError(Exception):
    """Base error for Watana operations."""


class ValidationError(WatanaError):
    """A mandatory payload field is missing, or a reserved key was touched.

    Raised locally; the request never reaches the network.

    Args:
        message: Human-readable error description.
        field: Name of the offending payload key, if any.
    """

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field

    def __reduce__(self) -> tuple[type[ValidationError], tuple[str], dict[str, Any]]:
        """Preserve the field name across pickle/unpickle."""
        return (type(self), (str(self),), {"field": self.field})

    def __setstate__(self, state: dict[str, Any] | None) -> None:
        if state is None:
            return
        self.field = state.get("field")


class CommunicationError(WatanaError):
    """The request could not be delivered, or the server refused it."""


class TransportError(CommunicationError):
    """Server answered with a non-2xx status.

    Args:
        status_code: Numeric HTTP status.
        reason: Reason phrase sent with the status line.
    """

    def __init__(self, status_code: int, reason: str = "") -> None:
        super().__init__(f"HTTP error {status_code}: {reason}".rstrip(": "))
        self.status_code = status_code
        self.reason = reason

    def __reduce__(self) -> tuple[type[TransportError], tuple[int, str]]:
        return (type(self), (self.status_code, self.reason))


class RequestTimeoutError(WatanaError, TimeoutError):
    """The configured timeout expired before the server answered."""


class UnsupportedContentTypeError(WatanaError):
    """Server answered with a media type the client cannot handle."""

    def __init__(self, content_type: str | None) -> None:
        super().__init__(f"Unsupported content type: {content_type or '<missing>'}")
        self.content_type = content_type

    def __reduce__(self) -> tuple[type[UnsupportedContentTypeError], tuple[str | None]]:
        return (type(self), (self.content_type,))


class ResponseDecodingError(WatanaError):
    """Response JSON could not be decoded into the requested result type."""

    def __init__(self, target: str, detail: str = "") -> None:
        message = f"Cannot decode server response as {target}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.target = target

    def __reduce__(self) -> tuple[type[ResponseDecodingError], tuple[str]]:
        return (type(self), (self.target,))


class CompressionError(WatanaError):
    """Archive could not be written or read."""


class EmptyArchiveError(CompressionError):
    """Archive contains no entries."""


class InvalidArchiveError(CompressionError):
    """Bytes are not a ZIP archive."""


class InvalidEncodingError(WatanaError):
    """Text is not valid base64."""


class UnexpectedError(WatanaError):
    """Catch-all for faults with no more specific category."""


class ConfigError(WatanaError):
    """Configuration validation error."""
