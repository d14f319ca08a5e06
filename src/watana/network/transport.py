"""
HTTP transport for the Watana service.

Every operation is a single JSON POST to the configured endpoint.  The
service answers either with JSON or, for downloads, with a raw ZIP stream.
This module hides that difference: callers always get JSON text back, and
a ZIP answer is repackaged into the same envelope shape as a JSON download
would have.

Public API:
- WatanaTransport.send for the normalized JSON text
- WatanaTransport.send_typed for a decoded pydantic model

No retries are attempted; one failed round trip is final for the call.
"""

from __future__ import annotations

__all__ = ["WatanaTransport"]

import asyncio
import json
import logging
from collections.abc import Mapping
from email.message import Message
from pathlib import PurePosixPath
from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from ..config.options import ClientConfig
from ..constants import (
    DEFAULT_FILE_NAME,
    DOWNLOAD_MESSAGE,
    DOWNLOAD_REQUEST_NUMBER,
    ERROR_PREVIEW_LENGTH,
    JSON_MEDIA_TYPE,
    ZIP_MEDIA_TYPES,
)
from ..core.codec import encode_base64
from ..core.payload import OperationPayload
from ..errors import (
    CommunicationError,
    RequestTimeoutError,
    ResponseDecodingError,
    TransportError,
    UnexpectedError,
    UnsupportedContentTypeError,
    ValidationError,
    WatanaError,
)
from ..models.responses import DownloadResponse, FileEnvelope
from .protocol import ResultT

_logger = logging.getLogger(__name__)


# ── Response helpers ─────────────────────────────────────────────────


def _media_type(response: httpx.Response) -> str | None:
    """Return the bare media type of a response (no parameters), lowercased."""
    raw = response.headers.get("content-type")
    if not raw:
        return None
    return raw.split(";", 1)[0].strip().lower() or None


def _download_file_name(disposition: str | None) -> str:
    """
    Derive a download name from a Content-Disposition header.

    Handles quoted and RFC 2231 encoded filenames.  Directory parts and the
    last extension are stripped; a fixed placeholder is used when the header
    is absent or names no file.
    """
    file_name: str | None = None
    if disposition:
        msg = Message()
        msg["content-disposition"] = disposition
        file_name = msg.get_filename()
    file_name = (file_name or DEFAULT_FILE_NAME).strip().strip('"')
    base = PurePosixPath(file_name.replace("\\", "/")).name
    # ".zip" has an empty stem, not the dotfile name ".zip"
    stem, dot, _ = base.rpartition(".")
    if not dot:
        stem = base
    return stem or PurePosixPath(DEFAULT_FILE_NAME).stem


def _download_envelope(response: httpx.Response) -> str:
    """Wrap a ZIP response body into download-envelope JSON text."""
    file_name = _download_file_name(response.headers.get("content-disposition"))
    data = response.content
    _logger.info("Received ZIP download %s: %d bytes", file_name, len(data))
    envelope = DownloadResponse(
        success=True,
        message=DOWNLOAD_MESSAGE,
        request_number=DOWNLOAD_REQUEST_NUMBER,
        files=[FileEnvelope(name=file_name, content=encode_base64(data))],
    )
    return envelope.model_dump_json(by_alias=True)


def _normalize(operation: str, response: httpx.Response) -> str:
    """Turn a received response into JSON text, or raise the matching error."""
    if not response.is_success:
        preview = response.text[:ERROR_PREVIEW_LENGTH]
        _logger.error(
            "HTTP %d for %s: %s",
            response.status_code,
            operation,
            preview,
        )
        raise TransportError(response.status_code, response.reason_phrase)

    media_type = _media_type(response)
    _logger.debug("%s answered with %s", operation, media_type)

    if media_type == JSON_MEDIA_TYPE:
        return response.text
    if media_type in ZIP_MEDIA_TYPES:
        return _download_envelope(response)
    raise UnsupportedContentTypeError(media_type)


def _encode_payload(payload: OperationPayload) -> bytes:
    try:
        text = json.dumps(payload.to_dict(), ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Payload is not JSON-serializable: {e}") from e
    return text.encode("utf-8")


# ── Transport ────────────────────────────────────────────────────────


class WatanaTransport:
    """httpx-based implementation of the OperationTransport protocol.

    Holds only the immutable :class:`ClientConfig`; each call opens its own
    connection, so one instance can serve any number of concurrent tasks.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the transport.

        Args:
            config: Endpoint, token, and timeout.
            http_transport: Optional httpx transport to route requests
                through (proxies, custom TLS, or ``httpx.MockTransport``).
        """
        self.config = config
        self._http_transport = http_transport

    @property
    def url(self) -> str:
        return self.config.url

    def _headers(self) -> dict[str, str]:
        return {
            "Accept": JSON_MEDIA_TYPE,
            "Content-Type": f"{JSON_MEDIA_TYPE}; charset=utf-8",
            "Authorization": self.config.token,
        }

    def _open_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.config.timeout),
            transport=self._http_transport,
            follow_redirects=False,
        )

    async def send(self, operation: str, payload: Mapping[str, Any]) -> str:
        """Send one operation; see :meth:`OperationTransport.send`."""
        if not operation:
            raise ValidationError("Operation name must not be empty")

        body_payload = OperationPayload.from_mapping(payload)
        operation = body_payload.ensure_operation(operation)
        body = _encode_payload(body_payload)

        _logger.info("Sending %s to %s", operation, self.config.url)
        _logger.debug("Request body: %d bytes", len(body))
        try:
            async with self._open_client() as client:
                # httpx timeouts apply per phase; this bounds the whole round trip
                response = await asyncio.wait_for(
                    client.post(self.config.url, content=body, headers=self._headers()),
                    self.config.timeout,
                )
            return _normalize(operation, response)
        except WatanaError:
            raise
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            _logger.error("Timed out after %ss: %s", self.config.timeout, operation)
            raise RequestTimeoutError(
                f"Request timed out after {self.config.timeout}s: {operation}"
            ) from e
        except httpx.TransportError as e:
            _logger.error("Cannot reach %s: %s", self.config.url, e)
            raise CommunicationError(f"Cannot reach {self.config.url}: {e}") from e
        except httpx.HTTPError as e:
            _logger.error("HTTP request failed: %s", e)
            raise CommunicationError(f"HTTP request failed: {e}") from e
        except Exception as e:
            _logger.exception("Unexpected error during %s", operation)
            raise UnexpectedError(f"Unexpected error during {operation}: {e}") from e

    async def send_typed(
        self, operation: str, payload: Mapping[str, Any], result_type: type[ResultT]
    ) -> ResultT:
        """Send one operation and decode it; see :meth:`OperationTransport.send_typed`."""
        text = await self.send(operation, payload)
        try:
            return result_type.model_validate_json(text)
        except PydanticValidationError as e:
            first = e.errors(include_url=False)[0]
            location = ".".join(str(part) for part in first["loc"]) or "<root>"
            detail = f"{location}: {first['msg']}"
            _logger.error(
                "Cannot decode %s response as %s: %s", operation, result_type.__name__, detail
            )
            raise ResponseDecodingError(result_type.__name__, detail) from e
