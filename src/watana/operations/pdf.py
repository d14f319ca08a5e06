"""
PDF operations: sign, stamp, and validate a single document.

Each call zips the PDF as ``<stem>.pdf``, base64-encodes it into the
``zip_base64`` field, and merges caller options (page, position, and other
service parameters) on top.  Use :meth:`PdfOperations.extract_content` to
get the PDF bytes back from the response.
"""

from __future__ import annotations

__all__ = ["PdfOperations"]

import logging
from collections.abc import Awaitable, Callable, Mapping
from pathlib import PurePath
from typing import TYPE_CHECKING, Any

from ..constants import (
    FIELD_ZIP_BASE64,
    MANDATORY_FIELDS,
    OP_SIGN_PDF,
    OP_STAMP_PDF,
    OP_VALIDATE_PDF,
    PDF_EXTENSION,
)
from ..core.payload import OperationPayload
from ..errors import ValidationError
from ..models.responses import PdfResponse

if TYPE_CHECKING:
    from ..client import WatanaClient

_logger = logging.getLogger(__name__)


def _pdf_stem(file_name: str) -> str:
    """Drop a trailing ``.pdf`` so the archive entry is not ``x.pdf.pdf``."""
    path = PurePath(file_name)
    if path.suffix.lower() == f".{PDF_EXTENSION}":
        return path.stem
    return file_name


class PdfOperations:
    """Sign, stamp, and validate PDF documents."""

    def __init__(self, client: WatanaClient) -> None:
        self._client = client

    async def _run(
        self,
        verb: str,
        operation: str,
        send: Callable[[OperationPayload], Awaitable[PdfResponse]],
        content: bytes,
        file_name: str,
        options: Mapping[str, Any] | None,
    ) -> PdfResponse:
        if not content:
            raise ValidationError("PDF content is empty", field=FIELD_ZIP_BASE64)

        _logger.info("%s PDF: %s", verb, file_name)
        try:
            encoded = await self._client.compress_and_encode(
                content, _pdf_stem(file_name), PDF_EXTENSION
            )
            payload = OperationPayload(operation, **{FIELD_ZIP_BASE64: encoded})
            payload.merge(options, reserved=MANDATORY_FIELDS[operation])
            result = await send(payload)
        except Exception as e:
            _logger.error("Error %s PDF %s: %s", verb.lower(), file_name, e)
            raise
        _logger.info("PDF %s done: %s", verb.lower(), file_name)
        return result

    async def sign(
        self, content: bytes, file_name: str, options: Mapping[str, Any] | None = None
    ) -> PdfResponse:
        """
        Sign *content* with the certificates configured on the server.

        Args:
            content: PDF bytes (must not be empty).
            file_name: Document name; a ``.pdf`` suffix is optional.
            options: Extra service options such as ``pagina`` or
                ``posicion_x``.

        Raises:
            ValidationError: If *content* is empty or an option would
                overwrite ``zip_base64``.
        """
        return await self._run(
            "Signing", OP_SIGN_PDF, self._client.sign_pdf, content, file_name, options
        )

    async def stamp(
        self, content: bytes, file_name: str, options: Mapping[str, Any] | None = None
    ) -> PdfResponse:
        """Apply the server's seal to *content*; see :meth:`sign` for arguments."""
        return await self._run(
            "Stamping", OP_STAMP_PDF, self._client.stamp_pdf, content, file_name, options
        )

    async def validate(
        self, content: bytes, file_name: str, options: Mapping[str, Any] | None = None
    ) -> PdfResponse:
        return await self._run(
            "Validating", OP_VALIDATE_PDF, self._client.validate_pdf, content, file_name, options
        )

    async def extract_content(self, zip_base64: str) -> bytes:
        """Return the PDF bytes carried in a response's ``zip_base64`` text."""
        return await self._client.decode_and_decompress(zip_base64)
