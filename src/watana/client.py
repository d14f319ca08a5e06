"""
Watana client: one coroutine per remote operation.

Methods here take raw payloads (plain mappings or
:class:`~watana.core.payload.OperationPayload`), check the operation's
mandatory fields, and hand the payload to the transport.  For typed inputs
use the facades exposed as :attr:`WatanaClient.folders`,
:attr:`WatanaClient.requests`, and :attr:`WatanaClient.pdf`.
"""

from __future__ import annotations

__all__ = ["WatanaClient"]

import asyncio
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .constants import (
    DISK_BUFFER_THRESHOLD,
    FIELD_FOLDER_CODE,
    FIELD_SIGNATURE_CODE,
    OP_DELETE_FOLDER,
    OP_DOWNLOAD_FOLDER,
    OP_GET_FOLDER,
    OP_GET_REQUEST,
    OP_PREPARE_REQUEST,
    OP_SEND_FOLDER,
    OP_SEND_REQUEST,
    OP_SIGN_PDF,
    OP_STAMP_PDF,
    OP_VALIDATE_PDF,
)
from .core.codec import compress_and_encode, decode_and_decompress
from .core.payload import OperationPayload, validate_operation
from .models.responses import (
    DownloadResponse,
    FolderResponse,
    OperationResponse,
    PdfResponse,
    SignatureRequestResponse,
)
from .network.transport import WatanaTransport
from .operations.folders import FolderOperations
from .operations.pdf import PdfOperations
from .operations.requests import SignatureRequestOperations

if TYPE_CHECKING:
    import httpx

    from .config.options import ClientConfig
    from .network.protocol import OperationTransport, ResultT

_logger = logging.getLogger(__name__)


class WatanaClient:
    """Entry point to the Watana service.

    Args:
        config: Endpoint, token, and timeout for the default HTTP transport.
        http_transport: Optional httpx transport for the default transport.
        transport: Replaces the HTTP transport entirely; anything
            implementing :class:`~watana.network.protocol.OperationTransport`.

    Every operation method takes an optional ``result_type``, a pydantic
    model the response is decoded into instead of the default one.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        http_transport: httpx.AsyncBaseTransport | None = None,
        transport: OperationTransport | None = None,
    ) -> None:
        if transport is None:
            if config is None:
                raise ValueError("WatanaClient needs a config or a transport")
            transport = WatanaTransport(config, http_transport=http_transport)
        self.transport = transport
        self.folders = FolderOperations(self)
        self.requests = SignatureRequestOperations(self)
        self.pdf = PdfOperations(self)

    async def call(
        self,
        operation: str,
        payload: Mapping[str, Any],
        result_type: type[ResultT],
    ) -> ResultT:
        """
        Validate and send *payload* as *operation*, decoding into *result_type*.

        Raises:
            ValidationError: If a mandatory field is missing (checked in
                declared order, stopping at the first one).
            Anything the transport raises.
        """
        body = OperationPayload.from_mapping(payload)
        # A payload that already names an operation is checked against that one
        operation = body.ensure_operation(operation)
        validate_operation(operation, body)
        return await self.transport.send_typed(operation, body, result_type)

    # ── Folders ──

    async def get_folder(
        self,
        folder_code: str,
        result_type: type[ResultT] = FolderResponse,  # type: ignore[assignment]
    ) -> ResultT:
        _logger.info("Querying folder: %s", folder_code)
        payload = OperationPayload(OP_GET_FOLDER, **{FIELD_FOLDER_CODE: folder_code})
        return await self.call(OP_GET_FOLDER, payload, result_type)

    async def send_folder(
        self,
        payload: Mapping[str, Any],
        result_type: type[ResultT] = FolderResponse,  # type: ignore[assignment]
    ) -> ResultT:
        _logger.info("Sending folder: %s", payload.get(FIELD_FOLDER_CODE, "N/A"))
        return await self.call(OP_SEND_FOLDER, payload, result_type)

    async def download_folder(
        self,
        folder_code: str,
        result_type: type[ResultT] = DownloadResponse,  # type: ignore[assignment]
    ) -> ResultT:
        """Download a folder; ZIP answers arrive wrapped in a download envelope."""
        _logger.info("Downloading folder: %s", folder_code)
        payload = OperationPayload(OP_DOWNLOAD_FOLDER, **{FIELD_FOLDER_CODE: folder_code})
        return await self.call(OP_DOWNLOAD_FOLDER, payload, result_type)

    async def delete_folder(
        self,
        folder_code: str,
        result_type: type[ResultT] = OperationResponse,  # type: ignore[assignment]
    ) -> ResultT:
        _logger.info("Deleting folder: %s", folder_code)
        payload = OperationPayload(OP_DELETE_FOLDER, **{FIELD_FOLDER_CODE: folder_code})
        return await self.call(OP_DELETE_FOLDER, payload, result_type)

    # ── Signature requests ──

    async def prepare_request(
        self,
        payload: Mapping[str, Any],
        result_type: type[ResultT] = OperationResponse,  # type: ignore[assignment]
    ) -> ResultT:
        _logger.info("Preparing request for folder: %s", payload.get(FIELD_FOLDER_CODE, "N/A"))
        return await self.call(OP_PREPARE_REQUEST, payload, result_type)

    async def send_request(
        self,
        payload: Mapping[str, Any],
        result_type: type[ResultT] = SignatureRequestResponse,  # type: ignore[assignment]
    ) -> ResultT:
        _logger.info("Sending request for signing: %s", payload.get(FIELD_SIGNATURE_CODE, "N/A"))
        return await self.call(OP_SEND_REQUEST, payload, result_type)

    async def get_request(
        self,
        signature_code: str,
        result_type: type[ResultT] = SignatureRequestResponse,  # type: ignore[assignment]
    ) -> ResultT:
        _logger.info("Querying request: %s", signature_code)
        payload = OperationPayload(OP_GET_REQUEST, **{FIELD_SIGNATURE_CODE: signature_code})
        return await self.call(OP_GET_REQUEST, payload, result_type)

    # ── PDF ──

    async def sign_pdf(
        self,
        payload: Mapping[str, Any],
        result_type: type[ResultT] = PdfResponse,  # type: ignore[assignment]
    ) -> ResultT:
        _logger.info("Signing PDF")
        return await self.call(OP_SIGN_PDF, payload, result_type)

    async def stamp_pdf(
        self,
        payload: Mapping[str, Any],
        result_type: type[ResultT] = PdfResponse,  # type: ignore[assignment]
    ) -> ResultT:
        _logger.info("Stamping PDF")
        return await self.call(OP_STAMP_PDF, payload, result_type)

    async def validate_pdf(
        self,
        payload: Mapping[str, Any],
        result_type: type[ResultT] = PdfResponse,  # type: ignore[assignment]
    ) -> ResultT:
        _logger.info("Validating PDF")
        return await self.call(OP_VALIDATE_PDF, payload, result_type)

    # ── Files ──

    async def compress_and_encode(
        self,
        content: bytes,
        name: str,
        extension: str = "",
        *,
        on_disk: bool | None = None,
    ) -> str:
        """
        Zip *content* and return base64 text for a ``zip_base64`` field.

        Args:
            content: Raw file bytes.
            name: Archive entry name without extension.
            extension: Optional entry extension.
            on_disk: Stage the archive in a temp file. Defaults to True for
                inputs above ``DISK_BUFFER_THRESHOLD``; the disk path runs in
                a worker thread.
        """
        _logger.info("Compressing %s (%d bytes)", name or "<unnamed>", len(content))
        if on_disk is None:
            on_disk = len(content) > DISK_BUFFER_THRESHOLD
        if on_disk:
            return await asyncio.to_thread(
                compress_and_encode, content, name, extension, on_disk=True
            )
        return compress_and_encode(content, name, extension)

    async def decode_and_decompress(self, text: str) -> bytes:
        """Reverse :meth:`compress_and_encode`: base64 text to original bytes."""
        _logger.info("Decompressing file from base64 (%d chars)", len(text))
        return decode_and_decompress(text)
