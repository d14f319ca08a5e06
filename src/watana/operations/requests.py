"""Signature request operations with typed inputs."""

from __future__ import annotations

__all__ = ["SignatureRequestOperations"]

import logging
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from ..constants import (
    FIELD_FILES,
    FIELD_FOLDER_CODE,
    FIELD_NAME,
    MANDATORY_FIELDS,
    OP_PREPARE_REQUEST,
    OP_SEND_REQUEST,
)
from ..core.payload import OperationPayload
from ..models.responses import FileEnvelope, OperationResponse, SignatureRequestResponse

if TYPE_CHECKING:
    from ..client import WatanaClient
    from ..models.requests import SignatureRequest

_logger = logging.getLogger(__name__)


class SignatureRequestOperations:
    """Prepare signature requests, send them to signers, and track them."""

    def __init__(self, client: WatanaClient) -> None:
        self._client = client

    async def get(self, signature_code: str) -> SignatureRequestResponse:
        _logger.info("Getting request: %s", signature_code)
        try:
            result = await self._client.get_request(signature_code)
        except Exception as e:
            _logger.error("Error getting request %s: %s", signature_code, e)
            raise
        _logger.info("Request retrieved: %s", signature_code)
        return result

    async def prepare(
        self,
        folder_code: str,
        name: str,
        files: Iterable[FileEnvelope],
        options: Mapping[str, Any] | None = None,
    ) -> OperationResponse:
        """
        Prepare a signature request on *folder_code*.

        Args:
            folder_code: Target folder.
            name: Request name.
            files: Files built with
                :meth:`~watana.operations.folders.FolderOperations.create_file`.
            options: Extra service options, merged after the mandatory
                fields (they may not overwrite them).
        """
        _logger.info("Preparing request for folder: %s", folder_code)
        payload = OperationPayload(
            OP_PREPARE_REQUEST,
            **{
                FIELD_FOLDER_CODE: folder_code,
                FIELD_NAME: name,
                FIELD_FILES: [f.to_payload() for f in files],
            },
        )
        payload.merge(options, reserved=MANDATORY_FIELDS[OP_PREPARE_REQUEST])
        try:
            result = await self._client.prepare_request(payload)
        except Exception as e:
            _logger.error("Error preparing request for folder %s: %s", folder_code, e)
            raise
        _logger.info("Request prepared for folder: %s", folder_code)
        return result

    async def send(
        self,
        request: SignatureRequest,
        options: Mapping[str, Any] | None = None,
    ) -> SignatureRequestResponse:
        _logger.info("Sending request for signing: %s", request.signature_code)
        payload = OperationPayload(OP_SEND_REQUEST, **request.to_payload())
        payload.merge(options, reserved=MANDATORY_FIELDS[OP_SEND_REQUEST])
        try:
            result = await self._client.send_request(payload)
        except Exception as e:
            _logger.error("Error sending request %s: %s", request.signature_code, e)
            raise
        _logger.info("Request sent: %s", request.signature_code)
        return result
