"""Folder operations with typed inputs."""

from __future__ import annotations

__all__ = ["FolderOperations"]

import logging
from typing import TYPE_CHECKING

from ..constants import OP_SEND_FOLDER
from ..core.payload import OperationPayload
from ..models.responses import (
    DownloadResponse,
    FileEnvelope,
    FolderResponse,
    OperationResponse,
)

if TYPE_CHECKING:
    from ..client import WatanaClient
    from ..models.requests import FolderRequest

_logger = logging.getLogger(__name__)


class FolderOperations:
    """Create, inspect, download and delete signing folders."""

    def __init__(self, client: WatanaClient) -> None:
        self._client = client

    async def get(self, folder_code: str) -> FolderResponse:
        _logger.info("Getting folder: %s", folder_code)
        try:
            result = await self._client.get_folder(folder_code)
        except Exception as e:
            _logger.error("Error getting folder %s: %s", folder_code, e)
            raise
        _logger.info("Folder retrieved: %s", folder_code)
        return result

    async def send(self, request: FolderRequest) -> FolderResponse:
        """Create a folder with its signer and files."""
        _logger.info("Sending folder: %s", request.folder_code)
        payload = OperationPayload(OP_SEND_FOLDER, **request.to_payload())
        try:
            result = await self._client.send_folder(payload)
        except Exception as e:
            _logger.error("Error sending folder %s: %s", request.folder_code, e)
            raise
        _logger.info("Folder sent: %s", request.folder_code)
        return result

    async def download(self, folder_code: str) -> DownloadResponse:
        _logger.info("Downloading folder: %s", folder_code)
        try:
            result = await self._client.download_folder(folder_code)
        except Exception as e:
            _logger.error("Error downloading folder %s: %s", folder_code, e)
            raise
        _logger.info("Folder downloaded: %s (%d files)", folder_code, len(result.files))
        return result

    async def delete(self, folder_code: str) -> OperationResponse:
        _logger.info("Deleting folder: %s", folder_code)
        try:
            result = await self._client.delete_folder(folder_code)
        except Exception as e:
            _logger.error("Error deleting folder %s: %s", folder_code, e)
            raise
        _logger.info("Folder deleted: %s", folder_code)
        return result

    async def create_file(
        self, folder_code: str, file_name: str, content: bytes
    ) -> FileEnvelope:
        """
        Pack one file for :class:`~watana.models.requests.FolderRequest`.

        *file_name* is used as-is for both the envelope name and the archive
        entry.
        """
        _logger.info("Creating file %s for folder %s", file_name, folder_code)
        encoded = await self._client.compress_and_encode(content, file_name)
        return FileEnvelope(name=file_name, content=encoded)
