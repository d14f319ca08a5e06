"""Request inputs and response envelopes."""

from __future__ import annotations

from .requests import FolderRequest, SignatureRequest, SignerRequest
from .responses import (
    DownloadResponse,
    FileEnvelope,
    FolderResponse,
    OperationResponse,
    PdfResponse,
    SignatureRequestResponse,
    SignerStatus,
)

__all__ = [
    "DownloadResponse",
    "FileEnvelope",
    "FolderRequest",
    "FolderResponse",
    "OperationResponse",
    "PdfResponse",
    "SignatureRequest",
    "SignatureRequestResponse",
    "SignerRequest",
    "SignerStatus",
]
