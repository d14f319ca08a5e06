"""
watana: async Python client for the Watana digital-signature service.

Creates signing folders, prepares and sends signature requests, and signs,
stamps, or validates PDF documents through the service's single JSON
endpoint.
"""

from __future__ import annotations

from .api import connect
from .client import WatanaClient
from .config.options import ClientConfig, make_client_config
from .constants import __version__
from .errors import (
    CommunicationError,
    CompressionError,
    ConfigError,
    EmptyArchiveError,
    InvalidArchiveError,
    InvalidEncodingError,
    RequestTimeoutError,
    ResponseDecodingError,
    TransportError,
    UnexpectedError,
    UnsupportedContentTypeError,
    ValidationError,
    WatanaError,
)
from .models import (
    DownloadResponse,
    FileEnvelope,
    FolderRequest,
    FolderResponse,
    OperationResponse,
    PdfResponse,
    SignatureRequest,
    SignatureRequestResponse,
    SignerRequest,
    SignerStatus,
)

__all__ = [
    "ClientConfig",
    "CommunicationError",
    "CompressionError",
    "ConfigError",
    "DownloadResponse",
    "EmptyArchiveError",
    "FileEnvelope",
    "FolderRequest",
    "FolderResponse",
    "InvalidArchiveError",
    "InvalidEncodingError",
    "OperationResponse",
    "PdfResponse",
    "RequestTimeoutError",
    "ResponseDecodingError",
    "SignatureRequest",
    "SignatureRequestResponse",
    "SignerRequest",
    "SignerStatus",
    "TransportError",
    "UnexpectedError",
    "UnsupportedContentTypeError",
    "ValidationError",
    "WatanaClient",
    "WatanaError",
    "__version__",
    "connect",
    "make_client_config",
]
