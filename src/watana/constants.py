"""
Application-wide constants for the Watana client.

Timeouts, wire identifiers, media types, and size limits are centralized
here for easy maintenance and configuration.
"""

from __future__ import annotations

import importlib.metadata

try:
    __version__ = importlib.metadata.version("watana-client")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.1.0"

__all__ = [
    "BYTES_PER_MB",
    "DEFAULT_FILE_NAME",
    "DEFAULT_FOLDER_TITLE",
    "DEFAULT_TIMEOUT",
    "DISK_BUFFER_THRESHOLD",
    "DOWNLOAD_MESSAGE",
    "DOWNLOAD_REQUEST_NUMBER",
    "ENV_TIMEOUT",
    "ENV_TOKEN",
    "ENV_URL",
    "ERROR_PREVIEW_LENGTH",
    "FIELD_FILES",
    "FIELD_FOLDER_CODE",
    "FIELD_NAME",
    "FIELD_OPERATION",
    "FIELD_SIGNATURE_CODE",
    "FIELD_SIGNER",
    "FIELD_SIGNERS",
    "FIELD_TITLE",
    "FIELD_ZIP_BASE64",
    "JSON_MEDIA_TYPE",
    "MANDATORY_FIELDS",
    "MAX_TIMEOUT",
    "MIN_TIMEOUT",
    "OP_DELETE_FOLDER",
    "OP_DOWNLOAD_FOLDER",
    "OP_GET_FOLDER",
    "OP_GET_REQUEST",
    "OP_PREPARE_REQUEST",
    "OP_SEND_FOLDER",
    "OP_SEND_REQUEST",
    "OP_SIGN_PDF",
    "OP_STAMP_PDF",
    "OP_VALIDATE_PDF",
    "OPERATIONS",
    "PDF_EXTENSION",
    "ZIP_COMPRESSION_LEVEL",
    "ZIP_MEDIA_TYPES",
    "__version__",
]

# ── Timeout values (seconds) ──────────────────────────────────────────

# Bound on every network call
DEFAULT_TIMEOUT = 300

MIN_TIMEOUT = 1
MAX_TIMEOUT = 3600


# ── Size units ────────────────────────────────────────────────────────

BYTES_PER_MB = 1024 * 1024

# Inputs above this size are zipped through a temp file instead of memory
DISK_BUFFER_THRESHOLD = 32 * BYTES_PER_MB

# zlib level used for archive entries (9 = smallest output)
ZIP_COMPRESSION_LEVEL = 9

# Response body truncation length for error logs (characters)
ERROR_PREVIEW_LENGTH = 300


# ── Operation catalogue ───────────────────────────────────────────────

OP_GET_FOLDER = "consultar_carpeta"
OP_SEND_FOLDER = "enviar_carpeta"
OP_DOWNLOAD_FOLDER = "descargar_carpeta"
OP_DELETE_FOLDER = "eliminar_carpeta"
OP_PREPARE_REQUEST = "preparar_solicitud"
OP_SEND_REQUEST = "enviar_solicitud"
OP_GET_REQUEST = "consultar_solicitud"
OP_SIGN_PDF = "firmar_pdf"
OP_STAMP_PDF = "sellar_pdf"
OP_VALIDATE_PDF = "validar_pdf"

OPERATIONS = (
    OP_GET_FOLDER,
    OP_SEND_FOLDER,
    OP_DOWNLOAD_FOLDER,
    OP_DELETE_FOLDER,
    OP_PREPARE_REQUEST,
    OP_SEND_REQUEST,
    OP_GET_REQUEST,
    OP_SIGN_PDF,
    OP_STAMP_PDF,
    OP_VALIDATE_PDF,
)


# ── Payload keys (as the service spells them) ────────────────────────

FIELD_OPERATION = "operacion"
FIELD_FOLDER_CODE = "carpeta_codigo"
FIELD_TITLE = "titulo"
FIELD_SIGNER = "firmante"
FIELD_SIGNERS = "firmantes"
FIELD_FILES = "archivos"
FIELD_NAME = "nombre"
FIELD_SIGNATURE_CODE = "firma_codigo"
FIELD_ZIP_BASE64 = "zip_base64"

# Checked in this order; validation stops at the first missing key
MANDATORY_FIELDS: dict[str, tuple[str, ...]] = {
    OP_GET_FOLDER: (FIELD_FOLDER_CODE,),
    OP_SEND_FOLDER: (FIELD_FOLDER_CODE, FIELD_TITLE, FIELD_SIGNER, FIELD_FILES),
    OP_DOWNLOAD_FOLDER: (FIELD_FOLDER_CODE,),
    OP_DELETE_FOLDER: (FIELD_FOLDER_CODE,),
    OP_PREPARE_REQUEST: (FIELD_FOLDER_CODE, FIELD_NAME, FIELD_FILES),
    OP_SEND_REQUEST: (FIELD_FOLDER_CODE, FIELD_SIGNATURE_CODE, FIELD_SIGNERS),
    OP_GET_REQUEST: (FIELD_SIGNATURE_CODE,),
    OP_SIGN_PDF: (FIELD_ZIP_BASE64,),
    OP_STAMP_PDF: (FIELD_ZIP_BASE64,),
    OP_VALIDATE_PDF: (FIELD_ZIP_BASE64,),
}


# ── Media types ───────────────────────────────────────────────────────

JSON_MEDIA_TYPE = "application/json"
ZIP_MEDIA_TYPES = frozenset({"application/x-zip-compressed", "application/zip"})


# ── Download envelope placeholders ────────────────────────────────────

DOWNLOAD_MESSAGE = "Archivo descargado correctamente"

# The service never reports a request number for binary downloads
DOWNLOAD_REQUEST_NUMBER = "00000000000"

DEFAULT_FILE_NAME = "archivo_sin_nombre.zip"


# ── Facade defaults ───────────────────────────────────────────────────

DEFAULT_FOLDER_TITLE = "Sin título"
PDF_EXTENSION = "pdf"


# ── Environment variable names ──────────────────────────────────────

ENV_URL = "WATANA_URL"
ENV_TOKEN = "WATANA_TOKEN"
ENV_TIMEOUT = "WATANA_TIMEOUT"
