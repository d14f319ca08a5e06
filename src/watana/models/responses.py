"""
Typed result envelopes returned by the Watana service.

Every response shares ``{success, mensaje}``; the rest is operation
specific.  Field names on the wire are camelCase Spanish (``carpetaCodigo``,
``zipBase64``); the snake_case spelling is accepted too since the service
is not consistent about it.  Python attribute names are English.
"""

from __future__ import annotations

__all__ = [
    "DownloadResponse",
    "FileEnvelope",
    "FolderResponse",
    "OperationResponse",
    "PdfResponse",
    "SignatureRequestResponse",
    "SignerStatus",
]

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from ..constants import FIELD_NAME, FIELD_ZIP_BASE64
from ..core.codec import decode_and_decompress


def _wire(camel: str, snake: str | None = None, **kwargs: Any) -> Any:
    """Field accepting *camel* (and *snake*, if given) and dumping as *camel*."""
    names = (camel, snake) if snake and snake != camel else (camel,)
    return Field(validation_alias=AliasChoices(*names), serialization_alias=camel, **kwargs)


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class FileEnvelope(_WireModel):
    """A named file whose content is ``base64(zip(bytes))``.

    Used for uploads (see :meth:`to_payload`) and for files the service
    sends back.
    """

    name: str = _wire("nombre", default="")
    content: str = _wire("zipBase64", "zip_base64", default="")

    def to_payload(self) -> dict[str, str]:
        return {FIELD_NAME: self.name, FIELD_ZIP_BASE64: self.content}

    def decode(self) -> bytes:
        """Return the original file bytes."""
        return decode_and_decompress(self.content)


class _Envelope(_WireModel):
    success: bool = _wire("success")
    message: str = _wire("mensaje", "message", default="")


class OperationResponse(_Envelope):
    """Free-form result (folder deletion, request preparation).

    Unknown fields are kept and available via ``model_extra``.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class FolderResponse(_Envelope):
    folder_code: str = _wire("carpetaCodigo", "carpeta_codigo", default="")
    status: str = _wire("estado", default="")
    created_at: datetime | None = _wire("fechaCreacion", "fecha_creacion", default=None)
    files: list[FileEnvelope] | None = _wire("archivos", default=None)

    @field_validator("created_at", mode="before")
    @classmethod
    def blank_created_at(cls, value: Any) -> Any:
        return _blank_to_none(value)


class DownloadResponse(_Envelope):
    request_number: str = _wire("solicitudNumero", "solicitud_numero", default="")
    files: list[FileEnvelope] = _wire("archivos", default_factory=list)


class SignerStatus(_WireModel):
    name: str = _wire("nombre", default="")
    email: str = _wire("email", default="")
    status: str = _wire("estado", default="")
    signed_at: datetime | None = _wire("fechaFirma", "fecha_firma", default=None)

    @field_validator("signed_at", mode="before")
    @classmethod
    def blank_signed_at(cls, value: Any) -> Any:
        return _blank_to_none(value)


class SignatureRequestResponse(_Envelope):
    signature_code: str = _wire("firmaCodigo", "firma_codigo", default="")
    status: str = _wire("estado", default="")
    signers: list[SignerStatus] | None = _wire("firmantes", default=None)


class PdfResponse(_Envelope):
    file: FileEnvelope | None = _wire("archivo", default=None)
