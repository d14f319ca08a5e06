"""
Typed inputs for operations that carry structured bodies.

Each request knows how to render itself as the payload fields the service
expects.  Optional signer details are omitted when empty rather than sent
as blanks.
"""

from __future__ import annotations

__all__ = ["FolderRequest", "SignatureRequest", "SignerRequest"]

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ..constants import (
    DEFAULT_FOLDER_TITLE,
    FIELD_FILES,
    FIELD_FOLDER_CODE,
    FIELD_NAME,
    FIELD_SIGNATURE_CODE,
    FIELD_SIGNER,
    FIELD_SIGNERS,
    FIELD_TITLE,
)

if TYPE_CHECKING:
    from .responses import FileEnvelope


@dataclass(frozen=True)
class SignerRequest:
    """A person asked to sign.

    Attributes:
        name: Full name.
        email: Address the service notifies.
        phone: Optional phone number (international format).
        document: Optional identity document number.
    """

    name: str
    email: str
    phone: str | None = None
    document: str | None = None

    def to_payload(self) -> dict[str, str]:
        data = {FIELD_NAME: self.name, "email": self.email}
        if self.phone:
            data["telefono"] = self.phone
        if self.document:
            data["documento"] = self.document
        return data


@dataclass(frozen=True)
class FolderRequest:
    """A folder to create, with its signer and attached files."""

    folder_code: str
    title: str | None = None
    signer: SignerRequest | None = None
    files: tuple[FileEnvelope, ...] = ()

    def to_payload(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            FIELD_FOLDER_CODE: self.folder_code,
            FIELD_TITLE: self.title or DEFAULT_FOLDER_TITLE,
        }
        if self.signer is not None:
            data[FIELD_SIGNER] = self.signer.to_payload()
        if self.files:
            data[FIELD_FILES] = [f.to_payload() for f in self.files]
        return data


@dataclass(frozen=True)
class SignatureRequest:
    """Send an already prepared request to its signers."""

    folder_code: str
    signature_code: str
    signers: tuple[SignerRequest, ...]

    def to_payload(self) -> dict[str, Any]:
        return {
            FIELD_FOLDER_CODE: self.folder_code,
            FIELD_SIGNATURE_CODE: self.signature_code,
            FIELD_SIGNERS: [s.to_payload() for s in self.signers],
        }
