"""Tests for watana.models -- request payloads and response decoding."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError as PydanticValidationError

from watana.core.codec import compress_and_encode
from watana.models import (
    DownloadResponse,
    FileEnvelope,
    FolderRequest,
    FolderResponse,
    OperationResponse,
    PdfResponse,
    SignatureRequest,
    SignerRequest,
)

# ── requests ─────────────────────────────────────────────────────────


def test_signer_payload_minimal():
    signer = SignerRequest(name="Ana", email="ana@example.com")
    assert signer.to_payload() == {"nombre": "Ana", "email": "ana@example.com"}


def test_signer_payload_empty_optionals_omitted():
    signer = SignerRequest(name="Ana", email="ana@example.com", phone="", document="")
    assert "telefono" not in signer.to_payload()
    assert "documento" not in signer.to_payload()


def test_signer_is_frozen():
    signer = SignerRequest(name="Ana", email="ana@example.com")
    with pytest.raises(AttributeError):
        signer.name = "Bea"  # type: ignore[misc]


def test_folder_request_defaults():
    assert FolderRequest(folder_code="C-1").to_payload() == {
        "carpeta_codigo": "C-1",
        "titulo": "Sin título",
    }


def test_folder_request_blank_title_uses_default():
    assert FolderRequest(folder_code="C-1", title="").to_payload()["titulo"] == "Sin título"


def test_signature_request_payload():
    request = SignatureRequest(
        folder_code="C-1",
        signature_code="F-1",
        signers=(
            SignerRequest(name="Ana", email="a@example.com"),
            SignerRequest(name="Bea", email="b@example.com", phone="+51"),
        ),
    )
    assert request.to_payload() == {
        "carpeta_codigo": "C-1",
        "firma_codigo": "F-1",
        "firmantes": [
            {"nombre": "Ana", "email": "a@example.com"},
            {"nombre": "Bea", "email": "b@example.com", "telefono": "+51"},
        ],
    }


# ── responses ────────────────────────────────────────────────────────


def test_file_envelope_accepts_both_spellings():
    assert FileEnvelope.model_validate({"nombre": "a", "zipBase64": "X"}).content == "X"
    assert FileEnvelope.model_validate({"nombre": "a", "zip_base64": "Y"}).content == "Y"


def test_file_envelope_payload_and_decode():
    envelope = FileEnvelope(name="a", content=compress_and_encode(b"hola", "a"))
    assert envelope.to_payload()["nombre"] == "a"
    assert envelope.decode() == b"hola"


def test_envelope_requires_success():
    with pytest.raises(PydanticValidationError):
        OperationResponse.model_validate({"mensaje": "x"})


def test_envelope_message_default():
    assert OperationResponse.model_validate({"success": False}).message == ""


def test_unknown_fields_ignored_on_typed_models():
    result = FolderResponse.model_validate({"success": True, "nuevoCampo": 1})
    assert not hasattr(result, "nuevoCampo")


def test_folder_blank_date_is_none():
    result = FolderResponse.model_validate({"success": True, "fechaCreacion": "  "})
    assert result.created_at is None


def test_folder_invalid_date_rejected():
    with pytest.raises(PydanticValidationError):
        FolderResponse.model_validate({"success": True, "fechaCreacion": "yesterday"})


def test_download_files_default_empty():
    assert DownloadResponse.model_validate({"success": True}).files == []


def test_pdf_response_file():
    result = PdfResponse.model_validate_json(
        json.dumps({"success": True, "archivo": {"nombre": "doc", "zipBase64": "AAA="}})
    )
    assert result.file is not None
    assert result.file.name == "doc"


def test_dump_uses_wire_names():
    result = DownloadResponse(
        success=True,
        message="ok",
        request_number="1",
        files=[FileEnvelope(name="a", content="X")],
    )
    dumped = json.loads(result.model_dump_json(by_alias=True))
    assert dumped == {
        "success": True,
        "mensaje": "ok",
        "solicitudNumero": "1",
        "archivos": [{"nombre": "a", "zipBase64": "X"}],
    }
