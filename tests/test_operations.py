"""Tests for watana.operations -- folder, request, and PDF facades."""

from __future__ import annotations

import asyncio
import base64
import io
import json
import zipfile

import httpx
import pytest
from conftest import json_response

from watana.core.codec import compress_and_encode
from watana.errors import TransportError, ValidationError
from watana.models import FileEnvelope, FolderRequest, SignatureRequest, SignerRequest


def _entry_names(zip_base64: str) -> list[str]:
    with zipfile.ZipFile(io.BytesIO(base64.b64decode(zip_base64))) as archive:
        return archive.namelist()


def _body(request: httpx.Request) -> dict:
    return json.loads(request.content)


# ── FolderOperations ─────────────────────────────────────────────────


def test_folder_send_builds_payload(make_client):
    client, recorder = make_client(json_response({"success": True, "carpetaCodigo": "C-1"}))
    request = FolderRequest(
        folder_code="C-1",
        signer=SignerRequest(name="Ana Pérez", email="ana@example.com"),
        files=(FileEnvelope(name="contrato", content="AAA="),),
    )
    result = asyncio.run(client.folders.send(request))

    assert result.folder_code == "C-1"
    assert recorder.last_body == {
        "operacion": "enviar_carpeta",
        "carpeta_codigo": "C-1",
        "titulo": "Sin título",
        "firmante": {"nombre": "Ana Pérez", "email": "ana@example.com"},
        "archivos": [{"nombre": "contrato", "zip_base64": "AAA="}],
    }


def test_folder_send_optional_signer_fields(make_client):
    client, recorder = make_client(json_response({"success": True}))
    request = FolderRequest(
        folder_code="C-1",
        title="Contratos",
        signer=SignerRequest(
            name="Ana", email="ana@example.com", phone="+51999999999", document="12345678"
        ),
        files=(FileEnvelope(name="a", content="AAA="),),
    )
    asyncio.run(client.folders.send(request))

    body = recorder.last_body
    assert body["titulo"] == "Contratos"
    assert body["firmante"]["telefono"] == "+51999999999"
    assert body["firmante"]["documento"] == "12345678"


def test_folder_send_without_signer_fails_validation(make_client):
    client, recorder = make_client(json_response({"success": True}))
    request = FolderRequest(folder_code="C-1", files=(FileEnvelope(name="a", content="A"),))
    with pytest.raises(ValidationError) as exc_info:
        asyncio.run(client.folders.send(request))
    assert exc_info.value.field == "firmante"
    assert recorder.requests == []


def test_folder_get_and_delete(make_client):
    client, recorder = make_client(json_response({"success": True, "estado": "ok"}))
    assert asyncio.run(client.folders.get("C-1")).status == "ok"
    assert asyncio.run(client.folders.delete("C-1")).success is True
    assert [r["operacion"] for r in map(_body, recorder.requests)] == [
        "consultar_carpeta",
        "eliminar_carpeta",
    ]


def test_folder_download(make_client):
    body = {
        "success": True,
        "solicitudNumero": "123",
        "archivos": [{"nombre": "f", "zipBase64": compress_and_encode(b"data", "f")}],
    }
    client, _ = make_client(json_response(body))
    result = asyncio.run(client.folders.download("C-1"))
    assert result.request_number == "123"
    assert result.files[0].decode() == b"data"


def test_folder_errors_are_reraised(make_client):
    client, _ = make_client(httpx.Response(500))
    with pytest.raises(TransportError):
        asyncio.run(client.folders.get("C-1"))


def test_create_file(make_client):
    client, recorder = make_client(json_response({}))
    envelope = asyncio.run(client.folders.create_file("C-1", "contrato.docx", b"content"))
    assert envelope.name == "contrato.docx"
    assert envelope.decode() == b"content"
    assert _entry_names(envelope.content) == ["contrato.docx"]
    assert recorder.requests == []


# ── SignatureRequestOperations ───────────────────────────────────────


def test_request_prepare(make_client):
    client, recorder = make_client(json_response({"success": True, "solicitud": "S-1"}))
    files = [FileEnvelope(name="a", content="AAA=")]
    result = asyncio.run(
        client.requests.prepare("C-1", "Contrato", files, {"fecha_limite": "2024-12-31"})
    )

    assert result.model_extra == {"solicitud": "S-1"}
    assert recorder.last_body == {
        "operacion": "preparar_solicitud",
        "carpeta_codigo": "C-1",
        "nombre": "Contrato",
        "archivos": [{"nombre": "a", "zip_base64": "AAA="}],
        "fecha_limite": "2024-12-31",
    }


def test_request_prepare_options_cannot_override_mandatory(make_client):
    client, recorder = make_client(json_response({"success": True}))
    with pytest.raises(ValidationError):
        asyncio.run(client.requests.prepare("C-1", "Contrato", [], {"carpeta_codigo": "X"}))
    assert recorder.requests == []


def test_request_send(make_client):
    body = {
        "success": True,
        "firmaCodigo": "F-1",
        "estado": "enviado",
        "firmantes": [{"nombre": "Ana", "email": "ana@example.com", "estado": "pendiente"}],
    }
    client, recorder = make_client(json_response(body))
    request = SignatureRequest(
        folder_code="C-1",
        signature_code="F-1",
        signers=(SignerRequest(name="Ana", email="ana@example.com"),),
    )
    result = asyncio.run(client.requests.send(request))

    assert result.signature_code == "F-1"
    assert result.signers is not None
    assert result.signers[0].status == "pendiente"
    assert result.signers[0].signed_at is None
    assert recorder.last_body["firmantes"] == [{"nombre": "Ana", "email": "ana@example.com"}]


def test_request_get(make_client):
    body = {
        "success": True,
        "firmaCodigo": "F-1",
        "firmantes": [{"nombre": "Ana", "estado": "firmado", "fechaFirma": "2024-05-02T09:30:00"}],
    }
    client, recorder = make_client(json_response(body))
    result = asyncio.run(client.requests.get("F-1"))
    assert result.signers is not None
    assert result.signers[0].signed_at is not None
    assert recorder.last_body == {"operacion": "consultar_solicitud", "firma_codigo": "F-1"}


# ── PdfOperations ────────────────────────────────────────────────────


@pytest.mark.parametrize(
    ("action", "operation"),
    [("sign", "firmar_pdf"), ("stamp", "sellar_pdf"), ("validate", "validar_pdf")],
)
def test_pdf_actions(make_client, action, operation):
    client, recorder = make_client(json_response({"success": True}))
    asyncio.run(getattr(client.pdf, action)(b"%PDF-1.7", "documento", {"pagina": 1}))

    body = recorder.last_body
    assert body["operacion"] == operation
    assert body["pagina"] == 1
    assert _entry_names(body["zip_base64"]) == ["documento.pdf"]


def test_pdf_name_with_extension_not_doubled(make_client):
    client, recorder = make_client(json_response({"success": True}))
    asyncio.run(client.pdf.sign(b"%PDF", "documento.PDF"))
    assert _entry_names(recorder.last_body["zip_base64"]) == ["documento.pdf"]


def test_pdf_empty_content_rejected(make_client):
    client, recorder = make_client(json_response({"success": True}))
    with pytest.raises(ValidationError):
        asyncio.run(client.pdf.sign(b"", "documento"))
    assert recorder.requests == []


def test_pdf_option_cannot_replace_content(make_client):
    client, recorder = make_client(json_response({"success": True}))
    with pytest.raises(ValidationError):
        asyncio.run(client.pdf.stamp(b"%PDF", "doc", {"zip_base64": "other"}))
    assert recorder.requests == []


def test_pdf_sign_and_extract(make_client):
    signed = compress_and_encode(b"%PDF signed", "documento", "pdf")
    client, _ = make_client(
        json_response({"success": True, "archivo": {"nombre": "documento", "zipBase64": signed}})
    )

    async def _run():
        result = await client.pdf.sign(b"%PDF", "documento")
        assert result.file is not None
        return await client.pdf.extract_content(result.file.content)

    assert asyncio.run(_run()) == b"%PDF signed"
