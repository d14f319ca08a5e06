"""Tests for watana.errors -- exception hierarchy."""

import pickle

import pytest

from watana.errors import (
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


def test_watana_error_is_exception():
    assert issubclass(WatanaError, Exception)


@pytest.mark.parametrize(
    "cls",
    [
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
    ],
)
def test_all_errors_inherit_base(cls):
    assert issubclass(cls, WatanaError)


def test_transport_error_is_communication_error():
    assert issubclass(TransportError, CommunicationError)


def test_timeout_is_builtin_timeout():
    assert issubclass(RequestTimeoutError, TimeoutError)
    assert not issubclass(RequestTimeoutError, CommunicationError)


def test_validation_error_field():
    e = ValidationError("Field 'titulo' is mandatory", field="titulo")
    assert e.field == "titulo"
    assert str(e) == "Field 'titulo' is mandatory"


def test_validation_error_field_optional():
    assert ValidationError("bad").field is None


def test_transport_error_message():
    e = TransportError(404, "Not Found")
    assert str(e) == "HTTP error 404: Not Found"
    assert e.status_code == 404
    assert e.reason == "Not Found"


def test_transport_error_without_reason():
    assert str(TransportError(599)) == "HTTP error 599"


def test_unsupported_content_type_message():
    assert "text/html" in str(UnsupportedContentTypeError("text/html"))
    assert "<missing>" in str(UnsupportedContentTypeError(None))


def test_response_decoding_error_message():
    e = ResponseDecodingError("FolderResponse", "success: Field required")
    assert e.target == "FolderResponse"
    assert str(e) == "Cannot decode server response as FolderResponse: success: Field required"


def test_validation_error_pickle_roundtrip():
    e = ValidationError("missing", field="carpeta_codigo")
    restored = pickle.loads(pickle.dumps(e))
    assert isinstance(restored, ValidationError)
    assert str(restored) == "missing"
    assert restored.field == "carpeta_codigo"


def test_transport_error_pickle_roundtrip():
    restored = pickle.loads(pickle.dumps(TransportError(502, "Bad Gateway")))
    assert isinstance(restored, TransportError)
    assert restored.status_code == 502
    assert str(restored) == "HTTP error 502: Bad Gateway"


def test_content_type_error_pickle_roundtrip():
    restored = pickle.loads(pickle.dumps(UnsupportedContentTypeError("text/plain")))
    assert restored.content_type == "text/plain"


def test_catch_all_with_base():
    for cls in (CommunicationError, CompressionError, InvalidEncodingError, UnexpectedError):
        try:
            raise cls("test")
        except WatanaError:  # noqa: PERF203
            pass  # expected
