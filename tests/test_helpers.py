"""Tests for watana.ui.helpers -- shared CLI helper functions."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from watana.errors import TransportError
from watana.models import OperationResponse
from watana.ui.helpers import (
    atomic_write,
    confirm_choice,
    format_size_kb,
    parse_options,
    print_result,
    run_async,
    safe_input,
    safe_read_file,
)

# ── format_size_kb ───────────────────────────────────────────────────


def test_format_size_kb():
    assert format_size_kb(0) == "0.0 KB"
    assert format_size_kb(1536) == "1.5 KB"


# ── safe_input / confirm_choice ──────────────────────────────────────


def test_safe_input_strips():
    with patch("builtins.input", return_value="  value  "):
        assert safe_input("? ") == "value"


def test_safe_input_eof():
    with patch("builtins.input", side_effect=EOFError):
        assert safe_input("? ") is None


@pytest.mark.parametrize(
    ("answer", "default_yes", "expected"),
    [
        ("", True, True),
        ("", False, False),
        ("y", False, True),
        ("YES", True, True),
        ("n", True, False),
    ],
)
def test_confirm_choice(answer, default_yes, expected):
    with patch("builtins.input", return_value=answer):
        assert confirm_choice("Continue?", default_yes=default_yes) is expected


def test_confirm_choice_interrupt():
    with patch("builtins.input", side_effect=KeyboardInterrupt):
        assert confirm_choice("Continue?") is False


# ── files ────────────────────────────────────────────────────────────


def test_safe_read_file(tmp_path):
    path = tmp_path / "a.pdf"
    path.write_bytes(b"%PDF")
    assert safe_read_file(path) == b"%PDF"


def test_safe_read_file_missing(tmp_path, capsys):
    assert safe_read_file(tmp_path / "missing.pdf", "PDF") is None
    assert "PDF not found" in capsys.readouterr().err


def test_atomic_write(tmp_path):
    path = tmp_path / "out.pdf"
    atomic_write(path, b"data")
    assert path.read_bytes() == b"data"
    assert [p.name for p in tmp_path.iterdir()] == ["out.pdf"]


# ── parse_options ────────────────────────────────────────────────────


def test_parse_options_json_values():
    assert parse_options(["pagina=1", "visible=true", 'pos={"x": 10}']) == {
        "pagina": 1,
        "visible": True,
        "pos": {"x": 10},
    }


def test_parse_options_plain_strings():
    assert parse_options(["motivo=Aprobado por gerencia", "vacio="]) == {
        "motivo": "Aprobado por gerencia",
        "vacio": "",
    }


def test_parse_options_value_with_equals():
    assert parse_options(["expr=a=b"]) == {"expr": "a=b"}


def test_parse_options_none():
    assert parse_options(None) == {}


@pytest.mark.parametrize("item", ["novalue", "=1"])
def test_parse_options_invalid(item):
    with pytest.raises(ValueError):
        parse_options([item])


# ── print_result / run_async ─────────────────────────────────────────


def test_print_result_uses_wire_names(capsys):
    print_result(OperationResponse(success=True, message="ok"))
    out = capsys.readouterr().out
    assert '"mensaje": "ok"' in out


def test_run_async_returns_value():
    async def _ok():
        return 42

    assert run_async(_ok()) == 42


def test_run_async_reports_errors(capsys):
    async def _fail():
        raise TransportError(500, "Internal Server Error")

    with pytest.raises(SystemExit) as exc_info:
        run_async(_fail())
    assert exc_info.value.code == 1
    assert capsys.readouterr().err.strip() == "Error: HTTP error 500: Internal Server Error"
