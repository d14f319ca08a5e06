"""
PDF subcommands: sign, stamp, validate, extract.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING

from ...core.codec import decode_and_decompress
from ...errors import WatanaError
from ..helpers import (
    atomic_write,
    client_from_args,
    format_size_kb,
    parse_options,
    print_result,
    run_async,
    safe_read_file,
)

if TYPE_CHECKING:
    import argparse

    from ...models import PdfResponse

_HIDE_FILE_CONTENT = {"file": {"content"}}

# Output suffix per action; validate writes only when -o is given
_OUTPUT_SUFFIX = {"sign": "_signed", "stamp": "_stamped"}


def default_output_path(pdf_path: Path, action: str) -> Path | None:
    """Compute the default output path, e.g. '<stem>_signed.pdf'."""
    suffix = _OUTPUT_SUFFIX.get(action)
    if suffix is None:
        return None
    return pdf_path.with_name(f"{pdf_path.stem}{suffix}.pdf")


async def _process(args: argparse.Namespace) -> None:
    pdf_path = Path(args.pdf)
    content = safe_read_file(pdf_path, "PDF")
    if content is None:
        sys.exit(1)
    options = parse_options(args.option)

    client = client_from_args(args)
    actions = {
        "sign": client.pdf.sign,
        "stamp": client.pdf.stamp,
        "validate": client.pdf.validate,
    }
    print(f"Sending {pdf_path.name} ({format_size_kb(len(content))})...", file=sys.stderr)
    result: PdfResponse = await actions[args.pdf_command](content, pdf_path.name, options)

    output = Path(args.output) if args.output else default_output_path(pdf_path, args.pdf_command)
    if output is not None and result.file is not None and result.file.content:
        data = await client.pdf.extract_content(result.file.content)
        atomic_write(output, data)
        print(f"Saved {output} ({format_size_kb(len(data))})", file=sys.stderr)

    print_result(result, exclude=_HIDE_FILE_CONTENT)


def _extract(args: argparse.Namespace) -> None:
    source = Path(args.source)
    raw = safe_read_file(source, "base64 file")
    if raw is None:
        sys.exit(1)

    try:
        data = decode_and_decompress(raw.decode("ascii").strip())
    except (WatanaError, UnicodeDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    output = Path(args.output)
    try:
        atomic_write(output, data)
    except OSError as e:
        print(f"Error: cannot write {output}: {e}", file=sys.stderr)
        sys.exit(1)
    print(f"Saved {output} ({format_size_kb(len(data))})")


def add_parser(sub: argparse._SubParsersAction) -> None:
    p_pdf = sub.add_parser("pdf", help="Sign, stamp, or validate PDF documents")
    pdf_sub = p_pdf.add_subparsers(dest="pdf_command", required=True)

    for action, help_text in (
        ("sign", "Sign a PDF with the server's certificate"),
        ("stamp", "Apply the server's seal to a PDF"),
        ("validate", "Validate the signatures of a PDF"),
    ):
        p_action = pdf_sub.add_parser(action, help=help_text)
        p_action.add_argument("pdf", help="PDF file")
        p_action.add_argument("-o", "--output", default=None, help="Output PDF path")
        p_action.add_argument(
            "--option", action="append", default=[], metavar="KEY=VALUE", help="Extra option"
        )

    p_extract = pdf_sub.add_parser("extract", help="Decode a saved zip_base64 value to a PDF")
    p_extract.add_argument("source", help="Text file holding the base64 value")
    p_extract.add_argument("-o", "--output", required=True, help="Output PDF path")


def cmd_pdf(args: argparse.Namespace) -> None:
    if args.pdf_command == "extract":
        _extract(args)
    else:
        run_async(_process(args))
