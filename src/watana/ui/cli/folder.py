"""
Folder subcommands: get, send, download, delete.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING

from ...core.codec import decode_base64
from ...models import FolderRequest, SignerRequest
from ..helpers import (
    atomic_write,
    client_from_args,
    format_size_kb,
    print_result,
    run_async,
    safe_read_file,
)

if TYPE_CHECKING:
    import argparse

# Keeps base64 bodies out of printed results
_HIDE_FILE_CONTENT = {"files": {"__all__": {"content"}}}


async def _get(args: argparse.Namespace) -> None:
    client = client_from_args(args)
    print_result(await client.folders.get(args.code), exclude=_HIDE_FILE_CONTENT)


async def _send(args: argparse.Namespace) -> None:
    client = client_from_args(args)

    envelopes = []
    for name in args.files:
        path = Path(name)
        content = safe_read_file(path)
        if content is None:
            sys.exit(1)
        print(f"Packing {path.name} ({format_size_kb(len(content))})...", file=sys.stderr)
        envelopes.append(await client.folders.create_file(args.code, path.name, content))

    signer = None
    if args.signer_name or args.signer_email:
        signer = SignerRequest(
            name=args.signer_name or "",
            email=args.signer_email or "",
            phone=args.signer_phone,
            document=args.signer_document,
        )

    request = FolderRequest(
        folder_code=args.code,
        title=args.title,
        signer=signer,
        files=tuple(envelopes),
    )
    print_result(await client.folders.send(request), exclude=_HIDE_FILE_CONTENT)


async def _download(args: argparse.Namespace) -> None:
    client = client_from_args(args)
    result = await client.folders.download(args.code)

    out_dir = Path(args.output_dir) if args.output_dir else Path.cwd()
    out_dir.mkdir(parents=True, exist_ok=True)
    for envelope in result.files:
        data = decode_base64(envelope.content)
        target = out_dir / f"{envelope.name or args.code}.zip"
        atomic_write(target, data)
        print(f"Saved {target} ({format_size_kb(len(data))})", file=sys.stderr)

    print_result(result, exclude=_HIDE_FILE_CONTENT)


async def _delete(args: argparse.Namespace) -> None:
    client = client_from_args(args)
    print_result(await client.folders.delete(args.code))


def add_parser(sub: argparse._SubParsersAction) -> None:
    p_folder = sub.add_parser("folder", help="Manage signing folders")
    folder_sub = p_folder.add_subparsers(dest="folder_command", required=True)

    p_get = folder_sub.add_parser("get", help="Show folder status")
    p_get.add_argument("code", help="Folder code")

    p_send = folder_sub.add_parser("send", help="Create a folder with a signer and files")
    p_send.add_argument("code", help="Folder code")
    p_send.add_argument("files", nargs="+", help="File(s) to attach")
    p_send.add_argument("--title", default=None, help="Folder title (default: 'Sin título')")
    p_send.add_argument("--signer-name", default=None, help="Signer full name")
    p_send.add_argument("--signer-email", default=None, help="Signer email")
    p_send.add_argument("--signer-phone", default=None, help="Signer phone (optional)")
    p_send.add_argument("--signer-document", default=None, help="Signer ID document (optional)")

    p_download = folder_sub.add_parser("download", help="Download folder files as ZIP")
    p_download.add_argument("code", help="Folder code")
    p_download.add_argument(
        "-o", "--output-dir", default=None, help="Directory for the files (default: cwd)"
    )

    p_delete = folder_sub.add_parser("delete", help="Delete a folder")
    p_delete.add_argument("code", help="Folder code")


def cmd_folder(args: argparse.Namespace) -> None:
    handlers = {
        "get": _get,
        "send": _send,
        "download": _download,
        "delete": _delete,
    }
    run_async(handlers[args.folder_command](args))
