"""
Signature request subcommands: get, prepare, send.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING

from ...models import SignatureRequest, SignerRequest
from ..helpers import (
    client_from_args,
    format_size_kb,
    parse_options,
    print_result,
    run_async,
    safe_read_file,
)

if TYPE_CHECKING:
    import argparse


def parse_signer(value: str) -> SignerRequest:
    """
    Parse ``NAME,EMAIL[,PHONE[,DOCUMENT]]`` into a signer.

    Raises:
        ValueError: If name or email is missing, or there are too many parts.
    """
    parts = [p.strip() for p in value.split(",")]
    if len(parts) < 2 or len(parts) > 4 or not parts[0] or not parts[1]:
        raise ValueError(f"Invalid signer {value!r}: expected NAME,EMAIL[,PHONE[,DOCUMENT]]")
    parts += [""] * (4 - len(parts))
    name, email, phone, document = parts
    return SignerRequest(name=name, email=email, phone=phone or None, document=document or None)


async def _get(args: argparse.Namespace) -> None:
    client = client_from_args(args)
    print_result(await client.requests.get(args.code))


async def _prepare(args: argparse.Namespace) -> None:
    options = parse_options(args.option)
    client = client_from_args(args)

    envelopes = []
    for name in args.files:
        path = Path(name)
        content = safe_read_file(path)
        if content is None:
            sys.exit(1)
        print(f"Packing {path.name} ({format_size_kb(len(content))})...", file=sys.stderr)
        envelopes.append(await client.folders.create_file(args.folder, path.name, content))

    result = await client.requests.prepare(args.folder, args.name, envelopes, options)
    print_result(result)


async def _send(args: argparse.Namespace) -> None:
    options = parse_options(args.option)
    signers = tuple(parse_signer(s) for s in args.signer)
    client = client_from_args(args)
    request = SignatureRequest(
        folder_code=args.folder,
        signature_code=args.code,
        signers=signers,
    )
    print_result(await client.requests.send(request, options))


def add_parser(sub: argparse._SubParsersAction) -> None:
    p_request = sub.add_parser("request", help="Manage signature requests")
    request_sub = p_request.add_subparsers(dest="request_command", required=True)

    p_get = request_sub.add_parser("get", help="Show request status and signers")
    p_get.add_argument("code", help="Signature request code")

    p_prepare = request_sub.add_parser("prepare", help="Prepare a request on a folder")
    p_prepare.add_argument("folder", help="Folder code")
    p_prepare.add_argument("name", help="Request name")
    p_prepare.add_argument("files", nargs="+", help="File(s) to include")
    p_prepare.add_argument(
        "--option", action="append", default=[], metavar="KEY=VALUE", help="Extra option"
    )

    p_send = request_sub.add_parser("send", help="Send a prepared request to signers")
    p_send.add_argument("folder", help="Folder code")
    p_send.add_argument("code", help="Signature request code")
    p_send.add_argument(
        "--signer",
        action="append",
        required=True,
        metavar="NAME,EMAIL[,PHONE[,DOCUMENT]]",
        help="Signer (repeat for several)",
    )
    p_send.add_argument(
        "--option", action="append", default=[], metavar="KEY=VALUE", help="Extra option"
    )


def cmd_request(args: argparse.Namespace) -> None:
    handlers = {
        "get": _get,
        "prepare": _prepare,
        "send": _send,
    }
    run_async(handlers[args.request_command](args))
