"""
Common CLI helper functions for Watana.

Input prompts, file I/O with uniform error reporting, and result printing
shared by the subcommand modules.
"""

from __future__ import annotations

import asyncio
import json
import os
import sys
import tempfile
from collections.abc import Coroutine, Iterable
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar

from ..errors import WatanaError

if TYPE_CHECKING:
    import argparse

    from pydantic import BaseModel

    from ..client import WatanaClient

__all__ = [
    "atomic_write",
    "client_from_args",
    "confirm_choice",
    "format_size_kb",
    "parse_options",
    "print_result",
    "prompt_token",
    "run_async",
    "safe_input",
    "safe_read_file",
]

_BYTES_PER_KB = 1024

T = TypeVar("T")


def format_size_kb(size_bytes: int) -> str:
    """Format a byte count as a human-readable KB string (e.g. '123.4 KB')."""
    return f"{size_bytes / _BYTES_PER_KB:.1f} KB"


def safe_input(prompt: str) -> str | None:
    """Prompt user for input, returning None on EOF/KeyboardInterrupt.

    Args:
        prompt: The prompt string to display.

    Returns:
        Stripped user input, or None if cancelled (Ctrl-C, Ctrl-D).
    """
    try:
        return input(prompt).strip()
    except (EOFError, KeyboardInterrupt):
        print()
        return None


def confirm_choice(message: str, default_yes: bool = True) -> bool:
    """
    Prompt user for yes/no confirmation.

    Args:
        message: Question to ask the user (without the [Y/n] suffix).
        default_yes: If True, empty input defaults to yes. If False, defaults to no.

    Returns:
        True if the user confirmed, False otherwise.
    """
    suffix = "[Y/n]" if default_yes else "[y/N]"
    try:
        answer = input(f"{message} {suffix} ").strip().lower()
    except (EOFError, KeyboardInterrupt):
        print()
        return False

    if default_yes:
        return answer in ("", "y", "yes")
    else:
        return answer in ("y", "yes")


def prompt_token() -> str:
    """
    Prompt for the access token without echoing it.

    Raises:
        SystemExit: If the user cancels or enters nothing.
    """
    import getpass

    try:
        token = getpass.getpass("Watana token: ").strip()
    except (EOFError, KeyboardInterrupt):
        print()
        sys.exit(1)

    if not token:
        print("Error: token is required.", file=sys.stderr)
        sys.exit(1)

    return token


def safe_read_file(path: Path, kind: str = "file") -> bytes | None:
    """
    Read a file with uniform error handling.

    Args:
        path: Path to the file to read.
        kind: Descriptive name for error messages (e.g., "PDF").

    Returns:
        File contents as bytes, or None if the file doesn't exist or can't be read.
    """
    if not path.exists():
        print(f"Error: {kind} not found: {path}", file=sys.stderr)
        return None

    try:
        return path.read_bytes()
    except OSError as e:
        print(f"Error reading {kind}: {e}", file=sys.stderr)
        return None


def atomic_write(path: Path, data: bytes) -> None:
    """Write data to a file atomically using temp file + rename."""
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    tmp = Path(tmp_path)
    try:
        os.write(fd, data)
        os.fsync(fd)
        os.close(fd)
        fd = -1
        tmp.replace(path)
    except Exception:
        if fd >= 0:
            os.close(fd)
        tmp.unlink(missing_ok=True)
        raise


def parse_options(items: Iterable[str] | None) -> dict[str, Any]:
    """
    Turn ``key=value`` strings into an options dict.

    Values are parsed as JSON when they are valid JSON (``1``, ``true``,
    ``{"a": 1}``) and kept as plain strings otherwise.

    Raises:
        ValueError: If an item has no ``=`` or an empty key.
    """
    options: dict[str, Any] = {}
    for item in items or ():
        key, sep, raw = item.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"Invalid option {item!r}: expected key=value")
        try:
            options[key] = json.loads(raw)
        except ValueError:
            options[key] = raw
    return options


def print_result(result: BaseModel, exclude: Any = None) -> None:
    """Print a response model as indented JSON using its wire field names.

    *exclude* follows pydantic's nested include/exclude syntax and is used
    to keep base64 file bodies off the terminal.
    """
    print(result.model_dump_json(by_alias=True, indent=2, exclude=exclude))


def run_async(coro: Coroutine[Any, Any, T]) -> T:
    """
    Run a command coroutine, turning library errors into a CLI failure.

    Raises:
        SystemExit: With status 1 after printing ``Error: ...`` to stderr.
    """
    try:
        return asyncio.run(coro)
    except (WatanaError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def client_from_args(args: argparse.Namespace) -> WatanaClient:
    """Build a client from the global ``--url``/``--timeout`` flags and saved config."""
    from ..api import connect

    return connect(url=getattr(args, "url", None), timeout=getattr(args, "timeout", None))
