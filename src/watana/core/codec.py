"""
File codec: single-entry ZIP archives and base64 text.

Every attachment the service accepts, and every file it hands back, is
``base64(zip(original_bytes))``.  The helpers here perform each half of
that transformation and their exact inverses.
"""

from __future__ import annotations

__all__ = [
    "compress",
    "compress_and_encode",
    "compress_on_disk",
    "decode_and_decompress",
    "decode_base64",
    "decompress",
    "encode_base64",
]

import base64
import binascii
import io
import logging
import os
import tempfile
import uuid
import zipfile
from pathlib import Path
from typing import IO

from ..constants import ZIP_COMPRESSION_LEVEL
from ..errors import (
    CompressionError,
    EmptyArchiveError,
    InvalidArchiveError,
    InvalidEncodingError,
)

_logger = logging.getLogger(__name__)


def _entry_name(name: str, extension: str) -> str:
    """Build the archive entry name, substituting a random stem if *name* is empty."""
    if not name:
        name = uuid.uuid4().hex
    extension = extension.lstrip(".")
    return f"{name}.{extension}" if extension else name


def _write_archive(target: IO[bytes], entry: str, content: bytes) -> None:
    with zipfile.ZipFile(
        target,
        mode="w",
        compression=zipfile.ZIP_DEFLATED,
        compresslevel=ZIP_COMPRESSION_LEVEL,
    ) as archive:
        archive.writestr(entry, content)


def compress(content: bytes, name: str, extension: str = "") -> bytes:
    """
    Wrap *content* as the single entry of a new ZIP archive.

    Args:
        content: Raw file bytes.
        name: Entry name without extension. A random hex name is used
            if empty.
        extension: Optional extension (leading dots are ignored).

    Returns:
        The archive bytes.

    Raises:
        CompressionError: If the archive cannot be written.
    """
    entry = _entry_name(name, extension)
    buf = io.BytesIO()
    try:
        _write_archive(buf, entry, content)
    except (OSError, ValueError, zipfile.LargeZipFile) as e:
        _logger.error("Cannot compress %s: %s", entry, e)
        raise CompressionError(f"Cannot compress {entry}: {e}") from e
    data = buf.getvalue()
    _logger.debug("Compressed %s: %d -> %d bytes", entry, len(content), len(data))
    return data


def compress_on_disk(content: bytes, name: str, extension: str = "") -> bytes:
    """
    Same contract as :func:`compress`, staging the archive in a temp file.

    Meant for large inputs. The temp file is removed on every exit path;
    a failed removal is logged and otherwise ignored.

    Raises:
        CompressionError: If the archive cannot be written or read back.
    """
    entry = _entry_name(name, extension)
    tmp: Path | None = None
    try:
        fd, tmp_path = tempfile.mkstemp(suffix=".zip")
        tmp = Path(tmp_path)
        with os.fdopen(fd, "w+b") as f:
            _write_archive(f, entry, content)
        data = tmp.read_bytes()
    except (OSError, ValueError, zipfile.LargeZipFile) as e:
        _logger.error("Cannot compress %s on disk: %s", entry, e)
        raise CompressionError(f"Cannot compress {entry} on disk: {e}") from e
    finally:
        if tmp is not None:
            try:
                tmp.unlink(missing_ok=True)
            except OSError as e:
                _logger.warning("Failed to remove temp file %s: %s", tmp, e)
    _logger.debug("Compressed %s on disk: %d -> %d bytes", entry, len(content), len(data))
    return data


def decompress(data: bytes) -> bytes:
    """
    Return the bytes of the first entry in a ZIP archive.

    Any further entries are ignored.

    Raises:
        InvalidArchiveError: If *data* is not a ZIP archive.
        EmptyArchiveError: If the archive has no entries.
        CompressionError: If the entry cannot be read.
    """
    try:
        with zipfile.ZipFile(io.BytesIO(data)) as archive:
            entries = archive.infolist()
            if not entries:
                raise EmptyArchiveError("ZIP archive contains no entries")
            if len(entries) > 1:
                _logger.debug("Archive has %d entries, reading only the first", len(entries))
            return archive.read(entries[0])
    except zipfile.BadZipFile as e:
        _logger.error("Invalid ZIP archive: %s", e)
        raise InvalidArchiveError(f"Invalid ZIP archive: {e}") from e
    except (OSError, ValueError, NotImplementedError, RuntimeError) as e:
        _logger.error("Cannot decompress archive: %s", e)
        raise CompressionError(f"Cannot decompress archive: {e}") from e


def encode_base64(data: bytes) -> str:
    """Encode bytes as standard base64 text."""
    return base64.b64encode(data).decode("ascii")


def decode_base64(text: str) -> bytes:
    """
    Decode standard base64 text.

    Raises:
        InvalidEncodingError: If *text* is not valid base64.
    """
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as e:
        _logger.error("Invalid base64 input: %s", e)
        raise InvalidEncodingError(f"Invalid base64 input: {e}") from e


def compress_and_encode(
    content: bytes, name: str, extension: str = "", *, on_disk: bool = False
) -> str:
    """Zip *content* and return it as base64 text, ready for a payload."""
    packer = compress_on_disk if on_disk else compress
    return encode_base64(packer(content, name, extension))


def decode_and_decompress(text: str) -> bytes:
    """Inverse of :func:`compress_and_encode`."""
    return decompress(decode_base64(text))
