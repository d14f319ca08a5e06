"""
On-disk settings for the Watana client.

Settings live in a single JSON object at ``~/.watana/config.json``.  Readers
get either the whole object (``load_raw_config``, for read-modify-write) or
the typed subset the client understands (``load_config``).  Unknown keys
survive a round trip untouched.
"""

from __future__ import annotations

__all__ = [
    "CONFIG_DIR",
    "CONFIG_FILE",
    "load_config",
    "load_raw_config",
    "save_config",
]

import json
import logging
import os
import uuid
from collections.abc import Callable
from pathlib import Path
from typing import TypedDict

from ..constants import MAX_TIMEOUT, MIN_TIMEOUT

_logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".watana"
CONFIG_FILE = CONFIG_DIR / "config.json"

_PRIVATE_FILE = 0o600
_PRIVATE_DIR = 0o700


class ConfigDict(TypedDict, total=False):
    """Settings the client reads back; anything else is passed through."""

    url: str
    timeout: int
    token: str


def _is_text(value: object) -> bool:
    return isinstance(value, str) and bool(value)


def _is_timeout(value: object) -> bool:
    if not isinstance(value, int) or isinstance(value, bool):
        return False
    if MIN_TIMEOUT <= value <= MAX_TIMEOUT:
        return True
    _logger.warning(
        "Config timeout=%d out of range [%d, %d], ignoring", value, MIN_TIMEOUT, MAX_TIMEOUT
    )
    return False


# Known key -> acceptance check; entries failing the check are dropped
_KNOWN_KEYS: dict[str, Callable[[object], bool]] = {
    "url": _is_text,
    "token": _is_text,
    "timeout": _is_timeout,
}


def load_raw_config() -> dict[str, object]:
    """Return the stored JSON object, or ``{}`` if it is missing or unreadable."""
    try:
        text = CONFIG_FILE.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError as e:
        _logger.warning("Cannot read %s: %s", CONFIG_FILE, e)
        return {}

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        _logger.warning("Ignoring corrupted %s: %s", CONFIG_FILE, e)
        return {}
    if not isinstance(data, dict):
        _logger.warning("Ignoring %s: top level is not an object", CONFIG_FILE)
        return {}
    return data


def load_config() -> ConfigDict:
    """Return only the known settings whose stored values are well-typed."""
    raw = load_raw_config()
    result: ConfigDict = {}
    for key, accept in _KNOWN_KEYS.items():
        if key in raw and accept(raw[key]):
            result[key] = raw[key]  # type: ignore[literal-required]  # key from _KNOWN_KEYS
    return result


def _restrict_dir() -> None:
    CONFIG_DIR.mkdir(parents=True, exist_ok=True, mode=_PRIVATE_DIR)
    if os.name == "nt":
        return
    try:
        CONFIG_DIR.chmod(_PRIVATE_DIR)
    except OSError:
        _logger.warning("Failed to set restrictive permissions on %s", CONFIG_DIR)


def save_config(config: dict[str, object]) -> None:
    """Replace the stored settings with *config*.

    The new content goes to a sibling file created with owner-only
    permissions and is then renamed over ``config.json``, so readers see
    either the old file or the new one.
    """
    _restrict_dir()
    payload = (json.dumps(config, indent=2, ensure_ascii=False) + "\n").encode("utf-8")
    staging = CONFIG_DIR / f".{CONFIG_FILE.name}.{uuid.uuid4().hex}.tmp"

    fd = os.open(staging, os.O_WRONLY | os.O_CREAT | os.O_EXCL, _PRIVATE_FILE)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())
        staging.replace(CONFIG_FILE)
    except BaseException:
        staging.unlink(missing_ok=True)
        raise
    _logger.debug("Saved %d keys to %s", len(config), CONFIG_FILE)
