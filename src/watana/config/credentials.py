"""
Access-token management for the Watana client.

Tokens are stored in the system keychain (keyring), keyed by endpoint URL.
If the keychain is locked or has no usable backend, the token falls back to
the config file, which is written with 0600 permissions.
"""

from __future__ import annotations

__all__ = [
    "clear_token",
    "get_token",
    "get_token_storage_info",
    "resolve_token",
    "save_token",
]

import logging
import os

import keyring
from keyring.errors import KeyringError, PasswordDeleteError

from ..constants import ENV_TOKEN
from ._storage import CONFIG_FILE, load_config, load_raw_config, save_config

# Keyring service name for token storage
_KEYRING_SERVICE = "watana"

_logger = logging.getLogger(__name__)


def get_token_storage_info() -> str:
    """Return a human-readable description of where tokens are stored."""
    backend = keyring.get_keyring()
    module = type(backend).__module__ or ""
    if "fail" in module or "null" in module:
        return f"{CONFIG_FILE} (plaintext)"
    if "macOS" in module:
        return "macOS Keychain"
    if "Windows" in module or "WinVault" in module:
        return "Windows Credential Manager"
    if "SecretService" in module:
        return "Linux Secret Service"
    if "KWallet" in module:
        return "KDE Wallet"
    return f"System keychain ({type(backend).__name__})"


def get_token(url: str) -> str | None:
    """
    Get the saved token for *url*.

    The keychain is consulted first, then the config file (only if the file
    belongs to the same URL).

    Returns:
        The token, or None if nothing is saved.
    """
    try:
        token = keyring.get_password(_KEYRING_SERVICE, url)
    except KeyringError as e:
        _logger.debug("Keyring read failed, trying config file: %s", e)
    except (OSError, RuntimeError) as e:
        _logger.debug("Keyring backend error, trying config file: %s", e)
    else:
        if token:
            _logger.debug("get_token: found token in keyring")
            return token

    config = load_config()
    if config.get("url") == url and config.get("token"):
        _logger.debug("get_token: found token in config file (plaintext)")
        return config["token"]
    return None


def resolve_token(url: str) -> str:
    """Resolve the token: env var first, then saved storage.

    Returns:
        The token, or an empty string if none is configured.
    """
    token = os.environ.get(ENV_TOKEN, "").strip()
    if token:
        _logger.debug("resolve_token: source=env")
        return token
    return get_token(url) or ""


def save_token(url: str, token: str) -> bool:
    """
    Save the token for *url*.

    Returns:
        True if the token went to the system keychain (secure).
        False if it fell back to the config file (plaintext).
    """
    config = load_raw_config()
    try:
        keyring.set_password(_KEYRING_SERVICE, url, token)
    except KeyringError as e:
        _logger.warning("Keyring save failed, using config file: %s", e)
    except (OSError, RuntimeError) as e:
        _logger.warning("Keyring backend error, using config file: %s", e)
    else:
        if config.pop("token", None) is not None:
            save_config(config)
        return True

    _logger.warning("Token will be saved in plaintext (%s).", CONFIG_FILE)
    config["url"] = url
    config["token"] = token
    save_config(config)
    return False


def clear_token(url: str) -> None:
    """Remove the saved token for *url* from all storage backends."""
    try:
        keyring.delete_password(_KEYRING_SERVICE, url)
        _logger.debug("Deleted keyring entry")
    except PasswordDeleteError:
        pass  # no entry; nothing to do
    except (KeyringError, OSError, RuntimeError) as e:
        _logger.debug("Keyring delete failed: %s", e)

    config = load_raw_config()
    if config.pop("token", None) is not None:
        save_config(config)
