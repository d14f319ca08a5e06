"""
Server configuration for the Watana client.

Stores the endpoint URL and timeout in ~/.watana/config.json.  Token
storage lives in ``credentials.py``; this module handles only config I/O
and resolution.
"""

from __future__ import annotations

__all__ = [
    "get_server_config",
    "logout",
    "reset_all",
    "resolve_client_config",
    "save_server_config",
]

import logging
import os

from ..constants import DEFAULT_TIMEOUT, ENV_TIMEOUT, ENV_URL, MAX_TIMEOUT, MIN_TIMEOUT
from ..errors import ConfigError
from ._storage import load_config, load_raw_config, save_config
from .credentials import clear_token, resolve_token
from .options import ClientConfig, make_client_config

_logger = logging.getLogger(__name__)


def _env_timeout() -> int | None:
    timeout_str = os.environ.get(ENV_TIMEOUT, "").strip()
    if not timeout_str:
        return None
    try:
        timeout = int(timeout_str)
    except ValueError:
        _logger.warning("Invalid %s value %r, ignoring", ENV_TIMEOUT, timeout_str)
        return None
    if timeout < MIN_TIMEOUT or timeout > MAX_TIMEOUT:
        _logger.warning(
            "%s=%d out of range [%d, %d], ignoring",
            ENV_TIMEOUT,
            timeout,
            MIN_TIMEOUT,
            MAX_TIMEOUT,
        )
        return None
    return timeout


def get_server_config() -> tuple[str | None, int]:
    """
    Resolve the active endpoint URL and timeout.

    Priority: env vars > config file > defaults.

    Returns:
        (url, timeout); url is None if nothing is configured.
    """
    config = load_config()

    url = os.environ.get(ENV_URL, "").strip() or config.get("url") or None

    timeout = _env_timeout()
    if timeout is None:
        timeout = config.get("timeout", DEFAULT_TIMEOUT)

    return url, timeout


def save_server_config(url: str, timeout: int = DEFAULT_TIMEOUT) -> None:
    """Save the endpoint URL and timeout, keeping any other keys."""
    config = load_raw_config()
    previous = config.get("url")
    if previous != url:
        # A plaintext token belongs to the URL it was saved for
        config.pop("token", None)
    config["url"] = url
    config["timeout"] = timeout
    save_config(config)


def resolve_client_config(
    url: str | None = None,
    token: str | None = None,
    timeout: float | None = None,
) -> ClientConfig:
    """
    Build a validated :class:`ClientConfig` from explicit values and saved state.

    Explicit arguments win; anything left as None is taken from env vars,
    then the config file and keychain.

    Raises:
        ConfigError: If no URL or token can be resolved, or a value is invalid.
    """
    config_url, config_timeout = get_server_config()
    resolved_url = url or config_url
    if not resolved_url:
        raise ConfigError(
            f"No Watana URL configured. Pass url='https://...', set {ENV_URL}, "
            "or run `watana setup`."
        )

    resolved_token = token or resolve_token(resolved_url)
    if not resolved_token:
        raise ConfigError(
            f"No token configured for {resolved_url}. Pass token=..., "
            "or run `watana setup`."
        )

    resolved_timeout = timeout if timeout is not None else config_timeout
    return make_client_config(resolved_url, resolved_token, resolved_timeout)


def logout() -> None:
    """Forget the token for the configured endpoint, keeping the URL."""
    url, _ = get_server_config()
    if url:
        clear_token(url)


def reset_all() -> None:
    """Clear all config: token and server settings."""
    logout()
    save_config({})
