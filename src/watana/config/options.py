"""
Connection options for a Watana endpoint.

A :class:`ClientConfig` bundles the endpoint URL, the access token, and the
request timeout.  It is immutable; build one through
:func:`make_client_config` to get validation.
"""

from __future__ import annotations

__all__ = ["ClientConfig", "make_client_config"]

from dataclasses import dataclass, field
from urllib.parse import urlparse

from ..constants import DEFAULT_TIMEOUT, MAX_TIMEOUT, MIN_TIMEOUT
from ..errors import ConfigError

_LOOPBACK_HOSTS = frozenset({"localhost", "127.0.0.1", "::1"})


@dataclass(frozen=True)
class ClientConfig:
    """Describes how to reach and authenticate against a Watana endpoint.

    Attributes:
        url: Endpoint URL. All operations POST to it, with no extra path.
        token: Sent verbatim as the ``Authorization`` header.
        timeout: Per-request timeout in seconds.
    """

    url: str
    token: str = field(repr=False)
    timeout: float = DEFAULT_TIMEOUT


def make_client_config(url: str, token: str, timeout: float | None = None) -> ClientConfig:
    """
    Validate and build a :class:`ClientConfig`.

    Plain ``http://`` is only accepted for loopback hosts, so the token is
    never sent unencrypted over a network.

    Raises:
        ConfigError: If the URL, token, or timeout is invalid.
    """
    url = (url or "").strip()
    if not url:
        raise ConfigError("No Watana URL configured.")

    parsed = urlparse(url)
    if not parsed.hostname:
        raise ConfigError(f"Invalid URL: no hostname found in {url!r}")
    if parsed.scheme == "http":
        if parsed.hostname not in _LOOPBACK_HOSTS:
            raise ConfigError(
                "HTTP URLs are not supported. Use https:// to protect the token in transit."
            )
    elif parsed.scheme != "https":
        raise ConfigError(f"Invalid URL scheme {parsed.scheme!r}. Use https://.")

    token = (token or "").strip()
    if not token:
        raise ConfigError("No Watana token configured.")

    if timeout is None:
        timeout = DEFAULT_TIMEOUT
    if not MIN_TIMEOUT <= timeout <= MAX_TIMEOUT:
        raise ConfigError(f"Timeout must be between {MIN_TIMEOUT} and {MAX_TIMEOUT} seconds.")

    return ClientConfig(url=url, token=token, timeout=timeout)
