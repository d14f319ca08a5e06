"""High-level convenience API.

:func:`connect` builds a :class:`~watana.client.WatanaClient` from explicit
arguments, environment variables, and saved configuration, in that order.

For lower-level control, build a :class:`~watana.config.options.ClientConfig`
with :func:`~watana.config.options.make_client_config` and pass it to
:class:`~watana.client.WatanaClient` directly.
"""

from __future__ import annotations

__all__ = ["connect"]

import logging
from typing import TYPE_CHECKING

from .client import WatanaClient
from .config import resolve_client_config

if TYPE_CHECKING:
    import httpx

_logger = logging.getLogger(__name__)


def connect(
    url: str | None = None,
    token: str | None = None,
    timeout: float | None = None,
    *,
    http_transport: httpx.AsyncBaseTransport | None = None,
) -> WatanaClient:
    """Create a client for the Watana service.

    Args:
        url: Service endpoint. Defaults to ``WATANA_URL`` or saved config.
        token: Authorization token. Defaults to ``WATANA_TOKEN``, the system
            keychain, or saved config.
        timeout: Per-request timeout in seconds.
        http_transport: Optional httpx transport (proxies, custom TLS, tests).

    Returns:
        A ready :class:`WatanaClient`. Nothing is sent until the first call.

    Raises:
        ConfigError: If no URL or token is available, or a value is invalid.
    """
    config = resolve_client_config(url, token, timeout)
    _logger.debug("Connecting to %s (timeout %ss)", config.url, config.timeout)
    return WatanaClient(config, http_transport=http_transport)
