"""
Configuration and token management.

Unified API for all config-related functionality. Instead of importing
from individual submodules, import from this package directly.
"""

from __future__ import annotations

from ._storage import CONFIG_FILE
from .config import (
    get_server_config,
    logout,
    reset_all,
    resolve_client_config,
    save_server_config,
)
from .credentials import (
    clear_token,
    get_token,
    get_token_storage_info,
    resolve_token,
    save_token,
)
from .options import ClientConfig, make_client_config

__all__ = [
    "CONFIG_FILE",
    "ClientConfig",
    "clear_token",
    "get_server_config",
    "get_token",
    "get_token_storage_info",
    "logout",
    "make_client_config",
    "reset_all",
    "resolve_client_config",
    "resolve_token",
    "save_server_config",
    "save_token",
]
