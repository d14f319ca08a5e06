"""
Interactive setup wizard for the Watana CLI.

Configures the service endpoint, request timeout, and access token.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from ...config import (
    CONFIG_FILE,
    get_server_config,
    get_token,
    get_token_storage_info,
    make_client_config,
    save_server_config,
    save_token,
)
from ...constants import DEFAULT_TIMEOUT, ENV_TOKEN, ENV_URL
from ...errors import ConfigError
from ..helpers import confirm_choice, prompt_token, safe_input

if TYPE_CHECKING:
    import argparse


# ── Setup steps ──────────────────────────────────────────────────────


def _choose_url(preset_url: str | None, current_url: str | None) -> str:
    """Step 1: endpoint URL, from the flag, a prompt, or the current value."""
    if preset_url:
        return preset_url.strip()

    hint = f" [{current_url}]" if current_url else ""
    url = safe_input(f"Watana endpoint URL{hint}: ")
    if url is None:
        sys.exit(1)
    url = url or current_url
    if not url:
        print("Error: URL is required.", file=sys.stderr)
        sys.exit(1)
    return url


def _choose_timeout(preset_timeout: int | None, current_timeout: int) -> int:
    """Step 2: request timeout in seconds."""
    if preset_timeout is not None:
        return preset_timeout

    raw = safe_input(f"Request timeout in seconds [{current_timeout}]: ")
    if raw is None:
        sys.exit(1)
    if not raw:
        return current_timeout
    try:
        return int(raw)
    except ValueError:
        print("Invalid timeout.", file=sys.stderr)
        sys.exit(1)


def _choose_token(url: str) -> str:
    """Step 3: access token, keeping the saved one if the user agrees."""
    if get_token(url) and confirm_choice("\nA token is already saved for this URL. Keep it?"):
        return ""
    print()
    return prompt_token()


# ── Main setup command ───────────────────────────────────────────────


def cmd_setup(args: argparse.Namespace) -> None:
    """Interactive setup wizard: configure endpoint, timeout, and token."""
    print("Watana Setup Wizard")
    print("=" * 40)
    print()

    current_url, current_timeout = get_server_config()
    if current_url:
        print("Current configuration:")
        print(f"  URL:          {current_url}")
        print(f"  Timeout:      {current_timeout}s")
        print(f"  Config file:  {CONFIG_FILE}")
        print()

    url = _choose_url(getattr(args, "url", None), current_url)
    timeout = _choose_timeout(getattr(args, "timeout", None), current_timeout or DEFAULT_TIMEOUT)
    token = _choose_token(url)

    # Validate before writing anything; a kept token is checked with a dummy value
    try:
        make_client_config(url, token or "saved", timeout)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    save_server_config(url, timeout)
    print(f"\nSaved to {CONFIG_FILE}")
    print(f"  URL:      {url}")
    print(f"  Timeout:  {timeout}s")

    if token:
        if save_token(url, token):
            print(f"Token saved to: {get_token_storage_info()}")
        else:
            print(f"Token saved to: {CONFIG_FILE} (plaintext)")
            print("  The system keychain is unavailable; protect this file.")
    print(f"Override anytime with {ENV_URL} / {ENV_TOKEN} env variables.")
