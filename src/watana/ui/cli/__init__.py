"""
Command-line interface for Watana.

Argument parsing, dispatch, and the account subcommands.  Service
subcommands live in ``folder``, ``request``, and ``pdf``.
"""

from __future__ import annotations

import argparse
import logging
import sys

from ...config import get_server_config
from ...constants import ENV_TIMEOUT, ENV_TOKEN, ENV_URL, __version__
from . import folder, pdf, request
from .setup import cmd_setup


def _cmd_logout() -> None:
    """Forget the token, keeping server configuration."""
    from ...config import logout

    logout()
    print("Logged out. Server configuration preserved.")
    print("Run 'watana setup' to log in again.")


def _cmd_reset() -> None:
    """Clear all configuration: token and server settings."""
    from ...config import reset_all

    reset_all()
    print("All configuration cleared.")
    print("Run 'watana setup' to reconfigure.")


def _configure_logging(verbosity: int) -> None:
    if verbosity <= 0:
        return
    level = logging.INFO if verbosity == 1 else logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    url, _ = get_server_config()
    url_hint = f" (current: {url})" if url else " (run `watana setup` first)"

    parser = argparse.ArgumentParser(
        prog="watana",
        description="Command-line client for the Watana digital-signature service.",
        epilog=(
            "Environment variables:\n"
            f"  {ENV_URL}      Service endpoint{url_hint}\n"
            f"  {ENV_TOKEN}    Access token (overrides the saved one)\n"
            f"  {ENV_TIMEOUT}  Timeout in seconds (default: 300)\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-V", "--version", action="version", version=f"watana {__version__}")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log progress to stderr (-vv for debug output)",
    )
    parser.add_argument("--url", default=None, help="Service endpoint (overrides config)")
    parser.add_argument(
        "--timeout", type=int, default=None, help="Request timeout in seconds (overrides config)"
    )

    sub = parser.add_subparsers(dest="command", help="Available commands")

    # setup
    sub.add_parser("setup", help="Configure endpoint, timeout, and token")

    # logout
    sub.add_parser("logout", help="Log out (clear token, keep server)")

    # reset
    sub.add_parser("reset", help="Clear all configuration (server and token)")

    folder.add_parser(sub)
    request.add_parser(sub)
    pdf.add_parser(sub)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.command == "setup":
        cmd_setup(args)
    elif args.command == "logout":
        _cmd_logout()
    elif args.command == "reset":
        _cmd_reset()
    elif args.command == "folder":
        folder.cmd_folder(args)
    elif args.command == "request":
        request.cmd_request(args)
    elif args.command == "pdf":
        pdf.cmd_pdf(args)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
