"""
=============================================================================
SERVO CLI ENTRY POINT
=============================================================================

Runs a Servo with the built-in routes: "GET /" and "GET /static/{}".

=============================================================================
USAGE
=============================================================================

    # Run with defaults (127.0.0.1:8000, ./static, ./templates)
    python -m servo

    # Custom port
    python -m servo --port 3000

    # Listen on all interfaces (for containers)
    python -m servo --host 0.0.0.0

    # Serve another directory under /static/
    python -m servo --static ./public

Settings come from SERVO_* environment variables first (see
ServerConfig.from_env); any flag given on the command line wins.

=============================================================================
"""

import argparse
import sys
from typing import List, Optional

from . import __version__
from .config import LOG_LEVELS, Configuration, ServerConfig
from .server import Servo


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="servo",
        description="Embeddable HTTP request router",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m servo                         # Run with defaults
  python -m servo --port 3000             # Custom port
  python -m servo --host 0.0.0.0          # Listen on all interfaces
  python -m servo --static ./public       # Serve static files from ./public
        """
    )

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--host", "-H",
        default=None,
        help="Host to bind to (default: 127.0.0.1, use 0.0.0.0 for containers)"
    )

    parser.add_argument(
        "--port", "-p",
        type=int,
        default=None,
        help="Port to listen on (default: 8000)"
    )

    # ─────────────────────────────────────────────────────────────────────
    # FILE ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--static", "-s",
        default=None,
        help="Directory served under /static/ (default: static/)"
    )

    parser.add_argument(
        "--templates", "-t",
        default=None,
        help="Directory get_html() reads from (default: templates/)"
    )

    parser.add_argument(
        "--log-level", "-l",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Logging level (default: INFO)"
    )

    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"servo {__version__}"
    )

    return parser


def config_from_args(args: argparse.Namespace) -> ServerConfig:
    """Environment settings with command-line overrides applied."""
    config = ServerConfig.from_env()

    if args.host is not None:
        config = config.with_host(args.host)
    if args.port is not None:
        config = config.with_port(args.port)
    if args.static is not None:
        config = config.with_static_dir(args.static)
    if args.templates is not None:
        config = config.with_html_dir(args.templates)
    if args.log_level is not None:
        config = config.with_log_level(args.log_level)

    return config


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    try:
        server = Servo(Configuration(server=config_from_args(args)))
        server.run()
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
