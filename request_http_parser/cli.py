"""Command-line interface and input handling.

Provides the argparse front end for inspecting a raw HTTP request file and,
optionally, replaying it against a live host.
"""

import argparse
import os
import sys

from request_http_parser import __version__
from request_http_parser.engine import DEFAULT_TIMEOUT


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="request-http-parser",
        description=(
            "request-http-parser v{ver} - Parse a raw HTTP request.\n\n"
            "Reads a raw HTTP request from a text file, prints its method, "
            "path, query parameters, headers and body, and optionally "
            "replays it against a target host."
        ).format(ver=__version__),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  request-http-parser --request-file request.txt\n"
            "  request-http-parser --request-file request.txt --json\n"
            "  request-http-parser --request-file request.txt --target-host "
            "api.example.com --no-https --proxy http://127.0.0.1:8080\n"
        ),
    )

    # Required arguments
    required = parser.add_argument_group("required arguments")
    required.add_argument(
        "--request-file",
        required=True,
        help="Path to a .txt file containing the raw HTTP request.",
    )

    # Optional arguments
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        dest="as_json",
        help="Print the parsed request as JSON.",
    )
    parser.add_argument(
        "--target-host",
        default=None,
        help=(
            "Replay the parsed request against this domain or IP address "
            "(e.g. api.example.com)."
        ),
    )
    parser.add_argument(
        "--https",
        action="store_true",
        default=True,
        dest="use_https",
        help="Use HTTPS when replaying (default: True).",
    )
    parser.add_argument(
        "--no-https",
        action="store_false",
        dest="use_https",
        help="Use HTTP instead of HTTPS when replaying.",
    )
    parser.add_argument(
        "--proxy",
        default=None,
        help=(
            "Route replayed traffic through a proxy for debugging "
            "(e.g. http://127.0.0.1:8080)."
        ),
    )
    parser.add_argument(
        "--timeout",
        type=int,
        default=DEFAULT_TIMEOUT,
        help=f"Replay timeout in seconds (default: {DEFAULT_TIMEOUT}).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Enable debug logging on stderr.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate parsed CLI arguments.

    Raises:
        SystemExit: If the request file does not exist or is not readable,
            or the target host is blank.
    """
    if not os.path.isfile(args.request_file):
        print(
            f"Error: Request file not found: '{args.request_file}'",
            file=sys.stderr,
        )
        sys.exit(1)

    if not os.access(args.request_file, os.R_OK):
        print(
            f"Error: Request file is not readable: '{args.request_file}'",
            file=sys.stderr,
        )
        sys.exit(1)

    if args.target_host is not None and not args.target_host.strip():
        print("Error: Target host cannot be empty.", file=sys.stderr)
        sys.exit(1)

    if args.timeout <= 0:
        print("Error: Timeout must be a positive number.", file=sys.stderr)
        sys.exit(1)


def parse_cli(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse and validate command-line arguments.

    Args:
        argv: Optional list of arguments (defaults to sys.argv).

    Returns:
        Parsed and validated argument namespace.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    validate_args(args)
    return args
