"""request-http-parser - Main entry point.

Ties together the CLI, parser, and engine modules: load a raw request file,
parse it, print the result and optionally replay it.
"""

import json
import logging
import sys

import requests

from request_http_parser.cli import parse_cli
from request_http_parser.engine import print_report, replay_request
from request_http_parser.parser import Request, load_request_file, parse_request

LOG_FORMAT = "%(levelname)s | %(asctime)s | %(name)s | %(message)s"

logger = logging.getLogger("request_http_parser")


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr, at DEBUG level when ``verbose``."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def print_summary(parsed: Request) -> None:
    """Print a human readable summary of a parsed request."""
    print(f"    Method : {parsed.method.value}")
    print(f"    Path   : {parsed.path}")
    if parsed.params is None:
        print("    Params : -")
    else:
        print(f"    Params : {len(parsed.params)}")
        for key, value in parsed.params.items():
            print(f"      {key} = {value}")
    print(f"    Headers: {len(parsed.headers)}")
    for key, value in parsed.headers.items():
        print(f"      {key}: {value}")
    print(f"    Body   : {'Yes' if parsed.body is not None else 'No'}")


def main(argv: list[str] | None = None) -> int:
    """Run the request-http-parser tool.

    Args:
        argv: Optional argument list (defaults to sys.argv).

    Returns:
        Exit code (0 = success, 2 = error).
    """
    args = parse_cli(argv)
    configure_logging(args.verbose)

    logger.debug("Loading raw request from %s", args.request_file)
    try:
        raw_text = load_request_file(args.request_file)
    except OSError as exc:
        print(f"Error reading request file: {exc}", file=sys.stderr)
        return 2

    try:
        parsed = parse_request(raw_text)
    except ValueError as exc:
        print(f"Error parsing request: {exc}", file=sys.stderr)
        return 2

    if args.as_json:
        print(json.dumps(parsed.to_dict(), indent=2))
    else:
        print(f"[*] Parsed raw HTTP request from: {args.request_file}")
        print_summary(parsed)

    if args.target_host is None:
        return 0

    scheme = "HTTPS" if args.use_https else "HTTP"
    print(f"\n[*] Replaying request to {args.target_host} via {scheme}...")
    if args.proxy:
        print(f"    Proxy  : {args.proxy}")

    try:
        result = replay_request(
            request=parsed,
            target_host=args.target_host,
            use_https=args.use_https,
            proxy=args.proxy,
            timeout=args.timeout,
        )
    except requests.RequestException as exc:
        logger.debug("Replay failed", exc_info=True)
        print(f"Error during request replay: {exc}", file=sys.stderr)
        return 2

    print_report(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
