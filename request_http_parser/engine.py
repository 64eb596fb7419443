"""Replay engine.

Forwards a parsed :class:`~request_http_parser.parser.Request` to a live
host with the ``requests`` library and reports what came back.
"""

from __future__ import annotations

import logging

import requests
import urllib3

from request_http_parser.parser import Request

# Suppress InsecureRequestWarning when using --proxy with self-signed certs
urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30

# Headers requests computes itself from the URL and body
HOP_HEADERS = frozenset({"host", "content-length", "accept-encoding"})


class ReplayResult:
    """Container for the response to a replayed request."""

    __slots__ = ("status_code", "headers", "body", "elapsed")

    def __init__(
        self,
        status_code: int,
        headers: dict[str, str],
        body: str,
        elapsed: float = 0.0,
    ) -> None:
        self.status_code = status_code
        self.headers = headers
        self.body = body
        self.elapsed = elapsed


def prepare_headers(headers: dict[str, str]) -> dict[str, str]:
    """Return a copy of ``headers`` without the hop-specific ones."""
    return {
        key: value
        for key, value in headers.items()
        if key.lower() not in HOP_HEADERS
    }


def build_url(target_host: str, path: str, use_https: bool = True) -> str:
    """Construct the full URL from host, path, and scheme.

    Args:
        target_host: The target domain or IP.
        path: The endpoint path (e.g. /api/v1/users), without query string.
        use_https: Whether to use HTTPS (default True).

    Returns:
        The fully-qualified URL string.
    """
    scheme = "https" if use_https else "http"
    host = target_host.rstrip("/")
    if not path.startswith("/"):
        path = "/" + path
    return f"{scheme}://{host}{path}"


def replay_request(
    request: Request,
    target_host: str,
    use_https: bool = True,
    proxy: str | None = None,
    timeout: int = DEFAULT_TIMEOUT,
) -> ReplayResult:
    """Send the parsed request to ``target_host``.

    Args:
        request: The parsed raw HTTP request.
        target_host: The target domain or IP.
        use_https: Whether to use HTTPS.
        proxy: Optional proxy URL for debugging.
        timeout: Request timeout in seconds.

    Returns:
        A ReplayResult describing the response.

    Raises:
        requests.RequestException: If the request could not be completed.
    """
    url = build_url(target_host, request.path, use_https)

    proxies = None
    if proxy:
        proxies = {"http": proxy, "https": proxy}

    logger.info("Replaying %s %s", request.method.value, url)
    response = requests.request(
        method=request.method.value,
        url=url,
        params=dict(request.params) if request.params is not None else None,
        headers=prepare_headers(request.headers),
        data=request.body,
        proxies=proxies,
        timeout=timeout,
        verify=False,
        allow_redirects=False,
    )
    logger.debug("Received HTTP %s from %s", response.status_code, url)

    return ReplayResult(
        status_code=response.status_code,
        headers=dict(response.headers),
        body=response.text,
        elapsed=response.elapsed.total_seconds(),
    )


def print_report(result: ReplayResult) -> None:
    """Print a formatted replay report to stdout.

    Args:
        result: The ReplayResult from the replayed request.
    """
    banner = "=" * 60
    print(f"\n{banner}")
    print("  Replay Report")
    print(banner)
    print(f"\n  Status Code : {result.status_code}")
    print(f"  Elapsed     : {result.elapsed:.3f}s")

    print("\n  Response Headers:")
    for key, value in result.headers.items():
        print(f"    {key}: {value}")
    print(f"\n  Response Body (first 500 chars):\n    {result.body[:500]}")

    print(f"\n{banner}\n")
