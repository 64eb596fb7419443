"""Raw HTTP Request Parsing Engine.

Converts a raw HTTP text block, as read off a socket or saved from a proxy,
into an immutable :class:`Request` holding the method, path, query
parameters, headers and body.
"""

from __future__ import annotations

import enum
import logging
import re
import types
from typing import Any

from request_http_parser.exceptions import (
    EmptyRequestError,
    MissingMethodError,
    MissingPathError,
    UnsupportedMethodError,
)

logger = logging.getLogger(__name__)

# Blank line separating the head (request line + headers) from the body
HEAD_BODY_SEPARATOR = "\r\n\r\n"
LINE_SEPARATOR = "\r\n"

# Version written by Request.render(); the parser never reads it back
DEFAULT_HTTP_VERSION = "HTTP/1.1"

# Request line tokens are separated by runs of ASCII whitespace only
REQUEST_LINE_TOKEN = re.compile(r"[^ \t\r\n\f\v]+")


class Method(str, enum.Enum):
    """Supported HTTP methods."""

    GET = "GET"
    POST = "POST"
    OPTIONS = "OPTIONS"

    @classmethod
    def from_token(cls, token: str) -> Method:
        """Return the method matching ``token`` exactly.

        Matching is case-sensitive: ``"get"`` is not ``GET``.

        Raises:
            UnsupportedMethodError: If ``token`` names no supported method.
        """
        try:
            return cls(token)
        except ValueError:
            raise UnsupportedMethodError(token) from None

    def __str__(self) -> str:
        return self.value


class Request:
    """Immutable container for a parsed raw HTTP request.

    ``headers`` and ``params`` are read-only copies of the mappings passed in.
    """

    __slots__ = ("method", "path", "params", "headers", "body")

    def __init__(
        self,
        method: Method,
        path: str,
        headers: dict[str, str],
        params: dict[str, str] | None = None,
        body: str | None = None,
    ) -> None:
        set_field = super().__setattr__
        set_field("method", method)
        set_field("path", path)
        if params is not None:
            params = types.MappingProxyType(dict(params))
        set_field("params", params)
        set_field("headers", types.MappingProxyType(dict(headers)))
        set_field("body", body)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"Request is immutable, cannot set {name!r}")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"Request is immutable, cannot delete {name!r}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Request):
            return NotImplemented
        return (
            self.method == other.method
            and self.path == other.path
            and self.params == other.params
            and self.headers == other.headers
            and self.body == other.body
        )

    def __repr__(self) -> str:
        params = "<none>" if self.params is None else f"<{len(self.params)} params>"
        return (
            f"Request(method={self.method.value!r}, path={self.path!r}, "
            f"params={params}, "
            f"headers=<{len(self.headers)} headers>, "
            f"body={'<present>' if self.body is not None else '<none>'})"
        )

    def header(self, name: str, default: str | None = None) -> str | None:
        """Look up a header by name, ignoring case."""
        return self.headers.get(name.strip().lower(), default)

    def render(self) -> str:
        """Render the request back into raw HTTP text.

        Parsing the result yields a request equal to this one, as long as no
        key or value contains a delimiter (whitespace, ``&``, ``=``, ``:``).
        """
        target = self.path
        if self.params is not None:
            query = "&".join(f"{key}={value}" for key, value in self.params.items())
            target = f"{target}?{query}"

        lines = [f"{self.method.value} {target} {DEFAULT_HTTP_VERSION}"]
        lines.extend(f"{key}: {value}" for key, value in self.headers.items())
        head = LINE_SEPARATOR.join(lines)

        if self.body is None:
            return head
        return f"{head}{HEAD_BODY_SEPARATOR}{self.body}"

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable view of the request."""
        return {
            "method": self.method.value,
            "path": self.path,
            "params": dict(self.params) if self.params is not None else None,
            "headers": dict(self.headers),
            "body": self.body,
        }


def extract_query_params(url: str) -> tuple[str, dict[str, str] | None]:
    """Split a URL into its path and query parameters.

    ``params`` is ``None`` when the URL has no ``?`` and a (possibly empty)
    dict otherwise. Pairs without ``=`` or with an empty key are dropped;
    for duplicate keys the last one wins. No percent-decoding is done.

    Args:
        url: The request target, e.g. ``/search?q=rust&lang=en``.

    Returns:
        A ``(path, params)`` tuple.
    """
    path, sep, query_string = url.partition("?")
    if not sep:
        return url, None

    params: dict[str, str] = {}
    for pair in query_string.split("&"):
        key, eq, value = pair.partition("=")
        if not eq or not key:
            continue
        params[key] = value

    return path, params


def _split_head_lines(head: str) -> list[str]:
    # CRLF terminated; a bare LF is tolerated and a trailing terminator
    # does not start another line.
    if not head:
        return []
    lines = head.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def parse_request(raw_text: str) -> Request:
    """Parse a raw HTTP request into a :class:`Request`.

    Handles:
      - GET, POST and OPTIONS request lines (version token ignored)
      - Query string extraction from the request target
      - Header dictionary construction, lower-cased keys, last value wins
      - A verbatim body after the first blank line, or no body at all

    Args:
        raw_text: The raw HTTP request as a string.

    Returns:
        The parsed request.

    Raises:
        EmptyRequestError: If the head section has no lines.
        MissingMethodError: If the request line has no supported method.
        MissingPathError: If the request line has no path.
    """
    head, sep, remainder = raw_text.partition(HEAD_BODY_SEPARATOR)
    body = remainder if sep else None

    lines = _split_head_lines(head)
    if not lines:
        raise EmptyRequestError()

    # --- Parse request line ---
    parts = REQUEST_LINE_TOKEN.findall(lines[0])
    if not parts:
        raise MissingMethodError()
    try:
        method = Method.from_token(parts[0])
    except UnsupportedMethodError as exc:
        raise MissingMethodError(f"Missing method: {exc}") from exc

    if len(parts) < 2:
        raise MissingPathError()
    path, params = extract_query_params(parts[1])

    # --- Parse headers ---
    headers: dict[str, str] = {}
    for line in lines[1:]:
        key, colon, value = line.partition(":")
        if not colon:
            continue
        headers[key.strip().lower()] = value.strip()

    logger.debug(
        "Parsed %s %s (%d headers, body %s)",
        method.value,
        path,
        len(headers),
        "present" if body is not None else "absent",
    )
    return Request(
        method=method,
        path=path,
        headers=headers,
        params=params,
        body=body,
    )


def load_request_file(filepath: str) -> str:
    """Read and return the contents of a raw request file.

    The file is read with newline translation disabled so CRLF line endings
    reach the parser untouched.

    Args:
        filepath: Path to the raw request text file.

    Returns:
        The raw text content of the file.

    Raises:
        FileNotFoundError: If the file does not exist.
        OSError: If the file cannot be read.
    """
    with open(filepath, "r", encoding="utf-8", newline="") as fh:
        return fh.read()
