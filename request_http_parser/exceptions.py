"""Errors raised while parsing a raw HTTP request.

All parse failures derive from :class:`ParseError`, itself a ``ValueError``,
so callers that only care about "bad input" can catch ``ValueError``.
"""

from __future__ import annotations


class ParseError(ValueError):
    """Base class for every request parsing failure."""

    #: Name of the parsing stage that failed.
    stage = "request"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message())

    def default_message(self) -> str:
        return f"Invalid {self.stage}"


class EmptyRequestError(ParseError):
    """The head section contains no lines at all."""

    stage = "head"

    def default_message(self) -> str:
        return "Empty request"


class UnsupportedMethodError(ParseError):
    """The method token is not one of the supported methods."""

    stage = "method"

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"Method not supported: {token!r}")


class MissingMethodError(ParseError):
    """The request line has no usable method token."""

    stage = "method"

    def default_message(self) -> str:
        return "Missing method"


class MissingPathError(ParseError):
    """The request line has no path token."""

    stage = "path"

    def default_message(self) -> str:
        return "No path"
