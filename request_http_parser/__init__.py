"""Parse raw HTTP request text into a structured Request."""

__version__ = "0.1.0"

from request_http_parser.exceptions import (  # noqa: E402
    EmptyRequestError,
    MissingMethodError,
    MissingPathError,
    ParseError,
    UnsupportedMethodError,
)
from request_http_parser.parser import (  # noqa: E402
    Method,
    Request,
    extract_query_params,
    parse_request,
)

__all__ = [
    "EmptyRequestError",
    "Method",
    "MissingMethodError",
    "MissingPathError",
    "ParseError",
    "Request",
    "UnsupportedMethodError",
    "extract_query_params",
    "parse_request",
]
