"""Import HTTP requests from pasted curl commands and fetch() snippets."""

__version__ = "0.1.0"

from request_importer.descriptor import (  # noqa: E402
    RequestDescriptor,
    format_headers,
    parse_headers,
)
from request_importer.parser import Dialect, detect_dialect, parse_request  # noqa: E402

__all__ = [
    "__version__",
    "Dialect",
    "RequestDescriptor",
    "detect_dialect",
    "format_headers",
    "parse_headers",
    "parse_request",
]
