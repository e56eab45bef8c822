"""Request import parser.

Turns free-form pasted text (a curl command or a JavaScript ``fetch``
call) into a RequestDescriptor that a form can be filled from.
"""

from __future__ import annotations

import enum
import re

from request_importer.curl import extract_curl
from request_importer.descriptor import RequestDescriptor
from request_importer.fetch import FETCH_CALL, extract_fetch

_CURL_KEYWORD = re.compile(r"^curl(\s|$)", re.IGNORECASE)


class Dialect(str, enum.Enum):
    CURL = "curl"
    FETCH = "fetch"


def detect_dialect(text: str) -> Dialect | None:
    """Work out which snippet style ``text`` is written in.

    A leading ``curl`` keyword wins over a ``fetch(`` call found anywhere
    in the text. Returns None when neither marker is present.
    """
    stripped = text.strip()
    if _CURL_KEYWORD.match(stripped):
        return Dialect.CURL
    if FETCH_CALL.search(stripped):
        return Dialect.FETCH
    return None


def parse_request(text: str) -> RequestDescriptor | None:
    """Parse pasted curl or fetch text into a RequestDescriptor.

    Args:
        text: Arbitrary user input; may be empty or unrelated text.

    Returns:
        A complete descriptor, or None when the text is not a recognised
        snippet or no URL could be extracted from it.
    """
    stripped = text.strip()
    if not stripped:
        return None

    dialect = detect_dialect(stripped)
    if dialect is Dialect.CURL:
        return extract_curl(stripped)
    if dialect is Dialect.FETCH:
        return extract_fetch(stripped)
    return None
