"""Structured request descriptor and header block helpers."""

from __future__ import annotations

import re

# Standard verbs; anything else is flagged as non-standard in summaries
KNOWN_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS")

_URL_PREFIX = re.compile(r"^https?://", re.IGNORECASE)


class RequestDescriptor:
    """Container for a request extracted from pasted text."""

    __slots__ = ("url", "method", "headers", "body")

    def __init__(
        self,
        url: str,
        method: str = "GET",
        headers: dict[str, str] | None = None,
        body: str | None = None,
    ) -> None:
        self.url = url
        self.method = method.upper()
        self.headers = dict(headers) if headers else {}
        self.body = body

    def to_dict(self) -> dict:
        return {
            "url": self.url,
            "method": self.method,
            "headers": dict(self.headers),
            "body": self.body,
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RequestDescriptor):
            return NotImplemented
        return (
            self.url == other.url
            and self.method == other.method
            and list(self.headers.items()) == list(other.headers.items())
            and self.body == other.body
        )

    def __repr__(self) -> str:
        return (
            f"RequestDescriptor(method={self.method!r}, url={self.url!r}, "
            f"headers=<{len(self.headers)} headers>, "
            f"body={'<present>' if self.body is not None else '<none>'})"
        )


def looks_like_url(token: str) -> bool:
    """True for absolute ``http://`` or ``https://`` URLs."""
    return bool(_URL_PREFIX.match(token))


def find_header(headers: dict[str, str], name: str) -> str | None:
    """Return the key spelling used for ``name`` (any case), or None."""
    wanted = name.lower()
    for key in headers:
        if key.lower() == wanted:
            return key
    return None


def split_header_line(line: str) -> tuple[str, str] | None:
    """Split ``Name: Value`` on the first colon.

    Returns None when there is no colon or the name is empty.
    """
    colon_idx = line.find(":")
    if colon_idx == -1:
        return None
    key = line[:colon_idx].strip()
    if not key:
        return None
    return key, line[colon_idx + 1 :].strip()


def format_headers(headers: dict[str, str]) -> str:
    """Render a header mapping as one ``Name: Value`` line per entry."""
    return "\n".join(f"{key}: {value}" for key, value in headers.items())


def parse_headers(text: str) -> dict[str, str]:
    """Parse a ``Name: Value`` text block back into an ordered mapping.

    Blank lines and lines without a usable name are skipped. A repeated
    name overwrites the earlier value but keeps its original position.

    Args:
        text: Newline-delimited header block (``\\n`` or ``\\r\\n``).

    Returns:
        The header mapping; empty for blank input.
    """
    headers: dict[str, str] = {}
    for line in text.replace("\r\n", "\n").split("\n"):
        if not line.strip():
            continue
        pair = split_header_line(line)
        if pair is None:
            continue
        key, value = pair
        headers[key] = value
    return headers
