"""Extraction of a request descriptor from a pasted ``fetch(...)`` call.

This is pattern scanning over JavaScript source, not evaluation: string
literals are decoded, every other expression is kept as source text.
"""

from __future__ import annotations

import re

from request_importer.descriptor import RequestDescriptor, looks_like_url

FETCH_CALL = re.compile(r"\bfetch\s*\(")
_JSON_STRINGIFY = re.compile(r"^JSON\s*\.\s*stringify\s*\(")
_IDENTIFIER = re.compile(r"^[A-Za-z_$][\w$]*$")

_QUOTES = "'\"`"
_OPENERS = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = set(_OPENERS.values())

_JS_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}


def _skip_ws(text: str, i: int) -> int:
    while i < len(text) and text[i].isspace():
        i += 1
    return i


def read_string(text: str, i: int) -> tuple[str, int] | None:
    """Decode the JS string literal starting at ``text[i]``.

    Returns:
        (decoded value, index just past the closing quote), or None when
        ``text[i]`` is not a quote or the literal is unterminated.
    """
    if i >= len(text) or text[i] not in _QUOTES:
        return None
    quote = text[i]
    out: list[str] = []
    i += 1
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == quote:
            return "".join(out), i + 1
        if ch == "\\" and i + 1 < n:
            nxt = text[i + 1]
            if nxt == "u" and re.match(r"[0-9a-fA-F]{4}", text[i + 2 : i + 6]):
                out.append(chr(int(text[i + 2 : i + 6], 16)))
                i += 6
                continue
            if nxt == "x" and re.match(r"[0-9a-fA-F]{2}", text[i + 2 : i + 4]):
                out.append(chr(int(text[i + 2 : i + 4], 16)))
                i += 4
                continue
            if nxt == "\n":
                i += 2
                continue
            out.append(_JS_ESCAPES.get(nxt, nxt))
            i += 2
            continue
        out.append(ch)
        i += 1
    return None


def _skip_string(text: str, i: int) -> int:
    literal = read_string(text, i)
    return len(text) if literal is None else literal[1]


def find_closing(text: str, i: int) -> int:
    """Index of the bracket closing the one at ``text[i]``.

    String literals are skipped. An unbalanced opener runs to the end of
    the text.
    """
    depth = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch in _QUOTES:
            i = _skip_string(text, i)
            continue
        if ch in _OPENERS:
            depth += 1
        elif ch in _CLOSERS:
            depth -= 1
            if depth == 0:
                return i
        i += 1
    return n


def split_top_level(text: str) -> list[str]:
    """Split on commas that are not nested inside brackets or strings."""
    parts: list[str] = []
    depth = 0
    start = 0
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch in _QUOTES:
            i = _skip_string(text, i)
            continue
        if ch in _OPENERS:
            depth += 1
        elif ch in _CLOSERS:
            depth -= 1
        elif ch == "," and depth == 0:
            parts.append(text[start:i])
            start = i + 1
        i += 1
    parts.append(text[start:])
    return [part for part in parts if part.strip()]


def _split_property(source: str) -> tuple[str, str] | None:
    source = source.strip()
    literal = read_string(source, 0)
    if literal is not None:
        key, end = literal
        rest = source[end:].lstrip()
    else:
        colon = source.find(":")
        if colon == -1:
            return None
        key = source[:colon].strip()
        if not _IDENTIFIER.match(key):
            return None
        rest = source[colon:]
    if not rest.startswith(":"):
        return None
    return key, rest[1:].strip()


def object_properties(source: str) -> list[tuple[str, str]]:
    """List (key, value source) pairs of an object literal's body.

    Shorthand properties, spreads and computed keys are skipped.
    """
    pairs = []
    for part in split_top_level(source):
        prop = _split_property(part)
        if prop is not None:
            pairs.append(prop)
    return pairs


def literal_value(source: str) -> str | None:
    """Decoded value when ``source`` is exactly one string literal."""
    source = source.strip()
    literal = read_string(source, 0)
    if literal is None or _skip_ws(source, literal[1]) != len(source):
        return None
    return literal[0]


def _parse_headers_value(source: str) -> dict[str, str]:
    headers: dict[str, str] = {}
    start = source.find("{")
    if start == -1:
        return headers
    end = find_closing(source, start)
    for key, value in object_properties(source[start + 1 : end]):
        name = key.strip()
        if not name:
            continue
        decoded = literal_value(value)
        headers[name] = (decoded if decoded is not None else value).strip()
    return headers


def _parse_body_value(source: str) -> str | None:
    source = source.strip()
    if source in ("null", "undefined", ""):
        return None
    match = _JSON_STRINGIFY.match(source)
    if match:
        open_idx = match.end() - 1
        close_idx = find_closing(source, open_idx)
        args = split_top_level(source[open_idx + 1 : close_idx])
        return args[0].strip() if args else ""
    decoded = literal_value(source)
    if decoded is not None:
        return decoded
    return source


def extract_fetch(text: str) -> RequestDescriptor | None:
    """Build a RequestDescriptor from a ``fetch(url, options)`` call.

    Args:
        text: Source text containing the call.

    Returns:
        The descriptor, or None when the first argument is not a string
        literal holding an absolute http(s) URL. Template literals with
        ``${...}`` interpolation count as no URL.
    """
    match = FETCH_CALL.search(text)
    if match is None:
        return None

    i = _skip_ws(text, match.end())
    quote = text[i] if i < len(text) else ""
    literal = read_string(text, i)
    if literal is None:
        return None
    url, i = literal
    url = url.strip()
    # Interpolated template URLs cannot be resolved without evaluation
    if quote == "`" and "${" in url:
        return None
    if not looks_like_url(url):
        return None

    method = "GET"
    headers: dict[str, str] = {}
    body: str | None = None

    i = _skip_ws(text, i)
    if i < len(text) and text[i] == ",":
        i = _skip_ws(text, i + 1)
        if i < len(text) and text[i] == "{":
            end = find_closing(text, i)
            for key, value in object_properties(text[i + 1 : end]):
                if key == "method":
                    verb = literal_value(value)
                    if verb and verb.strip():
                        method = verb.strip().upper()
                elif key == "headers":
                    for name, header_value in _parse_headers_value(value).items():
                        headers[name] = header_value
                elif key == "body":
                    body = _parse_body_value(value)

    return RequestDescriptor(url=url, method=method, headers=headers, body=body)
