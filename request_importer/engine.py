"""Rewriting and rendering of imported requests.

Covers token substitution, transport header clean-up, and rendering a
descriptor back out as a curl command or raw HTTP text. Requests are
prepared with the requests library but never sent.
"""

from __future__ import annotations

import shlex
from urllib.parse import urlsplit

import requests

from request_importer.descriptor import KNOWN_METHODS, RequestDescriptor, find_header

# Headers the HTTP client computes itself from the URL and body
TRANSPORT_HEADERS = ("host", "content-length", "accept-encoding")


def swap_token(headers: dict[str, str], token: str) -> dict[str, str]:
    """Return a copy of ``headers`` authorised with ``Bearer <token>``.

    The first Authorization header (any case) keeps its spelling and
    position; other spellings of it are dropped. Without one, the header
    is appended.
    """
    key = find_header(headers, "Authorization") or "Authorization"
    swapped = {
        name: value
        for name, value in headers.items()
        if name == key or name.lower() != "authorization"
    }
    swapped[key] = f"Bearer {token}"
    return swapped


def strip_transport_headers(headers: dict[str, str]) -> dict[str, str]:
    """Drop Host, Content-Length and Accept-Encoding (any case)."""
    return {
        key: value
        for key, value in headers.items()
        if key.lower() not in TRANSPORT_HEADERS
    }


def prepare_request(descriptor: RequestDescriptor) -> requests.PreparedRequest:
    """Build a prepared request for the descriptor without sending it.

    Raises:
        ValueError: If the URL is not absolute (requests' MissingSchema
            and InvalidURL are both ValueErrors).
    """
    data = descriptor.body.encode("utf-8") if descriptor.body is not None else None
    request = requests.Request(
        method=descriptor.method,
        url=descriptor.url,
        headers=strip_transport_headers(descriptor.headers),
        data=data,
    )
    return request.prepare()


def render_raw(descriptor: RequestDescriptor) -> str:
    """Render the descriptor as raw HTTP/1.1 request text."""
    prepared = prepare_request(descriptor)
    lines = [
        f"{prepared.method} {prepared.path_url} HTTP/1.1",
        f"Host: {urlsplit(prepared.url).netloc}",
    ]
    for key, value in prepared.headers.items():
        lines.append(f"{key}: {value}")

    body = prepared.body
    if isinstance(body, bytes):
        body = body.decode("utf-8")
    return "\r\n".join(lines) + "\r\n\r\n" + (body or "")


def render_curl(descriptor: RequestDescriptor) -> str:
    """Render the descriptor as a single-line curl command.

    ``-X`` is only written when curl would not infer the method from the
    presence or absence of a body.
    """
    parts = ["curl", shlex.quote(descriptor.url)]
    implied = "POST" if descriptor.body is not None else "GET"
    if descriptor.method != implied:
        parts += ["-X", shlex.quote(descriptor.method)]
    for key, value in descriptor.headers.items():
        parts += ["-H", shlex.quote(f"{key}: {value}")]
    if descriptor.body is not None:
        parts += ["--data-raw", shlex.quote(descriptor.body)]
    return " ".join(parts)


def print_summary(descriptor: RequestDescriptor) -> None:
    """Print a formatted summary of an imported request to stdout.

    Args:
        descriptor: The parsed request.
    """
    banner = "=" * 60
    method = descriptor.method
    if method not in KNOWN_METHODS:
        method += " (non-standard)"

    print(f"\n{banner}")
    print("  REQUEST IMPORTER - Imported Request")
    print(banner)
    print(f"\n  Method : {method}")
    print(f"  URL    : {descriptor.url}")

    print(f"\n  Headers ({len(descriptor.headers)}):")
    for key, value in descriptor.headers.items():
        print(f"    {key}: {value}")

    if descriptor.body is None:
        print("\n  Body   : No")
    else:
        print(f"\n  Body (first 500 chars):\n    {descriptor.body[:500]}")

    print(f"\n{banner}\n")
