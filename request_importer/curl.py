"""Extraction of a request descriptor from a pasted curl command.

Handles the shapes browsers and API docs commonly produce:
  - bash quoting (single, double and ``$'...'`` ANSI-C strings)
  - backslash line continuations, and Windows cmd caret (``^``) escaping
  - short options with attached values (``-XPOST``, ``-H'A: b'``)
"""

from __future__ import annotations

import base64
import re

from request_importer.descriptor import (
    RequestDescriptor,
    find_header,
    looks_like_url,
    split_header_line,
)

_BASH_CONTINUATION = re.compile(r"\\\r?\n")
_CMD_CONTINUATION = re.compile(r"\^\r?\n")
_CMD_START = re.compile(r"^\s*curl\s+\^\"", re.IGNORECASE)
_CMD_ESCAPE = re.compile(r"\^(.)", re.DOTALL)

METHOD_FLAGS = {"-X", "--request"}
HEADER_FLAGS = {"-H", "--header"}
BODY_FLAGS = {
    "-d",
    "--data",
    "--data-raw",
    "--data-binary",
    "--data-ascii",
    "--data-urlencode",
    "--json",
}

# Flags that set a single well-known header
HEADER_ALIASES = {
    "-A": "User-Agent",
    "--user-agent": "User-Agent",
    "-b": "Cookie",
    "--cookie": "Cookie",
    "-e": "Referer",
    "--referer": "Referer",
}

# Flags whose argument is irrelevant here but must not be read as the URL
IGNORED_VALUE_FLAGS = {
    "-o", "--output",
    "-x", "--proxy",
    "-U", "--proxy-user",
    "-m", "--max-time",
    "--connect-timeout",
    "-F", "--form",
    "-T", "--upload-file",
    "-w", "--write-out",
    "-c", "--cookie-jar",
    "-D", "--dump-header",
    "-E", "--cert",
    "--cacert",
    "--key",
    "-K", "--config",
    "-r", "--range",
    "--resolve",
    "--retry",
    "--max-redirs",
    "--limit-rate",
    "--interface",
}

VALUE_FLAGS = (
    METHOD_FLAGS
    | HEADER_FLAGS
    | BODY_FLAGS
    | set(HEADER_ALIASES)
    | IGNORED_VALUE_FLAGS
    | {"-u", "--user", "--url", "--oauth2-bearer"}
)

_SHORT_VALUE_FLAGS = {flag for flag in VALUE_FLAGS if not flag.startswith("--")}

_ANSI_C_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "e": "\x1b",
    "\\": "\\",
    "'": "'",
    '"': '"',
    "?": "?",
}


def normalize_command(text: str) -> str:
    """Join continuation lines and undo Windows cmd caret escaping.

    Caret escaping is only undone for cmd-style pastes: commands that
    open with ``curl ^"`` or continue lines with a trailing ``^``.
    Carets anywhere else are literal text.
    """
    if _CMD_START.match(text) or _CMD_CONTINUATION.search(text):
        text = _CMD_CONTINUATION.sub(" ", text)
        return _CMD_ESCAPE.sub(r"\1", text)
    return _BASH_CONTINUATION.sub(" ", text)


def _read_ansi_c(command: str, i: int) -> tuple[str, int]:
    out: list[str] = []
    n = len(command)
    while i < n:
        ch = command[i]
        if ch == "'":
            return "".join(out), i + 1
        if ch == "\\" and i + 1 < n:
            nxt = command[i + 1]
            if nxt in _ANSI_C_ESCAPES:
                out.append(_ANSI_C_ESCAPES[nxt])
                i += 2
                continue
            width = {"x": 2, "u": 4, "U": 8}.get(nxt)
            if width:
                digits = re.match(
                    r"[0-9a-fA-F]{1,%d}" % width, command[i + 2 : i + 2 + width]
                )
                if digits:
                    out.append(chr(int(digits.group(0), 16)))
                    i += 2 + len(digits.group(0))
                    continue
            out.append(ch)
            i += 1
            continue
        out.append(ch)
        i += 1
    return "".join(out), i


def _read_double_quoted(command: str, i: int) -> tuple[str, int]:
    out: list[str] = []
    n = len(command)
    while i < n:
        ch = command[i]
        if ch == '"':
            return "".join(out), i + 1
        if ch == "\\" and i + 1 < n and command[i + 1] in '"\\$`':
            out.append(command[i + 1])
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out), i


def tokenize(command: str) -> list[str]:
    """Split a shell command into words, removing one level of quoting.

    Unterminated quotes run to the end of the text instead of failing.
    """
    tokens: list[str] = []
    buf: list[str] = []
    in_token = False
    i = 0
    n = len(command)
    while i < n:
        ch = command[i]
        if ch.isspace():
            if in_token:
                tokens.append("".join(buf))
                buf = []
                in_token = False
            i += 1
            continue
        in_token = True
        if ch == "'":
            end = command.find("'", i + 1)
            if end == -1:
                end = n
            buf.append(command[i + 1 : end])
            i = end + 1
        elif command.startswith("$'", i):
            text, i = _read_ansi_c(command, i + 2)
            buf.append(text)
        elif ch == '"':
            text, i = _read_double_quoted(command, i + 1)
            buf.append(text)
        elif ch == "\\" and i + 1 < n:
            buf.append(command[i + 1])
            i += 2
        else:
            buf.append(ch)
            i += 1
    if in_token:
        tokens.append("".join(buf))
    return tokens


def _split_flag(token: str) -> tuple[str | None, str | None]:
    """Return (flag, attached value) for an option token, (None, None) otherwise."""
    if token.startswith("--") and len(token) > 2:
        if "=" in token:
            name, value = token.split("=", 1)
            if name in VALUE_FLAGS:
                return name, value
        return token, None
    if token.startswith("-") and len(token) > 1:
        if len(token) > 2 and token[:2] in _SHORT_VALUE_FLAGS:
            return token[:2], token[2:]
        return token, None
    return None, None


def _header_from_flag(value: str) -> tuple[str, str] | None:
    # curl sends "Name;" as a header with an empty value
    if ":" not in value and value.strip().endswith(";"):
        name = value.strip()[:-1].strip()
        return (name, "") if name else None
    return split_header_line(value)


def extract_curl(text: str) -> RequestDescriptor | None:
    """Build a RequestDescriptor from curl command text.

    Args:
        text: The command, starting with the ``curl`` keyword.

    Returns:
        The descriptor, or None when no URL can be found.
    """
    tokens = tokenize(normalize_command(text))
    if not tokens or tokens[0].lower() != "curl":
        return None

    url: str | None = None
    method: str | None = None
    headers: dict[str, str] = {}
    body: str | None = None
    has_body = False
    force_get = False
    head_only = False
    json_body = False

    i = 1
    while i < len(tokens):
        token = tokens[i]
        i += 1
        flag, value = _split_flag(token)
        if flag is None:
            if url is None and looks_like_url(token):
                url = token
            continue
        if flag in ("-I", "--head"):
            head_only = True
            continue
        if flag in ("-G", "--get"):
            force_get = True
            continue
        if flag not in VALUE_FLAGS:
            continue
        if value is None:
            if i >= len(tokens):
                break
            value = tokens[i]
            i += 1

        if flag in METHOD_FLAGS:
            if value.strip():
                method = value.strip().upper()
        elif flag in HEADER_FLAGS:
            pair = _header_from_flag(value)
            if pair is not None:
                headers[pair[0]] = pair[1]
        elif flag in HEADER_ALIASES:
            headers[HEADER_ALIASES[flag]] = value.strip()
        elif flag in BODY_FLAGS:
            body = value
            has_body = True
            if flag == "--json":
                json_body = True
        elif flag in ("-u", "--user"):
            credentials = value if ":" in value else value + ":"
            encoded = base64.b64encode(credentials.encode("utf-8")).decode("ascii")
            headers["Authorization"] = f"Basic {encoded}"
        elif flag == "--oauth2-bearer":
            headers["Authorization"] = f"Bearer {value.strip()}"
        elif flag == "--url":
            if url is None and looks_like_url(value):
                url = value

    if not url:
        return None

    if json_body:
        for name in ("Content-Type", "Accept"):
            if find_header(headers, name) is None:
                headers[name] = "application/json"

    if method is None:
        if head_only:
            method = "HEAD"
        elif force_get or not has_body:
            method = "GET"
        else:
            method = "POST"

    return RequestDescriptor(url=url, method=method, headers=headers, body=body)
