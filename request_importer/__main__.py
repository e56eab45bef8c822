"""request-importer - Main entry point.

Ties together the CLI, parser, and engine modules to import a pasted
request and print it.
"""

import json
import sys

from request_importer.cli import parse_cli, read_input
from request_importer.descriptor import format_headers
from request_importer.engine import (
    print_summary,
    render_curl,
    render_raw,
    swap_token,
)
from request_importer.parser import detect_dialect, parse_request


def main(argv: list[str] | None = None) -> int:
    """Run the request importer.

    Args:
        argv: Optional argument list (defaults to sys.argv).

    Returns:
        Exit code (0 = imported, 2 = input could not be read or parsed).
    """
    args = parse_cli(argv)
    summary = args.output_format == "summary"

    source = "stdin" if args.input == "-" else args.input
    if summary:
        print(f"[*] Reading snippet from: {source}")
    try:
        text = read_input(args.input)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Error reading input: {exc}", file=sys.stderr)
        return 2

    dialect = detect_dialect(text)
    if dialect is None:
        print(
            "Error parsing request: input is not a curl command or "
            "fetch() call.",
            file=sys.stderr,
        )
        return 2

    if summary:
        print(f"[*] Parsing {dialect.value} snippet...")
    descriptor = parse_request(text)
    if descriptor is None:
        print(
            f"Error parsing request: no URL found in the {dialect.value} "
            "snippet.",
            file=sys.stderr,
        )
        return 2

    if args.token:
        descriptor.headers = swap_token(descriptor.headers, args.token.strip())

    if summary:
        print_summary(descriptor)
    elif args.output_format == "json":
        print(json.dumps(descriptor.to_dict(), indent=2, ensure_ascii=False))
    elif args.output_format == "headers":
        print(format_headers(descriptor.headers))
    elif args.output_format == "curl":
        print(render_curl(descriptor))
    else:
        try:
            print(render_raw(descriptor))
        except ValueError as exc:
            print(f"Error rendering request: {exc}", file=sys.stderr)
            return 2

    return 0


if __name__ == "__main__":
    sys.exit(main())
