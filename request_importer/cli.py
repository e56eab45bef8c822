"""Command-line interface and input handling.

Reads a pasted curl command or fetch snippet from a file or stdin and
selects how the imported request is printed.
"""

import argparse
import os
import sys

from request_importer import __version__

OUTPUT_FORMATS = ("summary", "json", "headers", "curl", "raw")


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser for the request-importer CLI."""
    parser = argparse.ArgumentParser(
        prog="request-importer",
        description=(
            "request-importer v{ver} - Convert pasted curl commands and "
            "fetch() snippets into structured requests.\n\n"
            "Reads the snippet from a file (or stdin), extracts the method, "
            "URL, headers and body, and prints them in the chosen format."
        ).format(ver=__version__),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  request-importer snippet.txt\n"
            "  pbpaste | request-importer --format json\n"
            "  request-importer snippet.txt --token <TOKEN> --format curl\n"
        ),
    )

    parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="File holding the pasted snippet ('-' or omitted reads stdin).",
    )
    parser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default="summary",
        dest="output_format",
        help="How to print the imported request (default: summary).",
    )
    parser.add_argument(
        "--token",
        default=None,
        help="Replace the Bearer token in the Authorization header.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate parsed CLI arguments.

    Raises:
        SystemExit: If the input file does not exist or is not readable,
            or the token is blank.
    """
    if args.input != "-":
        if not os.path.isfile(args.input):
            print(
                f"Error: Input file not found: '{args.input}'",
                file=sys.stderr,
            )
            sys.exit(1)

        if not os.access(args.input, os.R_OK):
            print(
                f"Error: Input file is not readable: '{args.input}'",
                file=sys.stderr,
            )
            sys.exit(1)

    if args.token is not None and not args.token.strip():
        print("Error: Token cannot be empty.", file=sys.stderr)
        sys.exit(1)


def parse_cli(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse and validate command-line arguments.

    Args:
        argv: Optional list of arguments (defaults to sys.argv).

    Returns:
        Parsed and validated argument namespace.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    validate_args(args)
    return args


def read_input(path: str) -> str:
    """Return the snippet text from ``path``, or from stdin for ``-``.

    Raises:
        OSError: If the file cannot be read.
        UnicodeDecodeError: If the file is not valid UTF-8.
    """
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as fh:
        return fh.read()
