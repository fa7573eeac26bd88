"""
Command-line entry point for jon.

Usage:
    python -m jon document.jon
    python -m jon document.jon --schema document.schema.jon
    python -m jon document.jon --dump --indent 4
    cat document.jon | python -m jon -
"""

import argparse
import sys

from . import __version__
from .const import APP_DESCRIPTION, DEFAULT_INDENT, DEFAULT_MAX_DEPTH
from .logging import LogConfig, get_logger, setup_logging
from .models.value import Value
from .schema import validate
from .syntax.loader import DocumentLoader, LoadError
from .syntax.writer import dumps


logger = get_logger("main")


def load_document(loader: DocumentLoader, path: str) -> Value:
    """Load a document from a path, or from stdin for '-'."""
    if path == "-":
        return loader.load_stream(sys.stdin)
    return loader.load_file(path)


def check_document(args: argparse.Namespace) -> int:
    """Parse, optionally validate and dump a document. Returns exit status."""
    loader = DocumentLoader(max_depth=args.max_depth)

    try:
        document = load_document(loader, args.document)
        schema = loader.load_file(args.schema) if args.schema else None
    except LoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    status = 0

    if schema is not None:
        result = validate(document, schema)
        if result.valid:
            logger.info(f"{args.document} conforms to {args.schema}")
        else:
            print(f"Validation failed ({len(result)} violation(s)):", file=sys.stderr)
            for violation in result:
                print(f"  - {violation}", file=sys.stderr)
            status = 1

    if args.dump:
        try:
            print(dumps(document, args.indent))
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
    elif status == 0:
        print("Document is valid!")

    return status


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog="jon",
        description=APP_DESCRIPTION,
    )

    parser.add_argument(
        "document",
        help="Path to the document to check ('-' reads stdin)",
    )

    parser.add_argument(
        "-s", "--schema",
        metavar="PATH",
        help="Validate the document against this schema document",
    )

    parser.add_argument(
        "--dump",
        action="store_true",
        help="Print the parsed document in normalized form",
    )

    parser.add_argument(
        "--indent",
        type=int,
        default=DEFAULT_INDENT,
        metavar="N",
        help=f"Indentation for --dump; 0 writes one line (default: {DEFAULT_INDENT})",
    )

    parser.add_argument(
        "--max-depth",
        type=int,
        default=DEFAULT_MAX_DEPTH,
        metavar="N",
        help=f"Maximum nesting depth of objects and arrays (default: {DEFAULT_MAX_DEPTH})",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging (INFO level)",
    )

    parser.add_argument(
        "-d", "--debug",
        action="store_true",
        help="Enable debug logging (DEBUG level)",
    )

    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Quiet mode (only errors)",
    )

    parser.add_argument(
        "--log-file",
        metavar="PATH",
        help="Write logs to file",
    )

    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    args = parser.parse_args(argv)

    if args.indent == 0:
        args.indent = None

    log_config = LogConfig()

    if args.debug:
        log_config.console_level = "debug"
    elif args.verbose:
        log_config.console_level = "info"
    elif args.quiet:
        log_config.console_level = "error"
    else:
        log_config.console_level = "warning"

    if args.no_color:
        log_config.console_colors = False

    if args.log_file:
        log_config.file_enabled = True
        log_config.file_path = args.log_file

    setup_logging(log_config)

    return check_document(args)


if __name__ == "__main__":
    sys.exit(main())
