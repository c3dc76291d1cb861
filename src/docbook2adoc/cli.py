#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docbook2adoc/cli.py
"""Command-line interface for docbook2adoc.

Examples
--------
Convert a file next to its source::

    $ docbook2adoc guide.xml

Write to a specific file or to standard output::

    $ docbook2adoc guide.xml --out manual.adoc
    $ docbook2adoc guide.xml --stdout

Define document attributes (URLs equal to a value become ``{name}``)::

    $ docbook2adoc guide.xml -a product=Widget -a project-url=https://example.org

Show a summary table of the converted files::

    $ docbook2adoc chapters/*.xml --rich

"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.table import Table

from docbook2adoc import __version__
from docbook2adoc.constants import DEFAULT_IDPREFIX, DEFAULT_IDSEPARATOR
from docbook2adoc.exceptions import (
    DocBook2AdocError,
    FileError,
    ParsingError,
    RenderingError,
    ValidationError,
)
from docbook2adoc.logging_utils import configure_logging
from docbook2adoc.options.asciidoc import AsciiDocConversionOptions
from docbook2adoc.options.docbook import DocBookParserOptions
from docbook2adoc.parsers.docbook import DocBookParser
from docbook2adoc.renderers.asciidoc import DocBookAsciiDocRenderer
from docbook2adoc.utils.io_utils import derived_output_path

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_PARSING_ERROR = 6
EXIT_RENDERING_ERROR = 7


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to the CLI exit code for its category."""
    if isinstance(exception, ValidationError):
        return EXIT_VALIDATION_ERROR
    if isinstance(exception, FileError):
        return EXIT_FILE_ERROR
    if isinstance(exception, ParsingError):
        return EXIT_PARSING_ERROR
    if isinstance(exception, RenderingError):
        return EXIT_RENDERING_ERROR
    return EXIT_ERROR


def parse_attribute(value: str) -> tuple[str, str]:
    """Split a ``NAME=VALUE`` argument; a bare ``NAME`` gets an empty value.

    Raises
    ------
    argparse.ArgumentTypeError
        If the name is empty

    """
    name, _, attribute_value = value.partition("=")
    name = name.strip()
    if not name:
        raise argparse.ArgumentTypeError(f"Invalid attribute {value!r}, expected NAME=VALUE")
    return name, attribute_value


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the ``docbook2adoc`` command."""
    parser = argparse.ArgumentParser(
        prog="docbook2adoc",
        description="Convert DocBook XML documents to AsciiDoc.",
    )
    parser.add_argument("input", nargs="+", help="DocBook XML files to convert")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    output_group = parser.add_argument_group("output")
    output_group.add_argument("-o", "--out", help="Output file (single input only; default: input with .adoc)")
    output_group.add_argument("--stdout", action="store_true", help="Write the converted text to standard output")
    output_group.add_argument("--rich", action="store_true", help="Print a summary table of converted files")

    conversion_group = parser.add_argument_group("conversion")
    conversion_group.add_argument("--idprefix", default=DEFAULT_IDPREFIX, help="Prefix for normalized ids")
    conversion_group.add_argument("--idseparator", default=DEFAULT_IDSEPARATOR, help="Separator for normalized ids")
    conversion_group.add_argument(
        "--no-normalize-ids", dest="normalize_ids", action="store_false", help="Emit explicit ids verbatim"
    )
    conversion_group.add_argument("--compat-mode", action="store_true", help="Emit :compat-mode: in headers")
    conversion_group.add_argument(
        "-a",
        "--attribute",
        dest="attributes",
        action="append",
        type=parse_attribute,
        default=[],
        metavar="NAME=VALUE",
        help="Document attribute to declare (repeatable)",
    )
    conversion_group.add_argument(
        "--no-sentence-per-line", dest="sentence_per_line", action="store_false", help="Keep sentences together"
    )
    conversion_group.add_argument(
        "--no-preserve-line-wrap",
        dest="preserve_line_wrap",
        action="store_false",
        help="Join wrapped lines (only without sentence-per-line)",
    )
    conversion_group.add_argument(
        "--no-delimit-source",
        dest="delimit_source",
        action="store_false",
        help="Only fence program listings that contain blank lines",
    )
    conversion_group.add_argument(
        "--skip", dest="skip_elements", action="append", default=[], metavar="ELEMENT", help="Element to drop"
    )
    conversion_group.add_argument(
        "--no-write-includes",
        dest="write_includes",
        action="store_false",
        help="Do not write converted include files",
    )
    conversion_group.add_argument("--recover", action="store_true", help="Recover from malformed XML")

    logging_group = parser.add_argument_group("logging")
    logging_group.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING)",
    )
    logging_group.add_argument("--log-file", help="Also write log messages to this file")
    logging_group.add_argument("--trace", action="store_true", help="Debug logging with timestamps")
    return parser


def build_options(parsed_args: argparse.Namespace) -> tuple[AsciiDocConversionOptions, DocBookParserOptions]:
    """Create conversion and parser options from parsed arguments.

    Raises
    ------
    ValidationError
        If an option value is rejected

    """
    try:
        options = AsciiDocConversionOptions(
            idprefix=parsed_args.idprefix,
            idseparator=parsed_args.idseparator,
            normalize_ids=parsed_args.normalize_ids,
            compat_mode=parsed_args.compat_mode,
            attributes=dict(parsed_args.attributes),
            sentence_per_line=parsed_args.sentence_per_line,
            preserve_line_wrap=parsed_args.preserve_line_wrap,
            delimit_source=parsed_args.delimit_source,
            skip_elements=tuple(parsed_args.skip_elements),
            write_includes=parsed_args.write_includes,
        )
    except ValueError as exc:
        raise ValidationError(str(exc), original_error=exc) from exc
    return options, DocBookParserOptions(recover=parsed_args.recover)


def _print_summary(results: list[tuple[str, str, str]]) -> None:
    table = Table(title="docbook2adoc")
    table.add_column("Input")
    table.add_column("Output")
    table.add_column("Status")
    for source, target, status in results:
        style = "green" if status == "ok" else "red"
        table.add_row(source, target, f"[{style}]{status}[/{style}]")
    Console(stderr=True).print(table)


def main(args: Optional[list[str]] = None) -> int:
    """Run the command-line interface.

    Parameters
    ----------
    args : list of str, optional
        Command-line arguments; defaults to ``sys.argv[1:]``

    Returns
    -------
    int
        Process exit code

    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    log_level = logging.DEBUG if parsed_args.trace else getattr(logging, parsed_args.log_level)
    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace, use_rich=parsed_args.rich)

    if parsed_args.out and len(parsed_args.input) > 1:
        logger.error("--out can only be used with a single input file")
        return EXIT_VALIDATION_ERROR

    try:
        options, parser_options = build_options(parsed_args)
    except ValidationError as exc:
        logger.error("Invalid options: %s", exc)
        return EXIT_VALIDATION_ERROR

    docbook_parser = DocBookParser(parser_options)
    renderer = DocBookAsciiDocRenderer(options, parser_options)
    exit_code = EXIT_SUCCESS
    results: list[tuple[str, str, str]] = []

    for input_name in parsed_args.input:
        input_path = Path(input_name)
        target: Optional[Path] = None
        try:
            document = docbook_parser.parse(input_path)
            if parsed_args.stdout:
                sys.stdout.write(renderer.render_to_string(document))
                target_name = "<stdout>"
            else:
                target = Path(parsed_args.out) if parsed_args.out else derived_output_path(input_path)
                renderer.render(document, target)
                target_name = str(target)
            results.append((input_name, target_name, "ok"))
        except DocBook2AdocError as exc:
            logger.error("Failed to convert %s: %s", input_path, exc)
            exit_code = exit_code or get_exit_code_for_exception(exc)
            results.append((input_name, str(target or ""), type(exc).__name__))

    if parsed_args.rich:
        _print_summary(results)
    return exit_code


__all__ = ["create_parser", "get_exit_code_for_exception", "main", "parse_attribute"]
