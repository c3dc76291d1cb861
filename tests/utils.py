"""Test utilities for the docbook2adoc test suite.

This module provides helpers for building small DocBook documents and
converting them, so individual tests only spell out the markup under test.
"""

from docbook2adoc.ast import DocBookDocument
from docbook2adoc.options import AsciiDocConversionOptions, DocBookParserOptions
from docbook2adoc.parsers import DocBookParser
from docbook2adoc.renderers import DocBookAsciiDocRenderer

DOCBOOK5_NS = 'xmlns="http://docbook.org/ns/docbook" xmlns:xlink="http://www.w3.org/1999/xlink" version="5.0"'
XINCLUDE_NS = 'xmlns:xi="http://www.w3.org/2001/XInclude"'


def article(body: str, title: str = "Guide") -> str:
    """Wrap body markup in a DocBook 5 article."""
    return f"<article {DOCBOOK5_NS}><title>{title}</title>{body}</article>"


def parse_docbook(xml: str, **parser_options) -> DocBookDocument:
    """Parse DocBook text with optional parser option overrides."""
    options = DocBookParserOptions(**parser_options) if parser_options else None
    return DocBookParser(options).parse(xml)


def convert(xml: str, **options) -> str:
    """Convert DocBook text to AsciiDoc text."""
    renderer = DocBookAsciiDocRenderer(AsciiDocConversionOptions(**options))
    return renderer.render_to_string(parse_docbook(xml))


def convert_lines(xml: str, **options) -> list[str]:
    """Convert DocBook text and return the AsciiDoc output lines."""
    renderer = DocBookAsciiDocRenderer(AsciiDocConversionOptions(**options))
    return renderer.render_to_lines(parse_docbook(xml))


def convert_body(body: str, **options) -> list[str]:
    """Convert body markup wrapped in an article and return the output lines."""
    return convert_lines(article(body), **options)


def contains_run(lines: list[str], run: list[str]) -> bool:
    """Whether ``run`` occurs as consecutive lines of ``lines``."""
    size = len(run)
    return any(lines[start : start + size] == run for start in range(len(lines) - size + 1))
