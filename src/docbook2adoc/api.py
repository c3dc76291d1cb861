#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docbook2adoc/api.py
"""Convenience functions for converting DocBook to AsciiDoc.

Examples
--------
Convert an in-memory document:

    >>> from docbook2adoc import to_asciidoc
    >>> print(to_asciidoc("<article><title>Notes</title></article>"), end="")
    = Notes

Convert a file next to its source (``guide.xml`` -> ``guide.adoc``):

    >>> from docbook2adoc import convert_file
    >>> convert_file("guide.xml")  # doctest: +SKIP
    PosixPath('guide.adoc')

"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from docbook2adoc.options.asciidoc import AsciiDocConversionOptions
from docbook2adoc.options.docbook import DocBookParserOptions
from docbook2adoc.parsers.base import ParserInput
from docbook2adoc.parsers.docbook import DocBookParser
from docbook2adoc.renderers.asciidoc import DocBookAsciiDocRenderer
from docbook2adoc.utils.io_utils import derived_output_path

logger = logging.getLogger(__name__)


def to_asciidoc(
    source: ParserInput,
    options: Optional[AsciiDocConversionOptions] = None,
    parser_options: Optional[DocBookParserOptions] = None,
) -> str:
    """Convert a DocBook source to AsciiDoc text.

    Parameters
    ----------
    source : str, Path, bytes or file-like
        DocBook XML text (a string starting with ``<``), a file path, raw
        bytes or a readable stream
    options : AsciiDocConversionOptions, optional
        Conversion options
    parser_options : DocBookParserOptions, optional
        XML parsing options, also used for included documents

    Returns
    -------
    str
        AsciiDoc text, newline terminated

    Raises
    ------
    ParsingError
        If the XML is not well-formed
    IncludeError
        If an included document cannot be converted
    InvalidOptionsError
        If an options object of the wrong class is passed

    """
    document = DocBookParser(parser_options).parse(source)
    return DocBookAsciiDocRenderer(options, parser_options).render_to_string(document)


def convert_file(
    input_path: Union[str, Path],
    output_path: Optional[Union[str, Path]] = None,
    options: Optional[AsciiDocConversionOptions] = None,
    parser_options: Optional[DocBookParserOptions] = None,
) -> Path:
    """Convert a DocBook file and write the AsciiDoc result.

    Parameters
    ----------
    input_path : str or Path
        DocBook source file
    output_path : str or Path, optional
        Destination. Defaults to the input path with ``.xml`` replaced by ``.adoc``.
    options : AsciiDocConversionOptions, optional
        Conversion options
    parser_options : DocBookParserOptions, optional
        XML parsing options

    Returns
    -------
    Path
        The written output path

    """
    input_path = Path(input_path)
    target = Path(output_path) if output_path is not None else derived_output_path(input_path)
    document = DocBookParser(parser_options).parse(input_path)
    DocBookAsciiDocRenderer(options, parser_options).render(document, target)
    logger.info("Converted %s to %s", input_path, target)
    return target


__all__ = ["convert_file", "to_asciidoc"]
