#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docbook2adoc/parsers/base.py
"""Base classes for document parsers.

This module defines the abstract base class for parsers that turn a source
document into the :class:`~docbook2adoc.ast.DocBookDocument` node model
walked by the conversion engine.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Union

from docbook2adoc.ast import DocBookDocument
from docbook2adoc.exceptions import InvalidOptionsError
from docbook2adoc.options.base import BaseParserOptions

ParserInput = Union[str, Path, IO[bytes], IO[str], bytes]


class BaseParser(ABC):
    """Abstract base class for document parsers.

    Parameters
    ----------
    options : BaseParserOptions or None, default = None
        Format-specific parsing options

    Notes
    -----
    The parse() method should handle all supported input types:
    - str or Path: File path to read
    - IO[bytes] / IO[str]: File-like object
    - bytes: Raw document bytes

    """

    def __init__(self, options: BaseParserOptions | None = None):
        """Initialize the parser with optional configuration."""
        self.options: BaseParserOptions | None = options

    @staticmethod
    def _validate_options_type(options: BaseParserOptions | None, expected_type: type, parser_name: str) -> None:
        """Validate that options are of the correct type for this parser.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=parser_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @abstractmethod
    def parse(self, input_data: ParserInput) -> DocBookDocument:
        """Parse the input document into the node model.

        Parameters
        ----------
        input_data : str, Path, IO[bytes], IO[str] or bytes
            Source document

        Returns
        -------
        DocBookDocument
            Parsed document

        Raises
        ------
        ParsingError
            If the document cannot be parsed
        FileError
            If a source path cannot be read

        """
        pass
