#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docbook2adoc/renderers/base.py
"""Base classes for document renderers.

This module defines the abstract base class renderers inherit from. A
renderer walks a parsed :class:`~docbook2adoc.ast.DocBookDocument` and
writes the converted text to a file or stream.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Union

from docbook2adoc.ast import DocBookDocument
from docbook2adoc.exceptions import InvalidOptionsError
from docbook2adoc.options.base import BaseRendererOptions
from docbook2adoc.utils.io_utils import write_text


class BaseRenderer(ABC):
    """Abstract base class for renderers.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Format-specific rendering options

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the renderer with optional configuration."""
        self.options = options

    @abstractmethod
    def render_to_string(self, doc: DocBookDocument) -> str:
        """Render the document to a string.

        Parameters
        ----------
        doc : DocBookDocument
            Parsed document to render

        Returns
        -------
        str
            Rendered document

        """

    def render(self, doc: DocBookDocument, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Render the document and write it to a path or stream.

        Parameters
        ----------
        doc : DocBookDocument
            Parsed document to render
        output : str, Path, IO[bytes] or IO[str]
            Output destination. Paths are written as UTF-8.

        Raises
        ------
        OutputWriteError
            If a file path cannot be written
        TypeError
            If the output type is not supported

        """
        write_text(self.render_to_string(doc), output)

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the correct type for this renderer.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )


__all__ = ["BaseRenderer"]
