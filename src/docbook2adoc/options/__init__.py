#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Options dataclasses for DocBook parsing and AsciiDoc conversion."""

from docbook2adoc.options.asciidoc import AsciiDocConversionOptions
from docbook2adoc.options.base import BaseParserOptions, BaseRendererOptions, CloneFrozenMixin
from docbook2adoc.options.docbook import DocBookParserOptions

__all__ = [
    "AsciiDocConversionOptions",
    "BaseParserOptions",
    "BaseRendererOptions",
    "CloneFrozenMixin",
    "DocBookParserOptions",
]
