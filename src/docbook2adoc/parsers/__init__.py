#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Parsers producing the DocBook node model."""

from docbook2adoc.parsers.base import BaseParser
from docbook2adoc.parsers.docbook import DocBookParser

__all__ = ["BaseParser", "DocBookParser"]
