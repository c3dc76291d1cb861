#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/docbook2adoc/renderers/__init__.py
"""Renderers converting parsed DocBook documents to other formats.

Examples
--------
    >>> from docbook2adoc.parsers import DocBookParser
    >>> from docbook2adoc.renderers import DocBookAsciiDocRenderer
    >>> doc = DocBookParser().parse("<article><title>Title</title></article>")
    >>> DocBookAsciiDocRenderer().render_to_string(doc)
    '= Title\\n'

"""

from docbook2adoc.renderers.asciidoc import DocBookAsciiDocRenderer
from docbook2adoc.renderers.base import BaseRenderer

__all__ = ["BaseRenderer", "DocBookAsciiDocRenderer"]
