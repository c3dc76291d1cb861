#  Copyright (c) 2025 Tom Villani, Ph.D.
"""docbook2adoc - convert DocBook XML documents to AsciiDoc.

docbook2adoc reads DocBook 4.x and 5.x XML with lxml, adapts it into a
small read-only node model and walks it with a stateful visitor that
emits AsciiDoc: sections and document headers, paragraphs reflowed one
sentence per line, lists with continuations, CALS tables, listings with
callouts, admonitions, inline formatting, cross references and index
terms. ``xi:include`` targets are converted to their own ``.adoc`` files
and referenced with ``include::`` directives.

Examples
--------
    >>> from docbook2adoc import to_asciidoc
    >>> print(to_asciidoc("<article><title>Guide</title><para>One. Two.</para></article>"), end="")
    = Guide
    <BLANKLINE>
    One.
    Two.

Conversion options:

    >>> from docbook2adoc import AsciiDocConversionOptions
    >>> options = AsciiDocConversionOptions(sentence_per_line=False, attributes={"product": "Widget"})
    >>> adoc = to_asciidoc("<book><title>Manual</title></book>", options=options)

"""

import sys

if sys.version_info < (3, 10):
    raise RuntimeError(
        "docbook2adoc requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from docbook2adoc.api import convert_file, to_asciidoc  # noqa: E402
from docbook2adoc.exceptions import (  # noqa: E402
    DocBook2AdocError,
    FileError,
    IncludeError,
    InvalidOptionsError,
    ParsingError,
    RenderingError,
    ValidationError,
)
from docbook2adoc.options import AsciiDocConversionOptions, DocBookParserOptions  # noqa: E402
from docbook2adoc.parsers import DocBookParser  # noqa: E402
from docbook2adoc.renderers import DocBookAsciiDocRenderer  # noqa: E402

__all__ = [
    "AsciiDocConversionOptions",
    "DocBook2AdocError",
    "DocBookAsciiDocRenderer",
    "DocBookParser",
    "DocBookParserOptions",
    "FileError",
    "IncludeError",
    "InvalidOptionsError",
    "ParsingError",
    "RenderingError",
    "ValidationError",
    "__version__",
    "convert_file",
    "to_asciidoc",
]
