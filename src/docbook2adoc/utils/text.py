#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docbook2adoc/utils/text.py
"""Text normalization utilities.

This module undoes the automatic substitutions AsciiDoc applies to plain
text (typographic quotes, dashes, symbols), reflows paragraph text and
provides the small escaping helpers used while emitting AsciiDoc.

"""

from __future__ import annotations

import re
from typing import Optional

from docbook2adoc.constants import ENTITY_TABLE, REPLACEMENT_TABLE

LEADING_SPACE_PATTERN = re.compile(r"\A\s")
LEADING_ENDLINES_PATTERN = re.compile(r"\A\n+ *")
TRAILING_ENDLINES_PATTERN = re.compile(r"\n+\Z")
WRAPPED_INDENT_PATTERN = re.compile(r"\n[ \t]*")
INDENTATION_PATTERN = re.compile(r"^[ \t]+", re.MULTILINE)
PREVIOUS_ADJACENT_PATTERN = re.compile(r"\S\Z")
NEXT_ADJACENT_PATTERN = re.compile(r"\A\S")
# A period after a word (or at line start) followed by blanks, not at the end of the text
SENTENCE_END_PATTERN = re.compile(r"(?:^|\b)\.[ \t]+(?!\n?\Z)", re.MULTILINE)
LEADING_DOTS_PATTERN = re.compile(r"\A(\.+)")

_ENTITY_TRANSLATION = {codepoint: replacement for codepoint, replacement in ENTITY_TABLE.items()}


def reverse_substitute(text: str) -> str:
    """Replace characters AsciiDoc would generate with their plain-text source.

    Code points from the entity table are replaced first, then literal
    tokens that collide with AsciiDoc syntax. The result contains none of
    the triggering characters, so applying the function again is a no-op.

    Parameters
    ----------
    text : str
        Text to normalize

    Returns
    -------
    str
        Normalized text

    Examples
    --------
        >>> reverse_substitute("\\u00a9 Acme, Inc.")
        '(C) Acme, Inc.'
        >>> reverse_substitute("a\\u2014b")
        'a--b'

    """
    if not text:
        return text

    text = text.translate(_ENTITY_TRANSLATION)
    for original, replacement in REPLACEMENT_TABLE.items():
        text = text.replace(original, replacement)
    return text


def reflow(text: str, preserve_line_wrap: bool = False) -> str:
    """Strip surrounding blank lines and join wrapped lines of paragraph text.

    Parameters
    ----------
    text : str
        Raw character data from the source document
    preserve_line_wrap : bool, default False
        Keep line breaks (without their indentation) instead of joining
        wrapped lines with a single space

    Returns
    -------
    str
        Reflowed text, or an empty string for whitespace-only input

    """
    if not text.strip():
        return ""

    result = LEADING_ENDLINES_PATTERN.sub("", text)
    result = WRAPPED_INDENT_PATTERN.sub("\n" if preserve_line_wrap else " ", result)
    return TRAILING_ENDLINES_PATTERN.sub("", result)


def split_sentences(text: str) -> str:
    """Break text after each sentence-ending period followed by whitespace.

    The rule is literal: a period preceded by a word character (or at the
    start of a line) and followed by blanks ends a sentence, except at the
    very end of the text. Abbreviations are not recognized.

    Examples
    --------
        >>> split_sentences("One. Two. Three.")
        'One.\\nTwo.\\nThree.'

    """
    return SENTENCE_END_PATTERN.sub(".\n", text)


def escape_table_cell(text: str) -> str:
    r"""Escape the cell separator inside table text.

    Examples
    --------
        >>> escape_table_cell("a|b")
        'a\\|b'

    """
    return text.replace("|", "\\|")


def protect_leading_dots(text: str) -> str:
    """Wrap leading periods in a passthrough so they do not form a block title."""
    return LEADING_DOTS_PATTERN.sub(r"$$\1$$", text)


def lazy_quote(text: Optional[str], seek: str = ",") -> Optional[str]:
    """Quote text that contains ``seek`` so it survives an attribute list.

    Examples
    --------
        >>> lazy_quote("Chapter 1, Intro")
        '"Chapter 1, Intro"'
        >>> lazy_quote("Intro")
        'Intro'

    """
    if text and seek in text:
        return f'"{text}"'
    return text


def unwrap_text(text: str) -> str:
    """Remove line breaks and the indentation that follows them."""
    return WRAPPED_INDENT_PATTERN.sub("", text)


def join_lines(text: str) -> str:
    """Join the stripped lines of ``text`` with single spaces."""
    return " ".join(line.strip() for line in text.strip().split("\n"))


def normalize_menu_text(text: str) -> str:
    """Collapse a wrapped GUI label onto one line."""
    return " ".join(line.strip() for line in text.split("\n"))


def strip_indentation(line: str) -> str:
    """Remove leading blanks from every line of ``line``."""
    return INDENTATION_PATTERN.sub("", line)


__all__ = [
    "LEADING_SPACE_PATTERN",
    "NEXT_ADJACENT_PATTERN",
    "PREVIOUS_ADJACENT_PATTERN",
    "escape_table_cell",
    "join_lines",
    "lazy_quote",
    "normalize_menu_text",
    "protect_leading_dots",
    "reflow",
    "reverse_substitute",
    "split_sentences",
    "strip_indentation",
    "unwrap_text",
]
