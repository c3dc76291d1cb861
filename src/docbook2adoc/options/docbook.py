#  Copyright (c) 2025 Tom Villani, Ph.D.

# docbook2adoc/options/docbook.py
"""Configuration options for DocBook parsing."""

from __future__ import annotations

from dataclasses import dataclass, field

from docbook2adoc.constants import (
    DEFAULT_PARSER_HUGE_TREE,
    DEFAULT_PARSER_RECOVER,
    DEFAULT_PARSER_RESOLVE_ENTITIES,
)
from docbook2adoc.options.base import BaseParserOptions


@dataclass(frozen=True)
class DocBookParserOptions(BaseParserOptions):
    """Configuration options for DocBook XML parsing.

    Parameters
    ----------
    recover : bool, default False
        Let the XML parser recover from malformed markup instead of failing.
    resolve_entities : bool, default False
        Expand entities declared in the internal subset. When False, entity
        references stay in the tree and are converted to AsciiDoc attribute
        references (``&product;`` becomes ``{product}``).
    huge_tree : bool, default False
        Lift the XML parser's depth and size limits.
        SECURITY: leave disabled for untrusted input.

    """

    recover: bool = field(
        default=DEFAULT_PARSER_RECOVER,
        metadata={"help": "Recover from malformed XML", "importance": "advanced"},
    )
    resolve_entities: bool = field(
        default=DEFAULT_PARSER_RESOLVE_ENTITIES,
        metadata={"help": "Expand internal entities instead of emitting attribute references", "importance": "core"},
    )
    huge_tree: bool = field(
        default=DEFAULT_PARSER_HUGE_TREE,
        metadata={"help": "Disable parser size limits (SECURITY: trusted input only)", "importance": "security"},
    )
