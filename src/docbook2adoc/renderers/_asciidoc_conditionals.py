#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docbook2adoc/renderers/_asciidoc_conditionals.py
"""Conditional directives.

Elements carrying a ``condition`` attribute are wrapped in
``ifdef::<condition>[]`` / ``endif::<condition>[]`` lines. Because inline
text can be appended to the directive line afterwards, a final pass splits
such lines in two.

"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Iterable, Optional

from docbook2adoc.ast.nodes import Node

if TYPE_CHECKING:
    from docbook2adoc.renderers._asciidoc_context import ConversionContext

_DIRECTIVE_WITH_CONTENT_PATTERN = re.compile(r"^((?:ifdef|endif)::.+?\[\])(.+)$")


def condition_of(node: Node) -> Optional[str]:
    """Return the ``condition`` attribute of an element, if any."""
    if not node.is_element:
        return None
    return node.get("condition") or None


def append_condition_start(node: Node, ctx: ConversionContext) -> None:
    """Open a conditional block for ``node`` when it carries a condition."""
    condition = condition_of(node)
    if condition:
        ctx.append_line(f"ifdef::{condition}[]")


def append_condition_end(node: Node, ctx: ConversionContext) -> None:
    """Close the conditional block opened by :func:`append_condition_start`."""
    condition = condition_of(node)
    if condition:
        ctx.append_line(f"endif::{condition}[]")


def split_directive_lines(lines: Iterable[str]) -> list[str]:
    """Split physical lines and move content trailing a directive to its own line.

    Examples
    --------
        >>> split_directive_lines(["ifdef::draft[]Some text", "plain"])
        ['ifdef::draft[]', 'Some text', 'plain']

    """
    result: list[str] = []
    for line in lines:
        for physical in line.split("\n"):
            match = _DIRECTIVE_WITH_CONTENT_PATTERN.match(physical)
            if match:
                result.append(match.group(1))
                result.append(match.group(2))
            else:
                result.append(physical)
    return result


__all__ = ["append_condition_end", "append_condition_start", "condition_of", "split_directive_lines"]
