#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docbook2adoc/renderers/_asciidoc_context.py
"""Conversion state shared by the DocBook to AsciiDoc handlers.

This private module holds the output line buffer, the per-pass
:class:`ConversionContext` and :class:`ConversionHelpersMixin`, the
helpers every handler mixin builds on (subtree capture, block titles,
anchors).

"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, Optional

from docbook2adoc.ast.nodes import Node, NodeKind
from docbook2adoc.options.asciidoc import AsciiDocConversionOptions
from docbook2adoc.utils.ids import IdResolver
from docbook2adoc.utils.text import escape_table_cell, reverse_substitute, unwrap_text

logger = logging.getLogger(__name__)

# A list item line such as ". Step" or "* Item" followed by a trailing blank
_LIST_ITEM_LINE_PATTERN = re.compile(r"\.\s+.+")


class OutputLineBuffer:
    """Ordered, append-only sequence of output lines.

    Lines may still contain embedded newlines; they are split when the
    document is finalized.

    Examples
    --------
        >>> buffer = OutputLineBuffer()
        >>> buffer.append_line("== Title")
        >>> buffer.append_text(" suffix")
        >>> buffer.lines
        ['== Title suffix']

    """

    def __init__(self) -> None:
        self.lines: list[str] = []

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[str]:
        return iter(self.lines)

    @property
    def last(self) -> str:
        """The current (last) line, or an empty string for an empty buffer."""
        return self.lines[-1] if self.lines else ""

    def previous(self, offset: int = 2) -> str:
        """Return the line ``offset`` positions from the end, or an empty string."""
        return self.lines[-offset] if len(self.lines) >= offset else ""

    def append_line(self, text: str = "") -> None:
        """Start a new line."""
        self.lines.append(text)

    def append_text(self, text: str) -> None:
        """Concatenate ``text`` onto the current line."""
        if self.lines:
            self.lines[-1] = f"{self.lines[-1]}{text}"
        else:
            self.lines.append(text)

    def extend(self, lines: Iterable[str]) -> None:
        """Append captured lines verbatim."""
        self.lines.extend(lines)

    def mark_scratch(self, reuse_blank: bool = False) -> int:
        """Open a scratch region and return its start index.

        A fresh empty line is pushed unless ``reuse_blank`` is set and the
        current line is already empty, in which case that line becomes the
        first scratch line.
        """
        if not (reuse_blank and self.lines and self.lines[-1] == ""):
            self.lines.append("")
        return len(self.lines) - 1

    def take_from(self, mark: int) -> list[str]:
        """Remove and return the lines of a scratch region."""
        captured = self.lines[mark:]
        del self.lines[mark:]
        return captured


@dataclass
class ConversionContext:
    """Mutable state of one document conversion pass.

    A context is created for the main document and for every included
    document; only the options, the id resolver and the include chain are
    shared with the parent pass.

    Parameters
    ----------
    options : AsciiDocConversionOptions
        Conversion options shared by every pass
    resolver : IdResolver
        Anchor id resolver built from the options
    base_dir : Path
        Directory relative include paths resolve against
    source_path : Path, optional
        File being converted

    """

    options: AsciiDocConversionOptions
    resolver: IdResolver
    base_dir: Path
    source_path: Optional[Path] = None
    buffer: OutputLineBuffer = field(default_factory=OutputLineBuffer)
    level: int = 1
    list_depth: int = 0
    in_table: bool = False
    continuation: bool = False
    adjoin_next: bool = False
    last_emitted_was_block: bool = False
    nested_formatting: list[str] = field(default_factory=list)
    suppression: dict[str, int] = field(default_factory=dict)
    callouts: dict[str, int] = field(default_factory=dict)
    requires_index: bool = False
    skip_names: frozenset[str] = frozenset()
    handled: set[Node] = field(default_factory=set)
    include_chain: tuple[Path, ...] = ()

    @classmethod
    def create(
        cls,
        options: AsciiDocConversionOptions,
        source_path: Optional[Path] = None,
        base_dir: Optional[Path] = None,
    ) -> ConversionContext:
        """Create the context for a top-level conversion pass."""
        resolver = IdResolver(options.idprefix, options.idseparator, options.normalize_ids)
        chain = (source_path.resolve(),) if source_path is not None else ()
        return cls(
            options=options,
            resolver=resolver,
            base_dir=base_dir if base_dir is not None else options.resolve_base_dir(source_path),
            source_path=source_path,
            skip_names=frozenset(options.skip_elements),
            include_chain=chain,
        )

    def spawn(self, source_path: Path) -> ConversionContext:
        """Create a fresh context for an included document."""
        return ConversionContext(
            options=self.options,
            resolver=self.resolver,
            base_dir=source_path.parent,
            source_path=source_path,
            skip_names=self.skip_names,
            include_chain=(*self.include_chain, source_path.resolve()),
        )

    @property
    def lines(self) -> list[str]:
        """Lines produced so far."""
        return self.buffer.lines

    def append_line(self, text: str = "") -> None:
        """Start a new output line."""
        self.buffer.append_line(text)

    def append_text(self, text: str) -> None:
        """Concatenate text onto the current output line."""
        self.buffer.append_text(text)

    def consume_damper(self) -> bool:
        """Consume one pending blank-line damper; return whether one was set."""
        if self.continuation:
            self.continuation = False
            return True
        if self.adjoin_next:
            self.adjoin_next = False
            return True
        return False

    def append_blank_line(self) -> None:
        """Push an empty line unless a pending damper swallows it."""
        if not self.consume_damper():
            self.buffer.append_line("")

    def callout_number(self, callout_id: str) -> int:
        """Return the number of a callout, assigning the next one on first use."""
        number = self.callouts.get(callout_id)
        if number is None:
            number = len(self.callouts) + 1
            self.callouts[callout_id] = number
        return number


class ConversionHelpersMixin:
    """Capture and block-decoration helpers shared by the handler mixins.

    The implementing class must provide ``visit(node, ctx)``.
    """

    def visit(self, node: Node, ctx: ConversionContext) -> None:
        raise NotImplementedError

    def traverse_children(self, node: Node, ctx: ConversionContext, elements_only: bool = False) -> None:
        """Visit the children (or only the element children) of ``node``."""
        for child in node.elements if elements_only else list(node.children):
            self.visit(child, ctx)

    def format_nodes(self, nodes: Iterable[Node], ctx: ConversionContext) -> list[str]:
        """Render ``nodes`` into a scratch region and return the captured lines.

        Consumes a pending damper the way a blank line would. When a damper
        was consumed and the current line is empty, that line is reused as
        the scratch line instead of pushing a new one.
        """
        consumed = ctx.consume_damper()
        mark = ctx.buffer.mark_scratch(reuse_blank=consumed)
        for child in nodes:
            self.visit(child, ctx)
        return ctx.buffer.take_from(mark)

    def format_subtree(self, node: Optional[Node], ctx: ConversionContext) -> list[str]:
        """Render the children of ``node`` and return the captured lines."""
        if node is None:
            return []
        return self.format_nodes(list(node.children), ctx)

    def format_append_line(self, node: Node, ctx: ConversionContext, suffix: str = "") -> list[str]:
        captured = self.format_subtree(node, ctx)
        first, rest = split_first(captured)
        ctx.append_line(f"{first}{suffix}")
        ctx.buffer.extend(rest)
        return rest

    def format_append_text(self, node: Node, ctx: ConversionContext, prefix: str = "", suffix: str = "") -> list[str]:
        captured = self.format_subtree(node, ctx)
        first, rest = split_first(captured)
        ctx.append_text(f"{prefix}{first.strip()}{suffix}")
        ctx.buffer.extend(rest)
        return rest

    def node_text(self, node: Optional[Node], ctx: ConversionContext, unsubstitute: bool = True) -> Optional[str]:
        """Return the text content of ``node``, normalized for output.

        Vertical bars are escaped while a table is being rendered.
        """
        if node is None:
            return None
        text = reverse_substitute(node.text) if unsubstitute else node.text
        return escape_table_cell(text) if ctx.in_table else text

    def child_text(self, node: Node, ctx: ConversionContext, *names: str) -> Optional[str]:
        """Return the normalized text of the first descendant called one of ``names``."""
        return self.node_text(node.find(*names), ctx)

    def title_node(self, node: Node) -> Optional[Node]:
        """Return the ``title`` of ``node``, looking into ``info`` as well."""
        return node.child("title") or node.child_path("info", "title")

    def heading_text(self, title: Node, subtitle: Optional[Node], ctx: ConversionContext) -> str:
        """Render a title, joined with its subtitle, to raw heading text."""
        text = "".join(self.format_subtree(title, ctx))
        if subtitle is not None:
            text = f"{text}: {''.join(self.format_subtree(subtitle, ctx))}"
        return text

    def append_block_title(self, node: Node, ctx: ConversionContext, prefix: str = "") -> bool:
        """Emit the ``.Title`` line of a block; return whether one was emitted."""
        title_node = self.title_node(node)
        if title_node is None:
            return False

        title, rest = split_first(self.format_subtree(title_node, ctx))
        leading_char = "."
        # see-also lists render their title as plain text above the bullets
        if node.name == "itemizedlist" and node.get("role") == "see-also-list":
            leading_char = ""
        ctx.append_line(f"{leading_char}{prefix}{unwrap_text(title)}")
        ctx.buffer.extend(rest)
        ctx.adjoin_next = True
        return True

    def append_anchor(self, node: Node, ctx: ConversionContext) -> Optional[str]:
        """Emit the ``[[id]]`` anchor of ``node`` if it has an explicit id."""
        anchor = ctx.resolver.resolve(node)
        if anchor:
            if ctx.buffer.last == "" and _LIST_ITEM_LINE_PATTERN.search(ctx.buffer.previous()):
                ctx.append_text(f"[[{anchor}]]")
            else:
                ctx.append_line(f"[[{anchor}]]")
        return anchor

    def append_block_role(self, node: Node, ctx: ConversionContext) -> bool:
        """Emit the anchor and the ``[.role]`` line of a paragraph."""
        self.append_anchor(node, ctx)
        role = node.get("role")
        if role:
            ctx.append_line(f"[.{role}]")
            return True
        return False

    def section_title_for_diagnostics(self, node: Node) -> str:
        """Title of the section enclosing ``node``, for warning messages."""
        section = node.ancestor("section")
        if section is None:
            return ""
        title = section.child("title")
        return title.text if title is not None else ""


def split_first(lines: list[str]) -> tuple[str, list[str]]:
    """Split captured lines into the first line and the remainder."""
    if not lines:
        return "", []
    return lines[0], lines[1:]


def is_blank_text(node: Node) -> bool:
    """Whether ``node`` is character data made only of whitespace."""
    return node.kind in (NodeKind.TEXT, NodeKind.CDATA) and not node.content.strip()


__all__ = [
    "ConversionContext",
    "ConversionHelpersMixin",
    "OutputLineBuffer",
    "is_blank_text",
    "split_first",
]
