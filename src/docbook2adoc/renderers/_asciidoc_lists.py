#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docbook2adoc/renderers/_asciidoc_lists.py
"""List handlers for the DocBook to AsciiDoc renderer.

List depth is maintained by the engine around every list element, so the
handlers here only choose markers and lay out item content. A list item
holding only inline content is reflowed onto the marker line. Items with
block children join them with ``+`` continuation lines, except before
literal layouts and nested lists, which open their own block.

"""

from __future__ import annotations

import logging

from docbook2adoc.ast.nodes import Node, NodeKind
from docbook2adoc.constants import (
    FORMATTING_NAMES,
    INLINE_NAMES,
    INLINE_NAMES_AND_TEXT,
    LIST_NAMES,
    PARA_NAMES,
    SELF_DELIMITING_ITEM_CHILDREN,
)
from docbook2adoc.renderers._asciidoc_context import (
    ConversionContext,
    ConversionHelpersMixin,
    is_blank_text,
    split_first,
)
from docbook2adoc.utils.text import strip_indentation

logger = logging.getLogger(__name__)

_ORDERED_PARENTS = frozenset({"orderedlist", "procedure", "substeps"})
_NESTED_LIST_CHILDREN = frozenset({"itemizedlist", "orderedlist", "procedure"})
_DELIMITED_LINES = frozenset({"----", "===="})


def list_marker(parent_name: str, depth: int) -> str:
    """Return the item marker for a list item at ``depth``.

    Examples
    --------
        >>> list_marker("orderedlist", 2)
        '..'
        >>> list_marker("itemizedlist", 3)
        '***'
        >>> list_marker("stepalternatives", 1)
        'a.'

    """
    if parent_name in _ORDERED_PARENTS:
        return "." * depth
    if parent_name == "stepalternatives":
        return "a."
    return "*" * depth


def _is_inline_child(node: Node) -> bool:
    if node.kind in (NodeKind.COMMENT, NodeKind.ENTITY_REFERENCE, NodeKind.PROCESSING_INSTRUCTION):
        return True
    return node.name in INLINE_NAMES_AND_TEXT


class ListHandlersMixin(ConversionHelpersMixin):
    """Handlers for simple, itemized, ordered, procedure and variable lists."""

    def visit_simplelist(self, node: Node, ctx: ConversionContext) -> bool:
        list_type = node.get("type")
        if list_type and list_type != "vert":
            logger.warning(
                "Converting simplelist with type=%s to normal list in section '%s' at %s",
                list_type,
                self.section_title_for_diagnostics(node),
                node.path,
            )
        ctx.append_blank_line()
        self.append_block_title(node, ctx)
        if ctx.list_depth == 1:
            ctx.append_blank_line()
        return True

    def visit_member(self, node: Node, ctx: ConversionContext) -> bool:
        ctx.append_text("* ")
        # the member text belongs on the marker line
        ctx.last_emitted_was_block = False
        self.traverse_children(node, ctx)
        if node.children and node.children[-1].name in INLINE_NAMES_AND_TEXT:
            ctx.append_line()
        return False

    def visit_itemizedlist(self, node: Node, ctx: ConversionContext) -> bool:
        ctx.append_blank_line()
        self.append_block_title(node, ctx)
        if ctx.list_depth == 1:
            ctx.append_blank_line()
        return True

    def _open_ordered(self, node: Node, ctx: ConversionContext) -> bool:
        ctx.append_blank_line()
        numeration = node.get("numeration")
        if numeration and numeration != "arabic":
            ctx.append_line(f"[{numeration}]")
        if ctx.list_depth == 1:
            ctx.append_blank_line()
        return True

    def visit_orderedlist(self, node: Node, ctx: ConversionContext) -> bool:
        ctx.append_blank_line()
        self.append_block_title(node, ctx)
        return self._open_ordered(node, ctx)

    def visit_procedure(self, node: Node, ctx: ConversionContext) -> bool:
        ctx.append_blank_line()
        self.append_anchor(node, ctx)
        self.append_block_title(node, ctx, "Procedure: ")
        return self._open_ordered(node, ctx)

    def visit_substeps(self, node: Node, ctx: ConversionContext) -> bool:
        return self._open_ordered(node, ctx)

    visit_stepalternatives = visit_substeps

    def visit_variablelist(self, node: Node, ctx: ConversionContext) -> bool:
        # Without a title the first entry supplies the separating blank line
        if self.title_node(node) is None:
            ctx.consume_damper()
        else:
            ctx.append_blank_line()
            self.append_block_title(node, ctx)
        return True

    # ------------------------------------------------------------------
    # Items
    # ------------------------------------------------------------------
    def _append_item_lines(self, text: str, ctx: ConversionContext, first_line: bool, detached: bool = False) -> bool:
        """Append reflowed item text; the first line joins the marker line."""
        for line in text.split("\n"):
            line = strip_indentation(line)
            if not line:
                continue
            if first_line:
                if detached:
                    ctx.append_line(line)
                else:
                    ctx.append_text(f" {line}")
                first_line = False
            else:
                ctx.append_line(f"  {line}")
        return first_line

    def _append_captured_rest(self, rest: list[str], ctx: ConversionContext) -> None:
        if rest:
            if ctx.buffer.last != "+":
                ctx.append_line("+")
            ctx.buffer.extend(rest)

    def visit_listitem(self, node: Node, ctx: ConversionContext) -> bool:
        """Render a list item or procedure step.

        The marker goes onto an empty current line or starts a new one.
        Inline-only items are reflowed after the marker; items with block
        content are laid out child by child with continuations.
        """
        ctx.adjoin_next = False
        self.append_anchor(node, ctx)
        marker = list_marker(node.parent_name, ctx.list_depth)
        if ctx.buffer.last == "":
            ctx.append_text(marker)
        else:
            ctx.append_line(marker)

        if all(_is_inline_child(child) for child in node.children):
            item_text, rest = split_first(self.format_subtree(node, ctx))
            if self._append_item_lines(item_text, ctx, first_line=True):
                # a bare marker is not read as a list item
                ctx.append_text(" {empty}")
            self._append_captured_rest(rest, ctx)
        else:
            self._process_mixed_item(node, ctx)

        ctx.continuation = False
        if ctx.buffer.last != "":
            ctx.append_blank_line()
        return False

    visit_step = visit_listitem

    def _process_mixed_item(self, node: Node, ctx: ConversionContext) -> None:
        first_line = True
        for index, child in enumerate(node.children):
            if is_blank_text(child) or child.kind is NodeKind.COMMENT:
                continue

            local_continuation = False
            if not (index == 0 or first_line or child.name in SELF_DELIMITING_ITEM_CHILDREN):
                if ctx.buffer.last != "+":
                    ctx.append_line("+")
                ctx.continuation = True
                local_continuation = True
                first_line = True

            if child.name in PARA_NAMES or child.is_text:
                captured = self.format_nodes([child] if child.is_text else list(child.children), ctx)
                item_text, rest = split_first(captured)
                if not item_text and not rest:
                    continue
                first_line = self._append_item_lines(item_text, ctx, first_line, detached=local_continuation)
                self._append_captured_rest(rest, ctx)
            else:
                if child.name not in INLINE_NAMES:
                    if first_line and not local_continuation:
                        # keeps the marker line from being read as an empty item
                        ctx.append_text(" {empty}")
                    if not (local_continuation or child.name in _NESTED_LIST_CHILDREN):
                        ctx.append_line("+")
                    # the block attaches directly below its continuation line
                    ctx.continuation = ctx.buffer.last == "+"
                self.visit(child, ctx)
                ctx.continuation = True
            first_line = False

    def visit_varlistentry(self, node: Node, ctx: ConversionContext) -> bool:
        """Render a ``term::`` entry followed by its definition blocks."""
        ctx.append_blank_line()
        self.append_anchor(node, ctx)
        for term_line in self.format_subtree(node.child("term"), ctx):
            for position, line in enumerate(term_line.split("\n")):
                line = strip_indentation(line)
                if not line:
                    continue
                if position == 0:
                    ctx.append_line(line)
                else:
                    ctx.append_text(f" {line}")
        ctx.append_text(":" + ":" * ctx.list_depth)

        listitem = node.child("listitem")
        if listitem is None:
            logger.warning("Variable list entry without <listitem> at %s", node.path)
            return False

        first_line = True
        for index, child in enumerate(listitem.elements):
            local_continuation = False
            if not (index == 0 or first_line or child.name in ("literallayout", "screen") or child.name in LIST_NAMES):
                ctx.append_line("+")
                ctx.continuation = True
                local_continuation = True

            if child.name in PARA_NAMES:
                if index == 0:
                    ctx.append_blank_line()
                item_text, rest = split_first(self.format_subtree(child, ctx))
                if not item_text and not rest:
                    continue
                for line in item_text.split("\n"):
                    line = strip_indentation(line)
                    if not line:
                        continue
                    if first_line and line not in _DELIMITED_LINES:
                        ctx.append_text(line)
                    else:
                        ctx.append_line(line)
                    first_line = False
                self._append_captured_rest(rest, ctx)
            else:
                if child.name not in FORMATTING_NAMES:
                    if not (local_continuation or child.name == "literallayout" or child.name in LIST_NAMES):
                        ctx.append_line("+")
                    ctx.continuation = ctx.buffer.last == "+"
                self.visit(child, ctx)
                ctx.continuation = True
                first_line = False
        ctx.continuation = False
        return False

    # ------------------------------------------------------------------
    # Glossaries
    # ------------------------------------------------------------------
    def visit_glossentry(self, node: Node, ctx: ConversionContext) -> bool:
        ctx.append_blank_line()
        previous = node.previous_element
        if previous is None or previous.name != "glossentry":
            ctx.append_line("[glossary]")
        return True

    def visit_glossterm(self, node: Node, ctx: ConversionContext) -> bool:
        self.format_append_line(node, ctx, "::")
        return False

    def visit_glossdef(self, node: Node, ctx: ConversionContext) -> bool:
        elements = node.elements
        if elements:
            ctx.append_line(f"  {self.node_text(elements[0], ctx)}")
        return False


__all__ = ["ListHandlersMixin", "list_marker"]
