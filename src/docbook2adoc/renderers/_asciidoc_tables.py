#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docbook2adoc/renderers/_asciidoc_tables.py
"""Table conversion for the DocBook to AsciiDoc renderer.

CALS tables (``table``/``informaltable``) become ``|===`` blocks with one
cell per line. Cell spans and alignments are encoded in the cell prefix,
e.g. ``2.3+^.>|`` for a cell spanning two columns and three rows, centered
and bottom aligned. ``segmentedlist`` and ``revhistory`` are rendered as
tables too.

"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from docbook2adoc.ast.nodes import Node
from docbook2adoc.constants import HORIZONTAL_ALIGN_MARKERS, VERTICAL_ALIGN_MARKERS
from docbook2adoc.renderers._asciidoc_context import ConversionContext, ConversionHelpersMixin
from docbook2adoc.renderers._asciidoc_conditionals import append_condition_end, append_condition_start

logger = logging.getLogger(__name__)


def _to_int(value: Optional[str], default: int = 0) -> int:
    try:
        return int(value) if value is not None else default
    except ValueError:
        return default


def find_colname_index(colspecs: Sequence[Node], name: str) -> Optional[int]:
    """Return the position of the colspec called ``name``, or None."""
    for index, colspec in enumerate(colspecs):
        if colspec.get("colname") == name:
            return index
    return None


def compute_hspan(colspecs: Sequence[Node], entry: Node) -> int:
    """Return the number of columns a table entry spans.

    The span is derived from the ``namest``/``nameend`` colspec names.
    Unresolvable names fall back to a span of 1.

    Examples
    --------
        >>> from docbook2adoc.ast import element
        >>> specs = [element("colspec", colname="c1"), element("colspec", colname="c2")]
        >>> compute_hspan(specs, element("entry", namest="c1", nameend="c2"))
        2

    """
    start_name = entry.get("namest")
    end_name = entry.get("nameend")
    if start_name and end_name:
        start_index = find_colname_index(colspecs, start_name)
        end_index = find_colname_index(colspecs, end_name)
        if start_index is not None and end_index is not None:
            return end_index - start_index + 1
        if start_index is None:
            logger.warning("'namest' %s not found in <colspec>", start_name)
        if end_index is None:
            logger.warning("'nameend' %s not found in <colspec>", end_name)
    return 1


def cell_prefix(colspecs: Sequence[Node], cell: Node) -> str:
    """Build the AsciiDoc cell prefix combining spans and alignments."""
    horizontal = HORIZONTAL_ALIGN_MARKERS.get(cell.get("align") or "", "")
    vertical = VERTICAL_ALIGN_MARKERS.get(cell.get("valign") or "", "")

    more_rows = cell.get("morerows")
    vspan = f".{_to_int(more_rows) + 1}" if more_rows is not None else ""
    hspan_count = compute_hspan(colspecs, cell)
    hspan = str(hspan_count) if hspan_count > 1 else ""
    span = f"{hspan}{vspan}+" if hspan or vspan else ""
    return f"{span}{horizontal}{vertical}"


class TableHandlersMixin(ConversionHelpersMixin):
    """Handlers for CALS tables, segmented lists and revision histories."""

    def visit_table(self, node: Node, ctx: ConversionContext) -> bool:
        ctx.append_blank_line()
        self.append_anchor(node, ctx)
        self.append_block_title(node, ctx)
        self.process_table(node, ctx)
        return False

    def visit_informaltable(self, node: Node, ctx: ConversionContext) -> bool:
        ctx.append_blank_line()
        self.append_anchor(node, ctx)
        self.process_table(node, ctx)
        return False

    def process_table(self, node: Node, ctx: ConversionContext) -> None:
        """Emit a CALS ``tgroup`` as an AsciiDoc table block."""
        tgroup = node.child("tgroup")
        if tgroup is None:
            logger.warning("Table without <tgroup> at %s. Skipping.", node.path)
            return

        column_count = _to_int(tgroup.get("cols"))
        colspecs = tgroup.children_named("colspec")
        head = tgroup.child("thead")
        title_node = node.child("title")
        title_label = f" '{title_node.children[0].text if title_node is not None and title_node.children else ''}'"

        if colspecs and len(colspecs) != column_count:
            logger.warning(
                "%d columns specified in table%s, but only %d colspecs", column_count, title_label, len(colspecs)
            )

        head_row = None
        if head is not None:
            head_rows = head.children_named("row")
            if len(head_rows) > 1:
                logger.warning(
                    "%d rows in header specified in table%s in section '%s' at %s, only first row will be written out",
                    len(head_rows),
                    title_label,
                    self.section_title_for_diagnostics(node),
                    node.path,
                )
            if head_rows:
                head_row = head_rows[0]
                header_count = sum(compute_hspan(colspecs, entry) for entry in head_row.children_named("entry"))
                if header_count != column_count:
                    logger.warning(
                        "%d columns specified in table%s, but only %d headers", column_count, title_label, header_count
                    )

        cols = ["1"] * column_count
        body = tgroup.child("tbody")
        first_row = body.child("row") if body is not None else None
        if first_row is not None:
            first_cells = first_row.elements
            for index in range(min(column_count, len(first_cells))):
                cell_elements = first_cells[index].elements
                if cell_elements and cell_elements[0].name == "literallayout":
                    cols[index] = f"{cols[index]}*l"

        frame = node.get("frame")
        frame_attr = f', frame="{frame}"' if frame else ""
        table_options = []
        if head is not None:
            table_options.append("header")
        foot = tgroup.child("tfoot")
        if foot is not None:
            table_options.append("footer")
        options_attr = f', options="{",".join(table_options)}"' if table_options else ""

        ctx.append_line(f'[cols="{",".join(cols)}"{frame_attr}{options_attr}]')
        ctx.append_line("|===")

        if head_row is not None:
            for cell in head_row.children_named("entry"):
                ctx.append_line(f"{cell_prefix(colspecs, cell)}| {self.node_text(cell, ctx)}")
            ctx.append_blank_line()

        if body is not None:
            for row in body.children_named("row"):
                append_condition_start(row, ctx)
                ctx.append_blank_line()
                for cell in row.elements:
                    prefix = cell_prefix(colspecs, cell)
                    if cell.name == "literallayout":
                        ctx.append_line(f"{prefix}|{self.node_text(cell, ctx)}")
                    else:
                        ctx.append_line(f"{prefix}|")
                        self.traverse_children(cell, ctx)
                append_condition_end(row, ctx)

        if foot is not None:
            for row in foot.children_named("row"):
                for cell in row.children_named("entry"):
                    ctx.append_line(f"{cell_prefix(colspecs, cell)}| {self.node_text(cell, ctx)}")

        ctx.append_line("|===")

    def visit_segmentedlist(self, node: Node, ctx: ConversionContext) -> bool:
        ctx.append_blank_line()
        self.append_anchor(node, ctx)
        segtitles = node.children_named("segtitle")
        cols = ",".join("1" for _ in segtitles)
        ctx.append_line(
            f'[%autowidth,cols="{cols}", options="header", frame="none", grid="none", role="segmentedlist"]'
        )
        ctx.append_line("|===")
        for segtitle in segtitles:
            ctx.append_line("|")
            self.traverse_children(segtitle, ctx)
        for item in node.children_named("seglistitem"):
            ctx.append_blank_line()
            for seg in item.children_named("seg"):
                ctx.append_line("a|")
                self.traverse_children(seg, ctx)
        ctx.append_line("|===")
        return False

    def visit_revhistory(self, node: Node, ctx: ConversionContext) -> bool:
        ctx.append_blank_line()
        self.append_anchor(node, ctx)
        ctx.append_line(
            '[%autowidth, width="100%", cols="4", options="header", frame="none", grid="none", role="revhistory"]'
        )
        ctx.append_line("|===")
        ctx.append_line("4+|Revision History")
        for revision in node.children_named("revision"):
            ctx.append_blank_line()
            for name in ("revnumber", "date", "authorinitials"):
                value = self.node_text(revision.child(name), ctx)
                ctx.append_line(f"|{value}" if value is not None else "|{nbsp}")

            remark = self.node_text(revision.child("revremark"), ctx)
            description = revision.child("revdescription")
            if remark is not None:
                ctx.append_line(f"|{remark}")
            elif description is not None:
                ctx.append_line("a|")
                self.traverse_children(description, ctx)
            else:
                ctx.append_line("|{nbsp}")
        ctx.append_line("|===")
        return False


__all__ = ["TableHandlersMixin", "cell_prefix", "compute_hspan", "find_colname_index"]
