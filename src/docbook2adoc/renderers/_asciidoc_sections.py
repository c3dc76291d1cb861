#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docbook2adoc/renderers/_asciidoc_sections.py
"""Document, header and section handlers for the DocBook to AsciiDoc renderer."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from docbook2adoc.ast.nodes import Node
from docbook2adoc.constants import DEFAULT_IDPREFIX, DEFAULT_IDSEPARATOR, DOCUMENT_NAMES
from docbook2adoc.renderers._asciidoc_conditionals import append_condition_end, append_condition_start
from docbook2adoc.renderers._asciidoc_context import ConversionContext, ConversionHelpersMixin, split_first
from docbook2adoc.utils.text import join_lines, unwrap_text

logger = logging.getLogger(__name__)


class SectionHandlersMixin(ConversionHelpersMixin):
    """Handlers for documents, document headers and sections."""

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------
    def process_doc(self, node: Node, ctx: ConversionContext) -> bool:
        """Render ``book``/``article``: document title, then the body one level down."""
        self.append_anchor(node, ctx)
        title_node = node.child("title")
        if title_node is not None:
            title = self.heading_text(title_node, node.child("subtitle"), ctx)
            ctx.append_line(f"= {join_lines(title)}")
        ctx.level += 1
        self.traverse_children(node, ctx, elements_only=True)
        ctx.level -= 1
        return False

    def visit_set(self, node: Node, ctx: ConversionContext) -> bool:
        for child in node.elements:
            self.visit(child, ctx)
        return False

    def visit_info(self, node: Node, ctx: ConversionContext) -> bool:
        if node.parent_name in DOCUMENT_NAMES:
            self.process_info(node, ctx)
        return False

    def process_info(self, node: Node, ctx: ConversionContext) -> None:
        """Render a document header from ``info``/``bookinfo``/``articleinfo``.

        Emits the title (only for DocBook 4 style headers that carry it),
        the author line, the revision line, the book attributes, the
        custom document attributes and the abstract.
        """
        title_node = node.child("title")
        if title_node is not None:
            title = self.heading_text(title_node, node.child("subtitle"), ctx)
            ctx.append_line(f"= {join_lines(title)}")

        self.append_authors(node, ctx)

        revnumber = None
        revhistory = node.find("revhistory")
        if revhistory is not None:
            revnumber = revhistory.find("revnumber")
        if revnumber is None:
            revnumber = node.find("releaseinfo")
        date_node = node.child("date", "pubdate")
        if date_node is not None:
            version = f"v{revnumber.text}, " if revnumber is not None else ""
            ctx.append_line(f"{version}{date_node.text}")

        is_book = node.name == "bookinfo" or node.parent_name in ("book", "chapter")
        self.append_header_attributes(ctx, book=is_book)
        self.process_abstract(node, ctx)

    def append_header_attributes(self, ctx: ConversionContext, book: bool = True, sourcedir: bool = False) -> None:
        """Emit the document attribute entries of a header."""
        options = ctx.options
        if book:
            if options.compat_mode:
                ctx.append_line(":compat-mode:")
            ctx.append_line(":doctype: book")
            ctx.append_line(":sectnums:")
            ctx.append_line(":toc: left")
            ctx.append_line(":icons: font")
            ctx.append_line(":experimental:")
        if options.idprefix != DEFAULT_IDPREFIX:
            ctx.append_line(f":idprefix: {options.idprefix}".rstrip())
        if options.idseparator != DEFAULT_IDSEPARATOR:
            ctx.append_line(f":idseparator: {options.idseparator}".rstrip())
        if sourcedir and "sourcedir" not in options.attributes:
            ctx.append_line(":sourcedir: .")
        for name, value in options.attributes.items():
            ctx.append_line(f":{name}: {value}".rstrip())

    def append_authors(self, node: Node, ctx: ConversionContext) -> None:
        """Emit the ``First Last <email>; ...`` author line of a header."""
        authors = []
        for author_node in node.find_all("author"):
            name_source = author_node.find("personname") or author_node
            parts = [
                part
                for part in (
                    self.child_text(name_source, ctx, "firstname"),
                    self.child_text(name_source, ctx, "surname"),
                )
                if part is not None
            ]
            author = " ".join(parts)
            email = author_node.find("email")
            if email is not None:
                author = f"{author} <{self.node_text(email, ctx)}>".strip()
            if author:
                authors.append(author)
        if authors:
            ctx.append_line("; ".join(authors))

    def process_abstract(self, node: Node, ctx: ConversionContext) -> None:
        abstract = node.child("abstract")
        if abstract is None:
            return
        ctx.append_line()
        ctx.append_line("[abstract]")
        ctx.append_line("--")
        for child in abstract.elements:
            if child.name == "title":
                continue
            ctx.append_line()
            self.traverse_children(child, ctx)
            ctx.append_line()
        ctx.append_text("--")

    def visit_chapter(self, node: Node, ctx: ConversionContext) -> bool:
        # A document whose root is a chapter (or part) is converted as a book
        if node.is_root:
            ctx.adjoin_next = True
            return self.process_section(
                node,
                ctx,
                header=lambda: self.append_header_attributes(ctx, book=True, sourcedir=True),
            )
        return self.process_section(node, ctx)

    visit_part = visit_chapter

    def visit_sectioninfo(self, node: Node, ctx: ConversionContext) -> bool:
        self.append_authors(node, ctx)
        parent = node.parent
        if parent is not None:
            node_id = ctx.resolver.resolve(parent, normalize=False)
            title = self.child_text(parent, ctx, "title") or ""
            logger.warning(
                "Possibly incomplete handling of <%s>: %s%s", node.name, title, f" ({node_id})" if node_id else ""
            )
        return False

    visit_chapterinfo = visit_sectioninfo

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------
    def visit_bridgehead(self, node: Node, ctx: ConversionContext) -> bool:
        level = ctx.level
        renderas = node.get("renderas")
        if renderas:
            try:
                level = int(renderas.replace("sect", "")) + 1
            except ValueError:
                logger.warning("Unsupported bridgehead renderas=%r at %s", renderas, node.path)
        ctx.append_blank_line()
        ctx.append_line("[float]")
        title, rest = split_first(self.format_subtree(node, ctx))
        anchor = ctx.resolver.anchor_for(node, title)
        if anchor:
            ctx.append_line(f"[[{anchor}]]")
        ctx.append_line(f"{'=' * level} {unwrap_text(title)}")
        ctx.buffer.extend(rest)
        return False

    def process_special_section(self, node: Node, ctx: ConversionContext) -> bool:
        """Render abstract, appendix, bibliography, glossary, preface and index sections."""
        is_index = node.name == "index"
        if is_index:
            ctx.append_blank_line()
            ctx.append_line("ifdef::backend-docbook,backend-pdf[]")
        self.process_section(node, ctx, special=node.name)
        if is_index:
            ctx.append_line("endif::backend-docbook,backend-pdf[]")
            ctx.requires_index = False
        return False

    def process_section(
        self,
        node: Node,
        ctx: ConversionContext,
        special: Optional[str] = None,
        header: Optional[Callable[[], None]] = None,
    ) -> bool:
        """Render a section heading and its element children one level down.

        Parameters
        ----------
        node : Node
            Section element
        ctx : ConversionContext
            Current conversion pass
        special : str, optional
            Style name of a special section; numbering is switched off around it
        header : callable, optional
            Emits header attribute lines right after the heading

        """
        ctx.append_blank_line()
        if special:
            ctx.append_line(":sectnums!:")
            ctx.append_blank_line()
            ctx.append_line(f"[{special}]")

        title_node = self.title_node(node)
        if title_node is not None:
            subtitle_node = node.child("subtitle") or node.child_path("info", "subtitle")
            title = self.heading_text(title_node, subtitle_node, ctx)
        elif special:
            title = special.capitalize()
        else:
            logger.warning("No title found for section node: <%s> at %s", node.name, node.path)
            title = "Unknown Title!"

        anchor = ctx.resolver.anchor_for(node, title)
        if anchor:
            ctx.append_line(f"[[{anchor}]]")
        if title_node is not None:
            append_condition_start(title_node, ctx)
        ctx.append_line(f"{'=' * ctx.level} {join_lines(title)}")
        if title_node is not None:
            append_condition_end(title_node, ctx)

        info = node.child("info")
        if info is not None:
            self.append_authors(info, ctx)
        if header is not None:
            header()

        ctx.level += 1
        self.traverse_children(node, ctx, elements_only=True)
        ctx.level -= 1

        if special:
            ctx.append_blank_line()
            ctx.append_line(":sectnums:")
        return False


__all__ = ["SectionHandlersMixin"]
