#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docbook2adoc/renderers/_asciidoc_blocks.py
"""Block handlers for the DocBook to AsciiDoc renderer.

Covers paragraphs, admonitions, literal and program listings, delimited
blocks (examples, sidebars, quotes), figures, synopses, Q&A sets,
bibliographies and callout lists.

"""

from __future__ import annotations

import logging
import re
from pathlib import PurePosixPath
from typing import Optional

from docbook2adoc.ast.nodes import CDATA_NODE_NAME, Node, NodeKind
from docbook2adoc.constants import PARA_NAMES, XML_ID_ATTRIBUTE
from docbook2adoc.renderers._asciidoc_context import ConversionContext, ConversionHelpersMixin
from docbook2adoc.utils.text import lazy_quote, reflow

logger = logging.getLogger(__name__)

_LISTING_DELIMITER_PATTERN = re.compile(r"^-{4,}", re.MULTILINE)
_FIRST_LINE_ONLY_PATTERN = re.compile(r"\n.*", re.DOTALL)

_ARG_CHOICE_BRACKETS = {
    "opt": ("[ ", " ]"),
    "req": ("{ ", " }"),
    "plain": ("", ""),
}


class BlockHandlersMixin(ConversionHelpersMixin):
    """Handlers for block-level DocBook elements."""

    # ------------------------------------------------------------------
    # Paragraphs and admonitions
    # ------------------------------------------------------------------
    def visit_para(self, node: Node, ctx: ConversionContext) -> bool:
        empty_last_line = bool(ctx.lines) and ctx.buffer.last == ""
        if not ctx.continuation:
            ctx.append_blank_line()
        self.append_block_role(node, ctx)
        if not empty_last_line:
            ctx.append_blank_line()
        return True

    def visit_simpara(self, node: Node, ctx: ConversionContext) -> bool:
        empty_last_line = bool(ctx.lines) and ctx.buffer.last == ""
        ctx.append_blank_line()
        self.append_block_role(node, ctx)
        if not empty_last_line:
            ctx.append_blank_line()
        return True

    def visit_formalpara(self, node: Node, ctx: ConversionContext) -> bool:
        ctx.append_blank_line()
        self.append_block_title(node, ctx)
        return True

    def process_admonition(self, node: Node, ctx: ConversionContext) -> bool:
        """Render note, tip, warning, caution and important blocks.

        Inside a list the admonition is written as a ``LABEL:`` paragraph
        attached with continuations; elsewhere as a delimited ``====`` block.
        """
        label = node.name.upper()
        if not (ctx.continuation or ctx.list_depth > 0):
            ctx.append_blank_line()
        anchor = ctx.resolver.resolve(node)
        if anchor:
            ctx.append_line(f"[[{anchor}]]")
        have_title = self.append_block_title(node, ctx)

        if ctx.list_depth > 0:
            if have_title:
                ctx.append_blank_line()
            outer_continuation = ctx.continuation
            ctx.append_line(f"{label}: ")
            ctx.continuation = True
            self.traverse_children(node, ctx)
            ctx.continuation = outer_continuation
            ctx.append_line("+")
            ctx.append_blank_line()
            ctx.append_blank_line()
        else:
            ctx.append_line(f"[{label}]")
            ctx.append_line("====")
            ctx.adjoin_next = True
            self.traverse_children(node, ctx)
            ctx.adjoin_next = False
            ctx.append_line("====")
        return False

    def visit_remark(self, node: Node, ctx: ConversionContext) -> bool:
        ctx.append_blank_line()
        if ctx.buffer.last:
            ctx.append_line("ifdef::showremarks[]")
        else:
            ctx.append_text("ifdef::showremarks[]")
        ctx.append_blank_line()
        self.format_append_text(node, ctx, "#", "#")
        ctx.append_blank_line()
        ctx.append_text("endif::showremarks[]")
        ctx.append_blank_line()
        return False

    # ------------------------------------------------------------------
    # Literal blocks and listings
    # ------------------------------------------------------------------
    def visit_literallayout(self, node: Node, ctx: ConversionContext) -> bool:
        ctx.append_blank_line()
        text = node.text.rstrip()
        source_lines = text.split("\n")
        if any(not line.rstrip() for line in source_lines):
            ctx.append_line("....")
            ctx.append_line(text)
            ctx.append_line("....")
        else:
            for line in source_lines:
                ctx.append_line(f"  {line}")
        return False

    def _choose_screen_delimiter(self, node: Node, ctx: ConversionContext) -> str:
        delimiter = "----"
        for child in node.children:
            text = child.text.strip()
            if text and _LISTING_DELIMITER_PATTERN.search(text):
                ctx.append_line("[listing]")
                delimiter = "...."
                break
        ctx.append_line(delimiter)
        return delimiter

    def _callout_marker(self, node: Node, ctx: ConversionContext) -> str:
        callout_id = node.get(XML_ID_ATTRIBUTE) or node.get("id")
        if not callout_id:
            logger.warning("Callout <%s> without an id at %s", node.name, node.path)
            return ""
        return f" <{ctx.callout_number(callout_id)}>"

    def _coref_marker(self, node: Node, ctx: ConversionContext) -> str:
        """Return the marker of the callout a ``coref`` points back to."""
        linkend = node.get("linkend")
        number = ctx.callouts.get(linkend) if linkend else None
        if number is None:
            logger.warning("<coref> references undefined %s at %s", linkend, node.path)
            return ""
        return f" <{number}>"

    def visit_screen(self, node: Node, ctx: ConversionContext) -> bool:
        """Render a terminal session as a listing block.

        Children are flattened onto the listing lines: prompts, commands
        and options keep a trailing space, replaceables are quoted and
        ``co`` elements become numbered callouts.
        """
        if not node.children:
            return False
        if node.parent_name != "para":
            ctx.append_blank_line()
        delimiter = self._choose_screen_delimiter(node, ctx)
        first = node.children[0]
        last = node.children[-1]

        def emit(text: str, child: Node) -> None:
            if child is first:
                ctx.append_line(text)
            else:
                ctx.append_text(text)

        def emit_lines(child: Node) -> None:
            # interior newlines separate commands
            pieces = child.content.split("\n")
            if child is first:
                while len(pieces) > 1 and not pieces[0].strip():
                    pieces.pop(0)
            if child is last:
                while pieces and not pieces[-1].strip():
                    pieces.pop()
            for index, piece in enumerate(pieces):
                if index == 0 and child is not first:
                    ctx.append_text(piece.strip())
                else:
                    ctx.append_line(piece.rstrip())

        for child in node.children:
            if child.kind is NodeKind.COMMENT:
                continue
            if child.kind is NodeKind.ENTITY_REFERENCE:
                emit(f"{{{child.name}}}", child)
                continue

            text = child.text.strip()
            if child.kind is NodeKind.TEXT:
                emit_lines(child)
            elif child.kind is NodeKind.CDATA or child.name == CDATA_NODE_NAME:
                ctx.append_line(text)
            elif child.name == "prompt":
                if ctx.buffer.last == "" and child is not first:
                    ctx.append_text(f"{text} ")
                else:
                    ctx.append_line(f"{text} ")
            elif child.name == "co":
                ctx.append_text(self._callout_marker(child, ctx))
            elif child.name == "coref":
                ctx.append_text(self._coref_marker(child, ctx))
            elif child.name == "replaceable":
                emit(f"`{text}`", child)
            elif child.name == "comment":
                continue
            elif child.name == "command":
                emit(f"{text} ", child)
            elif child.name == "option":
                emit(f"_{text}_ ", child)
            elif child.name == "xref":
                self.visit(child, ctx)
            else:
                logger.warning(
                    "Cannot handle <%s> within <screen> (from %s)",
                    child.name,
                    " < ".join(ancestor.name for ancestor in child.ancestors()),
                )
        ctx.append_line(delimiter)
        return False

    def _listing_text(self, node: Node, ctx: ConversionContext) -> str:
        text = ""
        for child in node.iter_descendants():
            if child.is_text:
                text += child.content
            elif child.kind is NodeKind.ENTITY_REFERENCE:
                text += f"{{{child.name}}}"
            elif child.is_element and child.name == "co":
                text = text.rstrip(" \t") + self._callout_marker(child, ctx)
            elif child.is_element and child.name == "coref":
                text = text.rstrip(" \t") + self._coref_marker(child, ctx)
        return text

    def visit_programlisting(self, node: Node, ctx: ConversionContext) -> bool:
        language = node.get("language") or node.get("role") or ctx.options.attributes.get("source-language")
        language_attr = f",{language.lower()}" if language else ""
        linenums = ",linenums" if node.get("linenumbering") == "numbered" else ""
        if node.parent_name != "para":
            ctx.append_blank_line()
        ctx.append_line(f"[source{language_attr}{linenums}]")

        elements = node.elements
        if elements and elements[0].name == "include":
            ctx.append_line("----")
            for include in elements:
                ctx.append_line(f"include::{{sourcedir}}/{include.get('href', '')}[]")
            ctx.append_line("----")
            return False

        source_lines = self._listing_text(node, ctx).rstrip().split("\n")
        if ctx.options.delimit_source or any(not line.rstrip() for line in source_lines):
            ctx.append_line("----")
            ctx.append_line("\n".join(source_lines))
            ctx.append_line("----")
        else:
            ctx.append_line("\n".join(source_lines))
        return False

    # ------------------------------------------------------------------
    # Delimited blocks
    # ------------------------------------------------------------------
    def _body_elements(self, node: Node, *excluded: str) -> list[Node]:
        elements = node.elements
        if elements and elements[0].name in ("title", "info"):
            elements = elements[1:]
        return [child for child in elements if child.name not in excluded]

    def _process_delimited(
        self, node: Node, ctx: ConversionContext, style: str, delimiter: str, style_attrs: str = ""
    ) -> None:
        elements = self._body_elements(node, "attribution")
        if len(elements) == 1 and elements[0].name in PARA_NAMES:
            ctx.append_line(f"[{style}{style_attrs}]")
            ctx.adjoin_next = False
            self.format_append_line(elements[0], ctx)
        else:
            if style_attrs:
                ctx.append_line(f"[{style}{style_attrs}]")
            ctx.append_line(delimiter)
            ctx.adjoin_next = True
            self.traverse_children(node, ctx)
            ctx.adjoin_next = False
            ctx.append_line(delimiter)

    def process_example(self, node: Node, ctx: ConversionContext) -> bool:
        ctx.append_blank_line()
        anchor = ctx.resolver.resolve(node)
        if anchor:
            ctx.append_line(f"[[{anchor}]]")
        self.append_block_title(node, ctx)
        self._process_delimited(node, ctx, "example", "====")
        return False

    def visit_sidebar(self, node: Node, ctx: ConversionContext) -> bool:
        ctx.append_blank_line()
        anchor = ctx.resolver.resolve(node)
        if anchor:
            ctx.append_line(f"[[{anchor}]]")
        self.append_block_title(node, ctx)
        self._process_delimited(node, ctx, "sidebar", "****")
        return False

    def visit_blockquote(self, node: Node, ctx: ConversionContext) -> bool:
        ctx.append_blank_line()
        self.append_block_title(node, ctx)
        attribution = node.child("attribution")
        attrs = ""
        if attribution is not None:
            attrs = f", {lazy_quote(' '.join(self.node_text(attribution, ctx).split()))}"
        self._process_delimited(node, ctx, "quote", "____", attrs)
        return False

    def visit_attribution(self, node: Node, ctx: ConversionContext) -> bool:
        # Block quotes consume their attribution in the style line
        if node.parent_name != "blockquote":
            self.traverse_children(node, ctx)
        return False

    # ------------------------------------------------------------------
    # Figures and media
    # ------------------------------------------------------------------
    def imagedata_attrs(self, node: Node, ctx: ConversionContext) -> Optional[str]:
        """Return ``target[alt,scaledwidth=...]`` for the first usable image object.

        Image objects with ``role="fo"`` are skipped unless they point at
        an SVG file.
        """
        imagedata = None
        source = ""
        for image_object in node.find_all("imageobject"):
            candidate = image_object.find("imagedata")
            if candidate is None:
                continue
            source = candidate.get("fileref", "")
            if not source.endswith(".svg") and image_object.get("role") == "fo":
                continue
            imagedata = candidate
            break
        if imagedata is None:
            return None

        width = imagedata.get("width")
        width_attr = f"scaledwidth={width}" if width else ""
        textobject = node.find("textobject")
        alt = self.child_text(textobject, ctx, "phrase") if textobject is not None else None
        if alt is not None and alt == PurePosixPath(source).stem:
            alt = None
        quoted_alt = lazy_quote(alt) or ""
        separator = "," if quoted_alt and width_attr else ""
        return f"{source}[{quoted_alt}{separator}{width_attr}]"

    def visit_inlinemediaobject(self, node: Node, ctx: ConversionContext) -> bool:
        attrs = self.imagedata_attrs(node, ctx)
        if attrs is None:
            logger.warning("Inline media object without usable image data at %s. Skipping.", node.path)
        else:
            ctx.append_text(f"image:{attrs}")
        return False

    def visit_mediaobject(self, node: Node, ctx: ConversionContext) -> bool:
        if node.get("role") != "fo":
            self.visit_figure(node, ctx)
        return False

    def visit_figure(self, node: Node, ctx: ConversionContext) -> bool:
        ctx.append_blank_line()
        if node.name != "informalfigure":
            self.append_block_title(node, ctx)
            anchor = ctx.resolver.resolve(node)
            if anchor:
                ctx.append_text(f" [[{anchor}]]")
            ctx.append_blank_line()

        attrs = self.imagedata_attrs(node, ctx)
        if attrs is None:
            first = node.elements[0].name if node.elements else node.name
            logger.warning("Unknown mediaobject <%s>! Skipping.", first)
            return False

        output = f"image::{attrs}"
        if node.parent_name == "listitem":
            ctx.append_line(output)
        else:
            ctx.append_blank_line()
            ctx.append_line(output)
            ctx.append_blank_line()
        return False

    visit_informalfigure = visit_figure

    # ------------------------------------------------------------------
    # Synopses
    # ------------------------------------------------------------------
    def visit_funcsynopsis(self, node: Node, ctx: ConversionContext) -> bool:
        """Render a C function synopsis as a prototype in a source listing."""
        if node.parent_name != "para":
            ctx.append_blank_line()
        ctx.append_line("[source,c]")
        ctx.append_line("----")

        info = node.child("funcsynopsisinfo")
        if info is not None:
            for line in info.text.strip().splitlines():
                ctx.append_line(line.strip())
            ctx.append_blank_line()

        prototype = node.child("funcprototype")
        if prototype is not None:
            indent = 0
            first = True
            ctx.append_blank_line()
            funcdef = prototype.child("funcdef")
            if funcdef is not None:
                ctx.append_text(funcdef.text)
                indent = len(funcdef.text) + 2

            def open_parameter() -> None:
                nonlocal first
                if first:
                    ctx.append_text(" (")
                    first = False
                else:
                    ctx.append_text(",")
                    ctx.append_line(" " * indent)

            for paramdef in prototype.children_named("paramdef"):
                open_parameter()
                ctx.append_text(_FIRST_LINE_ONLY_PATTERN.sub("", paramdef.text))
                params = paramdef.child("funcparams")
                if params is not None:
                    ctx.append_text(f" ({params.text})")

            varargs = prototype.child("varargs")
            if varargs is not None:
                open_parameter()
                ctx.append_text(f"{varargs.text}...")

            ctx.append_text(" (void);" if first else ");")

        ctx.append_line("----")
        return False

    def visit_cmdsynopsis(self, node: Node, ctx: ConversionContext) -> bool:
        ctx.append_blank_line()
        return True

    def process_arg_or_group(self, node: Node, ctx: ConversionContext) -> bool:
        """Render ``arg``/``group`` with brackets for their choice and repetition."""
        choice = (node.get("choice") or "opt").lower()
        repeat = (node.get("rep") or "norepeat").lower()
        open_char, close_char = _ARG_CHOICE_BRACKETS.get(choice, _ARG_CHOICE_BRACKETS["opt"])
        repeat_char = "..." if repeat == "repeat" else ""

        ctx.append_text(" ")
        ctx.append_text(open_char)
        first = True
        for child in node.children:
            if node.name == "group":
                if not child.is_element:
                    continue
                if not first:
                    ctx.append_text(" | ")
                first = False
            self.visit(child, ctx)
        ctx.append_text(repeat_char)
        ctx.append_text(close_char)
        return False

    # ------------------------------------------------------------------
    # Q&A sets
    # ------------------------------------------------------------------
    def visit_qandaset(self, node: Node, ctx: ConversionContext) -> bool:
        divisions = node.children_named("qandadiv")
        for container in divisions or [node]:
            self._process_qanda(container, ctx)
        return False

    def visit_qandadiv(self, node: Node, ctx: ConversionContext) -> bool:
        self._process_qanda(node, ctx)
        return False

    def _process_qanda(self, container: Node, ctx: ConversionContext) -> None:
        style_pending = True
        for child in container.elements:
            if child.name == "title":
                ctx.append_line(f".{child.text}")
                ctx.append_blank_line()
            if style_pending:
                ctx.append_line("[qanda]")
                style_pending = False
            if child.name != "qandaentry":
                continue

            question = child.child_path("question", "para")
            if question is None:
                logger.warning("Missing question in qandaset! Skipping.")
                continue

            anchor = ctx.resolver.resolve(child)
            if anchor:
                ctx.append_line(f"[[{anchor}]]")
            self.format_append_line(question, ctx, "::")

            answer = child.child("answer")
            if answer is not None:
                first_part = True
                for part in answer.children:
                    if not part.text.rstrip():
                        continue
                    if not first_part:
                        ctx.append_line("+")
                        ctx.continuation = True
                    first_part = False
                    self.visit(part, ctx)
                ctx.continuation = False
            else:
                logger.warning("Missing answer in qandaset!")
            ctx.append_blank_line()

    # ------------------------------------------------------------------
    # Bibliography
    # ------------------------------------------------------------------
    def visit_bibliodiv(self, node: Node, ctx: ConversionContext) -> bool:
        ctx.append_blank_line()
        ctx.append_line("[bibliography]")
        return True

    def visit_bibliomisc(self, node: Node, ctx: ConversionContext) -> bool:
        return True

    def visit_bibliomixed(self, node: Node, ctx: ConversionContext) -> bool:
        ctx.append_blank_line()
        ctx.append_text("- ")
        ctx.last_emitted_was_block = False
        for child in node.children:
            if child.name == "abbrev":
                ctx.append_text(f"[[[{child.text}]]] ")
            elif child.name == "title":
                ctx.append_text(child.text)
            else:
                self.visit(child, ctx)
        return False

    def visit_citation(self, node: Node, ctx: ConversionContext) -> bool:
        ctx.append_text(f"<<{node.text}>>")
        return False

    # ------------------------------------------------------------------
    # Callouts
    # ------------------------------------------------------------------
    def visit_calloutlist(self, node: Node, ctx: ConversionContext) -> bool:
        for child in node.elements:
            if child.name != "callout":
                logger.warning("Expected <callout> in <calloutlist> but got <%s>. Ignoring.", child.name)
                continue
            arearefs = (child.get("arearefs") or "").split()
            number = ctx.callouts.get(arearefs[0]) if arearefs else None
            if number is None:
                logger.warning("<callout> references undefined %s, ignoring", " ".join(arearefs) or "callout")
            self.visit_callout(child, ctx, number)
        return False

    def visit_callout(self, node: Node, ctx: ConversionContext, number: Optional[int] = None) -> bool:
        if node.parent_name != "calloutlist":
            logger.warning("callout outside of calloutlist")
        for child in node.elements:
            if child.name not in PARA_NAMES:
                logger.warning("Unhandled <callout> child: <%s>", child.name)
                continue
            for part in child.children:
                if part.is_text:
                    if not part.content.strip():
                        continue
                    text = reflow(part.content)
                    ctx.append_line(f"<{number}> {text}" if number is not None else text)
                    number = None
                else:
                    self.visit(part, ctx)
        return False


__all__ = ["BlockHandlersMixin"]
