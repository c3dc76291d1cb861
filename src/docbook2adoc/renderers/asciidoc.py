#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docbook2adoc/renderers/asciidoc.py
"""DocBook to AsciiDoc conversion engine.

This module provides :class:`DocBookAsciiDocRenderer`, a recursive visitor
over the DocBook node model. Every node is classified once and dispatched
through explicit handler tables:

    1. Comments, already handled nodes and skipped element names are dropped.
    2. Non-element kinds (text, processing instructions, entity references,
       DTD nodes) map to fixed handlers.
    3. ``title``, ``subtitle`` and ``toc`` are always consumed by their parent.
    4. Element names are matched against the category sets, in order:
       admonition, literal, keyword, path, UI, normal section, special section.
    5. Remaining elements are looked up by exact name; unknown names fall
       back to a handler that logs a warning and emits nothing.

A handler returns True to have the engine visit its children, or False
when it rendered (or deliberately dropped) them itself. Before and after
each handler the engine maintains the scoped state of the conversion
context: list depth, table mode, the emphasis marker stack and
conditional directives.

"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Optional

from docbook2adoc.ast import DocBookDocument
from docbook2adoc.ast.nodes import Node, NodeKind
from docbook2adoc.constants import (
    ADMONITION_NAMES,
    IGNORED_NAMES,
    INLINE_LIKE_NAMES,
    KEYWORD_NAMES,
    LIST_NAMES,
    LITERAL_MARKER,
    LITERAL_NAMES,
    NORMAL_SECTION_NAMES,
    PATH_NAMES,
    SPECIAL_SECTION_NAMES,
    TABLE_SCOPE_NAMES,
    UI_NAMES,
    XLINK_HREF_ATTRIBUTE,
)
from docbook2adoc.exceptions import FileError, IncludeError, ParsingError
from docbook2adoc.options.asciidoc import AsciiDocConversionOptions
from docbook2adoc.options.docbook import DocBookParserOptions
from docbook2adoc.parsers.docbook import DocBookParser
from docbook2adoc.renderers._asciidoc_blocks import BlockHandlersMixin
from docbook2adoc.renderers._asciidoc_conditionals import (
    append_condition_end,
    append_condition_start,
    split_directive_lines,
)
from docbook2adoc.renderers._asciidoc_context import ConversionContext
from docbook2adoc.renderers._asciidoc_inline import InlineHandlersMixin, emphasis_marker
from docbook2adoc.renderers._asciidoc_lists import ListHandlersMixin
from docbook2adoc.renderers._asciidoc_sections import SectionHandlersMixin
from docbook2adoc.renderers._asciidoc_tables import TableHandlersMixin
from docbook2adoc.renderers.base import BaseRenderer
from docbook2adoc.utils.io_utils import derived_include_target, write_text

logger = logging.getLogger(__name__)

Handler = Callable[["DocBookAsciiDocRenderer", Node, ConversionContext], bool]

_INLINE_LIKE_KINDS = frozenset({NodeKind.TEXT, NodeKind.CDATA, NodeKind.ENTITY_REFERENCE})

# Scopes opened by the before-hook and closed by the after-hook
_LIST_SCOPE = "list"
_TABLE_SCOPE = "table"
_FORMATTING_SCOPE = "formatting"


class DocBookAsciiDocRenderer(
    SectionHandlersMixin,
    BlockHandlersMixin,
    ListHandlersMixin,
    TableHandlersMixin,
    InlineHandlersMixin,
    BaseRenderer,
):
    """Convert a parsed DocBook document to AsciiDoc.

    Parameters
    ----------
    options : AsciiDocConversionOptions or None, default = None
        Conversion options
    parser_options : DocBookParserOptions or None, default = None
        Options used to parse included documents

    Examples
    --------
        >>> from docbook2adoc.parsers import DocBookParser
        >>> doc = DocBookParser().parse("<article><title>Guide</title><para>Hello.</para></article>")
        >>> print(DocBookAsciiDocRenderer().render_to_string(doc))
        = Guide
        <BLANKLINE>
        Hello.
        <BLANKLINE>

    """

    def __init__(
        self,
        options: AsciiDocConversionOptions | None = None,
        parser_options: DocBookParserOptions | None = None,
    ):
        """Initialize the renderer with conversion and include parsing options."""
        BaseRenderer._validate_options_type(options, AsciiDocConversionOptions, "asciidoc")
        options = options or AsciiDocConversionOptions()
        BaseRenderer.__init__(self, options)
        self.options: AsciiDocConversionOptions = options
        self.parser = DocBookParser(parser_options)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def render_to_lines(self, doc: DocBookDocument) -> list[str]:
        """Convert a document into AsciiDoc output lines.

        Leading blank lines are removed and directive lines are split from
        trailing content. A document without a root element converts to
        no lines.
        """
        if doc.root is None:
            logger.warning("Document %s has no root element", doc.source_path or "<memory>")
            return []
        ctx = ConversionContext.create(self.options, source_path=doc.source_path)
        return self._convert(doc.root, ctx)

    def render_to_string(self, doc: DocBookDocument) -> str:
        """Convert a document into AsciiDoc text terminated by a newline."""
        lines = self.render_to_lines(doc)
        return "\n".join(lines) + "\n" if lines else ""

    def _convert(self, root: Node, ctx: ConversionContext) -> list[str]:
        self.visit(root, ctx)
        lines = split_directive_lines(ctx.lines)
        start = 0
        while start < len(lines) and not lines[start]:
            start += 1
        return lines[start:]

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------
    def visit(self, node: Node, ctx: ConversionContext) -> None:
        """Dispatch ``node`` to its handler and visit its children on request."""
        if node.kind is NodeKind.COMMENT or node in ctx.handled:
            return
        if node.is_element and node.name in ctx.skip_names:
            logger.debug("Skipping <%s> at %s", node.name, node.path)
            return

        handler = resolve_handler(node)
        scope = self._before_traverse(node, ctx)
        if handler(self, node, ctx):
            self.traverse_children(node, ctx)
        self._after_traverse(node, scope, ctx)

    def _before_traverse(self, node: Node, ctx: ConversionContext) -> Optional[str]:
        if not node.is_element:
            return None
        name = node.name
        if name not in IGNORED_NAMES:
            append_condition_start(node, ctx)

        if name in LIST_NAMES:
            ctx.list_depth += 1
            return _LIST_SCOPE
        if name in TABLE_SCOPE_NAMES:
            ctx.in_table = True
            return _TABLE_SCOPE
        if name == "emphasis":
            ctx.nested_formatting.append(emphasis_marker(node))
            return _FORMATTING_SCOPE
        if name in LITERAL_NAMES:
            ctx.nested_formatting.append(LITERAL_MARKER)
            return _FORMATTING_SCOPE
        return None

    def _after_traverse(self, node: Node, scope: Optional[str], ctx: ConversionContext) -> None:
        if scope == _LIST_SCOPE:
            ctx.list_depth -= 1
            if node.name == "variablelist":
                ctx.append_blank_line()
        elif scope == _TABLE_SCOPE:
            ctx.in_table = False
        elif scope == _FORMATTING_SCOPE:
            ctx.nested_formatting.pop()

        ctx.last_emitted_was_block = not (node.kind in _INLINE_LIKE_KINDS or node.name in INLINE_LIKE_NAMES)

        if node.is_root and ctx.requires_index:
            self.append_generated_index(ctx)

        if node.is_element and node.name not in IGNORED_NAMES:
            append_condition_end(node, ctx)

    def append_generated_index(self, ctx: ConversionContext) -> None:
        """Emit the index section DocBook backends generate from index terms."""
        ctx.append_blank_line()
        ctx.append_line("ifdef::backend-docbook[]")
        ctx.append_line("[index]")
        ctx.append_line("== Index")
        ctx.append_line("// Generated automatically by the DocBook toolchain.")
        ctx.append_line("endif::backend-docbook[]")
        ctx.requires_index = False

    # ------------------------------------------------------------------
    # Fixed handlers
    # ------------------------------------------------------------------
    def default_visit(self, node: Node, ctx: ConversionContext) -> bool:
        logger.warning("No visitor defined for <%s>! Skipping.", node.name)
        return False

    def ignore(self, node: Node, ctx: ConversionContext) -> bool:
        return False

    def visit_dtd(self, node: Node, ctx: ConversionContext) -> bool:
        return True

    def visit_entity_decl(self, node: Node, ctx: ConversionContext) -> bool:
        return False

    # ------------------------------------------------------------------
    # Includes
    # ------------------------------------------------------------------
    def visit_include(self, node: Node, ctx: ConversionContext) -> bool:
        """Convert an ``xi:include`` target to its own file and reference it.

        The included document is converted in a fresh context whose base
        directory is the directory of the included file. Nested includes
        get a ``leveloffset`` matching the current heading level.
        """
        href = node.get("href") or node.get(XLINK_HREF_ATTRIBUTE)
        if not href:
            logger.warning("Include without href at %s. Skipping.", node.path)
            return False

        target = derived_include_target(href)
        self.convert_include(ctx.base_dir / href, ctx.base_dir / target, ctx)

        ctx.append_blank_line()
        leveloffset = f"leveloffset={ctx.level - 1}" if ctx.level > 1 else ""
        ctx.append_line(f"include::{target}[{leveloffset}]")
        ctx.append_blank_line()
        return False

    def convert_include(self, include_path: Path, output_path: Path, ctx: ConversionContext) -> Optional[list[str]]:
        """Convert an included document and write it next to its source.

        Returns
        -------
        list of str or None
            Converted lines, or None when the include was not converted

        Raises
        ------
        IncludeError
            If the included document is not well-formed or has no root element

        """
        if include_path.resolve() in ctx.include_chain:
            logger.warning("Include cycle detected for %s. Skipping.", include_path)
            return None
        if not (include_path.is_file() and os.access(include_path, os.R_OK)):
            logger.warning("Include file not readable: %s", include_path)
            return None

        logger.debug("Converting included document %s", include_path)
        try:
            document = self.parser.parse(include_path)
        except ParsingError as exc:
            raise IncludeError(
                str(include_path), f"Included document is not well-formed: {include_path}", original_error=exc
            ) from exc
        except FileError as exc:
            logger.warning("Include file not readable: %s (%s)", include_path, exc)
            return None

        if document.root is None:
            raise IncludeError(str(include_path))

        lines = self._convert(document.root, ctx.spawn(include_path))
        if self.options.write_includes:
            write_text("\n".join(lines) + "\n", output_path)
            logger.debug("Wrote included document to %s", output_path)
        return lines


# =============================================================================
# Dispatch tables
# =============================================================================

_Renderer = DocBookAsciiDocRenderer

_KIND_DISPATCH: dict[NodeKind, Handler] = {
    NodeKind.TEXT: _Renderer.visit_text,
    NodeKind.CDATA: _Renderer.visit_text,
    NodeKind.PROCESSING_INSTRUCTION: _Renderer.visit_pi,
    NodeKind.DOCUMENT_TYPE: _Renderer.visit_dtd,
    NodeKind.ENTITY_DECLARATION: _Renderer.visit_entity_decl,
    NodeKind.ENTITY_REFERENCE: _Renderer.visit_entity_ref,
}

# Checked in order; the first set containing the element name wins
_CATEGORY_DISPATCH: tuple[tuple[frozenset[str], Handler], ...] = (
    (ADMONITION_NAMES, _Renderer.process_admonition),
    (LITERAL_NAMES, _Renderer.process_literal),
    (KEYWORD_NAMES, _Renderer.process_keyword),
    (PATH_NAMES, _Renderer.process_path),
    (UI_NAMES, _Renderer.process_ui),
    (NORMAL_SECTION_NAMES, _Renderer.process_section),
    (SPECIAL_SECTION_NAMES, _Renderer.process_special_section),
)

_NAME_DISPATCH: dict[str, Handler] = {
    # documents and sections
    "book": _Renderer.process_doc,
    "article": _Renderer.process_doc,
    "set": _Renderer.visit_set,
    "info": _Renderer.visit_info,
    "bookinfo": _Renderer.visit_info,
    "articleinfo": _Renderer.visit_info,
    "chapter": _Renderer.visit_chapter,
    "part": _Renderer.visit_part,
    "sectioninfo": _Renderer.visit_sectioninfo,
    "chapterinfo": _Renderer.visit_chapterinfo,
    "bridgehead": _Renderer.visit_bridgehead,
    "include": _Renderer.visit_include,
    # blocks
    "para": _Renderer.visit_para,
    "simpara": _Renderer.visit_simpara,
    "formalpara": _Renderer.visit_formalpara,
    "remark": _Renderer.visit_remark,
    "literallayout": _Renderer.visit_literallayout,
    "screen": _Renderer.visit_screen,
    "programlisting": _Renderer.visit_programlisting,
    "example": _Renderer.process_example,
    "informalexample": _Renderer.process_example,
    "sidebar": _Renderer.visit_sidebar,
    "blockquote": _Renderer.visit_blockquote,
    "attribution": _Renderer.visit_attribution,
    "figure": _Renderer.visit_figure,
    "informalfigure": _Renderer.visit_informalfigure,
    "mediaobject": _Renderer.visit_mediaobject,
    "inlinemediaobject": _Renderer.visit_inlinemediaobject,
    "funcsynopsis": _Renderer.visit_funcsynopsis,
    "cmdsynopsis": _Renderer.visit_cmdsynopsis,
    "arg": _Renderer.process_arg_or_group,
    "group": _Renderer.process_arg_or_group,
    "qandaset": _Renderer.visit_qandaset,
    "qandadiv": _Renderer.visit_qandadiv,
    "bibliodiv": _Renderer.visit_bibliodiv,
    "bibliomisc": _Renderer.visit_bibliomisc,
    "bibliomixed": _Renderer.visit_bibliomixed,
    "citation": _Renderer.visit_citation,
    "calloutlist": _Renderer.visit_calloutlist,
    "callout": _Renderer.visit_callout,
    # lists
    "simplelist": _Renderer.visit_simplelist,
    "member": _Renderer.visit_member,
    "itemizedlist": _Renderer.visit_itemizedlist,
    "orderedlist": _Renderer.visit_orderedlist,
    "procedure": _Renderer.visit_procedure,
    "substeps": _Renderer.visit_substeps,
    "stepalternatives": _Renderer.visit_stepalternatives,
    "variablelist": _Renderer.visit_variablelist,
    "listitem": _Renderer.visit_listitem,
    "step": _Renderer.visit_step,
    "varlistentry": _Renderer.visit_varlistentry,
    "glossentry": _Renderer.visit_glossentry,
    "glossterm": _Renderer.visit_glossterm,
    "glossdef": _Renderer.visit_glossdef,
    # tables
    "table": _Renderer.visit_table,
    "informaltable": _Renderer.visit_informaltable,
    "segmentedlist": _Renderer.visit_segmentedlist,
    "revhistory": _Renderer.visit_revhistory,
    # inline
    "emphasis": _Renderer.visit_emphasis,
    "superscript": _Renderer.visit_superscript,
    "subscript": _Renderer.visit_subscript,
    "quote": _Renderer.visit_quote,
    "foreignphrase": _Renderer.visit_foreignphrase,
    "phrase": _Renderer.visit_phrase,
    "trademark": _Renderer.visit_trademark,
    "prompt": _Renderer.visit_prompt,
    "guiicon": _Renderer.visit_guiicon,
    "keycombo": _Renderer.visit_keycombo,
    "keycode": _Renderer.visit_keycode,
    "anchor": _Renderer.visit_anchor,
    "link": _Renderer.visit_link,
    "uri": _Renderer.visit_uri,
    "ulink": _Renderer.visit_ulink,
    "xref": _Renderer.visit_xref,
    "email": _Renderer.visit_email,
    "footnote": _Renderer.visit_footnote,
    "indexterm": _Renderer.visit_indexterm,
}


def resolve_handler(node: Node) -> Handler:
    """Return the handler for ``node`` following the dispatch order.

    Examples
    --------
        >>> from docbook2adoc.ast import element
        >>> resolve_handler(element("tip")) is DocBookAsciiDocRenderer.process_admonition
        True
        >>> resolve_handler(element("unknown")) is DocBookAsciiDocRenderer.default_visit
        True

    """
    if not node.is_element:
        return _KIND_DISPATCH.get(node.kind, _Renderer.ignore)
    name = node.name
    if name in IGNORED_NAMES:
        return _Renderer.ignore
    for names, handler in _CATEGORY_DISPATCH:
        if name in names:
            return handler
    return _NAME_DISPATCH.get(name, _Renderer.default_visit)


__all__ = ["DocBookAsciiDocRenderer", "resolve_handler"]
