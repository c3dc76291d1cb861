#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docbook2adoc/renderers/_asciidoc_inline.py
"""Inline handlers for the DocBook to AsciiDoc renderer.

Text reflow, emphasis and literal markup, keywords, paths, GUI elements,
links, cross references, footnotes and index terms.

Emphasis Marker Doubling
------------------------
AsciiDoc's single-character (constrained) markers only work at word
boundaries. A formatted run glued to a word character on either side, or
nested inside another run, is written with doubled (unconstrained)
markers instead::

    <emphasis role="bold">word</emphasis>s   ->  **word**s
    <emphasis role="bold">word</emphasis> s  ->  *word* s

"""

from __future__ import annotations

import logging
from typing import Optional

from docbook2adoc.ast.nodes import Node, NodeKind
from docbook2adoc.constants import (
    ANONYMOUS_LITERAL_NAMES,
    DEFAULT_EMPHASIS_MARKER,
    EMPHASIS_MARKERS,
    FORMATTING_NAMES,
    FORMATTING_SENSITIVE_CHARS,
    KEYCAP_FUNCTIONS,
    MENU_ITEM_NAMES,
    PARA_NAMES,
    XLINK_HREF_ATTRIBUTE,
)
from docbook2adoc.renderers._asciidoc_context import ConversionContext, ConversionHelpersMixin, split_first
from docbook2adoc.utils.text import (
    LEADING_SPACE_PATTERN,
    NEXT_ADJACENT_PATTERN,
    PREVIOUS_ADJACENT_PATTERN,
    escape_table_cell,
    lazy_quote,
    normalize_menu_text,
    protect_leading_dots,
    reflow,
    reverse_substitute,
    split_sentences,
)

logger = logging.getLogger(__name__)

_LITERAL_SHORTNAMES = {
    "envar": "var",
    "application": "app",
}
_KEYWORD_ROLES = {
    "firstterm": ("term", "_"),
    "citetitle": ("ref", "_"),
}
_LINE_END_WHITESPACE = (" ", "\n", "\t", "\f")
_MENU_ARROW_ENTITIES = ("rarr", "gt")


def emphasis_marker(node: Node) -> str:
    """Return the marker character for an ``emphasis`` element's role."""
    return EMPHASIS_MARKERS.get(node.get("role") or "", DEFAULT_EMPHASIS_MARKER)


def literal_shortname(name: str) -> str:
    """Return the role name written before a named literal, e.g. ``[class]``.

    Examples
    --------
        >>> literal_shortname("classname")
        'class'
        >>> literal_shortname("envar")
        'var'

    """
    return _LITERAL_SHORTNAMES.get(name, name.replace("name", ""))


def _edge_text(node: Node, last: bool) -> Optional[Node]:
    if not node.children:
        return None
    candidate = node.children[-1] if last else node.children[0]
    return candidate if candidate.kind is NodeKind.TEXT else None


def _starts_content(node: Node) -> bool:
    """Whether no element or entity reference precedes ``node`` among its siblings."""
    previous = node.previous
    while previous is not None:
        if previous.is_element or previous.kind is NodeKind.ENTITY_REFERENCE:
            return False
        previous = previous.previous
    return True


class InlineHandlersMixin(ConversionHelpersMixin):
    """Handlers for character data and inline DocBook elements."""

    # ------------------------------------------------------------------
    # Character data
    # ------------------------------------------------------------------
    def visit_text(self, node: Node, ctx: ConversionContext) -> bool:
        """Append reflowed, escaped character data to the current line.

        Whitespace-only text is dropped. Inside paragraphs the text is
        reflowed and, in sentence-per-line mode, split at sentence ends.
        Text that follows a block element starts on a new line.
        """
        text = node.content
        if not text.rstrip():
            return False

        parent_name = node.parent_name
        if parent_name in PARA_NAMES or parent_name == "phrase":
            leading_space = LEADING_SPACE_PATTERN.match(text)
            text = reflow(text, ctx.options.effective_preserve_line_wrap)
            if _starts_content(node):
                text = text.lstrip()
            elif leading_space and not LEADING_SPACE_PATTERN.match(text):
                last = ctx.buffer.last
                previous = node.previous
                if last in ("----", "===="):
                    text = f"{leading_space.group(0)}{text}"
                elif (
                    previous is not None
                    and previous.name not in ("para", "text")
                    and (last.endswith((" ", "\n")) or last == "")
                ):
                    pass
                else:
                    text = f" {text}"

            if ctx.options.sentence_per_line:
                text = split_sentences(text)

        if ctx.in_table:
            text = escape_table_cell(text)
        if len(ctx.nested_formatting) >= 2 and text.startswith(FORMATTING_SENSITIVE_CHARS):
            text = f"\\{text}"
        if ctx.buffer.last == "" and text.startswith("."):
            text = protect_leading_dots(text)
        if ctx.last_emitted_was_block and ctx.buffer.last != "":
            trailing_space = text.endswith((" ", "\n"))
            text = f"\n{text.rstrip()}"
            if trailing_space:
                text = f"{text} "

        ctx.append_text(reverse_substitute(text))
        return False

    def visit_entity_ref(self, node: Node, ctx: ConversionContext) -> bool:
        ctx.append_text(f"{{{node.name}}}")
        return False

    # ------------------------------------------------------------------
    # Emphasis and literals
    # ------------------------------------------------------------------
    def adjacent_character(self, node: Node, ctx: ConversionContext) -> bool:
        """Whether a formatted run touches non-whitespace and needs doubled markers."""
        if len(ctx.nested_formatting) > 1:
            return True

        previous = node.previous
        following = node.next
        if previous is not None and previous.kind is NodeKind.TEXT:
            if PREVIOUS_ADJACENT_PATTERN.search(previous.content):
                return True
        if following is not None and following.kind is NodeKind.TEXT:
            if NEXT_ADJACENT_PATTERN.search(following.content):
                return True

        if previous is not None and previous.name in FORMATTING_NAMES:
            edge = _edge_text(previous, last=True)
            if edge is not None and PREVIOUS_ADJACENT_PATTERN.search(edge.content):
                return True
        if following is not None and following.name in FORMATTING_NAMES:
            edge = _edge_text(following, last=False)
            if edge is not None and NEXT_ADJACENT_PATTERN.search(edge.content):
                return True

        last = ctx.buffer.last
        return bool(last) and not last.endswith(_LINE_END_WHITESPACE)

    def visit_emphasis(self, node: Node, ctx: ConversionContext) -> bool:
        times = 2 if self.adjacent_character(node, ctx) else 1
        marker = emphasis_marker(node) * times
        self.format_append_text(node, ctx, marker, marker)
        return False

    def process_literal(self, node: Node, ctx: ConversionContext) -> bool:
        """Render code-like elements as backtick runs.

        Named literals (``classname``, ``command``, ...) carry a role such
        as ``[class]``. A literal nested in emphasis or strong text repeats
        the enclosing markers inside the backticks.
        """
        adjacent = self.adjacent_character(node, ctx) or node.parent_name == "quote"
        if node.name not in ANONYMOUS_LITERAL_NAMES:
            ctx.append_text(f"[{literal_shortname(node.name)}]")
        literal = "`" * (2 if adjacent else 1)

        other_start = other_end = ""
        if len(ctx.nested_formatting) > 1:
            enclosing = ctx.nested_formatting[:-1]
            emphasis = "_" in enclosing
            bold = "*" in enclosing
            if emphasis and bold:
                other_start, other_end = "**__", "__**"
            elif emphasis:
                other_start = other_end = "__"
            elif bold:
                other_start = other_end = "**"

        self.format_append_text(node, ctx, f"{literal}{other_start}", f"{other_end}{literal}")
        return False

    def process_keyword(self, node: Node, ctx: ConversionContext) -> bool:
        role, char = _KEYWORD_ROLES.get(node.name, (node.name, "#"))
        ctx.append_text(f"[{role}]{char}{node.text}{char}")
        return False

    def process_path(self, node: Node, ctx: ConversionContext) -> bool:
        role = (node.get("class") or node.name) if node.name == "systemitem" else "path"
        ctx.append_text(f"[{role}]``{node.text}``")
        return False

    def visit_superscript(self, node: Node, ctx: ConversionContext) -> bool:
        self.format_append_text(node, ctx, "^", "^")
        return False

    def visit_subscript(self, node: Node, ctx: ConversionContext) -> bool:
        self.format_append_text(node, ctx, "~", "~")
        return False

    def visit_quote(self, node: Node, ctx: ConversionContext) -> bool:
        self.format_append_text(node, ctx, '"`', '`"')
        return False

    def visit_foreignphrase(self, node: Node, ctx: ConversionContext) -> bool:
        self.format_append_text(node, ctx)
        return False

    def visit_phrase(self, node: Node, ctx: ConversionContext) -> bool:
        text, rest = split_first(self.format_subtree(node, ctx))
        role = node.get("role")
        ctx.append_text(f"[{role}]##{text}##" if role else text)
        ctx.buffer.extend(rest)
        return False

    def visit_trademark(self, node: Node, ctx: ConversionContext) -> bool:
        self.format_append_text(node, ctx, suffix="(TM)")
        return False

    def visit_prompt(self, node: Node, ctx: ConversionContext) -> bool:
        return False

    def visit_guiicon(self, node: Node, ctx: ConversionContext) -> bool:
        return True

    # ------------------------------------------------------------------
    # GUI and keyboard
    # ------------------------------------------------------------------
    def process_ui(self, node: Node, ctx: ConversionContext) -> bool:
        """Render GUI elements with the AsciiDoc UI macros (menu, btn, kbd, mouse)."""
        name = node.name
        following = node.next
        if (
            name == "guilabel"
            and following is not None
            and following.kind is NodeKind.ENTITY_REFERENCE
            and following.name in _MENU_ARROW_ENTITIES
        ):
            name = "guimenu"

        if name == "menuchoice":
            items = []
            for child in node.elements:
                if child.name in MENU_ITEM_NAMES:
                    ctx.handled.add(child)
                    items.append(normalize_menu_text(child.text))
            if not items:
                logger.warning("Empty <menuchoice> at %s. Skipping.", node.path)
                return False
            ctx.append_text(f"menu:{items[0]}[{' > '.join(items[1:])}]")
        elif name == "guimenu":
            ctx.append_text(f"menu:{normalize_menu_text(node.text)}[]")
        elif name == "guibutton":
            ctx.append_text(f"btn:[{normalize_menu_text(node.text)}]")
        elif name == "guilabel":
            ctx.append_text(f"[label]#{node.text}#")
        elif name == "keycap":
            function = node.get("function")
            if function is not None:
                key = KEYCAP_FUNCTIONS.get(function)
                if key is None:
                    logger.warning("Unhandled <keycap> function %r", function)
                else:
                    ctx.append_text(f"kbd:[{key}]")
            if node.text:
                ctx.append_text(f"kbd:[{node.text}]")
        elif name == "mousebutton":
            ctx.append_text(f"mouse:[{node.text}]")
        return False

    def visit_keycombo(self, node: Node, ctx: ConversionContext) -> bool:
        """Render ``Ctrl+Shift+T`` style key combinations, optionally with a mouse button."""
        ctx.append_text("kbd:[")
        follower = separator = ""
        closer = "]"
        for key in node.elements:
            if key.name == "keycap":
                if not closer:
                    ctx.append_text(f"{follower}kbd:[")
                    follower = separator = ""
                    closer = "]"
                ctx.append_text(f"{separator}{key.text}")
            elif key.name == "mousebutton":
                ctx.append_text(f"{closer}-{key.text}")
                closer = ""
                follower = "-"
            else:
                logger.warning("keycombo not followed by keycap but %r. Skipping.", key.name)
            separator = "+"
        ctx.append_text(closer)
        return False

    def visit_keycode(self, node: Node, ctx: ConversionContext) -> bool:
        ctx.append_text(f"keycode:[{node.text}]")
        return False

    # ------------------------------------------------------------------
    # Links and references
    # ------------------------------------------------------------------
    def visit_anchor(self, node: Node, ctx: ConversionContext) -> bool:
        if node.parent_name.startswith("biblio"):
            return False
        anchor = ctx.resolver.resolve(node)
        if anchor:
            ctx.append_text(f"[[{anchor}]]")
        return False

    def visit_link(self, node: Node, ctx: ConversionContext) -> bool:
        if node.get("linkend"):
            return self.visit_xref(node, ctx)
        return self.visit_uri(node, ctx)

    def attribute_reference(self, url: str, ctx: ConversionContext) -> str:
        """Replace a URL with ``{name}`` when a document attribute holds it."""
        for name, value in ctx.options.attributes.items():
            if value == url:
                return f"{{{name}}}"
        return url

    def visit_uri(self, node: Node, ctx: ConversionContext) -> bool:
        if node.name == "ulink":
            url = node.get("url") or ""
        else:
            url = node.get(XLINK_HREF_ATTRIBUTE) or node.text
        prefix = "" if url.startswith(("http://", "https://")) else "link:"
        label = self.node_text(node, ctx) or ""
        target = self.attribute_reference(url, ctx)
        if not label or url == label:
            ctx.append_text(f"{prefix}{target}")
        else:
            ctx.append_text(f"{prefix}{target}[{label}]")
        return False

    visit_ulink = visit_uri

    def visit_xref(self, node: Node, ctx: ConversionContext) -> bool:
        """Render ``<<id>>`` or ``<<id,label>>``; labels with commas are quoted."""
        linkend = node.get("linkend")
        if not linkend:
            logger.warning("Cross reference without linkend at %s. Skipping.", node.path)
            return False
        target = ctx.resolver.normalize_id(linkend) if ctx.options.normalize_ids else linkend
        label, rest = split_first(self.format_subtree(node, ctx))
        if label:
            ctx.append_text(f"<<{target},{lazy_quote(label)}>>")
        else:
            ctx.append_text(f"<<{target}>>")
        ctx.buffer.extend(rest)
        return False

    def visit_email(self, node: Node, ctx: ConversionContext) -> bool:
        ctx.append_text(f"mailto:{node.text}[<{node.text}>]")
        return False

    def visit_footnote(self, node: Node, ctx: ConversionContext) -> bool:
        text = self.node_text(node.child("para", "simpara"), ctx) or ""
        ctx.append_text(f"footnote:[{text.strip()}]")
        return False

    # ------------------------------------------------------------------
    # Index terms
    # ------------------------------------------------------------------
    def visit_indexterm(self, node: Node, ctx: ConversionContext) -> bool:
        """Emit a ``(((primary,secondary,tertiary)))`` index entry.

        Index terms that immediately follow with the same primary term are
        folded into this entry and dropped when they are visited.
        """
        pending = ctx.suppression.get(node.name, 0)
        if pending > 0:
            ctx.suppression[node.name] = pending - 1
            return False
        ctx.suppression.pop(node.name, None)

        entries = [
            text
            for text in (
                self.child_text(node, ctx, "primary"),
                self.child_text(node, ctx, "secondary"),
                self.child_text(node, ctx, "tertiary"),
            )
            if text is not None
        ]
        if not entries:
            logger.warning("Empty <indexterm> at %s. Skipping.", node.path)
            return False

        ctx.requires_index = True
        followers = self._matching_indexterm_followers(node, entries[0], ctx)
        if followers:
            ctx.suppression[node.name] = followers
        ctx.append_line(f"((({','.join(entries)})))")
        return False

    def _matching_indexterm_followers(self, node: Node, primary: str, ctx: ConversionContext) -> int:
        count = 0
        sibling = node.next
        while sibling is not None:
            if sibling.kind is NodeKind.COMMENT or (sibling.is_text and not sibling.content.strip()):
                sibling = sibling.next
                continue
            if sibling.name != "indexterm" or self.child_text(sibling, ctx, "primary") != primary:
                break
            count += 1
            sibling = sibling.next
        return count

    # ------------------------------------------------------------------
    # Processing instructions
    # ------------------------------------------------------------------
    def visit_pi(self, node: Node, ctx: ConversionContext) -> bool:
        if node.name == "asciidoc-br":
            ctx.append_text(" +")
        elif node.name == "asciidoc-hr":
            ctx.append_text("'''")
        else:
            logger.debug("Ignoring processing instruction <?%s?>", node.name)
        return False


__all__ = ["InlineHandlersMixin", "emphasis_marker", "literal_shortname"]
