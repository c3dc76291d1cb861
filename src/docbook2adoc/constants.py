#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for docbook2adoc.

This module centralizes the closed element-name category sets, the
reverse-substitution tables and the default configuration values used
across the converter.

Constants are organized by category:
1. Namespaces - XML namespaces recognized on input
2. Element Categories - closed sets used by the dispatcher
3. Text Normalization - reverse-substitution tables
4. Conversion Defaults - option defaults
5. File Extensions - source and target extensions
"""

from __future__ import annotations

# =============================================================================
# Namespaces
# =============================================================================

DOCBOOK_NAMESPACE = "http://docbook.org/ns/docbook"
XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"
XLINK_NAMESPACE = "http://www.w3.org/1999/xlink"
XINCLUDE_NAMESPACE = "http://www.w3.org/2001/XInclude"

# Attribute keys used for namespace-qualified attributes in the node model
XML_ID_ATTRIBUTE = "xml:id"
XLINK_HREF_ATTRIBUTE = "xlink:href"

# =============================================================================
# Element Categories
# =============================================================================

PARA_NAMES = frozenset({"para", "simpara"})

ADMONITION_NAMES = frozenset({"note", "tip", "warning", "caution", "important"})

NORMAL_SECTION_NAMES = frozenset({"section", "simplesect", "sect1", "sect2", "sect3", "sect4", "sect5"})

SPECIAL_SECTION_NAMES = frozenset({"abstract", "appendix", "bibliography", "glossary", "preface", "index"})

DOCUMENT_NAMES = frozenset({"article", "book", "set"})

ANONYMOUS_LITERAL_NAMES = frozenset(
    {"abbrev", "code", "computeroutput", "database", "function", "literal", "tag", "userinput", "sgmltag"}
)

NAMED_LITERAL_NAMES = frozenset(
    {
        "acronym",
        "application",
        "classname",
        "command",
        "constant",
        "date",
        "envar",
        "exceptionname",
        "interfacename",
        "methodname",
        "option",
        "parameter",
        "property",
        "replaceable",
        "type",
        "varname",
    }
)

LITERAL_NAMES = ANONYMOUS_LITERAL_NAMES | NAMED_LITERAL_NAMES

FORMATTING_NAMES = LITERAL_NAMES | {"emphasis", "quote"}

KEYWORD_NAMES = frozenset({"package", "firstterm", "citetitle", "errorcode"})

PATH_NAMES = frozenset({"directory", "filename", "systemitem"})

UI_NAMES = frozenset({"guibutton", "guilabel", "menuchoice", "guimenu", "keycap", "mousebutton"})

LIST_NAMES = frozenset(
    {"simplelist", "itemizedlist", "orderedlist", "variablelist", "procedure", "substeps", "stepalternatives"}
)

# Elements whose subtree is rendered with table-cell escaping enabled
TABLE_SCOPE_NAMES = frozenset({"table", "informaltable", "segmentedlist", "revhistory"})

# Always consumed by their parent element; never carry their own conditional
IGNORED_NAMES = frozenset({"title", "subtitle", "toc"})

INLINE_NAMES = FORMATTING_NAMES | KEYWORD_NAMES | PATH_NAMES | {"link", "ulink", "xref"}

INLINE_NAMES_AND_TEXT = INLINE_NAMES | {"text"}

# Names that keep the "last emitted was block" flag cleared after they are visited
INLINE_LIKE_NAMES = (
    INLINE_NAMES
    | UI_NAMES
    | {
        "para",
        "simpara",
        "text",
        "uri",
        "member",
        "superscript",
        "subscript",
        "phrase",
        "trademark",
        "foreignphrase",
        "anchor",
        "footnote",
        "email",
        "citation",
        "keycombo",
        "keycode",
        "arg",
        "group",
    }
)

# Children of a list item that open a block unambiguously and need no continuation
SELF_DELIMITING_ITEM_CHILDREN = frozenset({"literallayout", "itemizedlist", "orderedlist", "procedure"})

MENU_ITEM_NAMES = frozenset({"guimenu", "guisubmenu", "guimenuitem"})

KEYCAP_FUNCTIONS = {
    "control": "Ctrl",
    "shift": "Shift",
    "alt": "Alt",
    "enter": "Enter",
}

# =============================================================================
# Text Normalization
# =============================================================================

# Code points AsciiDoc produces from plain-text replacements, mapped back
ENTITY_TABLE: dict[int, str] = {
    169: "(C)",
    174: "(R)",
    8201: " ",  # thin space
    8212: "--",
    8216: "'`",
    8217: "`'",
    8220: '"`',
    8221: '`"',
    8230: "...",
    8482: "(TM)",
    8592: "<-",
    8594: "->",
    8656: "<=",
    8658: "=>",
}

# Literal tokens that would be misread as AsciiDoc syntax
REPLACEMENT_TABLE: dict[str, str] = {
    ":: ": "{two-colons} ",
}

EMPHASIS_MARKERS = {
    "strong": "*",
    "bold": "*",
    "marked": "#",
}
DEFAULT_EMPHASIS_MARKER = "_"
LITERAL_MARKER = "`"

# Characters escaped at the start of text nested inside inline formatting
FORMATTING_SENSITIVE_CHARS = ("_", "*", "+", "`", "#")

HORIZONTAL_ALIGN_MARKERS = {"left": "<", "center": "^", "right": ">"}
VERTICAL_ALIGN_MARKERS = {"top": ".<", "middle": ".^", "bottom": ".>"}

# =============================================================================
# Conversion Defaults
# =============================================================================

DEFAULT_IDPREFIX = "_"
DEFAULT_IDSEPARATOR = "_"
DEFAULT_NORMALIZE_IDS = True
DEFAULT_COMPAT_MODE = False
DEFAULT_SENTENCE_PER_LINE = True
DEFAULT_PRESERVE_LINE_WRAP = True
DEFAULT_DELIMIT_SOURCE = True
DEFAULT_WRITE_INCLUDES = True

DEFAULT_PARSER_RECOVER = False
DEFAULT_PARSER_RESOLVE_ENTITIES = False
DEFAULT_PARSER_HUGE_TREE = False

# =============================================================================
# File Extensions
# =============================================================================

DOCBOOK_EXTENSION = ".xml"
ASCIIDOC_EXTENSION = ".adoc"
