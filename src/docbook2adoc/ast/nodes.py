#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docbook2adoc/ast/nodes.py
"""Node model for parsed DocBook documents.

This module defines the self-contained tree the converter walks. It is
independent of the XML library that produced it: the parser adapts
library objects into :class:`Node` instances once, and the conversion
engine never touches parser internals.

Node Kinds
----------
Every node carries a :class:`NodeKind`:

    - ELEMENT: a DocBook element (``para``, ``section``, ...)
    - TEXT / CDATA: character data
    - COMMENT: XML comment, dropped by the converter
    - PROCESSING_INSTRUCTION: ``<?target data?>``
    - DOCUMENT_TYPE / ENTITY_DECLARATION: DTD information
    - ENTITY_REFERENCE: an unexpanded ``&name;`` reference

Nodes are read-only once built. Code that needs to remember that a node
was already handled keeps its own identity-keyed set.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterator, Optional


class NodeKind(Enum):
    """Closed enumeration of the node kinds found in a DocBook tree."""

    ELEMENT = "element"
    TEXT = "text"
    COMMENT = "comment"
    PROCESSING_INSTRUCTION = "processing-instruction"
    DOCUMENT_TYPE = "document-type"
    ENTITY_DECLARATION = "entity-declaration"
    ENTITY_REFERENCE = "entity-reference"
    CDATA = "cdata"


# Names given to non-element nodes so name-based checks stay uniform
TEXT_NODE_NAME = "text"
CDATA_NODE_NAME = "#cdata-section"
COMMENT_NODE_NAME = "#comment"


@dataclass(eq=False)
class Node:
    """A single node of a parsed DocBook document.

    Parameters
    ----------
    kind : NodeKind
        Kind of node
    name : str
        Element name (local name, namespace stripped). Text nodes are named
        ``"text"``, processing instructions carry their target and entity
        references the referenced entity name.
    attributes : dict, default = empty dict
        Attribute name to value mapping. Namespace-qualified ``id`` and
        ``href`` attributes are stored as ``xml:id`` and ``xlink:href``.
    children : list of Node, default = empty list
        Ordered child nodes
    content : str, default = ""
        Character data of text, CDATA, comment and processing-instruction nodes
    parent : Node or None
        Parent node, None for the root element
    document : DocBookDocument or None
        Owning document

    """

    kind: NodeKind
    name: str
    attributes: dict[str, str] = field(default_factory=dict)
    children: list[Node] = field(default_factory=list)
    content: str = ""
    parent: Optional[Node] = field(default=None, repr=False)
    document: Optional[DocBookDocument] = field(default=None, repr=False)

    @property
    def is_element(self) -> bool:
        """Whether this node is an element."""
        return self.kind is NodeKind.ELEMENT

    @property
    def is_text(self) -> bool:
        """Whether this node holds character data (text or CDATA)."""
        return self.kind in (NodeKind.TEXT, NodeKind.CDATA)

    @property
    def is_root(self) -> bool:
        """Whether this node is the root element of its document."""
        return self.document is not None and self.document.root is self

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Return an attribute value, or ``default`` when it is absent."""
        return self.attributes.get(name, default)

    @property
    def elements(self) -> list[Node]:
        """Element children in document order."""
        return [child for child in self.children if child.kind is NodeKind.ELEMENT]

    @property
    def text(self) -> str:
        """Concatenated character data of this node and all its descendants."""
        if self.is_text:
            return self.content
        return "".join(child.text for child in self.children if child.kind is not NodeKind.COMMENT)

    @property
    def parent_name(self) -> str:
        """Name of the parent node, or an empty string at the root."""
        return self.parent.name if self.parent is not None else ""

    def _sibling(self, offset: int) -> Optional[Node]:
        if self.parent is None:
            return None
        siblings = self.parent.children
        for index, sibling in enumerate(siblings):
            if sibling is self:
                position = index + offset
                if 0 <= position < len(siblings):
                    return siblings[position]
                return None
        return None

    @property
    def previous(self) -> Optional[Node]:
        """Immediately preceding sibling of any kind."""
        return self._sibling(-1)

    @property
    def next(self) -> Optional[Node]:
        """Immediately following sibling of any kind."""
        return self._sibling(1)

    @property
    def previous_element(self) -> Optional[Node]:
        """Closest preceding sibling element."""
        if self.parent is None:
            return None
        previous = None
        for sibling in self.parent.children:
            if sibling is self:
                return previous
            if sibling.is_element:
                previous = sibling
        return None

    @property
    def next_element(self) -> Optional[Node]:
        """Closest following sibling element."""
        if self.parent is None:
            return None
        found = False
        for sibling in self.parent.children:
            if found and sibling.is_element:
                return sibling
            if sibling is self:
                found = True
        return None

    def child(self, *names: str) -> Optional[Node]:
        """Return the first element child whose name is one of ``names``."""
        for candidate in self.children:
            if candidate.is_element and candidate.name in names:
                return candidate
        return None

    def children_named(self, name: str) -> list[Node]:
        """Return all element children called ``name``."""
        return [candidate for candidate in self.children if candidate.is_element and candidate.name == name]

    def child_path(self, *names: str) -> Optional[Node]:
        """Follow a chain of direct element children, e.g. ``("info", "title")``."""
        current: Optional[Node] = self
        for name in names:
            if current is None:
                return None
            current = current.child(name)
        return current

    def iter_descendants(self) -> Iterator[Node]:
        """Yield every descendant node depth-first in document order."""
        for candidate in self.children:
            yield candidate
            yield from candidate.iter_descendants()

    def find(self, *names: str) -> Optional[Node]:
        """Return the first descendant element whose name is one of ``names``."""
        for candidate in self.iter_descendants():
            if candidate.is_element and candidate.name in names:
                return candidate
        return None

    def find_all(self, name: str) -> list[Node]:
        """Return all descendant elements called ``name``."""
        return [candidate for candidate in self.iter_descendants() if candidate.is_element and candidate.name == name]

    def ancestors(self) -> Iterator[Node]:
        """Yield ancestors from the parent up to the root."""
        current = self.parent
        while current is not None:
            yield current
            current = current.parent

    def ancestor(self, name: str) -> Optional[Node]:
        """Return the nearest ancestor element called ``name``."""
        for candidate in self.ancestors():
            if candidate.name == name:
                return candidate
        return None

    @property
    def path(self) -> str:
        """Location of this node for diagnostics, e.g. ``/book/chapter[2]/para[1]``."""
        steps = []
        current: Optional[Node] = self
        while current is not None:
            if current.parent is None:
                steps.append(current.name)
            else:
                same_name = [s for s in current.parent.children if s.kind is current.kind and s.name == current.name]
                position = next(i for i, s in enumerate(same_name, start=1) if s is current)
                steps.append(f"{current.name}[{position}]")
            current = current.parent
        return "/" + "/".join(reversed(steps))

    def append(self, child: Node) -> Node:
        """Attach ``child`` as the last child of this node while building a tree."""
        child.parent = self
        child.document = self.document
        self.children.append(child)
        return child


@dataclass(eq=False)
class DocBookDocument:
    """A parsed DocBook document.

    Parameters
    ----------
    root : Node or None
        Root element. None when the source held no element at all.
    doctype : Node or None
        Document type node carrying entity declarations, if any
    source_path : Path or None
        File the document was read from, used to resolve includes

    """

    root: Optional[Node] = None
    doctype: Optional[Node] = None
    source_path: Optional[Path] = None
