#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docbook2adoc/ast/builder.py
"""Builders for DocBook node trees.

This module adapts lxml trees into the library-independent node model and
provides small factory helpers for assembling trees by hand.

"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from lxml import etree

from docbook2adoc.ast.nodes import (
    COMMENT_NODE_NAME,
    TEXT_NODE_NAME,
    DocBookDocument,
    Node,
    NodeKind,
)
from docbook2adoc.constants import (
    XLINK_HREF_ATTRIBUTE,
    XLINK_NAMESPACE,
    XML_ID_ATTRIBUTE,
    XML_NAMESPACE,
)

logger = logging.getLogger(__name__)

_QUALIFIED_ATTRIBUTES = {
    f"{{{XML_NAMESPACE}}}id": XML_ID_ATTRIBUTE,
    f"{{{XLINK_NAMESPACE}}}href": XLINK_HREF_ATTRIBUTE,
}


def _local_name(tag: str) -> str:
    """Strip the namespace part of a Clark-notation tag."""
    if tag.startswith("{"):
        return tag.split("}", 1)[1]
    return tag


def _convert_attributes(attrib: etree._Attrib) -> dict[str, str]:
    attributes: dict[str, str] = {}
    for key, value in attrib.items():
        if key in _QUALIFIED_ATTRIBUTES:
            attributes[_QUALIFIED_ATTRIBUTES[key]] = value
        else:
            attributes.setdefault(_local_name(key), value)
    return attributes


def _text_node(content: str, document: DocBookDocument, parent: Node) -> Node:
    return Node(NodeKind.TEXT, TEXT_NODE_NAME, content=content, parent=parent, document=document)


def _convert_element(element: etree._Element, document: DocBookDocument, parent: Optional[Node]) -> Node:
    node = Node(
        NodeKind.ELEMENT,
        _local_name(element.tag),
        attributes=_convert_attributes(element.attrib),
        parent=parent,
        document=document,
    )
    if element.text:
        node.children.append(_text_node(element.text, document, node))

    for child in element:
        if isinstance(child, etree._Comment):
            node.children.append(
                Node(NodeKind.COMMENT, COMMENT_NODE_NAME, content=child.text or "", parent=node, document=document)
            )
        elif isinstance(child, etree._ProcessingInstruction):
            node.children.append(
                Node(
                    NodeKind.PROCESSING_INSTRUCTION,
                    child.target,
                    content=child.text or "",
                    parent=node,
                    document=document,
                )
            )
        elif isinstance(child, etree._Entity):
            node.children.append(Node(NodeKind.ENTITY_REFERENCE, child.name, parent=node, document=document))
        else:
            node.children.append(_convert_element(child, document, node))

        if child.tail:
            node.children.append(_text_node(child.tail, document, node))

    return node


def _convert_doctype(tree: etree._ElementTree, document: DocBookDocument) -> Optional[Node]:
    docinfo = tree.docinfo
    if not docinfo.doctype:
        return None

    doctype = Node(NodeKind.DOCUMENT_TYPE, docinfo.root_name or "", document=document)
    if docinfo.public_id:
        doctype.attributes["public"] = docinfo.public_id
    if docinfo.system_url:
        doctype.attributes["system"] = docinfo.system_url

    internal = docinfo.internalDTD
    if internal is not None:
        for entity in internal.iterentities():
            doctype.children.append(
                Node(
                    NodeKind.ENTITY_DECLARATION,
                    entity.name,
                    content=entity.content or "",
                    parent=doctype,
                    document=document,
                )
            )
    return doctype


def build_document(tree: etree._ElementTree, source_path: Optional[Path] = None) -> DocBookDocument:
    """Convert a parsed lxml tree into a :class:`DocBookDocument`.

    Parameters
    ----------
    tree : lxml.etree._ElementTree
        Parsed XML tree
    source_path : Path, optional
        File the tree was read from

    Returns
    -------
    DocBookDocument
        Document whose ``root`` is None when the tree has no root element

    """
    document = DocBookDocument(source_path=source_path)
    document.doctype = _convert_doctype(tree, document)

    root_element = tree.getroot()
    if root_element is None:
        logger.debug("Parsed tree has no root element")
        return document

    document.root = _convert_element(root_element, document, None)
    return document


def element(name: str, *children: Node | str, **attributes: str) -> Node:
    """Build a detached element node.

    String children become text nodes. Attribute keyword names use ``_`` in
    place of ``:`` for qualified names (``xml_id`` becomes ``xml:id``).

    Examples
    --------
        >>> para = element("para", "Hello ", element("emphasis", "world", role="bold"))
        >>> para.text
        'Hello world'

    """
    qualified = {"xml_id": XML_ID_ATTRIBUTE, "xlink_href": XLINK_HREF_ATTRIBUTE}
    node = Node(NodeKind.ELEMENT, name, attributes={qualified.get(key, key): value for key, value in attributes.items()})
    for child in children:
        if isinstance(child, str):
            child = Node(NodeKind.TEXT, TEXT_NODE_NAME, content=child)
        child.parent = node
        node.children.append(child)
    return node


def document_from(root: Node, source_path: Optional[Path] = None) -> DocBookDocument:
    """Wrap a hand-built element tree in a :class:`DocBookDocument`."""
    document = DocBookDocument(root=root, source_path=source_path)
    root.parent = None
    stack = [root]
    while stack:
        current = stack.pop()
        current.document = document
        stack.extend(current.children)
    return document
