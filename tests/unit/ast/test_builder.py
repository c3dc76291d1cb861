#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for adapting lxml trees into the node model."""

import pytest
from lxml import etree

from docbook2adoc.ast import NodeKind, build_document


def _tree(xml: bytes) -> etree._ElementTree:
    parser = etree.XMLParser(resolve_entities=False, strip_cdata=True)
    return etree.fromstring(xml, parser).getroottree()


@pytest.mark.unit
class TestBuildDocument:
    """Tests for build_document."""

    def test_namespace_stripped(self):
        """Test that DocBook 5 element names lose their namespace."""
        document = build_document(_tree(b'<article xmlns="http://docbook.org/ns/docbook"><para/></article>'))
        assert document.root.name == "article"
        assert document.root.elements[0].name == "para"

    def test_qualified_attributes(self):
        """Test that xml:id and xlink:href keep a qualified key."""
        document = build_document(
            _tree(
                b'<article xmlns:xlink="http://www.w3.org/1999/xlink" xml:id="a1">'
                b'<link xlink:href="https://example.org"/></article>'
            )
        )
        assert document.root.get("xml:id") == "a1"
        assert document.root.elements[0].get("xlink:href") == "https://example.org"

    def test_text_and_tails_in_order(self):
        """Test that element text and tails become ordered text nodes."""
        document = build_document(_tree(b"<para>Hello <emphasis>big</emphasis> world</para>"))
        kinds = [(child.kind, child.name) for child in document.root.children]
        assert kinds == [
            (NodeKind.TEXT, "text"),
            (NodeKind.ELEMENT, "emphasis"),
            (NodeKind.TEXT, "text"),
        ]
        assert document.root.text == "Hello big world"

    def test_comments_and_processing_instructions(self):
        """Test that comments and processing instructions are kept as nodes."""
        document = build_document(_tree(b"<para><!-- note -->a<?asciidoc-br?>b</para>"))
        kinds = [child.kind for child in document.root.children]
        assert kinds == [
            NodeKind.COMMENT,
            NodeKind.TEXT,
            NodeKind.PROCESSING_INSTRUCTION,
            NodeKind.TEXT,
        ]
        assert document.root.children[2].name == "asciidoc-br"

    def test_entity_references_and_declarations(self):
        """Test that unexpanded entities and their declarations are adapted."""
        xml = b'<!DOCTYPE article [<!ENTITY product "Widget">]><article><para>&product;</para></article>'
        document = build_document(_tree(xml))
        reference = document.root.find("para").children[0]
        assert reference.kind is NodeKind.ENTITY_REFERENCE
        assert reference.name == "product"
        declaration = document.doctype.children[0]
        assert declaration.kind is NodeKind.ENTITY_DECLARATION
        assert (declaration.name, declaration.content) == ("product", "Widget")

    def test_nodes_know_their_document(self):
        """Test that every node points at the owning document."""
        document = build_document(_tree(b"<book><chapter><para>x</para></chapter></book>"))
        assert all(node.document is document for node in document.root.iter_descendants())
        assert document.doctype is None
