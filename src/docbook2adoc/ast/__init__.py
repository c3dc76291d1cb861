#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docbook2adoc/ast/__init__.py
"""Library-independent node model for parsed DocBook documents."""

from docbook2adoc.ast.builder import build_document, document_from, element
from docbook2adoc.ast.nodes import DocBookDocument, Node, NodeKind

__all__ = [
    "DocBookDocument",
    "Node",
    "NodeKind",
    "build_document",
    "document_from",
    "element",
]
