#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the conversion engine: dispatch, traversal hooks and output."""

import logging
from io import BytesIO, StringIO

import pytest
from utils import contains_run, convert_body

from docbook2adoc.ast import DocBookDocument, Node, NodeKind, document_from, element
from docbook2adoc.exceptions import InvalidOptionsError
from docbook2adoc.options import AsciiDocConversionOptions, DocBookParserOptions
from docbook2adoc.renderers import DocBookAsciiDocRenderer
from docbook2adoc.renderers._asciidoc_conditionals import condition_of, split_directive_lines
from docbook2adoc.renderers.asciidoc import resolve_handler


def hand_built() -> DocBookDocument:
    return document_from(element("article", element("title", "Hi"), element("para", "Text.")))


@pytest.mark.unit
class TestResolveHandler:
    """Tests for handler dispatch order."""

    @pytest.mark.parametrize(
        "name,handler",
        [
            ("warning", DocBookAsciiDocRenderer.process_admonition),
            ("literal", DocBookAsciiDocRenderer.process_literal),
            ("section", DocBookAsciiDocRenderer.process_section),
            ("appendix", DocBookAsciiDocRenderer.process_special_section),
            ("itemizedlist", DocBookAsciiDocRenderer.visit_itemizedlist),
            ("title", DocBookAsciiDocRenderer.ignore),
            ("subtitle", DocBookAsciiDocRenderer.ignore),
            ("frobnicate", DocBookAsciiDocRenderer.default_visit),
        ],
    )
    def test_element_handlers(self, name, handler):
        """Test categories and names resolve to their handlers."""
        assert resolve_handler(element(name)) is handler

    def test_kind_handlers(self):
        """Test non-element nodes resolve by kind."""
        assert resolve_handler(Node(NodeKind.TEXT, "text", content="x")) is DocBookAsciiDocRenderer.visit_text
        assert resolve_handler(Node(NodeKind.ENTITY_REFERENCE, "product")) is DocBookAsciiDocRenderer.visit_entity_ref
        assert resolve_handler(Node(NodeKind.COMMENT, "comment")) is DocBookAsciiDocRenderer.ignore


@pytest.mark.unit
class TestTraversal:
    """Tests for engine behavior around handlers."""

    def test_unknown_element_warns(self, caplog):
        """Test that unknown elements are reported and dropped."""
        with caplog.at_level(logging.WARNING):
            lines = convert_body("<frobnicate>Secret</frobnicate><para>Shown.</para>")
        assert "No visitor defined for <frobnicate>! Skipping." in caplog.text
        assert "Shown." in lines
        assert not any("Secret" in line for line in lines)

    def test_skip_elements(self):
        """Test that configured element names are not converted."""
        lines = convert_body("<remark>Hidden</remark><para>Shown.</para>", skip_elements=("remark",))
        assert "ifdef::showremarks[]" not in lines
        assert "Shown." in lines

    def test_comments_dropped(self):
        """Test that XML comments produce no output."""
        lines = convert_body("<!-- internal --><para>Text.</para>")
        assert not any("internal" in line for line in lines)

    def test_list_depth_restored(self):
        """Test that a list after a nested list starts at the outer depth again."""
        lines = convert_body(
            "<itemizedlist><listitem><para>Out</para><itemizedlist><listitem><para>In</para></listitem>"
            "</itemizedlist></listitem></itemizedlist>"
            "<itemizedlist><listitem><para>Next</para></listitem></itemizedlist>"
        )
        assert "** In" in lines
        assert "* Next" in lines

    def test_conditional_block(self):
        """Test that a condition wraps the element in directives."""
        lines = convert_body("<para condition='draft'>Draft only.</para><para>Always.</para>")
        start = lines.index("ifdef::draft[]")
        end = lines.index("endif::draft[]")
        assert start < lines.index("Draft only.") < end < lines.index("Always.")

    def test_title_condition_not_duplicated(self):
        """Test that a title condition is written once, around the heading."""
        lines = convert_body("<section><title condition='web'>Online</title><para>x</para></section>")
        assert contains_run(lines, ["ifdef::web[]", "== Online", "endif::web[]"])


@pytest.mark.unit
class TestConditionals:
    """Tests for the conditional directive helpers."""

    def test_condition_of(self):
        """Test reading the condition of elements only."""
        assert condition_of(element("para", condition="draft")) == "draft"
        assert condition_of(element("para")) is None
        assert condition_of(Node(NodeKind.TEXT, "text", content="x")) is None

    def test_split_directive_lines(self):
        """Test that trailing content is moved off directive lines."""
        assert split_directive_lines(["endif::draft[]Next", "a\nb"]) == ["endif::draft[]", "Next", "a", "b"]
        assert split_directive_lines(["ifdef::draft[]"]) == ["ifdef::draft[]"]


@pytest.mark.unit
class TestRendererOutput:
    """Tests for the renderer's public output methods."""

    def test_hand_built_document(self):
        """Test converting a tree assembled without a parser."""
        assert DocBookAsciiDocRenderer().render_to_lines(hand_built()) == ["= Hi", "", "Text."]

    def test_render_to_string(self):
        """Test that the text output ends with a newline."""
        assert DocBookAsciiDocRenderer().render_to_string(hand_built()) == "= Hi\n\nText.\n"

    def test_document_without_root(self, caplog):
        """Test that an empty document converts to nothing."""
        with caplog.at_level(logging.WARNING):
            assert DocBookAsciiDocRenderer().render_to_lines(DocBookDocument()) == []
            assert DocBookAsciiDocRenderer().render_to_string(DocBookDocument()) == ""
        assert "has no root element" in caplog.text

    def test_render_to_text_stream(self):
        """Test writing to a text stream."""
        stream = StringIO()
        DocBookAsciiDocRenderer().render(hand_built(), stream)
        assert stream.getvalue() == "= Hi\n\nText.\n"

    def test_render_to_binary_stream(self):
        """Test writing UTF-8 to a binary stream."""
        stream = BytesIO()
        DocBookAsciiDocRenderer().render(hand_built(), stream)
        assert stream.getvalue() == b"= Hi\n\nText.\n"

    def test_render_to_path(self, tmp_path):
        """Test writing to a file path."""
        target = tmp_path / "doc.adoc"
        DocBookAsciiDocRenderer().render(hand_built(), target)
        assert target.read_text(encoding="utf-8") == "= Hi\n\nText.\n"

    def test_wrong_options_class(self):
        """Test that parser options are rejected by the renderer."""
        with pytest.raises(InvalidOptionsError):
            DocBookAsciiDocRenderer(DocBookParserOptions())  # type: ignore[arg-type]

    def test_options_kept(self):
        """Test that the renderer exposes its options."""
        options = AsciiDocConversionOptions(idprefix="x")
        assert DocBookAsciiDocRenderer(options).options is options
