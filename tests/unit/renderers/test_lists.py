#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for list conversion."""

import logging

import pytest
from utils import contains_run, convert_body

from docbook2adoc.renderers._asciidoc_lists import list_marker


@pytest.mark.unit
class TestListMarker:
    """Tests for list_marker."""

    @pytest.mark.parametrize(
        "parent,depth,expected",
        [
            ("itemizedlist", 1, "*"),
            ("itemizedlist", 2, "**"),
            ("orderedlist", 1, "."),
            ("orderedlist", 3, "..."),
            ("procedure", 1, "."),
            ("substeps", 2, ".."),
            ("stepalternatives", 2, "a."),
        ],
    )
    def test_marker(self, parent, depth, expected):
        """Test the marker repeated for the nesting depth."""
        assert list_marker(parent, depth) == expected


@pytest.mark.unit
class TestSimpleItems:
    """Tests for lists holding inline content only."""

    def test_itemized(self):
        """Test bullets for an itemized list."""
        lines = convert_body(
            "<itemizedlist><listitem><para>Apple</para></listitem><listitem><para>Pear</para></listitem></itemizedlist>"
        )
        assert "* Apple" in lines
        assert "* Pear" in lines

    def test_inline_item_reflowed(self):
        """Test that an item with bare text is written after the marker."""
        lines = convert_body("<itemizedlist><listitem>Just <emphasis>text</emphasis></listitem></itemizedlist>")
        assert "* Just _text_" in lines

    def test_item_wrapped_lines_indented(self):
        """Test that continued sentences of an item are indented."""
        lines = convert_body("<itemizedlist><listitem><para>One. Two.</para></listitem></itemizedlist>")
        assert contains_run(lines, ["* One.", "  Two."])

    def test_nested_ordered(self):
        """Test that nested ordered lists deepen the marker."""
        lines = convert_body(
            "<orderedlist><listitem><para>One</para>"
            "<orderedlist><listitem><para>Nested</para></listitem></orderedlist>"
            "</listitem></orderedlist>"
        )
        assert ". One" in lines
        assert ".. Nested" in lines
        assert "+" not in lines

    def test_numeration(self):
        """Test that a non-arabic numeration becomes a style line."""
        lines = convert_body("<orderedlist numeration='loweralpha'><listitem><para>x</para></listitem></orderedlist>")
        assert "[loweralpha]" in lines
        assert ". x" in lines

    def test_titled_list(self):
        """Test a block title above a list."""
        lines = convert_body(
            "<itemizedlist><title>Fruit</title><listitem><para>Apple</para></listitem></itemizedlist>"
        )
        assert ".Fruit" in lines
        assert lines.index(".Fruit") < lines.index("* Apple")

    def test_item_anchor(self):
        """Test that an item id becomes an anchor before the marker."""
        lines = convert_body("<itemizedlist><listitem xml:id='first'><para>x</para></listitem></itemizedlist>")
        assert "[[_first]]" in lines
        assert "* x" in lines

    def test_procedure(self):
        """Test that a procedure is a titled ordered list."""
        lines = convert_body("<procedure><title>Setup</title><step><para>Download.</para></step></procedure>")
        assert ".Procedure: Setup" in lines
        assert ". Download." in lines

    def test_stepalternatives(self):
        """Test the marker of alternative steps."""
        lines = convert_body(
            "<procedure><step><para>Pick one.</para><stepalternatives>"
            "<step><para>Left.</para></step><step><para>Right.</para></step>"
            "</stepalternatives></step></procedure>"
        )
        assert ". Pick one." in lines
        assert "a. Left." in lines
        assert "a. Right." in lines


@pytest.mark.unit
class TestMixedItems:
    """Tests for list items holding block content."""

    def test_block_after_text(self):
        """Test that a block is attached with a continuation line."""
        lines = convert_body(
            "<itemizedlist><listitem><para>Run:</para><screen>make</screen></listitem></itemizedlist>"
        )
        assert contains_run(lines, ["* Run:", "+", "----", "make", "----"])

    def test_paragraphs_joined(self):
        """Test that following paragraphs are attached with continuations."""
        lines = convert_body(
            "<itemizedlist><listitem><para>First.</para><para>Second.</para></listitem></itemizedlist>"
        )
        assert contains_run(lines, ["* First.", "+", "Second."])

    def test_leading_block(self):
        """Test that an item starting with a block keeps a non-empty marker line."""
        lines = convert_body("<itemizedlist><listitem><screen>make</screen></listitem></itemizedlist>")
        assert contains_run(lines, ["* {empty}", "+", "----", "make", "----"])

    def test_empty_item(self):
        """Test that an empty item keeps a readable marker line."""
        lines = convert_body(
            "<orderedlist><listitem/><listitem><para>Second</para></listitem></orderedlist>"
        )
        assert contains_run(lines, [". {empty}", ". Second"])

    def test_single_continuation_before_literallayout(self):
        """Test that a literal layout after text gets exactly one continuation."""
        lines = convert_body(
            "<itemizedlist><listitem><para>Text</para><literallayout>a  b</literallayout></listitem></itemizedlist>"
        )
        assert "* Text" in lines
        assert lines.count("+") == 1


@pytest.mark.unit
class TestVariableLists:
    """Tests for variable lists and glossaries."""

    def test_entry(self):
        """Test a term with its definition."""
        lines = convert_body(
            "<variablelist><varlistentry><term>CPU</term>"
            "<listitem><para>Processor.</para></listitem></varlistentry></variablelist>"
        )
        assert contains_run(lines, ["CPU::", "Processor."])

    def test_nested_depth_marker(self):
        """Test that nested variable lists lengthen the delimiter."""
        lines = convert_body(
            "<variablelist><varlistentry><term>Outer</term><listitem><para>Text.</para>"
            "<variablelist><varlistentry><term>Inner</term><listitem><para>Deep.</para></listitem>"
            "</varlistentry></variablelist></listitem></varlistentry></variablelist>"
        )
        assert "Outer::" in lines
        assert "Inner:::" in lines

    def test_definition_paragraphs_joined(self):
        """Test continuation lines between definition paragraphs."""
        lines = convert_body(
            "<variablelist><varlistentry><term>CPU</term>"
            "<listitem><para>Processor.</para><para>Fast.</para></listitem></varlistentry></variablelist>"
        )
        assert contains_run(lines, ["CPU::", "Processor.", "+", "Fast."])

    def test_definition_block(self):
        """Test that a listing in a definition attaches below a continuation."""
        lines = convert_body(
            "<variablelist><varlistentry><term>Build</term>"
            "<listitem><para>Run:</para><programlisting>make</programlisting></listitem>"
            "</varlistentry></variablelist>"
        )
        assert contains_run(lines, ["Build::", "Run:", "+", "[source]", "----", "make", "----"])

    def test_missing_listitem(self, caplog):
        """Test that an entry without a definition is diagnosed."""
        with caplog.at_level(logging.WARNING):
            lines = convert_body("<variablelist><varlistentry><term>Lonely</term></varlistentry></variablelist>")
        assert "Lonely::" in lines
        assert "without <listitem>" in caplog.text

    def test_glossary(self):
        """Test glossary entries."""
        lines = convert_body(
            "<glossary><title>Terms</title><glossentry><glossterm>API</glossterm>"
            "<glossdef><para>Interface.</para></glossdef></glossentry></glossary>"
        )
        assert "[glossary]" in lines
        assert contains_run(lines, ["API::", "  Interface."])


@pytest.mark.unit
class TestSimpleList:
    """Tests for simple lists."""

    def test_members(self):
        """Test that members become bullets."""
        lines = convert_body("<simplelist><member>a</member><member>b</member></simplelist>")
        assert "* a" in lines
        assert "* b" in lines

    def test_member_after_section_title(self):
        """Test that member text stays on the marker line after a heading."""
        lines = convert_body("<section><title>S</title><simplelist><member>a</member></simplelist></section>")
        assert "== S" in lines
        assert "* a" in lines
        assert "* " not in lines

    def test_horizontal_type_warns(self, caplog):
        """Test that non-vertical simple lists are converted with a warning."""
        with caplog.at_level(logging.WARNING):
            lines = convert_body("<simplelist type='horiz'><member>a</member></simplelist>")
        assert "* a" in lines
        assert "type=horiz" in caplog.text
