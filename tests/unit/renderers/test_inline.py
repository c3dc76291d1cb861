#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for inline element conversion."""

import logging

import pytest
from utils import article, convert, convert_body, convert_lines

from docbook2adoc.ast import element
from docbook2adoc.renderers._asciidoc_inline import emphasis_marker, literal_shortname


def para_text(markup: str, **options) -> str:
    """Convert a single paragraph and return its text."""
    lines = convert_body(f"<para>{markup}</para>", **options)
    return "\n".join(lines[2:])


@pytest.mark.unit
class TestText:
    """Tests for character data."""

    def test_sentence_per_line(self):
        """Test that sentences are written on separate lines."""
        assert para_text("One. Two.") == "One.\nTwo."

    def test_sentences_kept_together(self):
        """Test that sentence splitting can be switched off."""
        assert para_text("One. Two.", sentence_per_line=False) == "One. Two."

    def test_line_wrap_preserved(self):
        """Test that source line breaks are kept without sentence splitting."""
        assert para_text("One\n    two", sentence_per_line=False) == "One\ntwo"

    def test_line_wrap_joined(self):
        """Test that wrapped lines are joined when preservation is off."""
        assert para_text("One\n    two", sentence_per_line=False, preserve_line_wrap=False) == "One two"

    def test_typographic_characters(self):
        """Test that typographic characters are reverse substituted."""
        assert para_text("a&#8212;b &#169; 2025") == "a--b (C) 2025"

    def test_leading_dots_protected(self):
        """Test that a paragraph starting with dots is not read as a block title."""
        assert para_text("...and so on") == "$$...$$and so on"

    def test_entity_reference(self):
        """Test that unexpanded entities become attribute references."""
        xml = (
            '<!DOCTYPE article [<!ENTITY product "Widget">]>'
            "<article><title>T</title><para>Use &product; now.</para></article>"
        )
        assert "Use {product} now." in convert_lines(xml)

    def test_processing_instructions(self):
        """Test the hard line break and horizontal rule instructions."""
        assert para_text("Line one<?asciidoc-br?>") == "Line one +"
        assert para_text("<?asciidoc-hr?>") == "'''"


@pytest.mark.unit
class TestEmphasis:
    """Tests for emphasis marker selection and doubling."""

    def test_marker_for_role(self):
        """Test the marker chosen for each emphasis role."""
        assert emphasis_marker(element("emphasis")) == "_"
        assert emphasis_marker(element("emphasis", role="bold")) == "*"
        assert emphasis_marker(element("emphasis", role="strong")) == "*"
        assert emphasis_marker(element("emphasis", role="marked")) == "#"

    def test_constrained_at_word_boundary(self):
        """Test single markers when the run is surrounded by spaces."""
        assert para_text("Say <emphasis>hi</emphasis> now") == "Say _hi_ now"
        assert para_text("<emphasis role='bold'>word</emphasis> follows") == "*word* follows"

    def test_unconstrained_inside_word(self):
        """Test doubled markers when a word character touches the run."""
        assert para_text("<emphasis role='bold'>word</emphasis>s") == "**word**s"

    def test_nested_emphasis_doubled(self):
        """Test that nested runs always use doubled markers."""
        text = para_text("This is <emphasis role='bold'>very <emphasis>deep</emphasis></emphasis> stuff.")
        assert text == "This is *very __deep__* stuff."

    def test_nested_sensitive_character_escaped(self):
        """Test that nested text starting with a marker character is escaped."""
        assert "\\_x" in para_text("<emphasis role='bold'><emphasis>_x</emphasis></emphasis>")


@pytest.mark.unit
class TestLiterals:
    """Tests for code-like elements."""

    def test_shortnames(self):
        """Test role names written before named literals."""
        assert literal_shortname("classname") == "class"
        assert literal_shortname("envar") == "var"
        assert literal_shortname("application") == "app"
        assert literal_shortname("command") == "command"

    def test_anonymous_literal(self):
        """Test a literal without a role."""
        assert para_text("Use <literal>x</literal> here") == "Use `x` here"

    def test_named_literal(self):
        """Test a named literal carries its role."""
        assert para_text("Run <command>make</command> now.") == "Run [command]`make` now."

    def test_named_literal_inside_word(self):
        """Test that adjacency is judged before the role is written."""
        assert para_text("<classname>Foo</classname>s") == "[class]``Foo``s"

    def test_literal_inside_emphasis(self):
        """Test that a literal repeats the enclosing emphasis markers."""
        assert "``__x__``" in para_text("<emphasis>see <literal>x</literal></emphasis>")


@pytest.mark.unit
class TestSimpleInline:
    """Tests for keywords, paths and simple wrappers."""

    @pytest.mark.parametrize(
        "markup,expected",
        [
            ("E = mc<superscript>2</superscript>", "E = mc^2^"),
            ("H<subscript>2</subscript>O", "H~2~O"),
            ("<quote>hi</quote>", '"`hi`"'),
            ("<phrase role='red'>hot</phrase> day", "[red]##hot## day"),
            ("<trademark>Acme</trademark>", "Acme(TM)"),
            ("A <firstterm>widget</firstterm>", "A [term]_widget_"),
            ("See <citetitle>Dune</citetitle>", "See [ref]_Dune_"),
            ("Install <package>numpy</package>", "Install [package]#numpy#"),
            ("<filename>/etc/hosts</filename>", "[path]``/etc/hosts``"),
            ("<systemitem class='username'>root</systemitem>", "[username]``root``"),
            ("<email>a@b.org</email>", "mailto:a@b.org[<a@b.org>]"),
        ],
    )
    def test_wrappers(self, markup, expected):
        """Test the AsciiDoc form of simple inline elements."""
        assert para_text(markup) == expected

    def test_footnote(self):
        """Test that footnotes are written inline."""
        assert para_text("Text<footnote><para>Note here.</para></footnote> more") == "Textfootnote:[Note here.] more"

    def test_anchor(self):
        """Test an inline anchor."""
        assert para_text("<anchor xml:id='here'/>Text") == "[[_here]]Text"


@pytest.mark.unit
class TestUserInterface:
    """Tests for GUI and keyboard elements."""

    @pytest.mark.parametrize(
        "markup,expected",
        [
            ("<guibutton>OK</guibutton>", "btn:[OK]"),
            ("<guilabel>Name</guilabel>", "[label]#Name#"),
            ("<guimenu>File</guimenu>", "menu:File[]"),
            (
                "<menuchoice><guimenu>File</guimenu><guisubmenu>Save</guisubmenu>"
                "<guimenuitem>As</guimenuitem></menuchoice>",
                "menu:File[Save > As]",
            ),
            ("<keycap>F1</keycap>", "kbd:[F1]"),
            ("<keycap function='control'/>", "kbd:[Ctrl]"),
            ("<mousebutton>left</mousebutton>", "mouse:[left]"),
            ("<keycombo><keycap>Ctrl</keycap><keycap>T</keycap></keycombo>", "kbd:[Ctrl+T]"),
            ("<keycombo><keycap>Ctrl</keycap><mousebutton>Button1</mousebutton></keycombo>", "kbd:[Ctrl]-Button1"),
            ("<keycode>0x1B</keycode>", "keycode:[0x1B]"),
        ],
    )
    def test_ui_macros(self, markup, expected):
        """Test the AsciiDoc UI macros."""
        assert para_text(markup) == expected

    def test_unknown_keycap_function(self, caplog):
        """Test that an unknown key function is diagnosed."""
        with caplog.at_level(logging.WARNING):
            para_text("<keycap function='hyper'/>")
        assert "Unhandled <keycap> function" in caplog.text

    def test_empty_menuchoice(self, caplog):
        """Test that an empty menu choice is skipped."""
        with caplog.at_level(logging.WARNING):
            assert "menu:" not in para_text("<menuchoice/>")
        assert "Empty <menuchoice>" in caplog.text


@pytest.mark.unit
class TestLinks:
    """Tests for links and cross references."""

    def test_external_link(self):
        """Test a link with a label."""
        assert para_text("<link xlink:href='https://example.org'>Example</link>") == "https://example.org[Example]"

    def test_bare_link(self):
        """Test a link without a label."""
        assert para_text("<link xlink:href='https://example.org'/>") == "https://example.org"

    def test_relative_link(self):
        """Test that non-HTTP targets use the link macro."""
        assert para_text("<link xlink:href='docs/a.html'>A</link>") == "link:docs/a.html[A]"

    def test_ulink(self):
        """Test a DocBook 4 ulink."""
        assert para_text("<ulink url='https://x.org'>X</ulink>") == "https://x.org[X]"

    def test_link_uses_attribute(self):
        """Test that a URL held by a document attribute is referenced by name."""
        text = para_text(
            "<link xlink:href='https://example.org'>Example</link>", attributes={"site": "https://example.org"}
        )
        assert text == "{site}[Example]"

    def test_xref(self):
        """Test a cross reference without a label."""
        assert para_text("See <xref linkend='intro'/>.") == "See <<_intro>>."

    def test_xref_without_normalization(self):
        """Test that the link end is kept verbatim when normalization is off."""
        assert para_text("See <xref linkend='Intro'/>.", normalize_ids=False) == "See <<Intro>>."

    def test_link_with_linkend_quotes_label(self):
        """Test that labels containing commas are quoted."""
        assert para_text("<link linkend='intro'>Intro, part 1</link>") == '<<_intro,"Intro, part 1">>'

    def test_xref_without_linkend(self, caplog):
        """Test that a cross reference without a target is dropped."""
        with caplog.at_level(logging.WARNING):
            assert "<<" not in para_text("See <xref/>.")
        assert "without linkend" in caplog.text


@pytest.mark.unit
class TestIndexTerms:
    """Tests for index term conversion."""

    def test_index_entry(self):
        """Test an entry with primary and secondary terms."""
        lines = convert_body("<para>Text<indexterm><primary>a</primary><secondary>b</secondary></indexterm></para>")
        assert "(((a,b)))" in lines

    def test_followers_with_same_primary_folded(self):
        """Test that consecutive terms sharing the primary are emitted once."""
        output = convert(
            article(
                "<para>Text<indexterm><primary>foo</primary></indexterm>"
                "<indexterm><primary>foo</primary><secondary>bar</secondary></indexterm>"
                "<indexterm><primary>foo</primary></indexterm></para>"
            )
        )
        assert output.count("(((foo)))") == 1
        assert "(((foo,bar)))" not in output

    def test_generated_index(self):
        """Test that documents with index terms get an index section."""
        lines = convert_body("<para>Text<indexterm><primary>foo</primary></indexterm></para>")
        assert "ifdef::backend-docbook[]" in lines
        assert "[index]" in lines
        assert lines[-1] == "endif::backend-docbook[]"

    def test_empty_indexterm(self, caplog):
        """Test that an index term without terms is skipped."""
        with caplog.at_level(logging.WARNING):
            lines = convert_body("<para>Text<indexterm/></para>")
        assert "[index]" not in lines
        assert "Empty <indexterm>" in caplog.text
