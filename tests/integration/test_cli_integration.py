#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/integration/test_cli_integration.py
"""Integration tests for the docbook2adoc command-line interface."""

import argparse

import pytest

from docbook2adoc.cli import (
    EXIT_FILE_ERROR,
    EXIT_PARSING_ERROR,
    EXIT_RENDERING_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    get_exit_code_for_exception,
    main,
    parse_attribute,
)
from docbook2adoc.exceptions import FileNotFoundError, IncludeError, ParsingError, ValidationError

ARTICLE = "<article><title>Guide</title><para>Hello world.</para></article>"


@pytest.fixture(autouse=True)
def _restore_logging(restore_root_logging):
    """Undo the root logging setup performed by every ``main`` call."""
    yield


@pytest.mark.cli
@pytest.mark.unit
class TestArgumentHelpers:
    """Tests for argument parsing helpers."""

    def test_parse_attribute(self):
        """Test NAME=VALUE splitting."""
        assert parse_attribute("product=Widget") == ("product", "Widget")
        assert parse_attribute("url=https://x.org/?a=b") == ("url", "https://x.org/?a=b")
        assert parse_attribute("flag") == ("flag", "")

    def test_parse_attribute_without_name(self):
        """Test that an empty name is rejected."""
        with pytest.raises(argparse.ArgumentTypeError):
            parse_attribute("=value")

    @pytest.mark.parametrize(
        "error,code",
        [
            (ValidationError("bad"), EXIT_VALIDATION_ERROR),
            (FileNotFoundError("x.xml"), EXIT_FILE_ERROR),
            (ParsingError("broken"), EXIT_PARSING_ERROR),
            (IncludeError("part.xml"), EXIT_RENDERING_ERROR),
            (RuntimeError("other"), 1),
        ],
    )
    def test_exit_codes(self, error, code):
        """Test the exit code chosen for each error category."""
        assert get_exit_code_for_exception(error) == code


@pytest.mark.cli
@pytest.mark.integration
class TestMain:
    """Tests for running the command."""

    def test_convert_next_to_source(self, write_docbook):
        """Test the default output path."""
        source = write_docbook("guide.xml", ARTICLE)
        assert main([str(source)]) == EXIT_SUCCESS
        assert source.with_suffix(".adoc").read_text(encoding="utf-8").startswith("= Guide\n")

    def test_out_option(self, write_docbook, tmp_path):
        """Test writing to an explicit output file."""
        source = write_docbook("guide.xml", ARTICLE)
        target = tmp_path / "manual.adoc"
        assert main([str(source), "--out", str(target)]) == EXIT_SUCCESS
        assert target.is_file()

    def test_stdout(self, write_docbook, capsys):
        """Test writing the conversion to standard output."""
        source = write_docbook("guide.xml", ARTICLE)
        assert main([str(source), "--stdout", "--no-sentence-per-line"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "= Guide\n\nHello world.\n"
        assert not source.with_suffix(".adoc").exists()

    def test_attribute_option(self, write_docbook, capsys):
        """Test that declared attributes replace matching URLs."""
        source = write_docbook(
            "guide.xml",
            "<article><articleinfo><title>Guide</title></articleinfo>"
            "<para><ulink url='https://example.org'>site</ulink></para></article>",
        )
        assert main([str(source), "--stdout", "-a", "home=https://example.org"]) == EXIT_SUCCESS
        output = capsys.readouterr().out
        assert ":home: https://example.org" in output
        assert "{home}[site]" in output

    def test_out_with_several_inputs(self, write_docbook, tmp_path):
        """Test that --out is refused for more than one input."""
        first = write_docbook("a.xml", ARTICLE)
        second = write_docbook("b.xml", ARTICLE)
        assert main([str(first), str(second), "--out", str(tmp_path / "x.adoc")]) == EXIT_VALIDATION_ERROR

    def test_invalid_attribute_name(self, write_docbook):
        """Test that rejected option values give a validation exit code."""
        source = write_docbook("guide.xml", ARTICLE)
        assert main([str(source), "-a", "bad name=x"]) == EXIT_VALIDATION_ERROR

    def test_missing_input(self, tmp_path):
        """Test the exit code for a missing file."""
        assert main([str(tmp_path / "missing.xml")]) == EXIT_FILE_ERROR

    def test_empty_input(self, write_docbook):
        """Test that an empty source file gives a file error exit code."""
        source = write_docbook("empty.xml", "")
        assert main([str(source)]) == EXIT_FILE_ERROR

    def test_malformed_input(self, write_docbook):
        """Test the exit code for malformed XML."""
        source = write_docbook("broken.xml", "<article><para></article>")
        assert main([str(source)]) == EXIT_PARSING_ERROR

    def test_recover_option(self, write_docbook):
        """Test that recovery lets malformed input convert."""
        source = write_docbook("broken.xml", "<article><title>T</title><para>x</article>")
        assert main([str(source), "--recover"]) == EXIT_SUCCESS

    def test_first_failure_sets_exit_code(self, write_docbook, tmp_path):
        """Test that later inputs are still converted after a failure."""
        good = write_docbook("good.xml", ARTICLE)
        assert main([str(tmp_path / "missing.xml"), str(good)]) == EXIT_FILE_ERROR
        assert good.with_suffix(".adoc").is_file()

    def test_rich_summary(self, write_docbook, capsys):
        """Test the summary table written to standard error."""
        source = write_docbook("guide.xml", ARTICLE)
        assert main([str(source), "--rich"]) == EXIT_SUCCESS
        err = capsys.readouterr().err
        assert "docbook2adoc" in err
        assert "ok" in err

    def test_log_file(self, write_docbook, tmp_path):
        """Test that warnings are written to the log file."""
        source = write_docbook("guide.xml", "<article><title>T</title><frobnicate/></article>")
        log_file = tmp_path / "run.log"
        assert main([str(source), "--log-file", str(log_file)]) == EXIT_SUCCESS
        assert "No visitor defined for <frobnicate>" in log_file.read_text(encoding="utf-8")

    def test_version(self, capsys):
        """Test the version flag."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert "docbook2adoc" in capsys.readouterr().out
