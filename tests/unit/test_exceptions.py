#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the exception hierarchy."""

import pytest

from docbook2adoc.exceptions import (
    DocBook2AdocError,
    FileAccessError,
    FileError,
    FileNotFoundError,
    IncludeError,
    InvalidOptionsError,
    MalformedFileError,
    OutputWriteError,
    ParsingError,
    RenderingError,
    ValidationError,
)
from docbook2adoc.options import AsciiDocConversionOptions, DocBookParserOptions


@pytest.mark.unit
class TestExceptionHierarchy:
    """Test the exception classes and their default messages."""

    @pytest.mark.parametrize(
        "error_class,base",
        [
            (ValidationError, DocBook2AdocError),
            (InvalidOptionsError, ValidationError),
            (FileError, DocBook2AdocError),
            (FileNotFoundError, FileError),
            (FileAccessError, FileError),
            (MalformedFileError, FileError),
            (ParsingError, DocBook2AdocError),
            (RenderingError, DocBook2AdocError),
            (OutputWriteError, RenderingError),
            (IncludeError, RenderingError),
        ],
    )
    def test_subclassing(self, error_class, base):
        """Test the place of each class in the hierarchy."""
        assert issubclass(error_class, base)

    def test_original_error_kept(self):
        """Test that the wrapped exception is available."""
        cause = OSError("disk full")
        error = OutputWriteError("out.adoc", original_error=cause)
        assert error.original_error is cause
        assert error.rendering_stage == "file_write"
        assert str(error) == "Failed to write output file: out.adoc"

    def test_invalid_options_message(self):
        """Test the generated message naming both option classes."""
        error = InvalidOptionsError("docbook", DocBookParserOptions, AsciiDocConversionOptions)
        assert "DocBookParserOptions" in error.message
        assert "AsciiDocConversionOptions" in error.message
        assert error.parameter_name == "options"

    def test_include_error(self):
        """Test the default include failure message."""
        error = IncludeError("/docs/part.xml")
        assert error.include_path == "/docs/part.xml"
        assert error.rendering_stage == "include"
        assert "has no root element" in str(error)

    def test_caught_by_base_class(self):
        """Test that the library error is caught by the library base class."""
        with pytest.raises(DocBook2AdocError):
            raise FileNotFoundError("missing.xml")
