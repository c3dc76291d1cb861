#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docbook2adoc/utils/io_utils.py
"""I/O utilities for reading DocBook sources and writing AsciiDoc output.

This module provides centralized helpers for writing converted text to
files or streams and for deriving the output path of a converted source.

"""

from __future__ import annotations

import io
from io import BytesIO, StringIO
from pathlib import Path
from typing import IO, Union, cast

from docbook2adoc.constants import ASCIIDOC_EXTENSION, DOCBOOK_EXTENSION
from docbook2adoc.exceptions import OutputWriteError


def derived_output_path(source: Union[str, Path]) -> Path:
    """Return the AsciiDoc path derived from a DocBook source path.

    The first ``.xml`` occurrence is replaced by ``.adoc``; paths without
    it get the ``.adoc`` suffix appended.

    Examples
    --------
        >>> derived_output_path("guide/intro.xml").as_posix()
        'guide/intro.adoc'

    """
    text = str(source)
    if DOCBOOK_EXTENSION in text:
        return Path(text.replace(DOCBOOK_EXTENSION, ASCIIDOC_EXTENSION, 1))
    return Path(f"{text}{ASCIIDOC_EXTENSION}")


def derived_include_target(href: str) -> str:
    """Return the include target written in place of an ``xi:include`` href."""
    return href.replace(DOCBOOK_EXTENSION, ASCIIDOC_EXTENSION, 1)


def write_text(content: str, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
    """Write converted text to a file path or a text/binary stream.

    Parameters
    ----------
    content : str
        Text to write
    output : str, Path, IO[bytes] or IO[str]
        Destination. Paths are written as UTF-8.

    Raises
    ------
    OutputWriteError
        If a file path cannot be written
    TypeError
        If the output type is not supported

    """
    if isinstance(output, (str, Path)):
        output_path = Path(output)
        try:
            output_path.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise OutputWriteError(str(output_path), original_error=exc) from exc
        return

    if hasattr(output, "write"):
        if isinstance(output, BytesIO):
            is_binary_mode = True
        elif isinstance(output, StringIO):
            is_binary_mode = False
        elif isinstance(output, io.TextIOBase):
            is_binary_mode = False
        elif isinstance(output, (io.BufferedIOBase, io.RawIOBase)):
            is_binary_mode = True
        else:
            mode = getattr(output, "mode", "")
            is_binary_mode = isinstance(mode, str) and "b" in mode

        if is_binary_mode:
            cast(IO[bytes], output).write(content.encode("utf-8"))
        else:
            cast(IO[str], output).write(content)
        return

    raise TypeError(f"Unsupported output type: {type(output)}")


__all__ = ["derived_include_target", "derived_output_path", "write_text"]
