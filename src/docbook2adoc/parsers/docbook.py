#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docbook2adoc/parsers/docbook.py
"""DocBook XML parser.

Reads DocBook 4.x or 5.x XML with lxml and adapts the resulting tree into
the library-independent node model. Entity references are kept as nodes
by default so the converter can turn them into AsciiDoc attribute
references.

"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from lxml import etree

from docbook2adoc.ast import DocBookDocument, build_document
from docbook2adoc.exceptions import (
    FileAccessError,
    FileNotFoundError,
    MalformedFileError,
    ParsingError,
    ValidationError,
)
from docbook2adoc.options.docbook import DocBookParserOptions
from docbook2adoc.parsers.base import BaseParser, ParserInput

logger = logging.getLogger(__name__)


class DocBookParser(BaseParser):
    """Parse DocBook XML into a :class:`DocBookDocument`.

    Parameters
    ----------
    options : DocBookParserOptions or None, default = None
        Parser configuration options

    Examples
    --------
        >>> parser = DocBookParser()
        >>> doc = parser.parse(b"<article><title>Hi</title></article>")
        >>> doc.root.name
        'article'

    """

    def __init__(self, options: Optional[DocBookParserOptions] = None):
        """Initialize the DocBook parser."""
        BaseParser._validate_options_type(options, DocBookParserOptions, "docbook")
        options = options or DocBookParserOptions()
        super().__init__(options)
        self.options: DocBookParserOptions = options

    def parse(self, input_data: ParserInput) -> DocBookDocument:
        """Parse a DocBook source.

        Strings starting with ``<`` are treated as XML text, other strings
        as file paths.

        Raises
        ------
        FileNotFoundError
            If a source path does not exist
        FileAccessError
            If a source path cannot be read
        MalformedFileError
            If a source file is empty
        ParsingError
            If the XML is not well-formed and recovery is disabled
        ValidationError
            If the input type is not supported

        """
        xml_bytes, source_path = self._load_bytes(input_data)
        tree = self._parse_tree(xml_bytes, source_path)
        document = build_document(tree, source_path=source_path)
        logger.debug(
            "Parsed %s (root: %s)",
            source_path or "<memory>",
            document.root.name if document.root is not None else None,
        )
        return document

    def _create_xml_parser(self) -> etree.XMLParser:
        return etree.XMLParser(
            resolve_entities=self.options.resolve_entities,
            recover=self.options.recover,
            huge_tree=self.options.huge_tree,
            load_dtd=False,
            no_network=True,
            remove_comments=False,
            remove_pis=False,
            strip_cdata=True,
        )

    def _load_bytes(self, input_data: ParserInput) -> tuple[bytes, Optional[Path]]:
        if isinstance(input_data, str) and input_data.lstrip().startswith("<"):
            return input_data.encode("utf-8"), None

        if isinstance(input_data, (str, Path)):
            path = Path(input_data)
            if not path.exists():
                raise FileNotFoundError(str(path))
            try:
                data = path.read_bytes()
            except OSError as exc:
                raise FileAccessError(str(path), original_error=exc) from exc
            if not data.strip():
                raise MalformedFileError(f"File is empty: {path}", file_path=str(path))
            return data, path

        if isinstance(input_data, bytes):
            return input_data, None

        if hasattr(input_data, "read"):
            data = input_data.read()
            if isinstance(data, str):
                data = data.encode("utf-8")
            name = getattr(input_data, "name", None)
            source_path = Path(name) if isinstance(name, str) and name else None
            return data, source_path

        raise ValidationError(
            f"Unsupported input type for DocBook parser: {type(input_data).__name__}",
            parameter_name="input_data",
            parameter_value=input_data,
        )

    def _parse_tree(self, xml_bytes: bytes, source_path: Optional[Path]) -> etree._ElementTree:
        parser = self._create_xml_parser()
        base_url = str(source_path) if source_path is not None else None
        try:
            root = etree.fromstring(xml_bytes, parser, base_url=base_url)
        except etree.XMLSyntaxError as exc:
            if self.options.recover:
                # Recovery of an empty document still yields no root
                logger.debug("Recovering parser produced no tree for %s: %s", source_path or "<memory>", exc)
                return etree.ElementTree()
            raise ParsingError(
                f"Failed to parse DocBook XML: {exc}",
                parsing_stage="xml_parsing",
                original_error=exc,
            ) from exc

        if root is None:
            return etree.ElementTree()
        if self.options.recover:
            for entry in parser.error_log:
                logger.warning("XML recovery: %s (line %s)", entry.message, entry.line)
        return root.getroottree()
