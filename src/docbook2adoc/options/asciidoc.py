#  Copyright (c) 2025 Tom Villani, Ph.D.

# docbook2adoc/options/asciidoc.py
"""Configuration options for DocBook-to-AsciiDoc conversion.

This module defines the options class consumed by the conversion engine.
The same immutable options object is shared by the conversion pass of a
document and the passes of every document it includes.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from docbook2adoc.constants import (
    DEFAULT_COMPAT_MODE,
    DEFAULT_DELIMIT_SOURCE,
    DEFAULT_IDPREFIX,
    DEFAULT_IDSEPARATOR,
    DEFAULT_NORMALIZE_IDS,
    DEFAULT_PRESERVE_LINE_WRAP,
    DEFAULT_SENTENCE_PER_LINE,
    DEFAULT_WRITE_INCLUDES,
)
from docbook2adoc.options.base import BaseRendererOptions

_ATTRIBUTE_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9_-]*$")


@dataclass(frozen=True)
class AsciiDocConversionOptions(BaseRendererOptions):
    """Configuration options for DocBook-to-AsciiDoc conversion.

    Parameters
    ----------
    idprefix : str, default "_"
        Prefix applied to normalized and generated anchor ids.
    idseparator : str, default "_"
        Separator used when normalizing ids and slugifying titles.
    normalize_ids : bool, default True
        Rewrite explicit ids (lowercase, separator canonicalization, prefix).
        When False, explicit ids are emitted verbatim.
    compat_mode : bool, default False
        Emit ``:compat-mode:`` in document headers.
    attributes : dict, default empty
        Custom document attributes, emitted as ``:name: value`` header lines
        in insertion order. A link whose URL equals one of the values is
        rewritten to reference the attribute (``{name}``).
    sentence_per_line : bool, default True
        Put each sentence of paragraph text on its own line. Forces
        ``preserve_line_wrap`` off.
    preserve_line_wrap : bool, default True
        Keep the source line breaks inside paragraphs instead of joining
        wrapped lines with a space. Ignored when ``sentence_per_line`` is on.
    delimit_source : bool, default True
        Always fence program listings with ``----`` lines.
    base_dir : str or Path, optional
        Directory relative include paths are resolved against. Defaults to the
        directory of the converted document, or the working directory for
        in-memory sources.
    skip_elements : tuple of str, default ()
        Element names dropped from the output together with their subtree.
    write_includes : bool, default True
        Write the converted text of included documents next to their sources.

    """

    idprefix: str = field(
        default=DEFAULT_IDPREFIX,
        metadata={"help": "Prefix for normalized and generated ids", "importance": "core"},
    )
    idseparator: str = field(
        default=DEFAULT_IDSEPARATOR,
        metadata={"help": "Separator for normalized and generated ids", "importance": "core"},
    )
    normalize_ids: bool = field(
        default=DEFAULT_NORMALIZE_IDS,
        metadata={"help": "Normalize explicit ids", "cli_name": "no-normalize-ids", "importance": "core"},
    )
    compat_mode: bool = field(
        default=DEFAULT_COMPAT_MODE,
        metadata={"help": "Emit :compat-mode: in the document header", "importance": "advanced"},
    )
    attributes: dict[str, str] = field(
        default_factory=dict,
        metadata={"help": "Custom document attributes (NAME=VALUE)", "cli_name": "attribute", "importance": "core"},
    )
    sentence_per_line: bool = field(
        default=DEFAULT_SENTENCE_PER_LINE,
        metadata={
            "help": "Write one sentence per line",
            "cli_name": "no-sentence-per-line",
            "importance": "core",
        },
    )
    preserve_line_wrap: bool = field(
        default=DEFAULT_PRESERVE_LINE_WRAP,
        metadata={
            "help": "Preserve source line wraps (only without sentence-per-line)",
            "cli_name": "no-preserve-line-wrap",
            "importance": "advanced",
        },
    )
    delimit_source: bool = field(
        default=DEFAULT_DELIMIT_SOURCE,
        metadata={
            "help": "Always fence program listings",
            "cli_name": "no-delimit-source",
            "importance": "advanced",
        },
    )
    base_dir: Optional[Union[str, Path]] = field(
        default=None,
        metadata={"help": "Directory used to resolve relative include paths", "importance": "advanced"},
    )
    skip_elements: tuple[str, ...] = field(
        default=(),
        metadata={"help": "Element names to drop from the output", "cli_name": "skip", "importance": "advanced"},
    )
    write_includes: bool = field(
        default=DEFAULT_WRITE_INCLUDES,
        metadata={"help": "Write converted include files next to their sources", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate the conversion options.

        Raises
        ------
        ValueError
            If a field value is not usable.

        """
        super().__post_init__()

        if "\n" in self.idprefix or "\n" in self.idseparator:
            raise ValueError("idprefix and idseparator must not contain line breaks")

        for name in self.attributes:
            if not _ATTRIBUTE_NAME_PATTERN.match(name):
                raise ValueError(f"Invalid document attribute name: {name!r}")

        if isinstance(self.skip_elements, str):
            raise ValueError("skip_elements must be a sequence of element names, not a string")

    @property
    def effective_preserve_line_wrap(self) -> bool:
        """Line-wrap preservation after applying the sentence-per-line override."""
        return False if self.sentence_per_line else self.preserve_line_wrap

    def resolve_base_dir(self, source_path: Optional[Path] = None) -> Path:
        """Return the directory relative include paths are resolved against."""
        if self.base_dir is not None:
            return Path(self.base_dir)
        if source_path is not None:
            return Path(source_path).parent
        return Path.cwd()
