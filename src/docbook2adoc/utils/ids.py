#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/docbook2adoc/utils/ids.py
"""Anchor id resolution.

DocBook elements carry explicit ids in an ``id`` or ``xml:id`` attribute.
AsciiDoc generates section ids from titles. :class:`IdResolver` normalizes
explicit ids the way AsciiDoc would generate them, so a converted document
keeps stable cross-reference targets, and drops explicit ids that match the
generated one.

"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Optional

from docbook2adoc.constants import DEFAULT_IDPREFIX, DEFAULT_IDSEPARATOR, XML_ID_ATTRIBUTE

if TYPE_CHECKING:
    from docbook2adoc.ast.nodes import Node

# Character references and runs of non-word characters
_ILLEGAL_SECTID_PATTERN = re.compile(r"&(?:[^\W\d_]+|#\d+|#x[0-9A-Za-z]+);|\W+?")


class IdResolver:
    """Derive and normalize anchor ids.

    Parameters
    ----------
    idprefix : str, default "_"
        Prefix for normalized and generated ids
    idseparator : str, default "_"
        Separator replacing illegal characters
    normalize : bool, default True
        Whether explicit ids are rewritten

    Examples
    --------
        >>> resolver = IdResolver()
        >>> resolver.generate("Getting Started")
        '_getting_started'
        >>> resolver.normalize_id("Install-Guide")
        '_install_guide'

    """

    def __init__(
        self,
        idprefix: str = DEFAULT_IDPREFIX,
        idseparator: str = DEFAULT_IDSEPARATOR,
        normalize: bool = True,
    ):
        self.idprefix = idprefix
        self.idseparator = idseparator
        self.normalize = normalize

    def explicit_id(self, node: Node) -> Optional[str]:
        """Return the raw id of ``node`` from ``id`` or ``xml:id``."""
        return node.get("id") or node.get(XML_ID_ATTRIBUTE)

    def resolve(self, node: Node, normalize: Optional[bool] = None) -> Optional[str]:
        """Return the anchor id for ``node``, or None when it has no explicit id.

        Parameters
        ----------
        node : Node
            Element to inspect
        normalize : bool, optional
            Override the resolver's normalization setting

        """
        raw_id = self.explicit_id(node)
        if not raw_id:
            return None
        should_normalize = self.normalize if normalize is None else normalize
        return self.normalize_id(raw_id) if should_normalize else raw_id

    def normalize_id(self, raw_id: str) -> str:
        """Lowercase ``raw_id``, canonicalize separators and apply the prefix."""
        normalized = raw_id.lower().replace("_", "\0").replace("-", "\0").replace("\0", self.idseparator)
        if self.idprefix and not normalized.startswith(self.idprefix):
            normalized = f"{self.idprefix}{normalized}"
        return normalized

    def generate(self, title: str) -> str:
        """Slugify a title into the id AsciiDoc would generate for it."""
        separator = self.idseparator
        slug = _ILLEGAL_SECTID_PATTERN.sub(separator, title.lower())
        if separator:
            slug = re.sub(f"(?:{re.escape(separator)})+", separator, slug)
            if slug.endswith(separator):
                slug = slug[: -len(separator)]

        generated = f"{self.idprefix}{slug}"
        if not self.idprefix and separator:
            while generated.startswith(separator):
                generated = generated[len(separator) :]
        return generated

    def anchor_for(self, node: Node, title: Optional[str] = None) -> Optional[str]:
        """Return the id to emit for a titled element, or None when it is redundant.

        An explicit id equal to the id generated from ``title`` adds nothing
        and is omitted.
        """
        resolved = self.resolve(node)
        if resolved is None:
            return None
        if title is not None and resolved == self.generate(title):
            return None
        return resolved
