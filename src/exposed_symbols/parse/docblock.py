"""Docstring annotation tags such as ``@display`` and ``@purpose``."""

from __future__ import annotations

import re

_TAG_LINE = re.compile(r"^\s*\*?\s*@([A-Za-z_][\w-]*)[ \t]*(.*?)\s*$", re.MULTILINE)
_QUOTED = re.compile(r"""^(["'])(.*)\1$""")


def _unquote(value: str) -> str:
    match = _QUOTED.match(value)
    return match.group(2) if match else value


def parse_doc_tags(
    doc: str | None, names: frozenset[str] | None = None
) -> list[tuple[str, str]]:
    """Return ``(tag, value)`` pairs in docstring order.

    Tag names are lowercased; a value wrapped in matching quotes is unquoted.
    When ``names`` is given, other tags are ignored.

    >>> parse_doc_tags('Write entries.\\n\\n@purpose LOG.WRITE\\n@Display "Write Log"')
    [('purpose', 'LOG.WRITE'), ('display', 'Write Log')]
    """
    if not doc:
        return []

    tags: list[tuple[str, str]] = []
    for match in _TAG_LINE.finditer(doc):
        name = match.group(1).lower()
        if names is not None and name not in names:
            continue
        tags.append((name, _unquote(match.group(2))))
    return tags
