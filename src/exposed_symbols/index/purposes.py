"""Hierarchical purpose index and pattern matcher.

Purposes are dot-separated tags such as ``LOG.WRITE``. Each tag is
uppercased, split into tokens and stored as a path in a nested mapping;
the reserved key ``#`` on a node holds the names registered exactly there.

Search patterns use the same dotted form:

    PURPOSE1.SUB.OTHER   exact path
    PURPOSE1.*           every direct child of PURPOSE1 (fnmatch globs)
    PURPOSE1.*.TEST      every TEST purpose of any child of PURPOSE1
    PURPOSE1.            PURPOSE1 and all of its descendants, at any depth
"""

from __future__ import annotations

import logging
from fnmatch import fnmatchcase
from typing import TYPE_CHECKING, Any

from exposed_symbols.contract.artifacts import BUCKET_KEY

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger(__name__)

PurposeTree = dict[str, Any]


def tokenize(purpose: str) -> list[str]:
    """Split a purpose tag or pattern into uppercased tokens, keeping empty ones."""
    return purpose.upper().split(".")


def _node_matches(token: str, name: str) -> bool:
    return token == name or fnmatchcase(name, token)


def _is_terminal(remaining: list[str]) -> bool:
    # Only empty tokens left means the pattern ended in a recursive-select dot.
    return not any(remaining)


def search_tree(
    tree: PurposeTree,
    pattern: str,
    include_ancestors: bool = False,
) -> Iterator[tuple[str, str]]:
    """Yield ``(resolved_path, name)`` pairs matching ``pattern`` in a raw tree.

    Args:
        tree: Nested purpose mapping as built by :class:`PurposeIndex`.
        pattern: Dotted pattern; tokens may be fnmatch globs, an empty
            token switches to recursive selection.
        include_ancestors: Also yield the buckets of every node traversed on
            the way to a match, not only the terminal ones.
    """
    yield from _deep_search(tree, tokenize(pattern), "", False, include_ancestors)


def _deep_search(
    node: PurposeTree,
    parts: list[str],
    resolved: str,
    pass_through: bool,
    include_ancestors: bool,
) -> Iterator[tuple[str, str]]:
    if not parts and not pass_through:
        return

    part = parts[0] if parts else ""
    remaining = parts[1:]
    recursive = pass_through or part == ""

    for name, children in node.items():
        if name == BUCKET_KEY:
            continue

        if not (recursive or _node_matches(part, name)):
            continue

        path = f"{resolved}.{name}" if resolved else name

        if include_ancestors or _is_terminal(remaining):
            for entry in children.get(BUCKET_KEY, ()):
                yield path, entry

        yield from _deep_search(
            children, remaining, path, recursive, include_ancestors
        )


class PurposeIndex:
    """A purpose tree for either classes or methods."""

    def __init__(self, tree: PurposeTree | None = None) -> None:
        self._tree: PurposeTree = tree if tree is not None else {}

    def register(self, purpose: str, name: str) -> None:
        """Append ``name`` to the bucket of the node addressed by ``purpose``.

        Intermediate nodes are created with an empty bucket and never receive
        ``name`` themselves.

        Raises:
            ValueError: If the tag contains no usable token.
        """
        tokens = [token for token in tokenize(purpose.strip()) if token]
        if not tokens:
            msg = f"Purpose tag {purpose!r} has no tokens"
            raise ValueError(msg)

        node = self._tree
        for token in tokens[:-1]:
            node = node.setdefault(token, {BUCKET_KEY: []})

        leaf = node.setdefault(tokens[-1], {})
        leaf.setdefault(BUCKET_KEY, []).append(name)

    def search(
        self, pattern: str, include_ancestors: bool = False
    ) -> Iterator[tuple[str, str]]:
        """Lazily yield ``(resolved_path, name)`` pairs matching ``pattern``."""
        return search_tree(self._tree, pattern, include_ancestors)

    def names(self) -> Iterator[str]:
        """Yield every registered name in tree order."""
        for _, name in self.search("."):
            yield name

    def to_dict(self) -> PurposeTree:
        return _copy_tree(self._tree)

    @classmethod
    def from_dict(cls, data: PurposeTree) -> PurposeIndex:
        return cls(_copy_tree(data))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PurposeIndex):
            return NotImplemented
        return self._tree == other._tree

    def __bool__(self) -> bool:
        return bool(self._tree)

    def __repr__(self) -> str:
        return f"PurposeIndex({self._tree!r})"


def _copy_tree(tree: PurposeTree) -> PurposeTree:
    copied: PurposeTree = {}
    for key, value in tree.items():
        if key == BUCKET_KEY:
            copied[key] = list(value)
        else:
            copied[key] = _copy_tree(value)
    return copied


__all__ = ["PurposeIndex", "PurposeTree", "search_tree", "tokenize"]
