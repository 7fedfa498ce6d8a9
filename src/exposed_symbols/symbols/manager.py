"""Query facade over a persisted exposed symbols index."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Union

from exposed_symbols.artifacts.serializer import load_index
from exposed_symbols.symbols.models import ClassSymbol, MethodSymbol
from exposed_symbols.utils import METHOD_SEPARATOR, join_method_name

if TYPE_CHECKING:
    from collections.abc import Iterator

    from exposed_symbols.artifacts.models.records import ClassRecord, MethodRecord
    from exposed_symbols.artifacts.serializer import IndexSource

_ClassEntry = Union["ClassRecord", ClassSymbol, None]
_MethodEntry = Union["MethodRecord", MethodSymbol, None]

_UNKNOWN = object()


class ExposedSymbolsManager:
    """Answers purpose queries and hydrates records into symbols on demand.

    Each record is converted into a symbol on its first lookup; the symbol
    then replaces the record in the cache and every later lookup returns the
    same instance. Unknown names are cached as misses.
    """

    def __init__(self, source: IndexSource) -> None:
        """Load the index from ``source``.

        Raises:
            ArtifactNotFoundError: If ``source`` is a path that does not exist.
            ArtifactFormatError: If the artifact cannot be decoded.
        """
        index = load_index(source)
        self._class_purposes = index.class_purposes
        self._method_purposes = index.method_purposes
        self._class_names = tuple(index.classes)
        self._method_names = tuple(index.methods)
        self._classes: dict[str, _ClassEntry] = dict(index.classes)
        self._methods: dict[str, _MethodEntry] = dict(index.methods)
        self._lock = threading.RLock()

    def yield_classes(
        self, purpose: str, include_parents: bool = False
    ) -> Iterator[tuple[str, str]]:
        """Yield ``(purpose_path, class_name)`` pairs matching a purpose pattern.

        Patterns are dot separated:

            PURPOSE1.SUB_PURPOSE.OTHER   exact path
            PURPOSE1.*                   every child purpose of PURPOSE1
            PURPOSE1.                    PURPOSE1 and every descendant
            PURPOSE1.*.TEST              every TEST purpose of any child of PURPOSE1

        With ``include_parents`` the classes of every traversed purpose are
        yielded too.
        """
        return self._class_purposes.search(purpose, include_parents)

    def yield_methods(
        self, purpose: str, include_parents: bool = False
    ) -> Iterator[tuple[str, str]]:
        """Yield ``(purpose_path, method_name)`` pairs, see ``yield_classes``."""
        return self._method_purposes.search(purpose, include_parents)

    def get_exposed_classes(self) -> list[str]:
        return list(self._class_names)

    def get_exposed_methods(self) -> list[str]:
        return list(self._method_names)

    def get_display_name_of_class(self, class_name: str) -> str | None:
        """Return the ``@display`` name of an exposed class."""
        entry = self._classes.get(class_name)
        return entry.display_name if entry is not None else None

    def get_display_name_of_method(self, method_name: str) -> str | None:
        """Return the ``@display`` name of an exposed ``Class::method``."""
        entry = self._methods.get(method_name)
        return entry.display_name if entry is not None else None

    def get_display_name(self, name: str) -> str | None:
        if METHOD_SEPARATOR in name:
            return self.get_display_name_of_method(name)
        return self.get_display_name_of_class(name)

    def get_exposed_class(self, class_name: str) -> ClassSymbol | None:
        """Return the hydrated class symbol, or None if it is not exposed."""
        with self._lock:
            entry = self._classes.get(class_name, _UNKNOWN)
            if entry is _UNKNOWN:
                self._classes[class_name] = None
                return None
            if entry is None or isinstance(entry, ClassSymbol):
                return entry

            symbol = ClassSymbol._from_record(entry)
            # Cached before its methods resolve their parent back to it.
            self._classes[class_name] = symbol

            methods = (
                self.get_exposed_method(join_method_name(class_name, name))
                for name in entry.method_names
            )
            symbol._attach_methods(m for m in methods if m is not None)
            return symbol

    def get_exposed_method(self, method_name: str) -> MethodSymbol | None:
        """Return the hydrated ``Class::method`` symbol, or None if it is not exposed."""
        with self._lock:
            entry = self._methods.get(method_name, _UNKNOWN)
            if entry is _UNKNOWN:
                self._methods[method_name] = None
                return None
            if entry is None or isinstance(entry, MethodSymbol):
                return entry

            symbol = MethodSymbol._from_record(entry)
            self._methods[method_name] = symbol

            symbol._attach_parent(self.get_exposed_class(entry.class_name))
            return symbol


__all__ = ["ExposedSymbolsManager"]
