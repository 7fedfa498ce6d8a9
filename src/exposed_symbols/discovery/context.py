"""Build-time queries over a finished discovery run.

Later build steps of the same run use this context while the live classes
are still available. Everything here reads the run's result; nothing
mutates it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from exposed_symbols.contract.capabilities import MethodFilter
from exposed_symbols.reflect.reflector import (
    iter_declared_methods,
    method_passes_filter,
)
from exposed_symbols.utils import join_method_name

if TYPE_CHECKING:
    from collections.abc import Iterator

    from exposed_symbols.discovery.driver import DiscoveryResult
    from exposed_symbols.index.exposed import ExposedSymbolsIndex


class ExposedSymbolsContext:
    """Helper API over a :class:`DiscoveryResult`."""

    def __init__(self, result: DiscoveryResult) -> None:
        self._result = result

    @property
    def index(self) -> ExposedSymbolsIndex:
        return self._result.index

    def get_registered_class_names(self) -> list[str]:
        """Return every class resolved during the scan, exposed or not."""
        return list(self._result.reflections)

    def get_class_reflection(self, class_name: str) -> type | None:
        return self._result.reflections.get(class_name)

    def find_class_methods(
        self,
        class_name: str,
        options: MethodFilter = MethodFilter.PUBLIC,
        *,
        exclude_magic: bool = True,
    ) -> dict[str, Any] | None:
        """Return the methods ``class_name`` declares itself that match ``options``.

        Keys are ``Class::method`` names. Returns None for an unknown class.
        """
        cls = self.get_class_reflection(class_name)
        if cls is None:
            return None

        if exclude_magic:
            options |= MethodFilter.EXCLUDE_MAGIC

        return {
            join_method_name(class_name, method.name): method.function
            for method in iter_declared_methods(cls)
            if method_passes_filter(method, options)
        }

    def yield_classes(
        self, purpose: str, include_parents: bool = False
    ) -> Iterator[tuple[str, str]]:
        """Yield ``(purpose_path, class_name)`` pairs, see ``PurposeIndex.search``."""
        return self.index.class_purposes.search(purpose, include_parents)

    def yield_methods(
        self, purpose: str, include_parents: bool = False
    ) -> Iterator[tuple[str, str]]:
        """Yield ``(purpose_path, method_name)`` pairs, see ``PurposeIndex.search``."""
        return self.index.method_purposes.search(purpose, include_parents)

    def get_exposed_classes(self) -> list[str]:
        return list(self.index.classes)

    def get_exposed_methods(self) -> list[str]:
        return list(self.index.methods)

    def qualify_symbol(self, symbol_name: str, class_context: str) -> str | None:
        """Qualify ``symbol_name`` through the imports of ``class_context``.

        Returns the name unchanged when the class does not import it, and
        None when ``class_context`` is not an exposed class.
        """
        record = self.index.classes.get(class_context)
        if record is None:
            return None
        return record.import_aliases.get(symbol_name, symbol_name)

    def get_declared_module(self, class_context: str) -> str | None:
        record = self.index.classes.get(class_context)
        return record.module_name if record is not None else None
