"""Hydrated symbol views over exposed class and method records.

Symbols are built by :class:`symbols.manager.ExposedSymbolsManager`. A class
and its methods reference each other, so both sides are created first and
linked once through ``_attach_*``; afterwards they are treated as read-only.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from exposed_symbols.artifacts.models.records import ClassRecord, MethodRecord


@dataclass(eq=False)
class AbstractSymbol:
    qualified_name: str
    display_name: str | None = None
    module_name: str | None = None

    @property
    def symbol_name(self) -> str:
        """The display name, or the last dotted segment of the qualified name."""
        if self.display_name:
            return self.display_name
        return self.qualified_name.rsplit(".", 1)[-1]

    @property
    def namespace(self) -> str | None:
        head, sep, _ = self.qualified_name.rpartition(".")
        return head if sep else None


@dataclass(eq=False)
class ClassSymbol(AbstractSymbol):
    inheritance: tuple[str, ...] = ()
    instantiable: bool = True
    import_aliases: dict[str, str] = field(default_factory=dict, repr=False)
    exposed_methods: tuple[MethodSymbol, ...] = field(default=(), repr=False)

    @property
    def is_abstract(self) -> bool:
        return not self.instantiable

    def get_method(self, name: str) -> MethodSymbol | None:
        for method in self.exposed_methods:
            if method.name == name:
                return method
        return None

    @classmethod
    def _from_record(cls, record: ClassRecord) -> ClassSymbol:
        return cls(
            qualified_name=record.qualified_name,
            display_name=record.display_name,
            module_name=record.module_name,
            inheritance=record.inheritance,
            instantiable=not record.is_abstract,
            import_aliases=dict(record.import_aliases),
        )

    def _attach_methods(self, methods: Iterable[MethodSymbol]) -> None:
        self.exposed_methods = tuple(methods)


@dataclass(eq=False)
class MethodSymbol(AbstractSymbol):
    is_public: bool = False
    is_protected: bool = False
    is_private: bool = False
    is_static: bool = False
    is_abstract: bool = False
    is_final: bool = False
    is_internal: bool = False
    is_constructor: bool = False
    is_destructor: bool = False
    is_deprecated: bool = False
    return_type: str | None = None
    parent_class: ClassSymbol | None = field(default=None, repr=False)

    @property
    def name(self) -> str:
        """The method name without its class part."""
        return self.qualified_name.partition("::")[2]

    @classmethod
    def _from_record(cls, record: MethodRecord) -> MethodSymbol:
        return cls(
            qualified_name=record.qualified_name,
            display_name=record.display_name,
            is_public=record.is_public,
            is_protected=record.is_protected,
            is_private=record.is_private,
            is_static=record.is_static,
            is_abstract=record.is_abstract,
            is_final=record.is_final,
            is_internal=record.is_internal,
            is_constructor=record.is_constructor,
            is_destructor=record.is_destructor,
            is_deprecated=record.is_deprecated,
            return_type=record.return_type,
        )

    def _attach_parent(self, parent: ClassSymbol | None) -> None:
        self.parent_class = parent
        if parent is not None:
            self.module_name = parent.module_name


__all__ = ["AbstractSymbol", "ClassSymbol", "MethodSymbol"]
