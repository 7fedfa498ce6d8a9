"""In-memory form of the complete exposed symbols index."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from exposed_symbols.index.purposes import PurposeIndex

if TYPE_CHECKING:
    from collections.abc import Iterable

    from exposed_symbols.artifacts.models.records import ClassRecord, MethodRecord

logger = logging.getLogger(__name__)


def _register_all(tree: PurposeIndex, purposes: Iterable[str], name: str) -> None:
    for purpose in purposes:
        try:
            tree.register(purpose, name)
        except ValueError as exc:
            logger.warning("Ignoring purpose of %s: %s", name, exc)


@dataclass
class ExposedSymbolsIndex:
    """Purpose trees plus flat class and method records, keyed by qualified name."""

    class_purposes: PurposeIndex = field(default_factory=PurposeIndex)
    method_purposes: PurposeIndex = field(default_factory=PurposeIndex)
    classes: dict[str, ClassRecord] = field(default_factory=dict)
    methods: dict[str, MethodRecord] = field(default_factory=dict)

    def add_class(self, record: ClassRecord, purposes: Iterable[str] = ()) -> None:
        _register_all(self.class_purposes, purposes, record.qualified_name)
        self.classes[record.qualified_name] = record

    def add_method(self, record: MethodRecord, purposes: Iterable[str] = ()) -> None:
        _register_all(self.method_purposes, purposes, record.qualified_name)
        self.methods[record.qualified_name] = record
