"""Capability contracts a class implements to be exposed to the symbol index."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Flag
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


class MethodFilter(Flag):
    """Selects which methods of an ``ExposeClassMethods`` class are indexed.

    The modifier bits (PUBLIC, PROTECTED, PRIVATE, STATIC, ABSTRACT, FINAL)
    select methods carrying any of them. STATIC and OBJECTIVE additionally
    restrict to class-level or instance methods.
    """

    PUBLIC = 1
    PROTECTED = 2
    PRIVATE = 4
    STATIC = 16
    FINAL = 32
    ABSTRACT = 64
    OBJECTIVE = 2048
    EXCLUDE_MAGIC = 4096
    PURPOSED_ONLY = 8192

    PUBLIC_STATIC = PUBLIC | STATIC
    PUBLIC_OBJECTIVE = PUBLIC | OBJECTIVE


MODIFIER_FILTERS = (
    MethodFilter.PUBLIC
    | MethodFilter.PROTECTED
    | MethodFilter.PRIVATE
    | MethodFilter.STATIC
    | MethodFilter.ABSTRACT
    | MethodFilter.FINAL
)


class ExposeClass(ABC):
    """Marks a class for inclusion in the exposed symbols index."""

    @classmethod
    @abstractmethod
    def get_purposes(cls) -> Iterable[str]:
        """Return the dot-separated purpose tags this class is registered under."""
        return ()


class ExposeClassMethods(ABC):
    """Marks an exposed class whose methods are indexed as well."""

    @classmethod
    @abstractmethod
    def get_method_filter_options(cls) -> MethodFilter:
        """Return the filter selecting which declared methods are indexed.

        Abstract intermediate classes that leave this unimplemented are
        reflected with public, non-magic methods.
        """
        return MethodFilter.PUBLIC | MethodFilter.EXCLUDE_MAGIC


CAPABILITY_MARKERS: tuple[type, ...] = (ExposeClass, ExposeClassMethods, ABC)


__all__ = [
    "CAPABILITY_MARKERS",
    "MODIFIER_FILTERS",
    "ExposeClass",
    "ExposeClassMethods",
    "MethodFilter",
]
