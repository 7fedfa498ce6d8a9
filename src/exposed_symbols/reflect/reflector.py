"""Reflection of exposed classes into index records.

The reflector works on a live class object plus the text of the file that
declares it. Structural facts (bases, abstractness, method modifiers) come
from the class object; import aliases and docstring tags come from text.
"""

from __future__ import annotations

import inspect
import types
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Generic, Protocol

from exposed_symbols.artifacts.models.records import ClassRecord, MethodRecord
from exposed_symbols.contract.capabilities import (
    CAPABILITY_MARKERS,
    MODIFIER_FILTERS,
    ExposeClass,
    ExposeClassMethods,
    MethodFilter,
)
from exposed_symbols.errors import ReflectionError
from exposed_symbols.parse.ast_imports import extract_import_aliases
from exposed_symbols.parse.docblock import parse_doc_tags
from exposed_symbols.utils import join_method_name

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

CLASS_TAGS = frozenset({"display", "module"})
METHOD_TAGS = frozenset({"purpose", "display", "deprecated"})

# Capability hooks are part of the contract, not of the exposed API.
_CAPABILITY_HOOKS = frozenset({"get_purposes", "get_method_filter_options"})

# Annotation functions the compiler stores in a class namespace.
_GENERATED = frozenset({"__annotate__", "__annotate_func__"})

_SKIPPED_BASES: tuple[type, ...] = (object, Generic, Protocol, *CAPABILITY_MARKERS)

_BUILTIN_CALLABLES = (
    types.BuiltinFunctionType,
    types.MethodDescriptorType,
    types.WrapperDescriptorType,
    types.ClassMethodDescriptorType,
)


def qualified_name_of(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


def is_exposed(cls: object) -> bool:
    return isinstance(cls, type) and issubclass(cls, ExposeClass)


def exposes_methods(cls: type) -> bool:
    return issubclass(cls, ExposeClassMethods)


def _primary_base(cls: type) -> type | None:
    for base in cls.__bases__:
        if base in _SKIPPED_BASES:
            continue
        return base
    return None


def inheritance_chain(cls: type) -> list[str]:
    """Return the qualified names of the primary base chain, root first."""
    chain: list[str] = []
    parent = _primary_base(cls)
    while parent is not None:
        chain.insert(0, qualified_name_of(parent))
        parent = _primary_base(parent)
    return chain


def _own_doc(obj: object) -> str | None:
    doc = getattr(obj, "__doc__", None)
    if not isinstance(doc, str):
        return None
    return inspect.cleandoc(doc)


def is_magic(name: str) -> bool:
    return len(name) > 4 and name.startswith("__") and name.endswith("__")


@dataclass(frozen=True)
class DeclaredMethod:
    """A callable found in a class namespace, with its resolved modifiers."""

    name: str
    attribute: str
    member: Any
    function: Callable[..., Any]
    modifiers: MethodFilter

    @property
    def is_static(self) -> bool:
        return bool(self.modifiers & MethodFilter.STATIC)

    @property
    def is_internal(self) -> bool:
        return isinstance(self.function, _BUILTIN_CALLABLES)


def _unwrap(member: Any) -> Callable[..., Any] | None:
    if isinstance(member, (staticmethod, classmethod)):
        return member.__func__
    if inspect.isfunction(member) or isinstance(member, _BUILTIN_CALLABLES):
        return member
    return None


def _demangle(cls: type, attribute: str) -> tuple[str, bool]:
    prefix = f"_{cls.__name__.lstrip('_')}__"
    if attribute.startswith(prefix) and not attribute.endswith("__"):
        return "__" + attribute[len(prefix) :], True
    return attribute, False


def _flag(member: Any, function: Any, attribute: str) -> bool:
    return bool(getattr(member, attribute, False) or getattr(function, attribute, False))


def _modifiers(name: str, private: bool, member: Any, function: Any) -> MethodFilter:
    if private:
        modifiers = MethodFilter.PRIVATE
    elif name.startswith("_") and not is_magic(name):
        modifiers = MethodFilter.PROTECTED
    else:
        modifiers = MethodFilter.PUBLIC

    if isinstance(member, (staticmethod, classmethod)) or isinstance(
        function, types.ClassMethodDescriptorType
    ):
        modifiers |= MethodFilter.STATIC
    if _flag(member, function, "__isabstractmethod__"):
        modifiers |= MethodFilter.ABSTRACT
    if _flag(member, function, "__final__"):
        modifiers |= MethodFilter.FINAL
    return modifiers


def iter_declared_methods(cls: type) -> Iterator[DeclaredMethod]:
    """Yield the callables defined in ``cls`` itself, in definition order."""
    for attribute, member in vars(cls).items():
        if attribute in _GENERATED:
            continue
        function = _unwrap(member)
        if function is None:
            continue
        name, private = _demangle(cls, attribute)
        yield DeclaredMethod(
            name=name,
            attribute=attribute,
            member=member,
            function=function,
            modifiers=_modifiers(name, private, member, function),
        )


def method_passes_filter(method: DeclaredMethod, options: MethodFilter) -> bool:
    """Apply the modifier, static/objective and magic rules of ``options``."""
    selected = options & MODIFIER_FILTERS
    if selected and not (selected & method.modifiers):
        return False
    if options & MethodFilter.STATIC and not method.is_static:
        return False
    if options & MethodFilter.OBJECTIVE and method.is_static:
        return False
    return not (options & MethodFilter.EXCLUDE_MAGIC and is_magic(method.name))


def render_type(annotation: Any) -> str:
    """Render a return annotation as a qualified type name."""
    if isinstance(annotation, str):
        return annotation
    if annotation is None or annotation is type(None):
        return "None"
    if isinstance(annotation, type) and not isinstance(annotation, types.GenericAlias):
        if annotation.__module__ == "builtins":
            return annotation.__qualname__
        return qualified_name_of(annotation)
    return str(annotation).replace("typing.", "")


def return_type_of(function: Callable[..., Any]) -> str | None:
    try:
        annotations = inspect.get_annotations(function)
    except (TypeError, NameError):
        return None
    if "return" not in annotations:
        return None
    return render_type(annotations["return"])


@dataclass
class ReflectionResult:
    """Facts extracted from one exposed class."""

    record: ClassRecord
    purposes: list[str] = field(default_factory=list)
    methods: list[tuple[MethodRecord, list[str]]] = field(default_factory=list)


class Reflector:
    """Extracts class and method records from exposed classes."""

    def reflect(
        self,
        cls: type,
        source: str,
        *,
        module_name: str | None = None,
    ) -> ReflectionResult | None:
        """Reflect ``cls``, or return None if it does not implement ``ExposeClass``.

        Args:
            cls: The resolved class object
            source: Text of the file declaring ``cls``
            module_name: Externally computed module membership; overrides a
                ``@module`` docstring tag when given

        Raises:
            ReflectionError: If any fact cannot be extracted.
        """
        if not is_exposed(cls):
            return None

        qualified_name = qualified_name_of(cls)
        try:
            return self._reflect(cls, qualified_name, source, module_name)
        except ReflectionError:
            raise
        except Exception as exc:
            raise ReflectionError(qualified_name, exc) from exc

    def _reflect(
        self,
        cls: type,
        qualified_name: str,
        source: str,
        module_name: str | None,
    ) -> ReflectionResult:
        info: dict[str, Any] = {}
        for tag, value in parse_doc_tags(_own_doc(cls), CLASS_TAGS):
            info[tag] = value
        if module_name:
            info["module"] = module_name

        methods: list[tuple[MethodRecord, list[str]]] = []
        if exposes_methods(cls):
            methods = self._reflect_methods(cls, qualified_name)

        record = ClassRecord(
            qualified_name=qualified_name,
            inheritance=tuple(inheritance_chain(cls)),
            is_abstract=inspect.isabstract(cls),
            display_name=info.get("display"),
            module_name=info.get("module"),
            import_aliases=extract_import_aliases(source, cls.__module__),
            method_names=tuple(record.name for record, _ in methods),
        )
        return ReflectionResult(
            record=record, purposes=self._purposes(cls), methods=methods
        )

    def _purposes(self, cls: type) -> list[str]:
        purposes = cls.get_purposes()
        if isinstance(purposes, str):
            return [purposes]
        return [str(purpose) for purpose in purposes or ()]

    def _reflect_methods(
        self, cls: type, qualified_name: str
    ) -> list[tuple[MethodRecord, list[str]]]:
        options = MethodFilter(cls.get_method_filter_options())

        methods: list[tuple[MethodRecord, list[str]]] = []
        for method in iter_declared_methods(cls):
            if method.name in _CAPABILITY_HOOKS:
                continue
            if not method_passes_filter(method, options):
                continue

            tags = parse_doc_tags(_own_doc(method.function), METHOD_TAGS)
            purposes = [value for tag, value in tags if tag == "purpose"]
            if options & MethodFilter.PURPOSED_ONLY and not purposes:
                continue

            methods.append(
                (self._method_record(cls, qualified_name, method, tags), purposes)
            )
        return methods

    def _method_record(
        self,
        cls: type,
        qualified_name: str,
        method: DeclaredMethod,
        tags: list[tuple[str, str]],
    ) -> MethodRecord:
        display = None
        deprecated = _flag(method.member, method.function, "__deprecated__")
        for tag, value in tags:
            if tag == "display":
                display = value
            elif tag == "deprecated":
                deprecated = True

        modifiers = method.modifiers
        return MethodRecord(
            qualified_name=join_method_name(qualified_name, method.name),
            display_name=display,
            is_public=bool(modifiers & MethodFilter.PUBLIC),
            is_protected=bool(modifiers & MethodFilter.PROTECTED),
            is_private=bool(modifiers & MethodFilter.PRIVATE),
            is_static=method.is_static,
            is_abstract=bool(modifiers & MethodFilter.ABSTRACT),
            is_final=bool(modifiers & MethodFilter.FINAL),
            is_internal=method.is_internal,
            is_constructor=method.name in {"__init__", "__new__"},
            is_destructor=method.name == "__del__",
            is_deprecated=deprecated,
            return_type=return_type_of(method.function),
        )


__all__ = [
    "DeclaredMethod",
    "ReflectionResult",
    "Reflector",
    "inheritance_chain",
    "is_exposed",
    "iter_declared_methods",
    "method_passes_filter",
    "qualified_name_of",
]
