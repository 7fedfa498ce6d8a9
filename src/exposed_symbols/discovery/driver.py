"""Discovery of exposed classes in a source tree."""

from __future__ import annotations

import importlib
import logging
import re
import sys
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from exposed_symbols.errors import ReflectionError, UnresolvableTypeError
from exposed_symbols.index.exposed import ExposedSymbolsIndex
from exposed_symbols.parse.treesitter_classes import extract_class_names
from exposed_symbols.reflect.reflector import Reflector
from exposed_symbols.rules.config import DEFAULT_FILE_PATTERN
from exposed_symbols.utils import normalize_class_name, path_to_module

if TYPE_CHECKING:
    from collections.abc import Iterator

    from exposed_symbols.scan.files import SourceFile, SourceTree

logger = logging.getLogger(__name__)

_CLASS_STATEMENT = re.compile(r"^[ \t]*class\s+([A-Za-z_]\w*)", re.MULTILINE)


@dataclass
class DiscoveryResult:
    """Outcome of one discovery run.

    ``reflections`` maps the qualified name of every resolved class, exposed
    or not, to the live class. It serves later build steps of the same run
    and is never persisted.
    """

    index: ExposedSymbolsIndex = field(default_factory=ExposedSymbolsIndex)
    reflections: dict[str, type] = field(default_factory=dict)
    failures: list[str] = field(default_factory=list)


@contextmanager
def _import_root(root: Path) -> Iterator[None]:
    entry = str(root)
    sys.path.insert(0, entry)
    importlib.invalidate_caches()
    try:
        yield
    finally:
        try:
            sys.path.remove(entry)
        except ValueError:
            pass


def _module_locations(module: object) -> list[str]:
    locations = [getattr(module, "__file__", None) or ""]
    locations.extend(str(entry) for entry in getattr(module, "__path__", None) or ())
    return [location for location in locations if location]


@contextmanager
def _scoped_imports(roots: list[Path]) -> Iterator[None]:
    """Unload the modules first imported from ``roots`` once the block exits.

    Classes already resolved stay usable; the next run imports the files
    afresh and sees their current contents.
    """
    resolved = [root.resolve() for root in roots]
    before = set(sys.modules)
    try:
        yield
    finally:
        for name in set(sys.modules) - before:
            locations = _module_locations(sys.modules[name])
            if any(
                Path(location).resolve().is_relative_to(root)
                for location in locations
                for root in resolved
            ):
                del sys.modules[name]
        importlib.invalidate_caches()


def declared_class_name(file_name: str, source: str) -> str | None:
    """Return the top-level class declared after the file, if any.

    The file stem and the class name are compared ignoring case and
    underscores, so ``log_handler.py`` may declare ``LogHandler``. A cheap
    textual check runs before the source is parsed.
    """
    expected = normalize_class_name(file_name.rsplit(".", 1)[0])
    candidates = _CLASS_STATEMENT.findall(source)
    if not any(normalize_class_name(name) == expected for name in candidates):
        return None

    for name in extract_class_names(source.encode("utf-8")):
        if normalize_class_name(name) == expected:
            return name
    return None


def _lookup(module_name: str, class_name: str) -> type | None:
    module = sys.modules.get(module_name)
    if module is None:
        return None
    candidate = getattr(module, class_name, None)
    return candidate if isinstance(candidate, type) else None


class DiscoveryDriver:
    """Walks a source tree and indexes every class implementing ``ExposeClass``."""

    def __init__(
        self,
        source_tree: SourceTree,
        *,
        file_pattern: str = DEFAULT_FILE_PATTERN,
        reflector: Reflector | None = None,
    ) -> None:
        self.source_tree = source_tree
        self.file_pattern = file_pattern
        self.reflector = reflector or Reflector()

    def run(self) -> DiscoveryResult:
        """Scan every source file once and return the complete index.

        Failures are isolated per file: they are logged, recorded in
        ``DiscoveryResult.failures`` and the scan continues.
        Modules imported from the search roots are unloaded afterwards.
        """
        result = DiscoveryResult()

        with _scoped_imports(self.source_tree.search_roots):
            for source in self.source_tree.yield_source_files(self.file_pattern):
                try:
                    self._process(source, result)
                except UnresolvableTypeError as exc:
                    logger.error("%s", exc)
                    result.failures.append(source.relative_path)
                except ReflectionError as exc:
                    logger.error("%s", exc)
                    result.failures.append(source.relative_path)
                except Exception as exc:
                    logger.error("E: %s: %s", source.relative_path, exc)
                    result.failures.append(source.relative_path)

        logger.info(
            "Indexed %d exposed classes and %d methods (%d failures)",
            len(result.index.classes),
            len(result.index.methods),
            len(result.failures),
        )
        return result

    def _process(self, source: SourceFile, result: DiscoveryResult) -> None:
        text = source.path.read_text(encoding="utf-8")

        class_name = declared_class_name(source.path.name, text)
        if class_name is None:
            logger.debug("No class declared by %s", source.relative_path)
            return

        module_name = path_to_module(source.relative_path)
        cls = self.resolve(module_name, class_name, source)
        qualified_name = f"{module_name}.{class_name}" if module_name else class_name
        result.reflections[qualified_name] = cls

        reflection = self.reflector.reflect(
            cls,
            text,
            module_name=self.source_tree.is_file_part_of_module(source),
        )
        if reflection is None:
            logger.debug("%s is not exposed", qualified_name)
            return

        result.index.add_class(reflection.record, reflection.purposes)
        for method_record, purposes in reflection.methods:
            result.index.add_method(method_record, purposes)

    def resolve(self, module_name: str, class_name: str, source: SourceFile) -> type:
        """Return the class, importing its file once if it is not loaded yet.

        Raises:
            UnresolvableTypeError: If the class is still missing after the load.
        """
        for attempt in range(2):
            cls = _lookup(module_name, class_name)
            if cls is not None:
                return cls
            if attempt == 0:
                with _import_root(source.search_root):
                    importlib.import_module(module_name)

        raise UnresolvableTypeError(f"{module_name}.{class_name}", source.path)


__all__ = ["DiscoveryDriver", "DiscoveryResult", "declared_class_name"]
