"""File scanning utilities for exposed symbols discovery."""

from __future__ import annotations

import re
from dataclasses import dataclass
from fnmatch import fnmatch
from typing import TYPE_CHECKING, cast

from gitignore_parser import parse_gitignore  # type: ignore[import-untyped]

from exposed_symbols.rules.config import DEFAULT_FILE_PATTERN
from exposed_symbols.rules.modules import classify_module

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator
    from pathlib import Path

    from exposed_symbols.rules.config import ModuleDef


@dataclass(frozen=True)
class SourceFile:
    """A scanned file together with the search root it was found under."""

    path: Path
    search_root: Path

    @property
    def relative_path(self) -> str:
        return self.path.relative_to(self.search_root).as_posix()


def _should_include_file(
    path: Path,
    directory: Path,
    output_dir: str,
    gitignore_matches: Callable[[str], bool] | None,
    include_patterns: list[str] | None,
    exclude_patterns: list[str] | None,
) -> bool:
    """Check if a file should be included based on all filtering rules."""
    if not path.is_file() or path.is_symlink():
        return False

    if not _is_within_root(path, directory):
        return False

    try:
        rel_path = path.relative_to(directory)
    except ValueError:
        return False

    rel_path_str = rel_path.as_posix()

    if output_dir and rel_path.parts and rel_path.parts[0] == output_dir:
        return False

    if gitignore_matches is not None and gitignore_matches(str(path)):
        return False

    if include_patterns and not any(
        fnmatch(rel_path_str, pat) for pat in include_patterns
    ):
        return False

    has_excluded_match = exclude_patterns and any(
        fnmatch(rel_path_str, pat) for pat in exclude_patterns
    )
    return not has_excluded_match


def _is_within_root(path: Path, root: Path) -> bool:
    """Return True when the resolved path stays within the resolved root."""
    try:
        root_resolved = root.resolve()
        path_resolved = path.resolve()
    except OSError:
        return False

    try:
        path_resolved.relative_to(root_resolved)
    except ValueError:
        return False

    return True


def _iter_gitignore_files(root: Path) -> list[Path]:
    """Return sorted list of .gitignore files under root (including root)."""
    gitignore_paths = [root / ".gitignore"]
    gitignore_paths.extend(root.rglob(".gitignore"))
    unique_paths = {
        path for path in gitignore_paths if path.is_file() and not path.is_symlink()
    }
    return sorted(unique_paths, key=lambda p: p.relative_to(root).as_posix())


def _build_gitignore_matcher(
    root: Path,
    *,
    nested_gitignore: bool,
) -> Callable[[str], bool] | None:
    if not nested_gitignore:
        gitignore_path = root / ".gitignore"
        if gitignore_path.is_file():
            return cast("Callable[[str], bool]", parse_gitignore(gitignore_path))
        return None

    gitignore_paths = _iter_gitignore_files(root)
    if not gitignore_paths:
        return None

    matchers = [parse_gitignore(path) for path in gitignore_paths]

    def matches(path_str: str) -> bool:
        for matcher in matchers:
            try:
                if matcher(path_str):
                    return True
            except ValueError:
                continue
        return False

    return matches


def find_source_files(
    directory: Path,
    *,
    file_pattern: str = DEFAULT_FILE_PATTERN,
    output_dir: str = ".expose",
    include_patterns: list[str] | None = None,
    exclude_patterns: list[str] | None = None,
    nested_gitignore: bool = False,
) -> Iterator[Path]:
    """Find source files whose name matches ``file_pattern``, respecting .gitignore.

    Args:
        directory: Directory to search
        file_pattern: Regular expression matched against each file name
            (case-insensitive)
        output_dir: Directory name to skip (default ".expose")
        include_patterns: Optional list of fnmatch patterns; if provided,
            files must match at least one pattern to be included
        exclude_patterns: Optional list of fnmatch patterns; files matching
            any pattern are excluded

    Yields:
        Path objects for each matching file, sorted lexicographically
        by relative path for deterministic ordering.
    """
    name_regex = re.compile(file_pattern, re.IGNORECASE)
    gitignore_matches = _build_gitignore_matcher(
        directory,
        nested_gitignore=nested_gitignore,
    )

    matched_files = [
        path
        for path in directory.rglob("*")
        if name_regex.search(path.name)
        and _should_include_file(
            path,
            directory,
            output_dir,
            gitignore_matches,
            include_patterns,
            exclude_patterns,
        )
    ]

    matched_files.sort(key=lambda p: p.relative_to(directory).as_posix())

    yield from matched_files


class SourceTree:
    """Enumerates source files under a set of search roots.

    Also answers which configured framework module a file belongs to.
    """

    def __init__(
        self,
        search_roots: Iterable[Path],
        *,
        output_dir: str = ".expose",
        include_patterns: list[str] | None = None,
        exclude_patterns: list[str] | None = None,
        nested_gitignore: bool = False,
        modules: list[ModuleDef] | None = None,
    ) -> None:
        self.search_roots = list(search_roots)
        self.output_dir = output_dir
        self.include_patterns = include_patterns
        self.exclude_patterns = exclude_patterns
        self.nested_gitignore = nested_gitignore
        self.modules = modules or []

    def yield_source_files(
        self,
        file_pattern: str = DEFAULT_FILE_PATTERN,
        search_roots: Iterable[Path] | None = None,
    ) -> Iterator[SourceFile]:
        """Yield matching files root by root, each root in sorted path order."""
        seen: set[Path] = set()
        for root in self.search_roots if search_roots is None else search_roots:
            if not root.is_dir():
                continue
            for path in find_source_files(
                root,
                file_pattern=file_pattern,
                output_dir=self.output_dir,
                include_patterns=self.include_patterns,
                exclude_patterns=self.exclude_patterns,
                nested_gitignore=self.nested_gitignore,
            ):
                resolved = path.resolve()
                if resolved in seen:
                    continue
                seen.add(resolved)
                yield SourceFile(path=path, search_root=root)

    def is_file_part_of_module(self, source: SourceFile) -> str | None:
        """Return the module name ``source`` belongs to, or None."""
        if not self.modules:
            return None
        return classify_module(source.relative_path, self.modules)


__all__ = ["SourceFile", "SourceTree", "_should_include_file", "find_source_files"]
