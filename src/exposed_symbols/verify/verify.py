"""Reproducibility check for the exposed symbols artifact.

Discovery is re-run into a scratch directory and the result is compared
with what is on disk. A byte difference in the index is narrowed down to the
class and method names whose records differ.
"""

from __future__ import annotations

import filecmp
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from exposed_symbols.artifacts.serializer import load_index
from exposed_symbols.artifacts.write import generate_exposed_symbols
from exposed_symbols.contract.artifacts import EXPOSED_SYMBOLS_JSON
from exposed_symbols.errors import ArtifactFormatError


@dataclass(frozen=True)
class DeterminismResult:
    ok: bool
    mismatches: tuple[str, ...] = field(default_factory=tuple)
    missing: tuple[str, ...] = field(default_factory=tuple)
    extra: tuple[str, ...] = field(default_factory=tuple)
    changed_symbols: tuple[str, ...] = field(default_factory=tuple)


def _relative_files(root: Path) -> set[Path]:
    return {path.relative_to(root) for path in root.rglob("*") if path.is_file()}


def _diff_records(expected: dict[str, object], actual: dict[str, object]) -> set[str]:
    names = expected.keys() ^ actual.keys()
    names.update(
        name for name in expected.keys() & actual.keys() if expected[name] != actual[name]
    )
    return names


def changed_symbols(expected: Path, actual: Path) -> tuple[str, ...]:
    """Return the sorted names whose class or method records differ.

    Purpose-only differences are not listed; an unreadable artifact yields
    an empty tuple.
    """
    try:
        before = load_index(expected)
        after = load_index(actual)
    except ArtifactFormatError:
        return ()

    names = _diff_records(before.classes, after.classes)
    names |= _diff_records(before.methods, after.methods)
    return tuple(sorted(names))


def verify_determinism(*, root: Path, artifacts_dir: Path) -> DeterminismResult:
    """Check that regenerating the artifact reproduces ``artifacts_dir`` exactly.

    Paths in the result are relative to the artifacts directory.

    Raises:
        FileNotFoundError: If artifacts_dir does not exist.
        NotADirectoryError: If artifacts_dir is not a directory.
    """
    if not artifacts_dir.exists():
        msg = f"Artifacts directory does not exist: {artifacts_dir}"
        raise FileNotFoundError(msg)
    if not artifacts_dir.is_dir():
        msg = f"Artifacts path is not a directory: {artifacts_dir}"
        raise NotADirectoryError(msg)

    with tempfile.TemporaryDirectory() as temp_dir:
        regenerated_dir = Path(temp_dir)
        generate_exposed_symbols(root=root, out_dir=regenerated_dir)

        on_disk = _relative_files(artifacts_dir)
        regenerated = _relative_files(regenerated_dir)

        mismatches = sorted(
            str(path)
            for path in on_disk & regenerated
            if not filecmp.cmp(
                artifacts_dir / path, regenerated_dir / path, shallow=False
            )
        )

        symbols: tuple[str, ...] = ()
        if EXPOSED_SYMBOLS_JSON in mismatches:
            symbols = changed_symbols(
                artifacts_dir / EXPOSED_SYMBOLS_JSON,
                regenerated_dir / EXPOSED_SYMBOLS_JSON,
            )

    missing = sorted(str(path) for path in on_disk - regenerated)
    extra = sorted(str(path) for path in regenerated - on_disk)
    return DeterminismResult(
        ok=not (missing or extra or mismatches),
        mismatches=tuple(mismatches),
        missing=tuple(missing),
        extra=tuple(extra),
        changed_symbols=symbols,
    )
