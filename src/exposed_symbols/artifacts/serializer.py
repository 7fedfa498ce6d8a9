"""Persisting and loading the exposed symbols index.

The persisted form is a nested mapping with the keys ``purposes``,
``method_purposes``, ``classes`` and ``methods``. Insertion order is kept on
both sides, so a fixed discovery order always produces the same bytes.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import orjson
from pydantic import ValidationError

from exposed_symbols.artifacts.models.records import ClassRecord, MethodRecord
from exposed_symbols.artifacts.utils import _dump_json, _write_bytes_atomic
from exposed_symbols.contract.artifacts import (
    CLASS_PURPOSES_KEY,
    CLASSES_KEY,
    EXPOSED_SYMBOLS_JSON,
    METHOD_PURPOSES_KEY,
    METHODS_KEY,
)
from exposed_symbols.errors import ArtifactFormatError, ArtifactNotFoundError
from exposed_symbols.index.exposed import ExposedSymbolsIndex
from exposed_symbols.index.purposes import PurposeIndex

logger = logging.getLogger(__name__)

IndexSource = ExposedSymbolsIndex | Mapping[str, Any] | Path | str


def index_to_dict(index: ExposedSymbolsIndex) -> dict[str, Any]:
    """Flatten ``index`` into its persisted nested-mapping form."""
    return {
        CLASS_PURPOSES_KEY: index.class_purposes.to_dict(),
        METHOD_PURPOSES_KEY: index.method_purposes.to_dict(),
        CLASSES_KEY: {
            name: record.to_artifact() for name, record in index.classes.items()
        },
        METHODS_KEY: {
            name: record.to_artifact() for name, record in index.methods.items()
        },
    }


def index_from_dict(data: Mapping[str, Any]) -> ExposedSymbolsIndex:
    """Rebuild an index from its persisted form. Missing sections are empty.

    Raises:
        ArtifactFormatError: If a section or record has the wrong shape.
    """
    try:
        return ExposedSymbolsIndex(
            class_purposes=PurposeIndex.from_dict(data.get(CLASS_PURPOSES_KEY) or {}),
            method_purposes=PurposeIndex.from_dict(
                data.get(METHOD_PURPOSES_KEY) or {}
            ),
            classes={
                name: ClassRecord.from_artifact(name, info or {})
                for name, info in (data.get(CLASSES_KEY) or {}).items()
            },
            methods={
                name: MethodRecord.from_artifact(name, info or {})
                for name, info in (data.get(METHODS_KEY) or {}).items()
            },
        )
    except (AttributeError, TypeError, ValidationError) as exc:
        msg = f"Malformed exposed symbols data: {exc}"
        raise ArtifactFormatError(msg) from exc


def dump_index(index: ExposedSymbolsIndex) -> bytes:
    return _dump_json(index_to_dict(index))


def write_index(path: Path, index: ExposedSymbolsIndex) -> Path:
    """Write ``index`` to ``path`` atomically and return the path."""
    _write_bytes_atomic(path, dump_index(index))
    logger.debug("Wrote exposed symbols artifact to %s", path)
    return path


def resolve_artifact_path(path: Path | str) -> Path:
    """Return the artifact file for ``path``, which may name its directory."""
    candidate = Path(path)
    if candidate.is_dir():
        candidate = candidate / EXPOSED_SYMBOLS_JSON
    if not candidate.is_file():
        msg = f"Could not find exposed symbols artifact: {candidate}"
        raise ArtifactNotFoundError(msg)
    return candidate


def load_index(source: IndexSource) -> ExposedSymbolsIndex:
    """Load an index from a file, a directory, a mapping or an existing index.

    Raises:
        ArtifactNotFoundError: If ``source`` is a path that does not exist.
        ArtifactFormatError: If the artifact cannot be decoded.
    """
    if isinstance(source, ExposedSymbolsIndex):
        return source
    if isinstance(source, Mapping):
        return index_from_dict(source)
    if not isinstance(source, (str, Path)):
        msg = f"Unsupported exposed symbols source: {type(source).__name__}"
        raise ArtifactNotFoundError(msg)

    path = resolve_artifact_path(source)
    try:
        data = orjson.loads(path.read_bytes())
    except orjson.JSONDecodeError as exc:
        msg = f"Invalid JSON in {path}: {exc}"
        raise ArtifactFormatError(msg) from exc

    if not isinstance(data, dict):
        msg = f"Exposed symbols artifact {path} is not a JSON object"
        raise ArtifactFormatError(msg)
    return index_from_dict(data)


__all__ = [
    "dump_index",
    "index_from_dict",
    "index_to_dict",
    "load_index",
    "resolve_artifact_path",
    "write_index",
]
