"""Validation helpers for the exposed symbols artifact."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import orjson
from pydantic import ValidationError

from exposed_symbols.artifacts.models.records import ClassRecord, MethodRecord
from exposed_symbols.contract.artifacts import (
    ARTIFACT_SPECS,
    BUCKET_KEY,
    CLASS_PURPOSES_KEY,
    CLASSES_KEY,
    METHOD_PURPOSES_KEY,
    METHODS_KEY,
)
from exposed_symbols.utils import join_method_name

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

_KNOWN_KEYS = (CLASS_PURPOSES_KEY, METHOD_PURPOSES_KEY, CLASSES_KEY, METHODS_KEY)


@dataclass(frozen=True)
class ValidationMessage:
    artifact: str
    path: Path
    message: str
    key: str | None = None

    def location(self) -> str:
        if self.key is None:
            return str(self.path)
        return f"{self.path}#{self.key}"


@dataclass
class ValidationResult:
    errors: list[ValidationMessage] = field(default_factory=list)
    warnings: list[ValidationMessage] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


@dataclass
class _Checker:
    artifact: str
    path: Path
    result: ValidationResult

    def error(self, message: str, key: str | None = None) -> None:
        self.result.errors.append(
            ValidationMessage(
                artifact=self.artifact, path=self.path, message=message, key=key
            )
        )

    def warning(self, message: str, key: str | None = None) -> None:
        self.result.warnings.append(
            ValidationMessage(
                artifact=self.artifact, path=self.path, message=message, key=key
            )
        )


def validate_artifacts(artifacts_dir: Path) -> ValidationResult:
    result = ValidationResult()

    if not artifacts_dir.exists():
        result.errors.append(
            ValidationMessage(
                artifact="artifacts_dir",
                path=artifacts_dir,
                message="Artifacts directory does not exist.",
            )
        )
        return result

    if not artifacts_dir.is_dir():
        result.errors.append(
            ValidationMessage(
                artifact="artifacts_dir",
                path=artifacts_dir,
                message="Artifacts path is not a directory.",
            )
        )
        return result

    for artifact_name, spec in ARTIFACT_SPECS.items():
        checker = _Checker(artifact_name, artifacts_dir / spec.filename, result)
        if not checker.path.exists():
            checker.error("Required artifact file is missing.")
            continue
        _validate_exposed_symbols(checker)

    return result


def _validate_exposed_symbols(checker: _Checker) -> None:
    try:
        raw = orjson.loads(checker.path.read_bytes())
    except (OSError, orjson.JSONDecodeError) as exc:
        checker.error(f"Invalid JSON: {exc}.")
        return

    if not isinstance(raw, dict):
        checker.error("Expected JSON object for the exposed symbols index.")
        return

    for key in raw:
        if key not in _KNOWN_KEYS:
            checker.warning("Unknown top-level key is ignored.", key)

    sections: dict[str, dict[str, Any]] = {}
    for key in _KNOWN_KEYS:
        section = raw.get(key, {})
        if not isinstance(section, dict):
            checker.error("Expected a JSON object.", key)
            section = {}
        sections[key] = section

    classes = _validate_records(checker, sections[CLASSES_KEY], ClassRecord, CLASSES_KEY)
    methods = _validate_records(checker, sections[METHODS_KEY], MethodRecord, METHODS_KEY)

    for name, record in classes.items():
        for method_name in record.method_names:
            if join_method_name(name, method_name) not in methods:
                checker.error(
                    f"Listed method {method_name!r} has no method record.",
                    f"{CLASSES_KEY}.{name}",
                )

    for name, method in methods.items():
        if not method.name:
            checker.error("Method key must have the form Class::method.", name)
        elif method.class_name not in classes:
            checker.error(f"Owning class {method.class_name!r} is not exposed.", name)

    _validate_tree(checker, sections[CLASS_PURPOSES_KEY], CLASS_PURPOSES_KEY, classes)
    _validate_tree(checker, sections[METHOD_PURPOSES_KEY], METHOD_PURPOSES_KEY, methods)


def _validate_records(
    checker: _Checker,
    section: dict[str, Any],
    model: type[ClassRecord] | type[MethodRecord],
    section_key: str,
) -> dict[str, Any]:
    records: dict[str, Any] = {}
    for name, data in section.items():
        if not isinstance(data, dict):
            checker.error("Expected a JSON object.", f"{section_key}.{name}")
            continue
        try:
            records[name] = model.from_artifact(name, data)
        except ValidationError as exc:
            checker.error(
                f"Schema validation failed: {exc}.", f"{section_key}.{name}"
            )
    return records


def _iter_tree(
    node: dict[str, Any], path: str
) -> Iterator[tuple[str, Any, Any]]:
    for token, child in node.items():
        if token == BUCKET_KEY:
            continue
        child_path = f"{path}.{token}"
        yield child_path, token, child
        if isinstance(child, dict):
            yield from _iter_tree(child, child_path)


def _validate_tree(
    checker: _Checker, tree: dict[str, Any], section_key: str, known: dict[str, Any]
) -> None:
    if BUCKET_KEY in tree:
        checker.error("The root of a purpose tree cannot hold names.", section_key)

    for path, token, node in _iter_tree(tree, section_key):
        if not isinstance(node, dict):
            checker.error("Expected a JSON object.", path)
            continue
        if token != token.upper() or "." in token:
            checker.error("Purpose tokens must be uppercase and dot free.", path)

        bucket = node.get(BUCKET_KEY, [])
        if not isinstance(bucket, list):
            checker.error("Purpose bucket must be a list of names.", path)
            continue
        for name in bucket:
            if name not in known:
                checker.error(f"Registered name {name!r} has no record.", path)


__all__ = [
    "ValidationMessage",
    "ValidationResult",
    "validate_artifacts",
]
