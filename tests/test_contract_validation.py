from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from exposed_symbols.contract.artifacts import EXPOSED_SYMBOLS_JSON
from exposed_symbols.contract.validation import (
    ValidationMessage,
    ValidationResult,
    validate_artifacts,
)


def _valid_index() -> dict[str, Any]:
    return {
        "purposes": {"JOB": {"#": [], "WORKER": {"#": ["app.Worker"]}}},
        "method_purposes": {"JOB": {"RUN": {"#": ["app.Worker::run"]}}},
        "classes": {"app.Worker": {"display": "Worker", "methodNames": ["run"]}},
        "methods": {"app.Worker::run": {"isPublic": True}},
    }


def _write(d: Path, data: object) -> None:
    d.mkdir(parents=True, exist_ok=True)
    (d / EXPOSED_SYMBOLS_JSON).write_text(json.dumps(data), encoding="utf-8")


def _messages_contain(messages: list[ValidationMessage], needle: str) -> bool:
    """Return True when any validation message contains the given substring."""
    return any(needle in message.message for message in messages)


def test_validation_message_location_with_key() -> None:
    msg = ValidationMessage("exposed_symbols", Path("x.json"), "bad", key="classes.a")
    assert msg.location() == "x.json#classes.a"


def test_validation_message_location_without_key() -> None:
    msg = ValidationMessage("exposed_symbols", Path("x.json"), "bad")
    assert msg.location() == "x.json"


def test_validation_result_ok() -> None:
    assert ValidationResult().ok
    result = ValidationResult(
        errors=[ValidationMessage("exposed_symbols", Path("x.json"), "bad")]
    )
    assert not result.ok


def test_valid_artifact_passes(tmp_path: Path) -> None:
    _write(tmp_path, _valid_index())

    result = validate_artifacts(tmp_path)

    assert result.ok
    assert result.warnings == []


def test_missing_directory(tmp_path: Path) -> None:
    result = validate_artifacts(tmp_path / "missing")

    assert _messages_contain(result.errors, "does not exist")


def test_path_is_not_a_directory(tmp_path: Path) -> None:
    path = tmp_path / "file.json"
    path.write_text("{}", encoding="utf-8")

    result = validate_artifacts(path)

    assert _messages_contain(result.errors, "not a directory")


def test_missing_artifact_file(tmp_path: Path) -> None:
    result = validate_artifacts(tmp_path)

    assert _messages_contain(result.errors, "Required artifact file is missing.")


def test_invalid_json(tmp_path: Path) -> None:
    (tmp_path / EXPOSED_SYMBOLS_JSON).write_text("{oops", encoding="utf-8")

    result = validate_artifacts(tmp_path)

    assert _messages_contain(result.errors, "Invalid JSON")


def test_non_object_root(tmp_path: Path) -> None:
    _write(tmp_path, ["not", "an", "object"])

    result = validate_artifacts(tmp_path)

    assert _messages_contain(result.errors, "Expected JSON object")


def test_unknown_key_is_a_warning(tmp_path: Path) -> None:
    data = _valid_index()
    data["generator"] = "other"
    _write(tmp_path, data)

    result = validate_artifacts(tmp_path)

    assert result.ok
    assert [warning.key for warning in result.warnings] == ["generator"]


def test_record_schema_errors(tmp_path: Path) -> None:
    data = _valid_index()
    data["classes"]["app.Worker"]["isAbstract"] = "sometimes"
    data["methods"]["app.Worker::run"] = "public"
    _write(tmp_path, data)

    result = validate_artifacts(tmp_path)

    assert _messages_contain(result.errors, "Schema validation failed")
    assert _messages_contain(result.errors, "Expected a JSON object.")


def test_cross_reference_errors(tmp_path: Path) -> None:
    data = _valid_index()
    data["classes"]["app.Worker"]["methodNames"] = ["run", "stop"]
    data["methods"]["app.Ghost::run"] = {}
    data["methods"]["app.Loose"] = {}
    _write(tmp_path, data)

    result = validate_artifacts(tmp_path)

    assert _messages_contain(result.errors, "Listed method 'stop' has no method record.")
    assert _messages_contain(result.errors, "Owning class 'app.Ghost' is not exposed.")
    assert _messages_contain(result.errors, "Class::method")


def test_purpose_tree_errors(tmp_path: Path) -> None:
    data = _valid_index()
    data["purposes"]["#"] = ["app.Worker"]
    data["purposes"]["job"] = {"#": ["app.Unknown"]}
    data["method_purposes"]["BROKEN"] = ["app.Worker::run"]
    _write(tmp_path, data)

    result = validate_artifacts(tmp_path)

    keys = {error.key for error in result.errors}
    assert "purposes" in keys
    assert "purposes.job" in keys
    assert "method_purposes.BROKEN" in keys
    assert _messages_contain(result.errors, "uppercase")
    assert _messages_contain(result.errors, "Registered name 'app.Unknown' has no record.")
