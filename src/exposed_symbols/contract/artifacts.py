"""Exposed symbols artifact contract definitions.

This module defines the stable boundary between the discovery step that
writes the artifact and the query layer that reads it.
"""

from __future__ import annotations

from dataclasses import dataclass

# Artifact filename constant (stable contract identifier).
EXPOSED_SYMBOLS_JSON = "exposed_symbols.json"

# Top-level keys of the persisted index.
CLASS_PURPOSES_KEY = "purposes"
METHOD_PURPOSES_KEY = "method_purposes"
CLASSES_KEY = "classes"
METHODS_KEY = "methods"

# Reserved purpose tree key holding a node's own bucket of names.
BUCKET_KEY = "#"


@dataclass(frozen=True)
class ArtifactSpec:
    """Specification for a generated artifact."""

    filename: str
    format: str
    required_fields_note: str


ARTIFACT_SPECS: dict[str, ArtifactSpec] = {
    "exposed_symbols": ArtifactSpec(
        filename=EXPOSED_SYMBOLS_JSON,
        format="json",
        required_fields_note=(
            "Nested index with purposes, method_purposes, classes and methods."
        ),
    ),
}
