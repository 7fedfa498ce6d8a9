"""Stable contract surface for exposed-symbols.

Application classes import the capability markers from here; the artifact
constants describe the file shared by discovery and the query layer.
"""

from exposed_symbols.contract.artifacts import (
    ARTIFACT_SPECS,
    BUCKET_KEY,
    EXPOSED_SYMBOLS_JSON,
    ArtifactSpec,
)
from exposed_symbols.contract.capabilities import (
    ExposeClass,
    ExposeClassMethods,
    MethodFilter,
)


def __getattr__(name: str) -> object:
    if name in {"ValidationMessage", "ValidationResult", "validate_artifacts"}:
        from exposed_symbols.contract.validation import (
            ValidationMessage,
            ValidationResult,
            validate_artifacts,
        )

        return {
            "ValidationMessage": ValidationMessage,
            "ValidationResult": ValidationResult,
            "validate_artifacts": validate_artifacts,
        }[name]

    msg = f"module 'exposed_symbols.contract' has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "ARTIFACT_SPECS",
    "BUCKET_KEY",
    "EXPOSED_SYMBOLS_JSON",
    "ArtifactSpec",
    "ExposeClass",
    "ExposeClassMethods",
    "MethodFilter",
    "ValidationMessage",
    "ValidationResult",
    "validate_artifacts",
]
