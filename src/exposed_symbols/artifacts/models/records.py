"""Record models for exposed classes and methods.

Records are the flat, persisted facts gathered during discovery. They are
keyed by qualified name in the artifact, so the name itself is excluded from
the dumped payload and re-attached on load.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from exposed_symbols.utils import split_method_name


class _ArtifactRecord(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    qualified_name: str = Field(exclude=True)

    def to_artifact(self) -> dict[str, Any]:
        """Dump using persisted keys, omitting unset flags and empty values."""
        payload = self.model_dump(mode="json", by_alias=True)
        return {key: value for key, value in payload.items() if value}

    @classmethod
    def from_artifact(cls, qualified_name: str, data: dict[str, Any]) -> Any:
        return cls.model_validate({**data, "qualified_name": qualified_name})


class ClassRecord(_ArtifactRecord):
    """An exposed class discovered in the source tree."""

    inheritance: tuple[str, ...] = Field(
        default=(), description="Ancestor qualified names, root first"
    )
    is_abstract: bool = Field(default=False, alias="isAbstract")
    display_name: str | None = Field(default=None, alias="display")
    module_name: str | None = Field(default=None, alias="module")
    import_aliases: dict[str, str] = Field(
        default_factory=dict,
        alias="imports",
        description="Bound import name -> qualified target",
    )
    method_names: tuple[str, ...] = Field(default=(), alias="methodNames")


class MethodRecord(_ArtifactRecord):
    """An exposed method, keyed as ``Class::method``."""

    display_name: str | None = Field(default=None, alias="display")
    is_public: bool = Field(default=False, alias="isPublic")
    is_protected: bool = Field(default=False, alias="isProtected")
    is_private: bool = Field(default=False, alias="isPrivate")
    is_static: bool = Field(default=False, alias="isStatic")
    is_abstract: bool = Field(default=False, alias="isAbstract")
    is_final: bool = Field(default=False, alias="isFinal")
    is_internal: bool = Field(default=False, alias="isInternal")
    is_constructor: bool = Field(default=False, alias="isConstructor")
    is_destructor: bool = Field(default=False, alias="isDestructor")
    is_deprecated: bool = Field(default=False, alias="isDeprecated")
    return_type: str | None = Field(default=None, alias="return")

    @property
    def class_name(self) -> str:
        return split_method_name(self.qualified_name)[0]

    @property
    def name(self) -> str:
        return split_method_name(self.qualified_name)[1]


__all__ = ["ClassRecord", "MethodRecord"]
