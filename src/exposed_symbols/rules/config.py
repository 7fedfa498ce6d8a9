from __future__ import annotations

import re
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from exposed_symbols.errors import ConfigError

CONFIG_FILENAME = "expose.toml"

DEFAULT_FILE_PATTERN = r"^[A-Za-z_][A-Za-z_0-9]*\.py$"


class ModuleDef(BaseModel):
    """Definition of a framework module grouping exposed classes."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(description="Module name (e.g., 'Contact', 'Admin')")
    globs: list[str] = Field(
        description="Glob patterns for files belonging to this module"
    )


class ExposeConfig(BaseModel):
    """Configuration for exposed symbols discovery."""

    model_config = ConfigDict(extra="forbid")

    output_dir: str = Field(
        default=".expose",
        description="Output directory for the generated artifact",
    )
    search_paths: list[str] = Field(
        default_factory=lambda: ["."],
        description="Directories to scan, relative to the root; each is an import root",
    )
    file_pattern: str = Field(
        default=DEFAULT_FILE_PATTERN,
        description="Regular expression a file name must match to be scanned",
    )
    include: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to include (empty = all matching files)",
    )
    exclude: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to exclude",
    )
    modules: list[ModuleDef] = Field(
        default_factory=list,
        description="Module membership definitions (first match wins)",
    )
    nested_gitignore: bool = Field(
        default=False,
        description=(
            "Enable nested .gitignore composition (default: false for root-only)"
        ),
    )

    @field_validator("file_pattern")
    @classmethod
    def validate_file_pattern(cls, v: Any) -> Any:
        """Reject file patterns that are not valid regular expressions."""
        try:
            re.compile(v)
        except re.error as e:
            msg = f"Invalid file_pattern {v!r}: {e}"
            raise ValueError(msg) from e
        return v

    @field_validator("search_paths")
    @classmethod
    def validate_search_paths(cls, v: list[str]) -> list[str]:
        if not v:
            msg = "search_paths must list at least one directory"
            raise ValueError(msg)
        for entry in v:
            if not entry or Path(entry).is_absolute() or entry.startswith("~"):
                msg = f"search path {entry!r} must be a relative path within the root"
                raise ValueError(msg)
        return v


def _resolve_within_root(root: Path, relative: str, label: str) -> Path:
    if not relative:
        msg = f"{label} must be a non-empty relative path"
        raise ConfigError(msg)

    if relative.startswith("~"):
        msg = f"{label} must be a relative path within the repo root"
        raise ConfigError(msg)

    relative_path = Path(relative)
    if relative_path.is_absolute():
        msg = f"{label} must be a relative path within the repo root"
        raise ConfigError(msg)

    try:
        resolved_root = root.resolve()
        resolved = (resolved_root / relative_path).resolve()
    except OSError as exc:
        msg = f"Failed to resolve {label} '{relative}': {exc}"
        raise ConfigError(msg) from exc

    try:
        resolved.relative_to(resolved_root)
    except ValueError as exc:
        msg = f"{label} '{relative}' escapes the repository root"
        raise ConfigError(msg) from exc

    return resolved


def resolve_output_dir(root: Path, output_dir: str) -> Path:
    """Resolve a config-provided output_dir safely within the repo root.

    The config output_dir must be a non-empty relative path that remains
    within the repository root after resolution. Absolute paths and paths
    that escape the root are rejected.
    """
    return _resolve_within_root(root, output_dir, "output_dir")


def resolve_search_paths(root: Path, search_paths: list[str]) -> list[Path]:
    """Resolve every configured search path, rejecting ones outside the root."""
    return [
        _resolve_within_root(root, entry, "search path") for entry in search_paths
    ]


def load_config(root: Path) -> ExposeConfig:
    """Load configuration from expose.toml if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return ExposeConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return ExposeConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "ExposeConfig",
    "ModuleDef",
    "load_config",
    "resolve_output_dir",
    "resolve_search_paths",
]
