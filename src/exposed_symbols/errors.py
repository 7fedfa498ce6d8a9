"""Exception taxonomy for exposed-symbols."""

from __future__ import annotations


class ExposeError(Exception):
    """Base class for every error raised by exposed-symbols."""


class ConfigError(ExposeError):
    """Raised when config file exists but cannot be parsed."""


class ArtifactNotFoundError(ExposeError, FileNotFoundError):
    """Raised when a persisted symbols artifact cannot be located."""


class ArtifactFormatError(ExposeError, ValueError):
    """Raised when a persisted symbols artifact cannot be decoded."""


class UnresolvableTypeError(ExposeError):
    """Raised when a declared class cannot be loaded, even after loading its file."""

    def __init__(self, qualified_name: str, path: object | None = None) -> None:
        self.qualified_name = qualified_name
        self.path = path
        where = f" (from {path})" if path is not None else ""
        super().__init__(f"Class {qualified_name} not found{where}")


class ReflectionError(ExposeError):
    """Raised when facts cannot be extracted from a resolved class."""

    def __init__(self, qualified_name: str, reason: BaseException) -> None:
        self.qualified_name = qualified_name
        self.reason = reason
        super().__init__(f"Reflection of {qualified_name} failed: {reason}")


__all__ = [
    "ArtifactFormatError",
    "ArtifactNotFoundError",
    "ConfigError",
    "ExposeError",
    "ReflectionError",
    "UnresolvableTypeError",
]
