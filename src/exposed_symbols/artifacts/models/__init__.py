"""Model namespace for exposed symbols artifact records."""

from exposed_symbols.artifacts.models.records import ClassRecord, MethodRecord

__all__ = ["ClassRecord", "MethodRecord"]
