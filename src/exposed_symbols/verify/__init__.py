"""Determinism verification of the exposed symbols artifact."""

from exposed_symbols.verify.verify import DeterminismResult, verify_determinism

__all__ = ["DeterminismResult", "verify_determinism"]
