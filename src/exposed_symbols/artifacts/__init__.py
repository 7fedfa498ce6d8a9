"""Artifact generation entry points."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from exposed_symbols.rules.config import ExposeConfig


def generate_exposed_symbols(
    *,
    root: Path,
    out_dir: Path | None = None,
    config: ExposeConfig | None = None,
) -> dict[str, object]:
    """Generate the artifact via lazy import to avoid package import cycles."""
    from exposed_symbols.artifacts.write import (
        generate_exposed_symbols as _generate_exposed_symbols,
    )

    return _generate_exposed_symbols(root=root, out_dir=out_dir, config=config)


__all__ = ["generate_exposed_symbols"]
