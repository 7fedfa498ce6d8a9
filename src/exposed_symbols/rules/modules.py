"""Module membership classification."""

from __future__ import annotations

from fnmatch import fnmatch
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from exposed_symbols.rules.config import ModuleDef


def classify_module(path: str, modules: list[ModuleDef]) -> str | None:
    """Return the framework module a file belongs to, if any.

    Uses first-match-wins semantics: the first module definition whose
    glob patterns match the path determines the module.
    """
    for module_def in modules:
        for glob_pattern in module_def.globs:
            if fnmatch(path, glob_pattern):
                return module_def.name
    return None
