"""AST-based import analysis for exposed classes."""

from __future__ import annotations

import ast


def resolve_relative_import(
    importing_module: str,
    relative_module: str,
    level: int,
) -> str:
    """Resolve a relative import to an absolute module name.

    Args:
        importing_module: The module doing the import (e.g., "pkg.sub.mod")
        relative_module: The relative module name (e.g., "foo" from ".foo")
        level: Number of dots (1 for ".", 2 for "..", etc.)

    Returns:
        Absolute module name (e.g., "pkg.sub.foo")

    Examples:
        >>> resolve_relative_import("pkg.sub.mod", "foo", 1)
        'pkg.sub.foo'
        >>> resolve_relative_import("pkg.sub.mod", "", 1)
        'pkg.sub'
        >>> resolve_relative_import("pkg.sub.mod", "bar", 2)
        'pkg.bar'
    """
    parts = importing_module.split(".")

    if level > len(parts):
        return relative_module or importing_module

    base_parts = parts[: len(parts) - level]

    if relative_module:
        return ".".join([*base_parts, relative_module])
    if base_parts:
        return ".".join(base_parts)
    return importing_module


def _process_import_node(node: ast.Import, aliases: dict[str, str]) -> None:
    """Process a standard import node (import x.y [as z])."""
    for name in node.names:
        if name.asname:
            aliases[name.asname] = name.name
        else:
            # `import a.b` binds only the top-level package name.
            top_level = name.name.split(".", 1)[0]
            aliases[top_level] = top_level


def _process_import_from_node(
    node: ast.ImportFrom, aliases: dict[str, str], module_name: str
) -> None:
    """Process a from-import node (from x import y [as z])."""
    module = node.module or ""
    if node.level > 0:
        module = resolve_relative_import(module_name, module, node.level)

    for name in node.names:
        if name.name == "*":
            continue
        target = f"{module}.{name.name}" if module else name.name
        aliases[name.asname or name.name] = target


def extract_import_aliases(source: str, module_name: str = "") -> dict[str, str]:
    """Map each module-level imported name to the qualified name it refers to.

    Args:
        source: Python source text
        module_name: Dotted name of the module holding ``source``; needed to
            resolve relative imports

    Returns:
        Dictionary of bound name -> qualified name, in statement order.
        Invalid syntax yields an empty mapping.

    Examples:
        >>> extract_import_aliases("from app.base import Base as B\\nimport os.path")
        {'B': 'app.base.Base', 'os': 'os'}
    """
    try:
        tree = ast.parse(source)
    except (SyntaxError, ValueError):
        # Invalid syntax or null bytes: treat as no imports to keep scans deterministic.
        return {}

    aliases: dict[str, str] = {}
    for node in tree.body:
        if isinstance(node, ast.Import):
            _process_import_node(node, aliases)
        elif isinstance(node, ast.ImportFrom):
            _process_import_from_node(node, aliases, module_name)
    return aliases
