"""Shared utilities for exposed-symbols."""

from __future__ import annotations

from pathlib import Path

METHOD_SEPARATOR = "::"


def path_to_module(file_path: str | Path) -> str:
    """Convert a path relative to a search root into a dotted module name.

    Args:
        file_path: Relative file path (e.g., "app/controller/index.py" or Path object)

    Returns:
        Module name (e.g., "app.controller.index")

    Examples:
        >>> path_to_module("app/controller/index.py")
        'app.controller.index'
        >>> path_to_module("app/__init__.py")
        'app'
        >>> path_to_module(Path("foo/bar.py"))
        'foo.bar'
    """
    path_str = file_path.as_posix() if isinstance(file_path, Path) else str(file_path)
    module_parts = [part for part in path_str.replace("\\", "/").split("/") if part]

    if module_parts and module_parts[-1].endswith(".py"):
        module_parts[-1] = module_parts[-1][:-3]

    if module_parts and module_parts[-1] == "__init__":
        module_parts = module_parts[:-1]

    return ".".join(module_parts)


def normalize_class_name(name: str) -> str:
    """Fold a file stem or class name for case- and underscore-insensitive matching.

    >>> normalize_class_name("log_error_handler_service")
    'logerrorhandlerservice'
    >>> normalize_class_name("LogErrorHandlerService")
    'logerrorhandlerservice'
    """
    return name.replace("_", "").casefold()


def split_method_name(qualified_name: str) -> tuple[str, str]:
    """Split ``Class::method`` into its class and method parts."""
    class_name, _, method_name = qualified_name.partition(METHOD_SEPARATOR)
    return class_name, method_name


def join_method_name(class_name: str, method_name: str) -> str:
    return f"{class_name}{METHOD_SEPARATOR}{method_name}"
