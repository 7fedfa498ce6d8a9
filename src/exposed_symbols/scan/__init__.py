"""Source file enumeration."""

from exposed_symbols.scan.files import SourceFile, SourceTree, find_source_files

__all__ = ["SourceFile", "SourceTree", "find_source_files"]
