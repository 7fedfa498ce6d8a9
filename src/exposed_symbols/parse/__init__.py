"""Parsing utilities for exposed symbols discovery."""

from exposed_symbols.parse.ast_imports import (

    extract_import_aliases,

    resolve_relative_import,

)
from exposed_symbols.parse.docblock import parse_doc_tags
from exposed_symbols.parse.treesitter_classes import extract_class_names

__all__ = [
    "extract_class_names",
    "extract_import_aliases",
    "parse_doc_tags",
    "resolve_relative_import",
]
