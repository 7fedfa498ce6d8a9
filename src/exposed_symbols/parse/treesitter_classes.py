"""Tree-sitter based detection of top-level class declarations."""

from __future__ import annotations

from tree_sitter import Language, Node, Parser
from tree_sitter_python import language as get_python_language

_PARSER: Parser | None = None


def _get_parser() -> Parser:
    """Initialize and return the Tree-sitter parser with Python language."""
    global _PARSER
    if _PARSER is None:
        lang = Language(get_python_language())
        _PARSER = Parser(lang)

    return _PARSER


def _class_name(node: Node) -> str | None:
    if node.type == "decorated_definition":
        definition = node.child_by_field_name("definition")
        if definition is None:
            return None
        node = definition

    if node.type != "class_definition":
        return None

    name_node = node.child_by_field_name("name")
    if not (name_node and name_node.text):
        return None
    return name_node.text.decode("utf8")


def extract_class_names(source_bytes: bytes) -> list[str]:
    """Return the names of classes declared at module level, in source order.

    Nested classes and classes defined inside functions are not returned;
    they cannot be resolved as attributes of the module.
    """
    tree = _get_parser().parse(source_bytes)

    names: list[str] = []
    for child in tree.root_node.children:
        name = _class_name(child)
        if name is not None:
            names.append(name)
    return names
