from __future__ import annotations

import pytest

from exposed_symbols.discovery.driver import declared_class_name
from exposed_symbols.parse.ast_imports import (
    extract_import_aliases,
    resolve_relative_import,
)
from exposed_symbols.parse.docblock import parse_doc_tags
from exposed_symbols.parse.treesitter_classes import extract_class_names
from exposed_symbols.utils import (
    normalize_class_name,
    path_to_module,
    split_method_name,
)


def test_parse_doc_tags_in_order() -> None:
    doc = """Write one entry.

    @purpose LOG.WRITE
    @Display "Write Log"
    @purpose AUDIT
    """

    assert parse_doc_tags(doc) == [
        ("purpose", "LOG.WRITE"),
        ("display", "Write Log"),
        ("purpose", "AUDIT"),
    ]


def test_parse_doc_tags_filters_and_tolerates_noise() -> None:
    doc = """
    * @display 'Quoted'
    * @unknown value
    email me at someone@example.com
    @deprecated
    """

    assert parse_doc_tags(doc, frozenset({"display", "deprecated"})) == [
        ("display", "Quoted"),
        ("deprecated", ""),
    ]


@pytest.mark.parametrize("doc", [None, "", "No tags here."])
def test_parse_doc_tags_without_tags(doc: str | None) -> None:
    assert parse_doc_tags(doc) == []


def test_extract_import_aliases() -> None:
    source = """\
import os
import xml.etree.ElementTree
import numpy as np
from app.base import Base, Mixin as M
from . import sibling
from ..shared import util
from lib import *


def inner():
    import json
"""

    assert extract_import_aliases(source, "app.web.views") == {
        "os": "os",
        "xml": "xml",
        "np": "numpy",
        "Base": "app.base.Base",
        "M": "app.base.Mixin",
        "sibling": "app.web.sibling",
        "util": "app.shared.util",
    }


def test_extract_import_aliases_invalid_source() -> None:
    assert extract_import_aliases("def broken(:\n") == {}


def test_resolve_relative_import_beyond_top_level() -> None:
    assert resolve_relative_import("pkg.mod", "x", 5) == "x"


def test_extract_class_names_top_level_only() -> None:
    source = b"""\
import dataclasses


class First:
    class Inner:
        pass


@dataclasses.dataclass
class Second:
    value: int = 0


def factory():
    class Local:
        pass
    return Local
"""

    assert extract_class_names(source) == ["First", "Second"]


@pytest.mark.parametrize(
    ("file_name", "source", "expected"),
    [
        ("log_handler.py", "class LogHandler:\n    pass\n", "LogHandler"),
        ("loghandler.py", "class LogHandler:\n    pass\n", "LogHandler"),
        ("Worker.py", "class Other:\n    pass\n", None),
        ("ghost.py", 'TEMPLATE = """\nclass Ghost:\n    pass\n"""\n', None),
        ("nested.py", "def f():\n    class Nested:\n        pass\n", None),
        ("__init__.py", "", None),
    ],
)
def test_declared_class_name(file_name: str, source: str, expected: str | None) -> None:
    assert declared_class_name(file_name, source) == expected


def test_name_helpers() -> None:
    assert path_to_module("acme/controller/index_controller.py") == (
        "acme.controller.index_controller"
    )
    assert path_to_module("acme/__init__.py") == "acme"
    assert normalize_class_name("Index_Controller") == "indexcontroller"
    assert split_method_name("app.Log::write") == ("app.Log", "write")
    assert split_method_name("app.Log") == ("app.Log", "")
