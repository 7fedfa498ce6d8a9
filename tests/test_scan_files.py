from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

from exposed_symbols.rules.config import ModuleDef
from exposed_symbols.scan.files import (
    SourceFile,
    SourceTree,
    _build_gitignore_matcher,
    find_source_files,
)

if TYPE_CHECKING:
    from pathlib import Path


def _touch(path: Path, content: str = "") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def _relative(paths: list[Path], root: Path) -> list[str]:
    return [path.relative_to(root).as_posix() for path in paths]


@pytest.mark.skipif(
    os.name == "nt",
    reason="Symlink semantics vary on Windows test runners.",
)
def test_find_source_files_skips_symlinked_dirs(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _touch(repo_root / "pkg" / "module.py", "print('ok')\n")

    external_root = tmp_path / "external"
    _touch(external_root / "leak.py", "print('leak')\n")

    symlink_dir = repo_root / "linked"
    symlink_dir.symlink_to(external_root, target_is_directory=True)

    results = _relative(list(find_source_files(repo_root)), repo_root)

    assert "pkg/module.py" in results
    assert "linked/leak.py" not in results


@pytest.mark.skipif(
    os.name == "nt",
    reason="Symlink semantics vary on Windows test runners.",
)
def test_nested_gitignore_skips_symlinked_gitignore(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _touch(repo_root / "pkg" / "module.py", "print('ok')\n")
    _touch(repo_root / ".gitignore", "*.bin\n")

    external_root = tmp_path / "external"
    _touch(external_root / "outside.gitignore", "pkg/module.py\n")

    symlink_gitignore = repo_root / "linked.gitignore"
    symlink_gitignore.symlink_to(external_root / "outside.gitignore")

    matcher = _build_gitignore_matcher(repo_root, nested_gitignore=True)
    assert matcher is not None
    assert matcher(str(repo_root / "pkg" / "module.py")) is False


def test_find_source_files_applies_pattern_and_filters(tmp_path: Path) -> None:
    for name in (
        "b/Worker.py",
        "a/log_service.py",
        "a/notes.txt",
        "a/2fast.py",
        "build/generated.py",
        ".expose/cached.py",
        "vendor/lib.py",
    ):
        _touch(tmp_path / name)
    _touch(tmp_path / ".gitignore", "build/\n")

    results = _relative(
        list(find_source_files(tmp_path, exclude_patterns=["vendor/*"])), tmp_path
    )

    assert results == ["a/log_service.py", "b/Worker.py"]


def test_find_source_files_pattern_is_case_insensitive(tmp_path: Path) -> None:
    _touch(tmp_path / "Upper.PY")
    _touch(tmp_path / "lower_service.py")

    results = _relative(
        list(find_source_files(tmp_path, file_pattern=r"(upper|_service)\.py$")),
        tmp_path,
    )

    assert results == ["Upper.PY", "lower_service.py"]


def test_source_tree_yields_each_file_once(tmp_path: Path) -> None:
    _touch(tmp_path / "app" / "a.py")
    _touch(tmp_path / "app" / "sub" / "b.py")

    tree = SourceTree([tmp_path / "app", tmp_path / "app" / "sub", tmp_path / "none"])
    sources = list(tree.yield_source_files())

    assert [source.relative_path for source in sources] == ["a.py", "sub/b.py"]
    assert all(source.search_root == tmp_path / "app" for source in sources)


def test_source_tree_limits_search_roots(tmp_path: Path) -> None:
    _touch(tmp_path / "app" / "a.py")
    _touch(tmp_path / "lib" / "b.py")

    tree = SourceTree([tmp_path / "app", tmp_path / "lib"])
    sources = list(tree.yield_source_files(search_roots=[tmp_path / "lib"]))

    assert [source.relative_path for source in sources] == ["b.py"]


def test_is_file_part_of_module(tmp_path: Path) -> None:
    tree = SourceTree(
        [tmp_path],
        modules=[
            ModuleDef(name="Contact", globs=["app/contact/*"]),
            ModuleDef(name="App", globs=["app/*"]),
        ],
    )

    def source(relative: str) -> SourceFile:
        return SourceFile(path=tmp_path / relative, search_root=tmp_path)

    assert tree.is_file_part_of_module(source("app/contact/form.py")) == "Contact"
    assert tree.is_file_part_of_module(source("app/index.py")) == "App"
    assert tree.is_file_part_of_module(source("lib/util.py")) is None
    assert SourceTree([tmp_path]).is_file_part_of_module(source("app/x.py")) is None
