from __future__ import annotations

import shutil
from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def app_repo(tmp_path: Path) -> Path:
    """A fresh copy of the ``app_repo`` fixture tree."""
    repo_root = tmp_path / "repo"
    shutil.copytree(FIXTURES_DIR / "app_repo", repo_root)
    return repo_root
