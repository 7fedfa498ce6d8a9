"""Utility functions for artifact generation."""

from __future__ import annotations

import os
import tempfile
from typing import TYPE_CHECKING

import orjson

if TYPE_CHECKING:
    from pathlib import Path

JSON_OPTIONS = orjson.OPT_INDENT_2 | orjson.OPT_APPEND_NEWLINE

# Mode a plain open() would create, before the umask.
_FILE_MODE = 0o666


def _dump_json(obj: object) -> bytes:
    return orjson.dumps(obj, option=JSON_OPTIONS)


def _default_file_mode() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return _FILE_MODE & ~umask


def _write_bytes_atomic(path: Path, payload: bytes) -> None:
    """Write ``payload`` next to ``path`` and move it into place in one step."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, temp_name = tempfile.mkstemp(
        prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
    )
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(payload)
        os.chmod(temp_name, _default_file_mode())
        os.replace(temp_name, path)
    except BaseException:
        if os.path.exists(temp_name):
            os.unlink(temp_name)
        raise


def _get_output_dir_name(out_dir: Path, root: Path) -> str:
    """Get the output directory name for filtering."""
    try:
        if out_dir.is_relative_to(root):
            rel = out_dir.relative_to(root)
            if rel.parts:
                return rel.parts[0]
            return ""
    except ValueError:
        # Non-comparable paths mean out_dir is external; avoid filtering.
        return ""
    return ""
