from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from exposed_symbols.artifacts.serializer import write_index
from exposed_symbols.artifacts.utils import _get_output_dir_name
from exposed_symbols.contract.artifacts import EXPOSED_SYMBOLS_JSON
from exposed_symbols.discovery.driver import DiscoveryDriver
from exposed_symbols.rules.config import (
    load_config,
    resolve_output_dir,
    resolve_search_paths,
)
from exposed_symbols.scan.files import SourceTree

if TYPE_CHECKING:
    from pathlib import Path

    from exposed_symbols.discovery.driver import DiscoveryResult
    from exposed_symbols.rules.config import ExposeConfig

logger = logging.getLogger(__name__)


def build_source_tree(root: Path, config: ExposeConfig, out_dir: Path) -> SourceTree:
    search_roots = resolve_search_paths(root, config.search_paths)
    out_dir_names = {_get_output_dir_name(out_dir, search) for search in search_roots}
    out_dir_names.discard("")
    return SourceTree(
        search_roots,
        output_dir=next(iter(out_dir_names), ""),
        include_patterns=config.include or None,
        exclude_patterns=config.exclude or None,
        nested_gitignore=config.nested_gitignore,
        modules=config.modules,
    )


def discover(
    *,
    root: Path,
    out_dir: Path | None = None,
    config: ExposeConfig | None = None,
) -> DiscoveryResult:
    """Run discovery over a repository without writing anything."""
    if config is None:
        config = load_config(root)

    if out_dir is None:
        out_dir = resolve_output_dir(root, config.output_dir)

    driver = DiscoveryDriver(
        build_source_tree(root, config, out_dir),
        file_pattern=config.file_pattern,
    )
    return driver.run()


def generate_exposed_symbols(
    *,
    root: Path,
    out_dir: Path | None = None,
    config: ExposeConfig | None = None,
) -> dict[str, object]:
    """Discover exposed symbols in a repository and persist the index.

    Args:
        root: Root directory of the repository to analyze
        out_dir: Optional output directory for the generated artifact
        config: Optional configuration; loaded from expose.toml when omitted

    Returns:
        Dictionary with counts and the list of generated artifact paths.
    """
    if config is None:
        config = load_config(root)

    if out_dir is None:
        out_dir = resolve_output_dir(root, config.output_dir)

    result = discover(root=root, out_dir=out_dir, config=config)

    artifact = write_index(out_dir / EXPOSED_SYMBOLS_JSON, result.index)
    logger.info("Exposed symbols written to %s", artifact)

    return {
        "class_count": len(result.index.classes),
        "method_count": len(result.index.methods),
        "failure_count": len(result.failures),
        "artifacts": [str(artifact)],
    }
