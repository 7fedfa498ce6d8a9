"""Command-line interface for exposed-symbols."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from exposed_symbols.artifacts.write import generate_exposed_symbols
from exposed_symbols.contract.validation import validate_artifacts
from exposed_symbols.errors import ExposeError
from exposed_symbols.rules.config import load_config, resolve_output_dir
from exposed_symbols.symbols.manager import ExposedSymbolsManager
from exposed_symbols.verify.verify import verify_determinism


def _setup_logging(verbose: bool, quiet: bool) -> None:
    """Configure logging based on verbosity flags.

    Default level is WARNING, so per-file discovery failures are shown.
    verbose takes precedence over quiet.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    logging.root.handlers.clear()

    handler = RichHandler(
        console=Console(stderr=True), rich_tracebacks=True, show_path=False
    )
    handler.setLevel(level)

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
    )


def _add_common_paths(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Repository root (default: .)",
    )


def _add_artifacts_dir(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--artifacts-dir",
        default=None,
        help="Artifacts directory (default: config output dir)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="expose")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true")
    verbosity.add_argument("-q", "--quiet", action="store_true")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate", help="Discover exposed symbols and write the index"
    )
    _add_common_paths(generate_parser)
    generate_parser.add_argument(
        "--out-dir",
        default=None,
        help="Output directory for the generated artifact (default: config output dir)",
    )

    query_parser = subparsers.add_parser(
        "query", help="List symbols registered under a purpose pattern"
    )
    query_parser.add_argument("pattern", help="Purpose pattern, e.g. ACTIONCONTROLLER.")
    _add_common_paths(query_parser)
    _add_artifacts_dir(query_parser)
    query_parser.add_argument(
        "--methods",
        action="store_true",
        help="Search method purposes instead of class purposes",
    )
    query_parser.add_argument(
        "--include-parents",
        action="store_true",
        help="Also list symbols of every traversed parent purpose",
    )

    validate_parser = subparsers.add_parser("validate", help="Validate the artifact")
    _add_common_paths(validate_parser)
    _add_artifacts_dir(validate_parser)

    verify_parser = subparsers.add_parser(
        "verify", help="Verify determinism of the artifact"
    )
    _add_common_paths(verify_parser)
    _add_artifacts_dir(verify_parser)

    return parser


def _resolve_output_dir(root: Path, out_dir: str | None) -> Path | None:
    if out_dir is None:
        return None
    return Path(out_dir).expanduser().resolve()


def _resolve_artifacts_dir(root: Path, artifacts_dir: str | None) -> Path:
    if artifacts_dir is None:
        config = load_config(root)
        return resolve_output_dir(root, config.output_dir)
    return Path(artifacts_dir).expanduser().resolve()


def _handle_generate(root: Path, out_dir: str | None) -> int:
    resolved_out_dir = _resolve_output_dir(root, out_dir)
    generate_exposed_symbols(root=root, out_dir=resolved_out_dir)
    return 0


def _handle_query(
    root: Path,
    artifacts_dir: str | None,
    pattern: str,
    *,
    methods: bool,
    include_parents: bool,
) -> int:
    manager = ExposedSymbolsManager(_resolve_artifacts_dir(root, artifacts_dir))
    search = manager.yield_methods if methods else manager.yield_classes
    for path, name in search(pattern, include_parents):
        sys.stdout.write(f"{path}\t{name}\n")
    return 0


def _handle_validate(root: Path, artifacts_dir: str | None) -> int:
    resolved_artifacts_dir = _resolve_artifacts_dir(root, artifacts_dir)
    result = validate_artifacts(resolved_artifacts_dir)
    for warning in result.warnings:
        sys.stderr.write(f"{warning.location()}: warning: {warning.message}\n")
    if result.errors:
        for error in result.errors:
            sys.stderr.write(f"{error.location()}: {error.message}\n")
        return 1
    return 0


def _handle_verify(root: Path, artifacts_dir: str | None) -> int:
    resolved_artifacts_dir = _resolve_artifacts_dir(root, artifacts_dir)
    try:
        result = verify_determinism(root=root, artifacts_dir=resolved_artifacts_dir)
    except (FileNotFoundError, NotADirectoryError) as exc:
        sys.stderr.write(f"artifacts-dir: {resolved_artifacts_dir}\n")
        sys.stderr.write(f"error: {exc}\n")
        return 2
    if not result.ok:
        for label, paths in (
            ("missing", result.missing),
            ("extra", result.extra),
            ("mismatches", result.mismatches),
            ("changed", result.changed_symbols),
        ):
            for path in paths:
                sys.stderr.write(f"{label}: {path}\n")
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose, args.quiet)

    root = Path(args.root).expanduser().resolve()

    try:
        if args.command == "generate":
            return _handle_generate(root, args.out_dir)

        if args.command == "query":
            return _handle_query(
                root,
                args.artifacts_dir,
                args.pattern,
                methods=args.methods,
                include_parents=args.include_parents,
            )

        if args.command == "validate":
            return _handle_validate(root, args.artifacts_dir)

        if args.command == "verify":
            return _handle_verify(root, args.artifacts_dir)
    except ExposeError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
