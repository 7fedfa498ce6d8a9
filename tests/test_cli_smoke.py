from __future__ import annotations

from pathlib import Path

import pytest

from exposed_symbols.cli import main
from exposed_symbols.rules.config import load_config

LOG = "acme.service.error.log_error_handler_service.LogErrorHandlerService"
LINEAR = (
    "acme.service.error.linear_chain_error_handler_service."
    "LinearChainErrorHandlerService"
)


def _write_minimal_repo(root: Path) -> None:
    (root / "pkg").mkdir(parents=True, exist_ok=True)
    (root / "pkg" / "__init__.py").write_text("", encoding="utf-8")
    (root / "pkg" / "module.py").write_text(
        '"""Minimal module."""\n',
        encoding="utf-8",
    )


def test_cli_generate_smoke(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    repo_root.mkdir()
    _write_minimal_repo(repo_root)

    out_dir = tmp_path / "artifacts"
    exit_code = main(["generate", str(repo_root), "--out-dir", str(out_dir)])

    assert exit_code == 0
    assert (out_dir / "exposed_symbols.json").is_file()


def test_generate_default_output_dir_from_fixture(app_repo: Path) -> None:
    assert not (app_repo / ".expose").exists(), "output dir must not pre-exist"
    exit_code = main(["-q", "generate", str(app_repo)])

    assert exit_code == 0
    assert (app_repo / ".expose" / "exposed_symbols.json").is_file()


def test_generate_reports_failures_and_succeeds(
    app_repo: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    exit_code = main(["generate", str(app_repo)])

    assert exit_code == 0
    captured = capsys.readouterr()
    assert "broken_thing" in captured.err
    assert captured.out == ""


def test_query_classes_and_methods(
    app_repo: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    assert main(["-q", "generate", str(app_repo)]) == 0
    capsys.readouterr()

    assert main(["query", "ERRORHANDLER.", str(app_repo)]) == 0
    assert capsys.readouterr().out.splitlines() == [
        f"ERRORHANDLER\t{LINEAR}",
        f"ERRORHANDLER.LOG\t{LOG}",
    ]

    assert main(["query", "log.write", str(app_repo), "--methods"]) == 0
    assert capsys.readouterr().out.splitlines() == [f"LOG.WRITE\t{LOG}::write_log"]

    assert main(["query", "ERRORHANDLER.CHAIN.ADD", str(app_repo), "--methods"]) == 0
    assert len(capsys.readouterr().out.splitlines()) == 1


def test_query_with_artifacts_dir_and_parents(
    app_repo: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    artifacts_dir = tmp_path / "artifacts"
    assert main(["-q", "generate", str(app_repo), "--out-dir", str(artifacts_dir)]) == 0
    capsys.readouterr()

    exit_code = main(
        [
            "query",
            "ERRORHANDLER.LOG",
            "--artifacts-dir",
            str(artifacts_dir),
            "--include-parents",
        ]
    )

    assert exit_code == 0
    assert capsys.readouterr().out.splitlines() == [
        f"ERRORHANDLER\t{LINEAR}",
        f"ERRORHANDLER.LOG\t{LOG}",
    ]


def test_query_without_artifact_reports_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    exit_code = main(["query", "ANYTHING", str(tmp_path)])

    assert exit_code == 2
    assert "Could not find exposed symbols artifact" in capsys.readouterr().err


def test_invalid_config_reports_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    (tmp_path / "expose.toml").write_text("bogus_key = true", encoding="utf-8")

    exit_code = main(["generate", str(tmp_path)])

    assert exit_code == 2
    assert "Invalid config" in capsys.readouterr().err


def test_validate_and_verify_generated_artifact(app_repo: Path) -> None:
    assert main(["-q", "generate", str(app_repo)]) == 0

    assert main(["validate", str(app_repo)]) == 0
    assert main(["-q", "verify", str(app_repo)]) == 0


def test_cli_validate_default_artifacts_dir_reports_error(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    repo_root = tmp_path / "repo"
    repo_root.mkdir()
    _write_minimal_repo(repo_root)
    default_artifacts_dir = (repo_root / load_config(repo_root).output_dir).resolve()

    monkeypatch.chdir(repo_root)
    exit_code = main(["validate"])

    assert exit_code == 1
    captured = capsys.readouterr()
    assert f"{default_artifacts_dir}:" in captured.err
    assert "Artifacts directory does not exist." in captured.err


def test_cli_validate_includes_path_and_message(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    artifacts_dir = tmp_path / "missing-artifacts"

    exit_code = main(["validate", str(tmp_path), "--artifacts-dir", str(artifacts_dir)])

    assert exit_code == 1
    captured = capsys.readouterr()
    assert f"{artifacts_dir}:" in captured.err
    assert "Artifacts directory does not exist." in captured.err


def test_cli_verify_default_artifacts_dir_reports_error(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    repo_root = tmp_path / "repo"
    repo_root.mkdir()
    _write_minimal_repo(repo_root)
    default_artifacts_dir = (repo_root / load_config(repo_root).output_dir).resolve()

    monkeypatch.chdir(repo_root)
    exit_code = main(["verify"])

    assert exit_code == 2
    captured = capsys.readouterr()
    assert f"artifacts-dir: {default_artifacts_dir}" in captured.err
    assert "Artifacts directory does not exist" in captured.err


def test_cli_verify_missing_artifacts_dir_reports_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    repo_root = tmp_path / "repo"
    repo_root.mkdir()
    _write_minimal_repo(repo_root)

    artifacts_dir = tmp_path / "missing-artifacts"
    exit_code = main(["verify", str(repo_root), "--artifacts-dir", str(artifacts_dir)])

    assert exit_code == 2
    captured = capsys.readouterr()
    assert f"artifacts-dir: {artifacts_dir}" in captured.err
    assert "Artifacts directory does not exist" in captured.err
