from __future__ import annotations

from pathlib import Path

import pytest

import mdexport.app as app_mod


@pytest.fixture
def source(tmp_path: Path) -> Path:
    p = tmp_path / "notes.md"
    p.write_text("# Notes\n\n- a\n- b\n", encoding="utf-8")
    return p


def test_run_app_writes_document_beside_input(isolated_config_dir, source: Path, capsys) -> None:
    rc = app_mod.run_app(["mdexport", str(source), "-f", "txt"])

    assert rc == 0
    out = source.parent / "document.txt"
    assert out.read_text(encoding="utf-8") == "\nNOTES\n=====\n\n  • a\n  • b"
    assert "document.txt" in capsys.readouterr().out


def test_run_app_explicit_output_and_options(isolated_config_dir, source: Path, tmp_path: Path) -> None:
    target = tmp_path / "out" / "deck.pdf"
    rc = app_mod.run_app(
        ["mdexport", str(source), "-f", "pdf", "-o", str(target), "--landscape", "--no-theme", "--theme", "nord"]
    )
    assert rc == 0
    assert target.read_bytes().startswith(b"%PDF")


def test_run_app_unknown_format_fails_with_status_1(isolated_config_dir, source: Path, capsys) -> None:
    rc = app_mod.run_app(["mdexport", str(source), "-f", "rtf"])

    assert rc == 1
    assert "Unsupported export format: rtf" in capsys.readouterr().err
    assert source.read_text(encoding="utf-8").startswith("# Notes")


def test_run_app_missing_input_fails(isolated_config_dir, tmp_path: Path, capsys) -> None:
    rc = app_mod.run_app(["mdexport", str(tmp_path / "nope.md"), "-f", "html"])
    assert rc == 1
    assert "Error:" in capsys.readouterr().err


def test_run_app_lists_formats(isolated_config_dir, capsys) -> None:
    assert app_mod.run_app(["mdexport", "--list-formats"]) == 0
    out = capsys.readouterr().out
    for token in ("markdown", "plaintext", "html", "pdf", "docx", "pptx"):
        assert token in out


def test_run_app_version(isolated_config_dir, capsys) -> None:
    assert app_mod.run_app(["mdexport", "--version"]) == 0
    assert capsys.readouterr().out.startswith(app_mod.APP_NAME)


def test_run_app_requires_input_and_format(isolated_config_dir) -> None:
    with pytest.raises(SystemExit):
        app_mod.run_app(["mdexport"])


def test_run_app_log_file_receives_records(isolated_config_dir, source: Path, tmp_path: Path) -> None:
    log = tmp_path / "export.log"
    rc = app_mod.run_app(["mdexport", str(source), "-f", "html", "-v", "--log-file", str(log)])

    assert rc == 0
    text = log.read_text(encoding="utf-8")
    assert "Exporting html" in text
    assert "INFO" in text
