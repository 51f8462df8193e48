"""CLI behaviour tests."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from vlbuild.cli import _build_parser, main


@pytest.fixture(autouse=True)
def _restore_logger():
    logger = logging.getLogger("vlbuild")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = propagate


def _snapshot(tmp_path: Path, make_dir: str = "obj_dir") -> Path:
    (tmp_path / "obj_dir").mkdir(exist_ok=True)
    path = tmp_path / "snapshot.yml"
    path.write_text(
        f"""
make_dir: {make_dir}
prefix: Vtop
vpi: true
files:
  - name: obj_dir/Vtop.cpp
    kind: cfile
    source: true
""",
        encoding="utf-8",
    )
    return path


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "emit", "snap.yml"])
    assert args.verbose is True
    assert args.command == "emit"


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["emit", "snap.yml", "--verbose"])
    assert args.verbose is True
    assert args.snapshot == "snap.yml"


def test_cli_accepts_dry_run_and_make_dir() -> None:
    parser = _build_parser()
    args = parser.parse_args(["emit", "snap.yml", "--dry-run", "--make-dir", "build"])
    assert args.dry_run is True
    assert args.make_dir == Path("build")


def test_emit_command_writes_document(tmp_path: Path, capsys) -> None:
    main(["emit", str(_snapshot(tmp_path))])

    output = capsys.readouterr().out
    assert "Build plan written to" in output
    document = json.loads((tmp_path / "obj_dir" / "vl_build.json").read_text(encoding="utf-8"))
    assert document["libverilated"]["features"] == ["vpi"]
    assert document["model"]["compile_sources"] == ["Vtop.cpp"]


def test_emit_command_dry_run_prints_document(tmp_path: Path, capsys) -> None:
    main(["emit", str(_snapshot(tmp_path)), "--dry-run"])

    document = json.loads(capsys.readouterr().out)
    assert document["model"]["prefix"] == "Vtop"
    assert not (tmp_path / "obj_dir" / "vl_build.json").exists()


def test_emit_command_honours_make_dir_override(tmp_path: Path) -> None:
    override = tmp_path / "elsewhere"
    override.mkdir()

    main(["emit", str(_snapshot(tmp_path)), "--make-dir", str(override)])

    assert (override / "vl_build.json").is_file()
    assert not (tmp_path / "obj_dir" / "vl_build.json").exists()


def test_emit_command_fails_when_output_unavailable(tmp_path: Path, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["emit", str(_snapshot(tmp_path, make_dir="missing/dir"))])

    assert excinfo.value.code == 1
    assert "Cannot write build plan" in capsys.readouterr().err


def test_emit_command_reports_missing_snapshot(tmp_path: Path, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["emit", str(tmp_path / "nope.yml")])

    assert excinfo.value.code == 1
    assert "Snapshot file not found" in capsys.readouterr().err


def test_emit_command_rejects_malformed_snapshot(tmp_path: Path, capsys) -> None:
    (tmp_path / "obj_dir").mkdir()
    snapshot = tmp_path / "snapshot.yml"
    snapshot.write_text("make_dir: obj_dir\ndpi: maybe\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main(["emit", str(snapshot)])

    assert excinfo.value.code == 1
    assert "vlbuild emit failed: 'dpi' must be a boolean" in capsys.readouterr().err
    assert not (tmp_path / "obj_dir" / "vl_build.json").exists()


def test_relative_make_dir_override_resolves_against_cwd(tmp_path: Path, monkeypatch) -> None:
    workdir = tmp_path / "work"
    (workdir / "out").mkdir(parents=True)
    monkeypatch.chdir(workdir)

    main(["emit", str(_snapshot(tmp_path)), "--make-dir", "out"])

    assert (workdir / "out" / "vl_build.json").is_file()
    assert not (tmp_path / "obj_dir" / "vl_build.json").exists()


def test_log_file_records_debug_while_console_stays_at_info(tmp_path: Path, capsys) -> None:
    log_file = tmp_path / "vlbuild.log"

    main(["--log-file", str(log_file), "emit", str(_snapshot(tmp_path))])

    err = capsys.readouterr().err
    assert "DEBUG" not in err
    assert "Wrote build plan" in err
    assert "DEBUG vlbuild.emitter: Emitting build plan" in log_file.read_text(encoding="utf-8")
