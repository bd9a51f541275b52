from __future__ import annotations

from pathlib import Path

import pytest

from parallels.cli import main as cli_main
from parallels.cli.classify import EXIT_FATAL, EXIT_SUCCESS

"""Exit code contract: 0 success, 1 fatal (usage, missing file, config, apply)."""


def test_success_exit_code(make_workbook):
    assert cli_main([str(make_workbook({"Base": ["Parallels:", "Gold", None]}))]) == EXIT_SUCCESS == 0


@pytest.mark.parametrize("argv", [[], ["--sql"], ["--json", "book.xlsx"]])
def test_usage_errors(temp_workdir: Path, capsys, argv):
    code = cli_main(argv)
    captured = capsys.readouterr()
    assert code == EXIT_FATAL == 1
    assert captured.out == ""
    assert "Usage: classify-parallels" in captured.err


def test_missing_file(temp_workdir: Path, capsys):
    code = cli_main(["nope.xlsx", "--sql"])
    captured = capsys.readouterr()
    assert code == 1
    assert captured.out == ""
    assert f"ERROR File not found: {(temp_workdir / 'nope.xlsx').resolve()}" in captured.err


def test_apply_without_product_id(make_workbook, capsys):
    code = cli_main([str(make_workbook({"Base": ["Parallels:", "Gold"]})), "--apply"])
    captured = capsys.readouterr()
    assert code == 1
    assert captured.out == ""
    assert "--apply requires --product-id" in captured.err


def test_bad_config(make_workbook, temp_workdir: Path, capsys):
    (temp_workdir / "config" / "classify.yml").write_text("bogus: true\n", encoding="utf-8")
    code = cli_main([str(make_workbook({"Base": ["Parallels:", "Gold"]}))])
    captured = capsys.readouterr()
    assert code == 1
    assert captured.out == ""
    assert "ERROR config: config validation failed" in captured.err


def test_unreadable_workbook(temp_workdir: Path, capsys):
    bad = temp_workdir / "data" / "bad.xlsx"
    bad.write_bytes(b"\x00\x01")
    code = cli_main([str(bad)])
    captured = capsys.readouterr()
    assert code == 1
    assert captured.out == ""
    assert "ERROR processing:" in captured.err
