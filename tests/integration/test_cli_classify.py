from __future__ import annotations

import json
from pathlib import Path

from parallels.cli import main as cli_main


def test_default_prints_sql(make_workbook, capsys):
    path = make_workbook({"Base": ["Parallels:", "Silver", "Gold /199", "Black 1/1", 12345]})
    code = cli_main([str(path)])
    captured = capsys.readouterr()
    assert code == 0
    assert captured.out.count("insert into parallels (") == 1
    assert "'gold-199'" in captured.out
    assert "SUMMARY base=3 autos=0 classified=3 rows=3 duplicates=0" in captured.err


def test_json_only(make_workbook, capsys):
    path = make_workbook({"Base": ["Parallels:", "Silver", "Silver", None]})
    code = cli_main([str(path), "--json"])
    out = capsys.readouterr().out
    assert code == 0
    assert "insert into" not in out
    data = json.loads(out)
    # pre-dedup: both rows present
    assert [d["rawName"] for d in data] == ["Silver", "Silver"]


def test_json_and_sql_both_print(make_workbook, capsys):
    path = make_workbook({"Autographs": ["Parallels:", "Gold /10", None]})
    code = cli_main([str(path), "--sql", "--json"])
    out = capsys.readouterr().out
    assert code == 0
    json_part, sql_part = out.split("-- ", 1)
    assert json.loads(json_part)[0]["tabGroup"] == "autos"
    assert "'auto-gold-10'" in sql_part


def test_out_file_redirects_sql_only(make_workbook, temp_workdir: Path, capsys):
    path = make_workbook({"Base": ["Parallels:", "Rookie's Gold", None]})
    code = cli_main([str(path), "--json", "--sql", "--out=parallels.sql"])
    captured = capsys.readouterr()
    assert code == 0
    written = (temp_workdir / "parallels.sql").read_text(encoding="utf-8")
    assert "'Rookie''s Gold'" in written
    assert "insert into" not in captured.out
    assert json.loads(captured.out)[0]["rawName"] == "Rookie's Gold"
    assert "INFO Wrote SQL to parallels.sql" in captured.err


def test_empty_workbook_prints_no_rows_comment(make_workbook, capsys):
    path = make_workbook({"Other": ["Parallels:", "Gold"]})
    code = cli_main([str(path), "--sql"])
    assert code == 0
    assert capsys.readouterr().out == "-- No rows generated.\n\n"


def test_unknown_flag_is_warned_and_ignored(make_workbook, capsys):
    path = make_workbook({"Base": ["Parallels:", "Gold", None]})
    code = cli_main([str(path), "--verbose"])
    captured = capsys.readouterr()
    assert code == 0
    assert "WARN ignoring unknown argument: --verbose" in captured.err
    assert "'gold'" in captured.out


def test_config_file_option(make_workbook, temp_workdir: Path, capsys):
    cfg = temp_workdir / "config" / "alt.yml"
    cfg.write_text("base_sheet: Base Set\nproduct_placeholder: __SET__\n", encoding="utf-8")
    path = make_workbook({"Base Set": ["Parallels:", "Gold", None]})
    code = cli_main([str(path), f"--config={cfg}"])
    out = capsys.readouterr().out
    assert code == 0
    assert "'__SET__'" in out
    assert "Replace __SET__ with" in out


def test_apply_inserts_rows(make_workbook, monkeypatch, capsys):
    import contextlib

    import parallels.cli.classify as classify_cli

    inserted = {}

    @contextlib.contextmanager
    def fake_cursor(db_cfg):
        yield "cursor"

    def fake_apply(cur, result, product_id, table):
        inserted.update(cur=cur, product_id=product_id, table=table, n=len(result.rows))
        from parallels.db.batch_insert import InsertResult
        return InsertResult(inserted_rows=len(result.rows))

    monkeypatch.setattr(classify_cli, "db_cursor", fake_cursor)
    monkeypatch.setattr(classify_cli, "apply_rows", fake_apply)
    path = make_workbook({"Base": ["Parallels:", "Gold", "Red", None]})
    code = cli_main([str(path), "--apply", "--product-id=prod-1"])
    err = capsys.readouterr().err
    assert code == 0
    assert inserted == {"cur": "cursor", "product_id": "prod-1", "table": "parallels", "n": 2}
    assert "INFO inserted 2 rows into parallels" in err


def test_apply_failure_is_fatal(make_workbook, monkeypatch, capsys):
    import contextlib

    import parallels.cli.classify as classify_cli
    from parallels.db.batch_insert import BatchInsertError

    @contextlib.contextmanager
    def fake_cursor(db_cfg):
        yield None

    def failing_apply(*args, **kwargs):
        raise BatchInsertError("relation \"parallels\" does not exist")

    monkeypatch.setattr(classify_cli, "db_cursor", fake_cursor)
    monkeypatch.setattr(classify_cli, "apply_rows", failing_apply)
    path = make_workbook({"Base": ["Parallels:", "Gold", None]})
    code = cli_main([str(path), "--apply", "--product-id=prod-1"])
    assert code == 1
    assert "ERROR apply: relation" in capsys.readouterr().err
