from pathlib import Path

from src.attendance_engine.attendance_engine.database.bootstrap import split_sql_statements

SCHEMA = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


def test_split_ignores_semicolons_in_quotes_and_comments():
    sql = "-- header; not a statement\nINSERT INTO t VALUES ('a;b');\nSELECT 1;\n"

    assert list(split_sql_statements(sql)) == ["INSERT INTO t VALUES ('a;b')", "SELECT 1"]


def test_schema_file_has_both_tables():
    statements = list(split_sql_statements(SCHEMA.read_text(encoding="utf-8")))

    assert len(statements) == 2
    assert statements[0].startswith("CREATE TABLE IF NOT EXISTS employees")
    assert statements[1].startswith("CREATE TABLE IF NOT EXISTS attendance_records")
