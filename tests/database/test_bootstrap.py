from pathlib import Path

from src.hr_admin.hr_admin.database.bootstrap import _strip_create_db_and_use, iter_sql_statements

SCHEMA = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


def test_splitter_keeps_semicolons_inside_quotes():
    sql = "INSERT INTO notices(subject) VALUES('a; b');\nSELECT 1;"
    assert list(iter_sql_statements(sql)) == ["INSERT INTO notices(subject) VALUES('a; b')", "SELECT 1"]


def test_schema_is_database_name_agnostic():
    statements = list(iter_sql_statements(_strip_create_db_and_use(SCHEMA.read_text(encoding="utf-8"))))
    assert statements
    assert all(s.upper().startswith("CREATE TABLE") for s in statements)
    assert any("attendance_records" in s for s in statements)
