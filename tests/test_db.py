import psycopg
import pytest

import campus_signage.db as db_mod
from campus_signage.db import Database, _load_sql_file, _prepare_sql

from signage_fakes import DummyConn, DummyCursor, FakeConfig


def test_prepare_sql_rewrites_placeholders_and_expands_params():
    sql = """
    -- comment $9
    SELECT * FROM tbl WHERE id=$1 AND status=$2 OR owner=$1;
    /* block $3 */
    """.strip()
    text, params = _prepare_sql(sql, (10, 'A'))
    assert text.count('%s') == 3
    assert params == (10, 'A', 10)


def test_prepare_sql_missing_param_raises():
    with pytest.raises(ValueError, match=r"\$2"):
        _prepare_sql("SELECT $1, $2", (1,))


def test_prepare_sql_without_placeholders_keeps_params():
    assert _prepare_sql("SELECT 1", ()) == ("SELECT 1", ())


def test_load_sql_file_resolves_packaged_queries():
    assert "FROM events" in _load_sql_file("events/list_all.sql")
    with pytest.raises(FileNotFoundError):
        _load_sql_file("events/nope.sql")


def test_database_context_and_helpers(monkeypatch, tmp_path):
    sqlp = tmp_path / "q.sql"
    sqlp.write_text("SELECT * FROM t WHERE id=$1 AND owner=$1", encoding="utf-8")
    conn = DummyConn()
    monkeypatch.setattr(db_mod.psycopg, "connect", lambda **k: conn)

    with Database(FakeConfig()) as db:
        assert len(db.fetch_all(str(sqlp), (5,))) == 1
        assert db.execute(str(sqlp), (5,)) == 1

    assert conn._cur.queries[0] == ("SELECT * FROM t WHERE id=%s AND owner=%s", (5, 5))
    assert conn.committed and conn.closed


def test_statement_without_params_runs_as_simple_query(monkeypatch):
    conn = DummyConn()
    monkeypatch.setattr(db_mod.psycopg, "connect", lambda **k: conn)

    with Database(FakeConfig()) as db:
        db.execute("events/create_table.sql")

    sql, params = conn._cur.queries[0]
    assert "CREATE TABLE IF NOT EXISTS events" in sql
    assert params is None


def test_database_rolls_back_on_error(monkeypatch):
    conn = DummyConn(DummyCursor(error=psycopg.OperationalError("boom")))
    monkeypatch.setattr(db_mod.psycopg, "connect", lambda **k: conn)

    with pytest.raises(RuntimeError, match="DB fetch_all failed"):
        with Database(FakeConfig()) as db:
            db.fetch_all("events/list_all.sql")
    assert conn.rolled and conn.closed


def test_query_without_connection_raises():
    with pytest.raises(RuntimeError, match="not established"):
        Database(FakeConfig()).fetch_all("events/list_all.sql")
