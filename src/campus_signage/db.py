from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Iterable, Optional

import psycopg
from psycopg.rows import dict_row

from .config import Config

SQL_DIR = Path(__file__).resolve().parent / "sql"


def _load_sql_file(sql_path: str | Path) -> str:
    path_obj = Path(sql_path)
    if not path_obj.is_absolute() and not path_obj.exists():
        path_obj = SQL_DIR / path_obj
    if not path_obj.exists():
        raise FileNotFoundError(f"SQL file not found: {sql_path}")
    return path_obj.read_text(encoding="utf-8")


_DOLLAR_PARAM_PATTERN = re.compile(r"\$([1-9][0-9]*)")


def _strip_sql_comments(sql_text: str) -> str:
    """Remove single-line (--) and block (/* */) comments from SQL text."""
    no_block = re.sub(r"/\*.*?\*/", "", sql_text, flags=re.DOTALL)
    no_line = re.sub(r"--.*?$", "", no_block, flags=re.MULTILINE)
    return no_line


def _prepare_sql(sql_text: str, params: Iterable[Any]) -> tuple[str, tuple[Any, ...]]:
    """Prepare SQL by converting $1-style placeholders to %s and expanding params.

    The same positional parameter may be referenced several times in the SQL;
    its value is duplicated in the parameter sequence to match the number of
    placeholders.
    """
    clean_sql = _strip_sql_comments(sql_text)
    occurrences = [int(m.group(1)) for m in _DOLLAR_PARAM_PATTERN.finditer(clean_sql)]
    sql_text_percent = _DOLLAR_PARAM_PATTERN.sub("%s", clean_sql)

    original_params = tuple(params)
    if not occurrences:
        return sql_text_percent, original_params

    expanded_params: list[Any] = []
    for idx in occurrences:
        param_pos = idx - 1
        if param_pos >= len(original_params):
            raise ValueError(
                f"SQL expects parameter ${idx} but only {len(original_params)} were provided"
            )
        expanded_params.append(original_params[param_pos])
    return sql_text_percent, tuple(expanded_params)


class Database:
    """Lightweight helper around psycopg for running queries from sql/ files."""

    def __init__(self, config: Config):
        self._config = config
        self._conn: Optional[psycopg.Connection] = None

    def connect(self) -> None:
        if self._conn is not None:
            return
        pg = self._config.postgres_config
        self._conn = psycopg.connect(
            host=pg["host"],
            port=pg["port"],
            user=pg["user"],
            password=pg["password"],
            dbname=pg["database"],
            row_factory=dict_row,
            autocommit=True,
        )

    def close(self) -> None:
        if self._conn is not None:
            try:
                self._conn.close()
            finally:
                self._conn = None

    def __enter__(self) -> "Database":
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._conn is None:
            return
        if exc is None:
            self._conn.commit()
        else:
            self._conn.rollback()
        self.close()

    def _require_conn(self) -> psycopg.Connection:
        if self._conn is None:
            raise RuntimeError(
                "Database connection not established. Call connect() or use 'with Database(config) as db:' context manager."
            )
        return self._conn

    def fetch_all(self, sql_file_path: str | Path, params: Iterable[Any] = ()) -> list[dict[str, Any]]:
        sql_raw = _load_sql_file(sql_file_path)
        sql_text, expanded = _prepare_sql(sql_raw, params)
        cur = self._require_conn().cursor()
        try:
            cur.execute(sql_text, expanded or None)
            return list(cur.fetchall())
        except Exception as e:
            raise RuntimeError(
                f"DB fetch_all failed for {sql_file_path} with params={expanded}: {e}"
            ) from e
        finally:
            cur.close()

    def execute(self, sql_file_path: str | Path, params: Iterable[Any] = ()) -> int:
        sql_raw = _load_sql_file(sql_file_path)
        sql_text, expanded = _prepare_sql(sql_raw, params)
        cur = self._require_conn().cursor()
        try:
            cur.execute(sql_text, expanded or None)
            return cur.rowcount
        except Exception as e:
            raise RuntimeError(
                f"DB execute failed for {sql_file_path} with params={expanded}: {e}"
            ) from e
        finally:
            cur.close()
