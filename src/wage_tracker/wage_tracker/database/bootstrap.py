from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterator, List

import mysql.connector

from .connection import DBConfig

logger = logging.getLogger(__name__)

_DATABASE_DIRECTIVE_RE = re.compile(r"(?im)^\s*(CREATE\s+DATABASE|USE)\b.*?;\s*$")
_LINE_COMMENT_RE = re.compile(r"(?m)^\s*--.*$")


def _prepare_schema(sql: str) -> str:
    # The target database comes from DB_CONFIG, not from the file.
    return _LINE_COMMENT_RE.sub("", _DATABASE_DIRECTIVE_RE.sub("", sql))


def iter_sql_statements(sql: str) -> Iterator[str]:
    """Split a script on ``;`` outside of quoted literals."""
    buf: List[str] = []
    quote = None
    escaped = False

    for ch in sql:
        if escaped:
            escaped = False
        elif ch == "\\":
            escaped = True
        elif quote:
            if ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = "".join(buf).strip()
            buf = []
            if stmt:
                yield stmt
            continue
        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(target: DBConfig) -> None:
    conn = mysql.connector.connect(**target.server_kwargs(), use_pure=True)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    """Create the database if needed and run every statement of schema.sql.

    The schema only uses ``CREATE TABLE IF NOT EXISTS`` so reapplying is safe.
    """
    target = DBConfig.from_dict(db_config)
    ensure_database_exists(target)

    sql = _prepare_schema(Path(schema_path).read_text(encoding="utf-8"))

    conn = mysql.connector.connect(**target.connect_kwargs(), use_pure=True)
    try:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()

    logger.info("Schema applied to %s", target)


def list_tables(db_config: dict) -> List[str]:
    conn = mysql.connector.connect(**DBConfig.from_dict(db_config).connect_kwargs(), use_pure=True)
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
