from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

import mysql.connector

from ..core.exceptions import ConflictError, StorageError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    db_cursor,
    fetchall,
    fetchone,
    from_mysql_datetime,
    is_duplicate_key,
    to_mysql_datetime,
)
from .model import WorkSession
from .repository import SessionRepository

_COLUMNS = "session_id, user_id, start_time, end_time, hourly_wage, earned_amount"


def _to_session(r: Dict[str, Any]) -> WorkSession:
    earned = r.get("earned_amount")
    return WorkSession(
        session_id=int(r["session_id"]),
        user_id=r["user_id"],
        start_time=from_mysql_datetime(r["start_time"]),
        end_time=from_mysql_datetime(r.get("end_time")),
        hourly_wage=int(r["hourly_wage"]),
        earned_amount=int(earned) if earned is not None else None,
    )


class MySQLSessionRepository(SessionRepository):
    """Sessions in ``work_sessions``.

    The ``uq_one_open_session`` index rejects a second open session for the
    same user even when several processes share the database.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, user_id: str, session_id: int) -> Optional[WorkSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM work_sessions WHERE user_id=%s AND session_id=%s",
                (user_id, int(session_id)),
            )
            r = fetchone(cur)
            return _to_session(r) if r else None

    def get_open(self, user_id: str) -> Optional[WorkSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM work_sessions WHERE user_id=%s AND end_time IS NULL",
                (user_id,),
            )
            r = fetchone(cur)
            return _to_session(r) if r else None

    def list_for_user(self, user_id: str) -> Sequence[WorkSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM work_sessions WHERE user_id=%s ORDER BY session_id ASC",
                (user_id,),
            )
            return [_to_session(r) for r in fetchall(cur)]

    def create_open(self, user_id: str, *, start_time: datetime, hourly_wage: int) -> WorkSession:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO work_sessions(user_id, start_time, hourly_wage)
                    VALUES(%s,%s,%s)
                    """,
                    (user_id, to_mysql_datetime(start_time), int(hourly_wage)),
                )
                session_id = int(cur.lastrowid)
                cur.execute(
                    f"SELECT {_COLUMNS} FROM work_sessions WHERE session_id=%s",
                    (session_id,),
                )
                return _to_session(fetchone(cur))
        except mysql.connector.IntegrityError as exc:
            if is_duplicate_key(exc):
                raise ConflictError("session already started") from exc
            raise StorageError("storage unavailable") from exc

    def close(
        self,
        user_id: str,
        session_id: int,
        *,
        end_time: datetime,
        earned_amount: int,
    ) -> Optional[WorkSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE work_sessions
                SET end_time=%s, earned_amount=%s
                WHERE user_id=%s AND session_id=%s AND end_time IS NULL
                """,
                (to_mysql_datetime(end_time), int(earned_amount), user_id, int(session_id)),
            )
            if cur.rowcount == 0:
                return None
            cur.execute(
                f"SELECT {_COLUMNS} FROM work_sessions WHERE session_id=%s",
                (int(session_id),),
            )
            return _to_session(fetchone(cur))

    def update_times(
        self,
        user_id: str,
        session_id: int,
        *,
        start_time: datetime,
        end_time: Optional[datetime],
        earned_amount: Optional[int],
    ) -> Optional[WorkSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE work_sessions
                SET start_time=%s, end_time=%s, earned_amount=%s
                WHERE user_id=%s AND session_id=%s
                """,
                (
                    to_mysql_datetime(start_time),
                    to_mysql_datetime(end_time) if end_time else None,
                    earned_amount,
                    user_id,
                    int(session_id),
                ),
            )
            cur.execute(
                f"SELECT {_COLUMNS} FROM work_sessions WHERE user_id=%s AND session_id=%s",
                (user_id, int(session_id)),
            )
            r = fetchone(cur)
            return _to_session(r) if r else None

    def delete(self, user_id: str, session_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM work_sessions WHERE user_id=%s AND session_id=%s",
                (user_id, int(session_id)),
            )
            return cur.rowcount > 0
