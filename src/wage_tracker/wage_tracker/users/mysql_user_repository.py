from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, from_mysql_datetime, to_mysql_datetime
from .model import User
from .repository import UserRepository


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT user_id, created_at FROM users WHERE user_id=%s",
                (user_id,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return User(user_id=row["user_id"], created_at=from_mysql_datetime(row["created_at"]))

    def ensure(self, user_id: str, *, now: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT IGNORE INTO users(user_id, created_at) VALUES(%s,%s)",
                (user_id, to_mysql_datetime(now)),
            )
            return cur.rowcount > 0
