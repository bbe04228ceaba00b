from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, from_mysql_datetime, to_mysql_datetime
from .model import WageSetting
from .repository import WageRepository


class MySQLWageRepository(WageRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, user_id: str) -> Optional[WageSetting]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT hourly_wage, updated_at FROM wage_settings WHERE user_id=%s",
                (user_id,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return WageSetting(
                hourly_wage=int(row["hourly_wage"]),
                updated_at=from_mysql_datetime(row["updated_at"]),
            )

    def put(self, user_id: str, setting: WageSetting) -> WageSetting:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO wage_settings(user_id, hourly_wage, updated_at)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE hourly_wage=VALUES(hourly_wage), updated_at=VALUES(updated_at)
                """,
                (user_id, setting.hourly_wage, to_mysql_datetime(setting.updated_at)),
            )
        return setting
