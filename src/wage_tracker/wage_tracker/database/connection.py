from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, Dict, Optional

import mysql.connector


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "wage_tracker")),
        )

    def server_kwargs(self) -> Dict[str, Any]:
        """Connection arguments without a default database."""
        return {"host": self.host, "port": self.port, "user": self.user, "password": self.password}

    def connect_kwargs(self) -> Dict[str, Any]:
        return {**self.server_kwargs(), "database": self.database}

    def __str__(self) -> str:
        return f"{self.user}@{self.host}:{self.port}/{self.database}"


class DatabaseConnection:
    """Process-wide factory handing out one short-lived connection per unit of work.

    Sessions are pinned to UTC so DATETIME columns always hold UTC wall time.
    """

    _instance: Optional["DatabaseConnection"] = None
    _instance_lock = threading.Lock()

    def __init__(self, config: DBConfig):
        self._config = config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        with cls._instance_lock:
            if cls._instance is None or cls._instance.config != config:
                cls._instance = DatabaseConnection(config)
            return cls._instance

    @property
    def config(self) -> DBConfig:
        return self._config

    def connect(self):
        return mysql.connector.connect(**self._config.connect_kwargs(), time_zone="+00:00")
