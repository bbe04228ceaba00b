from __future__ import annotations

from dataclasses import dataclass
from datetime import timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .common.clock import Clock, SystemClock
from .core.constants import DEFAULT_TIMEZONE
from .core.enums import StorageBackend
from .database.connection import DBConfig, DatabaseConnection
from .earnings.calculator.standard_calculator import StandardEarningsCalculator
from .earnings.service import SummaryService
from .facade import WageTracker
from .sessions.locks import UserLockRegistry
from .sessions.memory_session_repository import InMemorySessionRepository
from .sessions.mysql_session_repository import MySQLSessionRepository
from .sessions.repository import SessionRepository
from .sessions.service import SessionService
from .users.memory_user_repository import InMemoryUserRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import UserService
from .wages.memory_wage_repository import InMemoryWageRepository
from .wages.mysql_wage_repository import MySQLWageRepository
from .wages.repository import WageRepository
from .wages.service import WageService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]
    clock: Clock
    tz: tzinfo

    users_repo: UserRepository
    wages_repo: WageRepository
    sessions_repo: SessionRepository

    user_service: UserService
    wage_service: WageService
    session_service: SessionService
    summary_service: SummaryService
    tracker: WageTracker


def resolve_timezone(name: Optional[str]) -> tzinfo:
    if not name or name.upper() == DEFAULT_TIMEZONE:
        return timezone.utc
    try:
        return ZoneInfo(name)
    except ZoneInfoNotFoundError as exc:
        raise ValueError(f"Invalid timezone: {name}") from exc


def build_container(
    *,
    backend: str = StorageBackend.MEMORY.value,
    db_config: Optional[dict] = None,
    clock: Optional[Clock] = None,
    timezone_name: Optional[str] = None,
) -> Container:
    clock = clock or SystemClock()
    tz = resolve_timezone(timezone_name)

    conn: Optional[DatabaseConnection] = None
    if StorageBackend(backend) is StorageBackend.MYSQL:
        if not db_config:
            raise ValueError("DB_CONFIG is required for the mysql storage backend")
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
        users_repo = MySQLUserRepository(conn)
        wages_repo = MySQLWageRepository(conn)
        sessions_repo = MySQLSessionRepository(conn)
    else:
        users_repo = InMemoryUserRepository()
        wages_repo = InMemoryWageRepository()
        sessions_repo = InMemorySessionRepository()

    locks = UserLockRegistry()
    user_service = UserService(users_repo, clock=clock)
    wage_service = WageService(wages_repo, clock=clock)
    session_service = SessionService(
        sessions_repo,
        wages_repo,
        locks=locks,
        calculator=StandardEarningsCalculator(),
        clock=clock,
        tz=tz,
    )
    summary_service = SummaryService(sessions_repo, locks=locks, tz=tz)
    tracker = WageTracker(user_service, wage_service, session_service, summary_service)

    return Container(
        conn=conn,
        clock=clock,
        tz=tz,
        users_repo=users_repo,
        wages_repo=wages_repo,
        sessions_repo=sessions_repo,
        user_service=user_service,
        wage_service=wage_service,
        session_service=session_service,
        summary_service=summary_service,
        tracker=tracker,
    )
