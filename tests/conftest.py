from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from src.wage_tracker.wage_tracker.container import build_container
from src.wage_tracker.wage_tracker.main import create_app


class FixedClock:
    def __init__(self, now: datetime):
        self._now = now

    def now(self) -> datetime:
        return self._now

    def advance(self, **kwargs) -> datetime:
        self._now = self._now + timedelta(**kwargs)
        return self._now

    def set(self, now: datetime) -> None:
        self._now = now


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 1, 15, 9, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock(fixed_now) -> FixedClock:
    return FixedClock(fixed_now)


@pytest.fixture
def container(clock):
    return build_container(backend="memory", clock=clock)


@pytest.fixture
def tracker(container):
    return container.tracker


@pytest.fixture
def app(container):
    return create_app(settings_module="config.testing", container=container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_client(client):
    resp = client.post("/auth/login", json={"userId": "alice"})
    assert resp.status_code == 200
    return client
