from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from src.wage_tracker.wage_tracker.common.datetime_utils import YearMonth
from src.wage_tracker.wage_tracker.core.enums import ErrorKind
from src.wage_tracker.wage_tracker.core.exceptions import ConflictError, DomainError, NotFoundError, ValidationError


def _utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def test_start_freezes_current_wage(tracker, clock, fixed_now):
    tracker.set_wage("alice", 1500)

    session = tracker.start_session("alice")

    assert session.session_id == 1
    assert session.start_time == fixed_now
    assert session.hourly_wage == 1500
    assert session.end_time is None
    assert session.earned_amount is None


def test_start_twice_conflicts_even_with_override(tracker):
    tracker.set_wage("alice", 1500)
    tracker.start_session("alice")

    with pytest.raises(ConflictError) as exc:
        tracker.start_session("alice", override_wage=3000)

    assert exc.value.kind is ErrorKind.CONFLICT
    assert exc.value.message == "session already started"


def test_start_without_wage_is_invalid_input(tracker):
    with pytest.raises(ValidationError) as exc:
        tracker.start_session("alice")

    assert exc.value.kind is ErrorKind.INVALID_INPUT
    assert exc.value.message == "hourly wage is not set"


def test_start_with_override_needs_no_wage_setting(tracker):
    session = tracker.start_session("alice", override_wage=1200)
    assert session.hourly_wage == 1200


@pytest.mark.parametrize("override", [0, -5, "100", 12.5, True])
def test_start_rejects_bad_override(tracker, override):
    with pytest.raises(ValidationError):
        tracker.start_session("alice", override_wage=override)
    assert tracker.current_session("alice") is None


def test_stop_computes_floor_earnings(tracker, clock):
    tracker.set_wage("alice", 2000)
    session = tracker.start_session("alice")

    clock.advance(hours=1, minutes=30)
    stopped = tracker.stop_session("alice", session.session_id)

    assert stopped.end_time == clock.now()
    assert stopped.earned_amount == 3000


@pytest.mark.parametrize(
    "elapsed, expected",
    [
        (timedelta(seconds=3600), 1500),
        (timedelta(seconds=1800), 750),
        (timedelta(seconds=1), 0),
        (timedelta(seconds=2, microseconds=999999), 0),
        (timedelta(seconds=2399), 999),
    ],
)
def test_stop_rounds_down(tracker, clock, elapsed, expected):
    tracker.set_wage("alice", 1500)
    session = tracker.start_session("alice")

    stopped = tracker.stop_session("alice", session.session_id, now=clock.now() + elapsed)

    assert stopped.earned_amount == expected


def test_stop_twice_conflicts_and_keeps_earnings(tracker, clock):
    tracker.set_wage("alice", 1500)
    session = tracker.start_session("alice")
    first = tracker.stop_session("alice", session.session_id, now=clock.advance(hours=1))

    with pytest.raises(ConflictError):
        tracker.stop_session("alice", session.session_id, now=clock.advance(hours=5))

    [stored] = tracker.list_sessions("alice")
    assert stored.earned_amount == first.earned_amount == 1500
    assert stored.end_time == first.end_time


def test_stop_unknown_session_is_not_found(tracker):
    with pytest.raises(NotFoundError):
        tracker.stop_session("alice", 42)


def test_sessions_are_scoped_per_user(tracker):
    tracker.set_wage("alice", 1000)
    tracker.set_wage("bob", 2000)
    alice_session = tracker.start_session("alice")
    bob_session = tracker.start_session("bob")

    assert alice_session.session_id == 1
    assert bob_session.session_id == 1

    with pytest.raises(NotFoundError):
        tracker.stop_session("bob", 2)
    assert tracker.current_session("alice").hourly_wage == 1000


def test_wage_change_does_not_touch_open_session(tracker, clock):
    tracker.set_wage("alice", 1000)
    session = tracker.start_session("alice")

    tracker.set_wage("alice", 5000)
    stopped = tracker.stop_session("alice", session.session_id, now=clock.advance(hours=2))

    assert stopped.hourly_wage == 1000
    assert stopped.earned_amount == 2000


def test_at_most_one_open_session_after_any_sequence(tracker, clock):
    tracker.set_wage("alice", 1000)
    for i in range(5):
        session = tracker.start_session("alice")
        with pytest.raises(ConflictError):
            tracker.start_session("alice")
        clock.advance(minutes=30)
        if i % 2 == 0:
            tracker.stop_session("alice", session.session_id)
        else:
            tracker.delete_session("alice", session.session_id)
        open_sessions = [s for s in tracker.list_sessions("alice") if s.end_time is None]
        assert len(open_sessions) == 0

    tracker.start_session("alice")
    assert len([s for s in tracker.list_sessions("alice") if s.end_time is None]) == 1


def test_ids_increase_monotonically_after_delete(tracker):
    tracker.set_wage("alice", 1000)
    first = tracker.start_session("alice")
    tracker.delete_session("alice", first.session_id)

    second = tracker.start_session("alice")

    assert second.session_id > first.session_id


def test_current_is_live_projection(tracker, clock):
    tracker.set_wage("alice", 1500)
    session = tracker.start_session("alice")
    clock.advance(minutes=30)

    view = tracker.current_session("alice")

    assert view.session_id == session.session_id
    assert view.elapsed_seconds == 1800
    assert view.current_earned_amount == 750
    # nothing persisted
    assert tracker.list_sessions("alice")[0].earned_amount is None


def test_current_is_none_without_open_session(tracker, clock):
    tracker.set_wage("alice", 1500)
    session = tracker.start_session("alice")
    tracker.stop_session("alice", session.session_id, now=clock.advance(minutes=1))

    assert tracker.current_session("alice") is None


def test_list_filters_by_start_or_end_date(tracker):
    tracker.set_wage("alice", 1000)
    a = tracker.start_session("alice", now=_utc(2025, 1, 31, 22, 0))
    tracker.stop_session("alice", a.session_id, now=_utc(2025, 2, 1, 2, 0))
    b = tracker.start_session("alice", now=_utc(2025, 2, 3, 9, 0))
    tracker.stop_session("alice", b.session_id, now=_utc(2025, 2, 3, 17, 0))
    c = tracker.start_session("alice", now=_utc(2024, 12, 20, 9, 0))

    assert [s.session_id for s in tracker.list_sessions("alice")] == [1, 2, 3]
    assert [s.session_id for s in tracker.list_sessions("alice", day=date(2025, 2, 1))] == [a.session_id]
    assert [s.session_id for s in tracker.list_sessions("alice", day=date(2025, 1, 31))] == [a.session_id]
    assert [s.session_id for s in tracker.list_sessions("alice", month=YearMonth(2025, 1))] == [a.session_id]
    assert [s.session_id for s in tracker.list_sessions("alice", month=YearMonth(2025, 2))] == [a.session_id, b.session_id]
    assert [s.session_id for s in tracker.list_sessions("alice", month=YearMonth(2024, 12))] == [c.session_id]
    assert tracker.list_sessions("alice", day=date(2025, 3, 1)) == []


def test_list_date_filter_wins_over_month(tracker):
    tracker.set_wage("alice", 1000)
    s = tracker.start_session("alice", now=_utc(2025, 1, 10, 9, 0))
    tracker.stop_session("alice", s.session_id, now=_utc(2025, 1, 10, 10, 0))

    items = tracker.list_sessions("alice", day=date(2025, 1, 11), month=YearMonth(2025, 1))

    assert items == []


def test_update_closed_session_recomputes_earnings(tracker):
    tracker.set_wage("alice", 1200)
    s = tracker.start_session("alice", now=_utc(2025, 1, 10, 9, 0))
    tracker.stop_session("alice", s.session_id, now=_utc(2025, 1, 10, 10, 0))
    tracker.set_wage("alice", 9999)

    updated = tracker.update_session("alice", s.session_id, end_time="2025-01-10T12:30:00Z")

    assert updated.end_time == _utc(2025, 1, 10, 12, 30)
    assert updated.hourly_wage == 1200
    assert updated.earned_amount == 4200


def test_update_start_only_on_open_session_keeps_it_open(tracker):
    tracker.set_wage("alice", 1200)
    s = tracker.start_session("alice", now=_utc(2025, 1, 10, 9, 0))

    updated = tracker.update_session("alice", s.session_id, start_time="2025-01-10T08:00:00Z")

    assert updated.start_time == _utc(2025, 1, 10, 8, 0)
    assert updated.end_time is None
    assert updated.earned_amount is None


def test_update_end_on_open_session_closes_it(tracker):
    tracker.set_wage("alice", 1200)
    s = tracker.start_session("alice", now=_utc(2025, 1, 10, 9, 0))

    updated = tracker.update_session("alice", s.session_id, end_time=_utc(2025, 1, 10, 9, 30))

    assert updated.earned_amount == 600
    assert tracker.current_session("alice") is None


def test_update_requires_a_field(tracker):
    tracker.set_wage("alice", 1200)
    s = tracker.start_session("alice")

    with pytest.raises(ValidationError, match="startTime or endTime required"):
        tracker.update_session("alice", s.session_id)


@pytest.mark.parametrize("field", ["start_time", "end_time"])
def test_update_rejects_unparsable_timestamp(tracker, field):
    tracker.set_wage("alice", 1200)
    s = tracker.start_session("alice")

    with pytest.raises(ValidationError, match="Invalid"):
        tracker.update_session("alice", s.session_id, **{field: "yesterday"})


def test_update_rejects_end_before_start(tracker):
    tracker.set_wage("alice", 1200)
    s = tracker.start_session("alice", now=_utc(2025, 1, 10, 9, 0))

    with pytest.raises(ValidationError):
        tracker.update_session("alice", s.session_id, end_time="2025-01-10T08:00:00Z")


def test_update_unknown_session_is_not_found(tracker):
    with pytest.raises(NotFoundError):
        tracker.update_session("alice", 7, start_time="2025-01-10T08:00:00Z")


def test_delete_reports_whether_session_existed(tracker):
    tracker.set_wage("alice", 1200)
    s = tracker.start_session("alice")

    assert tracker.delete_session("alice", s.session_id) is True
    assert tracker.delete_session("alice", s.session_id) is False
    assert tracker.list_sessions("alice") == []


def test_all_failures_are_domain_errors(tracker):
    with pytest.raises(DomainError) as exc:
        tracker.stop_session("alice", 1)
    assert exc.value.kind is ErrorKind.NOT_FOUND
