"""Example: drive the service layer directly (no Flask, in-memory storage)."""

from datetime import datetime, timedelta, timezone

from src.wage_tracker.wage_tracker.container import build_container


def main():
    container = build_container(backend="memory")
    tracker = container.tracker

    user_id = tracker.login("demo-user")
    tracker.set_wage(user_id, 2000)

    t0 = datetime(2025, 1, 15, 9, 0, tzinfo=timezone.utc)
    session = tracker.start_session(user_id, now=t0)
    session = tracker.stop_session(user_id, session.session_id, now=t0 + timedelta(hours=1, minutes=30))

    print(session.to_dict())
    print(tracker.monthly_summary(user_id, 2025, 1).to_dict())


if __name__ == "__main__":
    main()
