from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..common.datetime_utils import local_date, parse_iso_date
from ..common.http import login_required
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/summary/daily", methods=["GET"], endpoint="daily_summary")
    @login_required
    def daily_summary():
        date_param = request.args.get("date")
        if date_param is None:
            day = local_date(container.clock.now(), container.tz)
        else:
            try:
                day = parse_iso_date(date_param)
            except ValueError:
                raise ValidationError("Invalid date format. Expected YYYY-MM-DD")

        return jsonify(container.tracker.daily_summary(g.user_id, day).to_dict())

    @app.route("/summary/monthly", methods=["GET"], endpoint="monthly_summary")
    @login_required
    def monthly_summary():
        year = _int_or_none(request.args.get("year"))
        month = _int_or_none(request.args.get("month"))
        if year is None or month is None:
            raise ValidationError("year and month are required")
        if not 1 <= month <= 12:
            raise ValidationError("month must be 01-12")

        return jsonify(container.tracker.monthly_summary(g.user_id, year, month).to_dict())


def _int_or_none(raw):
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None
