from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..common.auth import make_token_required
from ..common.datetime_utils import format_time, parse_iso_date
from ..container import Container
from .export import record_to_row
from .filters import HistoryFilter
from .schemas import ClockRequest, HistoryQuery
from .service import detail_to_dict


def register(app: Flask, container: Container) -> None:
    token_required = make_token_required(container.token_service)

    @app.route("/api/attendance/clock", methods=["POST"], endpoint="attendance_clock")
    @token_required
    def clock():
        clock_request = ClockRequest.from_payload(request.get_json(silent=True))
        result = container.attendance_service.clock(g.user_id, clock_request)
        return jsonify(
            {
                "success": True,
                "message": "Clock event recorded",
                "record": {
                    "type": result.event.type.value,
                    "time": format_time(result.event.time),
                    "date": result.record.work_date.strftime("%Y-%m-%d"),
                    "attendance": record_to_row(result.record),
                },
            }
        )

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @token_required
    def today():
        return jsonify(container.attendance_service.get_today(g.user_id).to_dict())

    @app.route("/api/attendance/history", methods=["GET"], endpoint="attendance_history")
    @token_required
    def history():
        query = HistoryQuery.from_args(request.args)
        return jsonify(container.attendance_service.get_history(g.user_id, query).to_dict())

    @app.route("/api/attendance/date/<day>", methods=["GET"], endpoint="attendance_by_date")
    @token_required
    def by_date(day: str):
        view = container.attendance_service.get_day(g.user_id, parse_iso_date(day))
        if view.record is None:
            return jsonify({"record": None, "details": []})
        return jsonify(
            {
                "record": record_to_row(view.record),
                "details": [detail_to_dict(d) for d in view.details],
            }
        )

    @app.route("/api/attendance/export", methods=["GET"], endpoint="attendance_export")
    @token_required
    def export():
        history_filter = HistoryFilter.from_query(
            month_s=request.args.get("month"),
            year_s=request.args.get("year"),
        )
        data = container.attendance_service.export_csv(g.user_id, history_filter)
        return app.response_class(
            data.content,
            mimetype="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{data.filename}"'},
        )
