from __future__ import annotations

import logging
from functools import wraps
from typing import Optional

from flask import Flask, jsonify, request

from ..container import Container
from ..core.enums import ToggleAction
from ..core.exceptions import (
    AlreadyCheckedIn,
    AlreadyCheckedOut,
    DomainError,
    NotCheckedIn,
    OperationInFlight,
    StoreError,
    StoreUnavailable,
    ToggleFailed,
    ValidationError,
)
from .week import current_week

logger = logging.getLogger(__name__)

_CONFLICTS = (OperationInFlight, AlreadyCheckedIn, NotCheckedIn, AlreadyCheckedOut)


def status_code_for(exc: DomainError) -> int:
    if isinstance(exc, ToggleFailed):
        inner = exc.error
        if isinstance(inner, StoreUnavailable):
            return 503
        if isinstance(inner, _CONFLICTS):
            return 409
        return 502
    if isinstance(exc, StoreUnavailable):
        return 503
    if isinstance(exc, _CONFLICTS):
        return 409
    if isinstance(exc, ValidationError):
        return 400
    if isinstance(exc, StoreError):
        return 502
    return 500


def _bearer_token() -> Optional[str]:
    header = request.headers.get("Authorization", "")
    if header.lower().startswith("bearer "):
        return header[7:].strip() or None
    return None


def register(app: Flask, container: Container) -> None:
    def token_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if container.store_backend == "http" and not _bearer_token():
                return jsonify({"success": False, "message": "Missing bearer token"}), 401
            return view(*args, **kwargs)

        return wrapper

    def _error(exc: DomainError):
        return jsonify({"success": False, "message": str(exc)}), status_code_for(exc)

    def _week_offset() -> int:
        raw = request.args.get("offset") or str(current_week())
        try:
            return int(raw)
        except ValueError:
            raise ValidationError(f"offset must be an integer, got {raw!r}") from None

    def _load_week(service):
        return service.load_week(
            _week_offset(),
            from_date=request.args.get("from") or None,
            to_date=request.args.get("to") or None,
            employee_id=request.args.get("employeeId") or None,
        )

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @token_required
    def attendance_today():
        service = container.attendance_service(_bearer_token())
        try:
            rows = service.get_today_ui()
        except DomainError as e:
            return _error(e)
        return jsonify({"success": True, "date": service.today().strftime("%Y-%m-%d"), "items": rows})

    @app.route("/api/attendance/week", methods=["GET"], endpoint="attendance_week")
    @token_required
    def attendance_week():
        service = container.attendance_service(_bearer_token())
        try:
            view = _load_week(service)
        except DomainError as e:
            return _error(e)
        return jsonify({"success": True, **service.get_week_ui(view)})

    @app.route("/api/attendance/week.csv", methods=["GET"], endpoint="attendance_week_csv")
    @token_required
    def attendance_week_csv():
        service = container.attendance_service(_bearer_token())
        try:
            view = _load_week(service)
        except DomainError as e:
            return _error(e)

        data = container.report_service.build_report(view.records)
        start = view.query.from_date.strftime("%Y%m%d")
        end = view.query.to_date.strftime("%Y%m%d")
        return app.response_class(
            container.report_service.to_csv(data),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename=attendance_{start}_{end}.csv"},
        )

    def _mutate(employee_id: str, action: Optional[ToggleAction]):
        service = container.attendance_service(_bearer_token())
        try:
            if action == ToggleAction.CHECK_IN:
                record = service.request_check_in(employee_id)
            elif action == ToggleAction.CHECK_OUT:
                record = service.request_check_out(employee_id)
            else:
                record = service.toggle(employee_id)
            rows = service.get_today_ui()
        except DomainError as e:
            return _error(e)
        except Exception:
            logger.exception("Unexpected error while updating attendance for %s", employee_id)
            return jsonify({"success": False, "message": "Failed to update attendance"}), 500

        return jsonify(
            {
                "success": True,
                "employee_id": record.employee_id,
                "status": record.status.value,
                "today": rows,
            }
        )

    @app.route("/api/attendance/<employee_id>/checkin", methods=["POST"], endpoint="attendance_checkin")
    @token_required
    def attendance_checkin(employee_id: str):
        return _mutate(employee_id, ToggleAction.CHECK_IN)

    @app.route("/api/attendance/<employee_id>/checkout", methods=["POST"], endpoint="attendance_checkout")
    @token_required
    def attendance_checkout(employee_id: str):
        return _mutate(employee_id, ToggleAction.CHECK_OUT)

    @app.route("/api/attendance/<employee_id>/toggle", methods=["POST"], endpoint="attendance_toggle")
    @token_required
    def attendance_toggle(employee_id: str):
        return _mutate(employee_id, None)
