from __future__ import annotations

import io
import logging

from flask import Flask, jsonify, request, send_file, session

from ..common.datetime_utils import format_form_datetime, parse_form_datetime, to_display
from ..container import Container
from ..core.exceptions import DomainError, GuardDeniedError, StoreError, ValidationError
from ..preferences.session_preferences import SessionPreferenceStore
from .duration import record_duration
from .model import OvertimeRecord, PendingFields
from .service import OvertimeLifecycleService

logger = logging.getLogger(__name__)

_EDITING_KEY = "editing_id"
_EDITING_TECHNICIAN_KEY = "editing_technician"


class PayloadError(ValueError):
    """A request field has the wrong JSON type."""


def register(app: Flask, container: Container) -> None:
    tz = container.display_tz

    def _lifecycle(*, load: bool = True) -> OvertimeLifecycleService:
        """Rebuild the caller's lifecycle from the session (selection + record being edited).

        Routes that mutate pass ``load=False``: the mutation reloads afterwards,
        so the records are not read twice.
        """
        svc = container.new_lifecycle(SessionPreferenceStore())
        editing_id = session.get(_EDITING_KEY)
        editing_technician = session.get(_EDITING_TECHNICIAN_KEY)
        if editing_id is not None and not editing_technician:
            load = True

        svc.restore_selection(load=load)
        if editing_id is None:
            return svc
        if not load:
            svc.resume_edit(int(editing_id), editing_technician)
            return svc

        record = svc.find_record(int(editing_id))
        if record:
            svc.begin_edit(record)
        else:
            session.pop(_EDITING_KEY, None)
            session.pop(_EDITING_TECHNICIAN_KEY, None)
        return svc

    def _persist(svc: OvertimeLifecycleService) -> None:
        if svc.state.editing_id is None:
            session.pop(_EDITING_KEY, None)
            session.pop(_EDITING_TECHNICIAN_KEY, None)
        else:
            session[_EDITING_KEY] = svc.state.editing_id
            session[_EDITING_TECHNICIAN_KEY] = svc.state.editing_technician

    def _record_json(r: OvertimeRecord) -> dict:
        return {
            "id": r.record_id,
            "technician": r.technician_name,
            "start_time": to_display(r.start_time, tz).isoformat(timespec="minutes"),
            "end_time": to_display(r.end_time, tz).isoformat(timespec="minutes"),
            "work_description": r.work_description,
            "duration": str(record_duration(r)),
        }

    def _pending_json(p: PendingFields) -> dict:
        return {
            "technician": p.technician_name,
            "start_time": format_form_datetime(p.start_time, tz) if p.start_time else "",
            "end_time": format_form_datetime(p.end_time, tz) if p.end_time else "",
            "work_description": p.work_description,
        }

    def _state_json(svc: OvertimeLifecycleService) -> dict:
        st = svc.state
        return {
            "success": st.last_error is None,
            "selected_technician": st.selected_technician,
            "mode": st.mode.value,
            "editing_id": st.editing_id,
            "pending": _pending_json(st.pending),
            "records": [_record_json(r) for r in st.records],
            "total": str(st.total),
            "error": st.last_error.value if st.last_error else None,
        }

    def _error(e: DomainError, svc: OvertimeLifecycleService | None = None):
        if isinstance(e, ValidationError):
            status = 400
        elif isinstance(e, GuardDeniedError):
            status = 403
        elif isinstance(e, StoreError):
            status = 503
        else:
            status = 500
        body = {"success": False, "error": e.kind.value, "message": str(e)}
        if svc is not None:
            body["state"] = _state_json(svc)
        return jsonify(body), status

    def _failed(e: DomainError, svc: OvertimeLifecycleService):
        """Answer a failed mutation with the records as the store now has them."""
        svc.refresh()
        svc.state.last_error = e.kind
        return _error(e, svc)

    def _payload() -> dict:
        data = request.get_json(silent=True)
        if isinstance(data, dict) and data:
            return data
        return request.form.to_dict()

    def _text(data: dict, key: str) -> str | None:
        """A string field of the payload; anything else but null is rejected."""
        value = data.get(key)
        if value is None or isinstance(value, str):
            return value
        raise PayloadError(key)

    @app.errorhandler(PayloadError)
    def _invalid_field(e: PayloadError):
        return jsonify({"success": False, "error": "INVALID_FIELD", "message": f"'{e}' must be a string"}), 400

    @app.route("/technicians", methods=["GET"], endpoint="technicians")
    def technicians():
        return jsonify({"technicians": list(container.technicians)})

    @app.route("/overtime", methods=["GET"], endpoint="overtime_state")
    def overtime_state():
        svc = _lifecycle()
        _persist(svc)
        return jsonify(_state_json(svc))

    @app.route("/overtime/select", methods=["POST"], endpoint="overtime_select")
    def overtime_select():
        name = _text(_payload(), "technician")
        svc = _lifecycle(load=False)
        svc.select_technician(name)
        if svc.state.editing_id is not None:
            # Same technician: refill the form from the freshly loaded record.
            record = svc.find_record(svc.state.editing_id)
            if record:
                svc.begin_edit(record)
            else:
                svc.cancel_edit()
        _persist(svc)
        return jsonify(_state_json(svc))

    @app.route("/overtime/records", methods=["POST"], endpoint="overtime_submit")
    def overtime_submit():
        data = _payload()
        technician = _text(data, "technician")
        start_time = _text(data, "start_time")
        end_time = _text(data, "end_time")
        description = _text(data, "work_description")

        svc = _lifecycle(load=False)
        try:
            pending = PendingFields(
                technician_name=(technician or "").strip() or None,
                start_time=parse_form_datetime(start_time, tz),
                end_time=parse_form_datetime(end_time, tz),
                work_description=description or "",
            )
        except ValueError:
            return jsonify({"success": False, "error": "INVALID_TIMESTAMP", "message": "Invalid date/time value"}), 400

        try:
            record_id = svc.submit(pending)
        except DomainError as e:
            return _failed(e, svc)
        _persist(svc)
        body = _state_json(svc)
        body["record_id"] = record_id
        return jsonify(body), 200

    @app.route("/overtime/records/<int:record_id>/edit", methods=["POST"], endpoint="overtime_edit")
    def overtime_edit(record_id: int):
        svc = _lifecycle()
        record = svc.find_record(record_id)
        if not record:
            return jsonify({"success": False, "message": "Record not found"}), 404
        svc.begin_edit(record)
        _persist(svc)
        return jsonify(_state_json(svc))

    @app.route("/overtime/edit/cancel", methods=["POST"], endpoint="overtime_cancel_edit")
    def overtime_cancel_edit():
        svc = _lifecycle()
        svc.cancel_edit()
        _persist(svc)
        return jsonify(_state_json(svc))

    @app.route("/overtime/records/<int:record_id>", methods=["DELETE"], endpoint="overtime_delete")
    def overtime_delete(record_id: int):
        svc = _lifecycle(load=False)
        try:
            svc.delete_one(record_id)
        except DomainError as e:
            return _failed(e, svc)
        _persist(svc)
        return jsonify(_state_json(svc))

    @app.route("/overtime/delete-all", methods=["POST"], endpoint="overtime_delete_all")
    def overtime_delete_all():
        code = _text(_payload(), "code")
        svc = _lifecycle(load=False)
        try:
            removed = svc.delete_all(code)
        except DomainError as e:
            return _failed(e, svc)
        _persist(svc)
        body = _state_json(svc)
        body["deleted"] = removed
        return jsonify(body)

    @app.route("/overtime/export.xlsx", methods=["GET"], endpoint="overtime_export")
    def overtime_export():
        svc = container.new_lifecycle()
        try:
            table = svc.export_all()
        except DomainError as e:
            return _error(e)
        if not table.rows:
            return jsonify({"success": False, "message": "No data to export"}), 404

        content = container.exporter.write(table)
        logger.info("Exported %s overtime rows", len(table))
        return send_file(
            io.BytesIO(content),
            download_name=table.file_name,
            as_attachment=True,
            mimetype=container.exporter.mimetype,
        )
