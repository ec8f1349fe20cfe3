from __future__ import annotations

import csv
import io
import logging
from datetime import date

from flask import Flask, jsonify, request

from ..common.validators import coerce_int, require_date_range, require_iso_date
from ..core.constants import DEFAULT_PAGE_LIMIT
from ..core.exceptions import ProcessingError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _json_body() -> dict:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")
        return data

    def _write_report_csv(*, headers, rows, filename: str):
        """Write report rows to a CSV response (utf-8 BOM so spreadsheet apps read Arabic)."""

        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=list(headers))
        writer.writeheader()
        for row in rows:
            writer.writerow(row)

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    def _range_from_args() -> tuple[date, date]:
        start = require_iso_date(request.args.get("startDate"), "startDate")
        end = require_iso_date(request.args.get("endDate"), "endDate")
        require_date_range(start, end)
        return start, end

    @app.errorhandler(ValidationError)
    def handle_validation_error(e: ValidationError):
        return jsonify({"message": str(e)}), 400

    @app.errorhandler(ProcessingError)
    def handle_processing_error(e: ProcessingError):
        return jsonify({"message": str(e)}), 409

    @app.route("/api/attendance/process", methods=["POST"], endpoint="api_attendance_process")
    def api_attendance_process():
        body = _json_body()
        offset = body.get("timezoneOffsetMinutes")
        codes = body.get("employeeCodes")
        if codes is not None and not isinstance(codes, list):
            raise ValidationError("employeeCodes must be a list")

        try:
            processed = container.processing_service.process(
                start_date=body.get("startDate"),
                end_date=body.get("endDate"),
                timezone_offset_minutes=coerce_int(offset, "timezoneOffsetMinutes") if offset not in (None, "") else None,
                employee_codes=[str(c) for c in codes] if codes is not None else None,
            )
        except (ValidationError, ProcessingError):
            raise
        except Exception:
            logger.exception("Attendance processing failed")
            return jsonify({"message": "Failed to process attendance"}), 500

        return jsonify({"message": "Processing completed", "processedCount": processed})

    @app.route("/api/attendance", methods=["GET"], endpoint="api_attendance_list")
    def api_attendance_list():
        page = coerce_int(request.args.get("page"), "page", default=1)
        limit = coerce_int(request.args.get("limit"), "limit", default=DEFAULT_PAGE_LIMIT)
        data, total = container.processing_service.list_records(
            start_date=request.args.get("startDate") or None,
            end_date=request.args.get("endDate") or None,
            employee_code=request.args.get("employeeCode"),
            page=page,
            limit=limit,
        )
        return jsonify({
            "data": [r.to_dict() for r in data],
            "total": total,
            "page": page if page > 0 else 1,
            "limit": limit if limit > 0 else 0,
        })

    @app.route("/api/attendance/export", methods=["GET"], endpoint="api_attendance_export")
    def api_attendance_export():
        start, end = _range_from_args()
        kind = (request.args.get("kind") or "detail").strip().lower()
        if kind not in {"detail", "summary"}:
            raise ValidationError("kind must be 'detail' or 'summary'")

        report = container.report_service.build(
            start=start,
            end=end,
            employee_code=(request.args.get("employeeCode") or "").strip() or None,
        )
        stamp = f"{start.strftime('%Y%m%d')}_{end.strftime('%Y%m%d')}"
        if kind == "summary":
            return _write_report_csv(
                headers=report.summary_headers,
                rows=report.summary,
                filename=f"attendance_summary_{stamp}.csv",
            )
        return _write_report_csv(
            headers=report.detail_headers,
            rows=report.rows,
            filename=f"attendance_detail_{stamp}.csv",
        )
