from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..core.exceptions import ValidationError
from ..container import Container

logger = logging.getLogger(__name__)

# adjustments.source_file_name is VARCHAR(255)
SOURCE_FILE_NAME_MAX = 255


def _source_file_name(value) -> str | None:
    name = str(value or "").strip()[:SOURCE_FILE_NAME_MAX]
    return name or None


def register(app: Flask, container: Container) -> None:
    @app.route("/api/adjustments", methods=["GET"], endpoint="api_adjustments_list")
    def api_adjustments_list():
        adjustments = container.adjustment_service.list_adjustments(
            start_date=request.args.get("startDate") or None,
            end_date=request.args.get("endDate") or None,
            employee_code=request.args.get("employeeCode"),
            type=request.args.get("type"),
        )
        return jsonify([a.to_dict() for a in adjustments])

    @app.route("/api/adjustments", methods=["POST"], endpoint="api_adjustments_create")
    def api_adjustments_create():
        body = request.get_json(silent=True)
        if not isinstance(body, dict):
            raise ValidationError("Invalid input")

        adjustment = container.adjustment_service.create(body)
        return jsonify(adjustment.to_dict()), 201

    @app.route("/api/adjustments/import", methods=["POST"], endpoint="api_adjustments_import")
    def api_adjustments_import():
        body = request.get_json(silent=True)
        if not isinstance(body, dict) or not isinstance(body.get("rows"), list):
            raise ValidationError("Invalid input")

        rows = [r for r in body["rows"] if isinstance(r, dict)]
        source_file_name = _source_file_name(body.get("sourceFileName"))

        try:
            result = container.adjustment_import_service.import_rows(rows, source_file_name=source_file_name)
        except ValidationError:
            raise
        except Exception:
            logger.exception("Adjustment import failed")
            return jsonify({"message": "Failed to import adjustments"}), 500

        return jsonify({
            "inserted": result.inserted,
            "invalid": [r.to_dict() for r in result.invalid],
            "processedCount": result.processed_count,
            "reprocessed": result.reprocessed,
        })
