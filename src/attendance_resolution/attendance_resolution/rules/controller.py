from __future__ import annotations

from flask import Flask, jsonify, request

from ..core.exceptions import NotFoundError, ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _json_object() -> dict:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Invalid input")
        return data

    @app.errorhandler(NotFoundError)
    def handle_not_found(e: NotFoundError):
        return jsonify({"message": str(e)}), 404

    @app.route("/api/rules", methods=["GET"], endpoint="api_rules_list")
    def api_rules_list():
        return jsonify([r.to_dict() for r in container.rule_service.list_rules()])

    @app.route("/api/rules", methods=["POST"], endpoint="api_rules_create")
    def api_rules_create():
        rule = container.rule_service.create(_json_object())
        return jsonify(rule.to_dict()), 201

    @app.route("/api/rules/<int:rule_id>", methods=["PUT"], endpoint="api_rules_update")
    def api_rules_update(rule_id: int):
        rule = container.rule_service.update(rule_id, _json_object())
        return jsonify(rule.to_dict())

    @app.route("/api/rules/<int:rule_id>", methods=["DELETE"], endpoint="api_rules_delete")
    def api_rules_delete(rule_id: int):
        container.rule_service.delete(rule_id)
        return "", 204

    @app.route("/api/rules/import", methods=["POST"], endpoint="api_rules_import")
    def api_rules_import():
        body = request.get_json(silent=True)
        if not isinstance(body, list):
            raise ValidationError("Invalid rule format")

        created = container.rule_service.import_rules(body)
        return jsonify({"message": "Imported rules", "count": len(created)})
