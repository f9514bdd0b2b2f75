from __future__ import annotations

import io
import logging

from flask import Flask, jsonify, request, send_file

from ..container import Container
from ..core.enums import ErrorKind
from ..core.exceptions import DomainError
from .service import as_row

logger = logging.getLogger(__name__)

_STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.DUPLICATE: 400,
    ErrorKind.STORAGE: 500,
}


def register(app: Flask, container: Container) -> None:
    def _error_response(error: DomainError):
        status = _STATUS_BY_KIND.get(error.kind, 500)
        if error.kind is ErrorKind.STORAGE:
            payload = {"error": "Error en la base de datos"}
            if app.config.get("DEBUG"):
                payload["details"] = str(error)
            return jsonify(payload), status

        logger.info("Request rejected (%s): %s", error.kind.value, error)
        return jsonify({"error": str(error)}), status

    @app.route("/registrar", methods=["POST"], endpoint="registrar")
    def registrar():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            data = {}

        result = container.registro_service.register(data.get("codigo"), data.get("turno"))
        if not result.ok:
            return _error_response(result.error)

        return jsonify({"message": "Registro exitoso", "registro": as_row(result.value)})

    @app.route("/registros", methods=["GET"], endpoint="registros")
    def registros():
        result = container.registro_service.list_today(request.args.get("turno"))
        if not result.ok:
            return _error_response(result.error)

        return jsonify([as_row(r) for r in result.value])

    @app.route("/exportar", methods=["GET"], endpoint="exportar")
    def exportar():
        result = container.export_service.export(request.args.get("turno"))
        if not result.ok:
            return _error_response(result.error)

        artifact = result.value
        return send_file(
            io.BytesIO(artifact.content),
            mimetype=artifact.mimetype,
            as_attachment=True,
            download_name=artifact.filename,
        )

    @app.route("/status", methods=["GET"], endpoint="status")
    def status():
        result = container.health_service.check()
        if not result.ok:
            return jsonify({"status": "Error", "database": "Disconnected", "error": str(result.error)}), 500

        return jsonify(result.value)
