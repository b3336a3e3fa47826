"""Backup export/import API."""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required

from reflectdiary.domains.diary.schemas.diary_schemas import ImportData
from reflectdiary.domains.diary.services import transfer_service

transfer_api_bp = Blueprint("transfer_api", __name__)

EXPORT_FILENAME = "reflection-diary-backup.json"


@transfer_api_bp.get("/export")
@jwt_required()
def export_backup():
    response = jsonify(transfer_service.export_data())
    response.headers["Content-Disposition"] = f"attachment; filename={EXPORT_FILENAME}"
    return response


@transfer_api_bp.post("/import")
@jwt_required()
def import_backup():
    payload = request.get_json(silent=True) or {}
    data = payload.get("data") if isinstance(payload, dict) else None
    if not isinstance(data, dict) or not isinstance(data.get("sections"), list):
        return jsonify({"error": "Invalid data format"}), 400
    result = transfer_service.import_data(ImportData.model_validate(data))
    return jsonify({"message": "Data imported successfully", **result})
