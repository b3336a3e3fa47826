"""Entries JSON API."""

from __future__ import annotations

from flask import Blueprint, jsonify
from flask_jwt_extended import jwt_required

from reflectdiary.core.utils.http import parse_args, parse_json
from reflectdiary.domains.diary.mappers import map_entry, map_entry_detail
from reflectdiary.domains.diary.schemas.diary_schemas import EntryListFilter, EntryPayload
from reflectdiary.domains.diary.services import entry_service

entries_api_bp = Blueprint("entries_api", __name__)


@entries_api_bp.get("")
@jwt_required()
def list_entries():
    filters = parse_args(EntryListFilter)
    result = entry_service.list_entries(**filters.model_dump())
    return jsonify(
        {
            "entries": [map_entry(e) for e in result["items"]],
            "pagination": {
                "page": result["page"],
                "limit": result["per_page"],
                "total": result["total"],
                "pages": result["pages"],
            },
        }
    )


@entries_api_bp.get("/<int:entry_id>")
@jwt_required()
def get_entry(entry_id: int):
    return jsonify(map_entry_detail(entry_service.get_entry(entry_id)))


@entries_api_bp.post("")
@jwt_required()
def create_entry():
    data = parse_json(EntryPayload)
    entry = entry_service.create_entry(**data.model_dump())
    return jsonify(map_entry(entry)), 201


@entries_api_bp.put("/<int:entry_id>")
@jwt_required()
def update_entry(entry_id: int):
    data = parse_json(EntryPayload)
    entry = entry_service.update_entry(entry_id, **data.model_dump())
    return jsonify(map_entry(entry))


@entries_api_bp.delete("/<int:entry_id>")
@jwt_required()
def delete_entry(entry_id: int):
    entry_service.delete_entry(entry_id)
    return jsonify({"message": "Entry deleted"})
