"""Sections and subtopics JSON API."""

from __future__ import annotations

from flask import Blueprint, jsonify
from flask_jwt_extended import jwt_required

from reflectdiary.core.utils.http import parse_json
from reflectdiary.domains.diary.mappers import map_section, map_subtopic
from reflectdiary.domains.diary.schemas.diary_schemas import SubtopicCreate, SubtopicUpdate
from reflectdiary.domains.diary.services import catalog_service

sections_api_bp = Blueprint("sections_api", __name__)
subtopics_api_bp = Blueprint("subtopics_api", __name__)


@sections_api_bp.get("")
@jwt_required()
def list_sections():
    return jsonify([map_section(section, count) for section, count in catalog_service.list_sections()])


@subtopics_api_bp.post("")
@jwt_required()
def create_subtopic():
    data = parse_json(SubtopicCreate)
    subtopic = catalog_service.create_subtopic(
        name=data.name, description=data.description, section_id=data.section_id
    )
    return jsonify(map_subtopic(subtopic)), 201


@subtopics_api_bp.put("/<int:subtopic_id>")
@jwt_required()
def update_subtopic(subtopic_id: int):
    data = parse_json(SubtopicUpdate)
    subtopic = catalog_service.update_subtopic(subtopic_id, **data.model_dump(exclude_unset=True))
    return jsonify(map_subtopic(subtopic))


@subtopics_api_bp.delete("/<int:subtopic_id>")
@jwt_required()
def delete_subtopic(subtopic_id: int):
    catalog_service.delete_subtopic(subtopic_id)
    return jsonify({"message": "Subtopic deleted"})
