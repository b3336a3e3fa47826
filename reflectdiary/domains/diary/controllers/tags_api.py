"""Tags and prompts JSON API."""

from __future__ import annotations

from flask import Blueprint, jsonify
from flask_jwt_extended import jwt_required

from reflectdiary.core.utils.http import parse_json
from reflectdiary.domains.diary.mappers import map_prompt, map_tag
from reflectdiary.domains.diary.schemas.diary_schemas import TagCreate, TagUpdate
from reflectdiary.domains.diary.services import tag_service

tags_api_bp = Blueprint("tags_api", __name__)
prompts_api_bp = Blueprint("prompts_api", __name__)


@tags_api_bp.get("")
@jwt_required()
def list_tags():
    return jsonify([map_tag(tag, count) for tag, count in tag_service.list_tags()])


@tags_api_bp.post("")
@jwt_required()
def create_tag():
    data = parse_json(TagCreate)
    tag = tag_service.create_tag(name=data.name, color=data.color)
    return jsonify(map_tag(tag)), 201


@tags_api_bp.put("/<int:tag_id>")
@jwt_required()
def update_tag(tag_id: int):
    data = parse_json(TagUpdate)
    tag = tag_service.update_tag(tag_id, **data.model_dump(exclude_unset=True))
    return jsonify(map_tag(tag))


@tags_api_bp.delete("/<int:tag_id>")
@jwt_required()
def delete_tag(tag_id: int):
    tag_service.delete_tag(tag_id)
    return jsonify({"message": "Tag deleted"})


@prompts_api_bp.get("")
@jwt_required()
def list_prompts():
    return jsonify([map_prompt(p) for p in tag_service.list_prompts()])
