"""Auth HTTP controllers."""

from __future__ import annotations

from flask import Blueprint, jsonify
from flask_jwt_extended import get_jwt_identity, jwt_required
from pydantic import ValidationError

from reflectdiary.core.auth.auth_service import authenticate, change_password, issue_token
from reflectdiary.core.auth.schemas import ChangePasswordRequest, LoginRequest
from reflectdiary.core.utils.http import jsonable_errors, parse_json
from reflectdiary.extensions import limiter

auth_bp = Blueprint("auth_api", __name__)


@auth_bp.post("/login")
@limiter.limit("10/minute")
def login():
    try:
        data = parse_json(LoginRequest)
    except ValidationError as exc:
        return jsonify({"error": "Password is required", "details": jsonable_errors(exc)}), 400
    user = authenticate(data.password)
    return jsonify({"token": issue_token(user), "user": {"id": user.id}})


@auth_bp.post("/change-password")
@jwt_required()
def change_password_route():
    try:
        data = parse_json(ChangePasswordRequest)
    except ValidationError as exc:
        return (
            jsonify({"error": "Current and new passwords are required", "details": jsonable_errors(exc)}),
            400,
        )
    change_password(int(get_jwt_identity()), data.current_password, data.new_password)
    return jsonify({"message": "Password changed"})
