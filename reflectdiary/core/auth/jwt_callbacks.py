"""flask-jwt-extended responses: missing token is 401, a bad token is 403."""

from __future__ import annotations

from flask import current_app, jsonify, request
from flask_jwt_extended import JWTManager


def _missing_token_response():
    return jsonify({"error": "Access token is missing"}), 401


def _header_has_token() -> bool:
    """False for an ``Authorization`` header that names the scheme but carries no token."""
    header = request.headers.get(current_app.config["JWT_HEADER_NAME"], "")
    return len(header.split()) > 1


def register_jwt_callbacks(jwt: JWTManager) -> None:
    @jwt.unauthorized_loader
    def _missing_token(reason: str):
        return _missing_token_response()

    @jwt.invalid_token_loader
    def _invalid_token(reason: str):
        # A bare "Bearer" header is rejected by the header parser, not the decoder.
        if not _header_has_token():
            return _missing_token_response()
        return jsonify({"error": "Invalid token"}), 403

    @jwt.expired_token_loader
    def _expired_token(jwt_header: dict, jwt_payload: dict):
        return jsonify({"error": "Token has expired"}), 403
