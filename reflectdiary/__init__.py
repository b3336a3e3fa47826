"""Reflection diary API application factory."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from flask import Flask, jsonify
from pydantic import ValidationError

from reflectdiary.config import config_by_name
from reflectdiary.core.errors import DiaryError
from reflectdiary.core.utils.http import validation_error_response
from reflectdiary.extensions import db, init_extensions

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def resolve_config_name(config_name: Optional[str] = None) -> str:
    return (config_name or os.environ.get("APP_ENV") or "development").lower()


def create_app(config_name: Optional[str] = None) -> Flask:
    """Create and configure the diary API application."""
    env_name = resolve_config_name(config_name)
    app = Flask(__name__, instance_path=str(PROJECT_ROOT / "instance"))
    config_cls = config_by_name.get(env_name, config_by_name["development"])
    app.config.from_object(config_cls)

    # Normalize sqlite path to absolute to avoid "unable to open database file"
    db_uri = app.config.get("SQLALCHEMY_DATABASE_URI") or ""
    if db_uri.startswith("sqlite:///") and not db_uri.startswith("sqlite:////"):
        db_path = PROJECT_ROOT / db_uri.replace("sqlite:///", "", 1)
        db_path.parent.mkdir(parents=True, exist_ok=True)
        app.config["SQLALCHEMY_DATABASE_URI"] = f"sqlite:///{db_path}"

    init_extensions(app)
    _register_models()
    _register_blueprints(app)
    _register_error_handlers(app)

    @app.get("/api/health")
    def health():
        return {"ok": True}, 200

    from reflectdiary.cli import register_cli

    register_cli(app)
    return app


def _register_models() -> None:
    """Import model modules so metadata is complete before create_all/migrations."""
    from reflectdiary.core.users import models as user_models  # noqa: F401
    from reflectdiary.domains.diary import models as diary_models  # noqa: F401


def _register_blueprints(app: Flask) -> None:
    """Lazy import and register all controllers."""
    from reflectdiary.core.auth.controllers import auth_bp
    from reflectdiary.domains.diary.controllers.entries_api import entries_api_bp
    from reflectdiary.domains.diary.controllers.sections_api import (
        sections_api_bp,
        subtopics_api_bp,
    )
    from reflectdiary.domains.diary.controllers.tags_api import prompts_api_bp, tags_api_bp
    from reflectdiary.domains.diary.controllers.transfer_api import transfer_api_bp

    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(sections_api_bp, url_prefix="/api/sections")
    app.register_blueprint(subtopics_api_bp, url_prefix="/api/subtopics")
    app.register_blueprint(entries_api_bp, url_prefix="/api/entries")
    app.register_blueprint(tags_api_bp, url_prefix="/api/tags")
    app.register_blueprint(prompts_api_bp, url_prefix="/api/prompts")
    app.register_blueprint(transfer_api_bp, url_prefix="/api")


def _register_error_handlers(app: Flask) -> None:
    """JSON error responses shaped as ``{"error": message}``."""
    from werkzeug.exceptions import HTTPException

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        return jsonify({"error": exc.description}), exc.code

    @app.errorhandler(DiaryError)
    def _diary_error(exc: DiaryError):
        return jsonify({"error": str(exc)}), exc.status_code

    @app.errorhandler(ValidationError)
    def _validation_error(exc: ValidationError):
        return validation_error_response(exc)

    @app.errorhandler(Exception)
    def _generic_error(exc: Exception):
        db.session.rollback()
        app.logger.exception("Unhandled error: %s", exc)
        return jsonify({"error": str(exc)}), 500
