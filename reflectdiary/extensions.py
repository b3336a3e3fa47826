"""Shared extensions for the diary API server."""

from pathlib import Path

from flask_bcrypt import Bcrypt
from flask_jwt_extended import JWTManager
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy(session_options={"expire_on_commit": False})
migrate = Migrate()
jwt = JWTManager()
bcrypt = Bcrypt()
# Single local user: only the login route carries a limit.
limiter = Limiter(key_func=get_remote_address, enabled=True, default_limits=[])


def init_extensions(app) -> None:
    """Initialize all extensions with the Flask app."""
    from reflectdiary.core.auth.jwt_callbacks import register_jwt_callbacks

    db.init_app(app)
    migrations_dir = Path(__file__).resolve().parent / "migrations"
    migrate.init_app(app, db, directory=str(migrations_dir), render_as_batch=True)
    jwt.init_app(app)
    register_jwt_callbacks(jwt)
    bcrypt.init_app(app)
    limiter.enabled = app.config.get("RATELIMIT_ENABLED", True)
    limiter.init_app(app)
