"""Page server: the diary UI rendered with Jinja, backed by the JSON API."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

from flask import Flask, flash, redirect, render_template, request, url_for
from flask_wtf.csrf import CSRFProtect

from reflectdiary import PROJECT_ROOT, resolve_config_name
from reflectdiary.client.api_client import ApiClient, ApiError
from reflectdiary.client.state import LocalStore
from reflectdiary.config import config_by_name

csrf = CSRFProtect()

ClientFactory = Callable[..., ApiClient]


def create_frontend_app(
    config_name: Optional[str] = None,
    client_factory: Optional[ClientFactory] = None,
    state_path: Optional[Path | str] = None,
) -> Flask:
    """Create the page app; ``client_factory(base_url, timeout=...)`` builds the API client."""
    env_name = resolve_config_name(config_name)
    app = Flask(__name__)
    app.config.from_object(config_by_name.get(env_name, config_by_name["development"]))

    if state_path is None:
        state_dir = Path(app.config["DIARY_STATE_DIR"])
        if not state_dir.is_absolute():
            state_dir = PROJECT_ROOT / state_dir
        state_path = state_dir / "state.json"
    app.extensions["diary_store"] = LocalStore(state_path)
    app.extensions["diary_client_factory"] = client_factory or ApiClient

    csrf.init_app(app)

    from reflectdiary.frontend.controllers import auth_pages, diary_pages, settings_pages  # noqa: F401
    from reflectdiary.frontend.controllers.pages import pages_bp
    from reflectdiary.frontend.helpers import current_auth, error_status, get_moods, get_theme

    app.register_blueprint(pages_bp)

    @app.context_processor
    def inject_ui_state():
        return {"theme": get_theme().value, "moods": get_moods()}

    @app.errorhandler(ApiError)
    def _api_error(exc: ApiError):
        if exc.is_auth_error:
            current_auth().logout()
            flash("Your session has expired, please sign in again.", "warning")
            return redirect(url_for("pages.login"))
        app.logger.warning("API error %s: %s", exc.status, exc.message)
        if request.method == "POST" and request.referrer and request.referrer != request.url:
            flash(exc.message, "danger")
            return redirect(request.referrer)
        status = error_status(exc)
        retry_url = request.url if request.method == "GET" else url_for("pages.dashboard")
        return render_template("error.html", message=exc.message, status=status, retry_url=retry_url), status

    return app
