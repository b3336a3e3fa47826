"""Per-request access to the API client and local state."""

from __future__ import annotations

from functools import wraps

from flask import current_app, g, redirect, session, url_for

from reflectdiary.client.api_client import ApiClient, ApiError
from reflectdiary.client.state import AuthState, LocalStore, MoodVocabulary, ThemePreference


def get_store() -> LocalStore:
    return current_app.extensions["diary_store"]


def get_client() -> ApiClient:
    if "diary_client" not in g:
        factory = current_app.extensions["diary_client_factory"]
        g.diary_client = factory(
            current_app.config["DIARY_API_URL"],
            timeout=current_app.config["DIARY_API_TIMEOUT"],
        )
    return g.diary_client


def current_auth() -> AuthState:
    if "diary_auth" not in g:
        g.diary_auth = AuthState(get_client(), session)
    return g.diary_auth


def get_theme() -> ThemePreference:
    return ThemePreference(get_store())


def get_moods() -> MoodVocabulary:
    return MoodVocabulary(get_store())


def error_status(exc: ApiError) -> int:
    """HTTP status for a page that failed on ``exc``; 503 when the API was unreachable."""
    return exc.status if exc.status >= 400 else 503


def login_required(view):
    @wraps(view)
    def wrapped(*args, **kwargs):
        if not current_auth().is_authenticated:
            return redirect(url_for("pages.login"))
        return view(*args, **kwargs)

    return wrapped
