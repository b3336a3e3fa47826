"""Client-side state: the local JSON store and what the pages keep in it."""

from __future__ import annotations

import json
import logging
import re
import threading
from pathlib import Path
from typing import Any, Dict, List, MutableMapping, Optional, Tuple

from reflectdiary.client.api_client import ApiClient, ApiError

logger = logging.getLogger(__name__)

TOKEN_KEY = "auth_token"
THEME_KEY = "theme"
MOODS_KEY = "moods"

DEFAULT_MOODS: Tuple[Dict[str, str], ...] = (
    {"id": "happy", "name": "Happy"},
    {"id": "sad", "name": "Sad"},
    {"id": "neutral", "name": "Neutral"},
    {"id": "excited", "name": "Excited"},
    {"id": "anxious", "name": "Anxious"},
)

_WHITESPACE = re.compile(r"\s+")


class LocalStore:
    """Persistent key/value store backed by a single JSON file."""

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("Ignoring unreadable state file %s", self.path)
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._load().get(key, default)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            data = self._load()
            data[key] = value
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")

    def remove(self, key: str) -> None:
        with self._lock:
            data = self._load()
            if key not in data:
                return
            del data[key]
            self.path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")


class ThemePreference:
    THEMES = ("light", "dark")

    def __init__(self, store: LocalStore):
        self.store = store

    @property
    def value(self) -> str:
        theme = self.store.get(THEME_KEY, "light")
        return theme if theme in self.THEMES else "light"

    @property
    def is_dark(self) -> bool:
        return self.value == "dark"

    def set(self, theme: str) -> None:
        if theme not in self.THEMES:
            raise ValueError(f"Unknown theme: {theme}")
        self.store.set(THEME_KEY, theme)

    def toggle(self) -> str:
        new_theme = "light" if self.is_dark else "dark"
        self.store.set(THEME_KEY, new_theme)
        return new_theme


def slugify_mood(name: str) -> str:
    """``"  Very Calm "`` -> ``"very-calm"``."""
    return _WHITESPACE.sub("-", name.strip().lower())


class MoodVocabulary:
    """User-editable mood list; moods live only on the client."""

    def __init__(self, store: LocalStore):
        self.store = store

    def all(self) -> List[Dict[str, str]]:
        moods = self.store.get(MOODS_KEY)
        if not isinstance(moods, list):
            return [dict(m) for m in DEFAULT_MOODS]
        return moods

    def _save(self, moods: List[Dict[str, str]]) -> None:
        self.store.set(MOODS_KEY, moods)

    def add(self, name: str) -> Optional[Dict[str, str]]:
        """Add a mood; returns None for blank names and existing ids."""
        mood_id = slugify_mood(name)
        if not mood_id:
            return None
        moods = self.all()
        if any(m["id"] == mood_id for m in moods):
            return None
        mood = {"id": mood_id, "name": name.strip()}
        moods.append(mood)
        self._save(moods)
        return mood

    def rename(self, mood_id: str, name: str) -> bool:
        label = name.strip()
        if not label:
            return False
        moods = self.all()
        for mood in moods:
            if mood["id"] == mood_id:
                mood["name"] = label
                self._save(moods)
                return True
        return False

    def remove(self, mood_id: str) -> bool:
        moods = self.all()
        kept = [m for m in moods if m["id"] != mood_id]
        if len(kept) == len(moods):
            return False
        self._save(kept)
        return True

    def label_for(self, mood_id: Optional[str]) -> str:
        if not mood_id:
            return ""
        for mood in self.all():
            if mood["id"] == mood_id:
                return mood["name"]
        return mood_id


class AuthState:
    """Token handling around an ApiClient.

    ``storage`` is any mutable mapping that lives for the browser session;
    the pages pass the Flask ``session``.
    """

    def __init__(self, client: ApiClient, storage: MutableMapping[str, Any]):
        self.client = client
        self.storage = storage
        self.client.set_auth_token(self.token)

    @property
    def token(self) -> Optional[str]:
        return self.storage.get(TOKEN_KEY)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def login(self, password: str) -> Tuple[bool, Optional[str]]:
        try:
            result = self.client.login(password)
        except ApiError as exc:
            return False, exc.message or "Login failed"
        self.storage[TOKEN_KEY] = result["token"]
        self.client.set_auth_token(result["token"])
        return True, None

    def logout(self) -> None:
        self.storage.pop(TOKEN_KEY, None)
        self.client.set_auth_token(None)

    def change_password(self, current_password: str, new_password: str) -> Tuple[bool, Optional[str]]:
        try:
            self.client.change_password(current_password, new_password)
        except ApiError as exc:
            return False, exc.message
        return True, None
