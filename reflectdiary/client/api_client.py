"""Thin requests-based client for the diary JSON API."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class ApiError(Exception):
    """A failed API call; ``status`` is 0 when the server was unreachable."""

    def __init__(self, status: int, message: str):
        super().__init__(message)
        self.status = status
        self.message = message

    @property
    def is_auth_error(self) -> bool:
        return self.status in (401, 403)


class ApiClient:
    def __init__(
        self,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout or DEFAULT_TIMEOUT
        self.token: Optional[str] = None

    def set_auth_token(self, token: Optional[str]) -> None:
        self.token = token

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _request(self, method: str, endpoint: str, data: Any = None, params: Optional[dict] = None) -> Any:
        url = f"{self.base_url}{endpoint}"
        try:
            resp = self.session.request(
                method,
                url,
                json=data,
                params=params,
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning("API %s %s failed: %s", method, endpoint, exc)
            raise ApiError(0, "Network error") from exc

        if not resp.ok:
            message = f"HTTP {resp.status_code}"
            try:
                body = resp.json()
            except ValueError:
                body = None
            if isinstance(body, dict) and body.get("error"):
                message = str(body["error"])
            raise ApiError(resp.status_code, message)
        if not resp.content:
            return None
        return resp.json()

    def get(self, endpoint: str, params: Optional[dict] = None) -> Any:
        return self._request("GET", endpoint, params=params)

    def post(self, endpoint: str, data: Any = None) -> Any:
        return self._request("POST", endpoint, data=data)

    def put(self, endpoint: str, data: Any = None) -> Any:
        return self._request("PUT", endpoint, data=data)

    def delete(self, endpoint: str) -> Any:
        return self._request("DELETE", endpoint)

    # ---- auth ----

    def login(self, password: str) -> Dict[str, Any]:
        return self.post("/auth/login", {"password": password})

    def change_password(self, current_password: str, new_password: str) -> Dict[str, Any]:
        return self.post(
            "/auth/change-password",
            {"currentPassword": current_password, "newPassword": new_password},
        )

    # ---- sections / subtopics ----

    def get_sections(self) -> List[Dict[str, Any]]:
        return self.get("/sections")

    def create_subtopic(self, name: str, section_id: int, description: Optional[str] = None) -> Dict[str, Any]:
        return self.post("/subtopics", {"name": name, "description": description, "sectionId": section_id})

    def update_subtopic(self, subtopic_id: int, name: str, description: Optional[str] = None) -> Dict[str, Any]:
        return self.put(f"/subtopics/{subtopic_id}", {"name": name, "description": description})

    def delete_subtopic(self, subtopic_id: int) -> Dict[str, Any]:
        return self.delete(f"/subtopics/{subtopic_id}")

    # ---- entries ----

    def get_entries(self, **filters) -> Dict[str, Any]:
        """``filters`` use the API's query names (sectionId, tagId, search, page, limit...)."""
        params = {key: value for key, value in filters.items() if value is not None}
        return self.get("/entries", params=params)

    def get_entry(self, entry_id: int) -> Dict[str, Any]:
        return self.get(f"/entries/{entry_id}")

    def create_entry(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.post("/entries", data)

    def update_entry(self, entry_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.put(f"/entries/{entry_id}", data)

    def delete_entry(self, entry_id: int) -> Dict[str, Any]:
        return self.delete(f"/entries/{entry_id}")

    # ---- tags / prompts ----

    def get_tags(self) -> List[Dict[str, Any]]:
        return self.get("/tags")

    def create_tag(self, name: str, color: Optional[str] = None) -> Dict[str, Any]:
        return self.post("/tags", {"name": name, "color": color})

    def get_prompts(self) -> List[Dict[str, Any]]:
        return self.get("/prompts")

    # ---- backup ----

    def export_data(self) -> Dict[str, Any]:
        return self.get("/export")

    def import_data(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.post("/import", {"data": data})
