"""Page server tests with a mocked API client."""

from __future__ import annotations

import io
import json
from unittest.mock import MagicMock

import pytest

pytestmark = pytest.mark.unit

from reflectdiary.client.api_client import ApiError
from reflectdiary.frontend import create_frontend_app

SECTIONS = [
    {
        "id": 1,
        "name": "Basic information",
        "description": None,
        "order": 1,
        "subtopics": [{"id": 10, "name": "Family", "description": None, "sectionId": 1}],
        "_count": {"entries": 2},
    },
    {"id": 2, "name": "Life story", "description": None, "order": 2, "subtopics": [], "_count": {"entries": 0}},
]

ENTRIES = [
    {
        "id": 5,
        "title": "With subtopic",
        "content": "one two",
        "mood": "happy",
        "intensity": 3,
        "isDraft": False,
        "sectionId": 1,
        "subtopicId": 10,
        "createdAt": "2024-03-02T10:00:00.000Z",
        "updatedAt": "2024-03-02T10:00:00.000Z",
        "tags": [{"entryId": 5, "tagId": 7, "tag": {"id": 7, "name": "work"}}],
        "section": SECTIONS[0],
        "subtopic": SECTIONS[0]["subtopics"][0],
    },
    {
        "id": 6,
        "title": "Loose",
        "content": "three",
        "mood": None,
        "intensity": None,
        "isDraft": True,
        "sectionId": 1,
        "subtopicId": None,
        "createdAt": "2024-03-01T10:00:00.000Z",
        "updatedAt": "2024-03-01T10:00:00.000Z",
        "tags": [],
        "section": SECTIONS[0],
        "subtopic": None,
    },
]


@pytest.fixture
def api():
    mock = MagicMock()
    mock.get_sections.return_value = SECTIONS
    mock.get_entries.return_value = {
        "entries": ENTRIES,
        "pagination": {"page": 1, "limit": 20, "total": 2, "pages": 1},
    }
    mock.get_tags.return_value = [{"id": 7, "name": "work", "color": None}]
    mock.get_entry.return_value = ENTRIES[0]
    return mock


@pytest.fixture
def pages_app(api, tmp_path):
    app = create_frontend_app("testing", client_factory=lambda *a, **kw: api, state_path=tmp_path / "state.json")
    return app


@pytest.fixture
def pages(pages_app):
    return pages_app.test_client()


@pytest.fixture
def logged_in(pages):
    with pages.session_transaction() as sess:
        sess["auth_token"] = "tok"
    return pages


def test_redirects_to_login_without_token(pages):
    resp = pages.get("/")
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/login")


def test_login_stores_token(pages, api):
    api.login.return_value = {"token": "tok", "user": {"id": 1}}
    resp = pages.post("/login", data={"password": "password"})
    assert resp.status_code == 302
    api.login.assert_called_once_with("password")
    with pages.session_transaction() as sess:
        assert sess["auth_token"] == "tok"


def test_login_shows_api_error(pages, api):
    api.login.side_effect = ApiError(401, "Invalid password")
    resp = pages.post("/login", data={"password": "bad"})
    assert resp.status_code == 200
    assert b"Invalid password" in resp.data


def test_logout_clears_token(logged_in):
    logged_in.get("/logout")
    with logged_in.session_transaction() as sess:
        assert "auth_token" not in sess


def test_dashboard_shows_stats_and_groups(logged_in, api):
    resp = logged_in.get("/?section=1")
    assert resp.status_code == 200
    html = resp.data.decode()
    assert "Basic information" in html
    assert "Family" in html
    assert "Without subtopic" in html
    assert "longest streak <strong>2</strong>" in html
    api.get_entries.assert_any_call(limit=10000)
    api.get_entries.assert_any_call(sectionId=1, limit=10000)


def test_api_auth_error_logs_out(logged_in, api):
    api.get_sections.side_effect = ApiError(403, "Invalid token")
    resp = logged_in.get("/")
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/login")
    with logged_in.session_transaction() as sess:
        assert "auth_token" not in sess


def test_unreachable_api_renders_error_page(logged_in, api):
    api.get_sections.side_effect = ApiError(0, "Network error")
    resp = logged_in.get("/")
    assert resp.status_code == 503
    assert "Location" not in resp.headers
    assert b"Network error" in resp.data
    with logged_in.session_transaction() as sess:
        assert sess["auth_token"] == "tok"


def test_server_error_on_entries_page_is_rendered(logged_in, api):
    api.get_entries.side_effect = ApiError(500, "Database error")
    resp = logged_in.get("/entries")
    assert resp.status_code == 500
    assert b"Database error" in resp.data


def test_failed_action_returns_to_referring_page(logged_in, api):
    api.create_subtopic.side_effect = ApiError(404, "Section not found")
    resp = logged_in.post(
        "/subtopics",
        data={"name": "Work", "section_id": "1"},
        headers={"Referer": "http://localhost/?section=1"},
    )
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/?section=1")


def test_failed_save_keeps_editor_content(logged_in, api):
    api.create_entry.side_effect = ApiError(0, "Network error")
    resp = logged_in.post(
        "/entries/new",
        data={"content": "Thoughts worth keeping", "section_id": "1", "save": "Save"},
        headers={"Referer": "http://localhost/entries/new"},
    )
    assert resp.status_code == 503
    assert b"Network error" in resp.data
    assert b"Thoughts worth keeping" in resp.data


def test_entries_page_passes_filters(logged_in, api):
    resp = logged_in.get("/entries?search=apple&section=1&mood=happy")
    assert resp.status_code == 200
    api.get_entries.assert_called_with(search="apple", sectionId=1, subtopicId=None, mood="happy", page=1)
    assert b"With subtopic" in resp.data


def test_delete_entry_keeps_filters(logged_in, api):
    resp = logged_in.post("/entries/5/delete?search=apple")
    api.delete_entry.assert_called_once_with(5)
    assert resp.headers["Location"].endswith("/entries?search=apple")


def test_create_entry_as_draft(logged_in, api):
    api.create_entry.return_value = {"id": 9}
    resp = logged_in.post(
        "/entries/new",
        data={
            "title": "T",
            "content": "Body",
            "section_id": "1",
            "subtopic_id": "",
            "mood": "happy",
            "intensity": "4",
            "tag_ids": ["7"],
            "save_draft": "Save as draft",
        },
    )
    assert resp.status_code == 302
    api.create_entry.assert_called_once_with(
        {
            "title": "T",
            "content": "Body",
            "mood": "happy",
            "intensity": 4,
            "sectionId": 1,
            "subtopicId": None,
            "tagIds": [7],
            "isDraft": True,
        }
    )


def test_editor_requires_content_and_section(logged_in, api):
    resp = logged_in.post("/entries/new", data={"content": "", "section_id": ""})
    assert resp.status_code == 200
    assert b"Content is required" in resp.data
    assert b"Section is required" in resp.data
    api.create_entry.assert_not_called()


def test_edit_entry_prefills_and_updates(logged_in, api):
    resp = logged_in.get("/entries/5")
    assert resp.status_code == 200
    assert b"With subtopic" in resp.data

    logged_in.post("/entries/5", data={"content": "changed", "section_id": "2", "save": "Save"})
    api.update_entry.assert_called_once()
    entry_id, payload = api.update_entry.call_args.args
    assert entry_id == 5
    assert payload["sectionId"] == 2
    assert payload["isDraft"] is False


def test_subtopic_management(logged_in, api):
    logged_in.post("/subtopics", data={"name": "Work", "section_id": "1"})
    api.create_subtopic.assert_called_once_with("Work", 1, None)
    logged_in.post("/subtopics/10/rename", data={"name": "Kin", "section_id": "1"})
    api.update_subtopic.assert_called_once_with(10, "Kin", None)
    logged_in.post("/subtopics/10/delete", data={"section_id": "1"})
    api.delete_subtopic.assert_called_once_with(10)


def test_mood_management(logged_in, pages_app):
    logged_in.post("/moods", data={"name": "Very Calm"})
    with pages_app.app_context():
        from reflectdiary.frontend.helpers import get_moods

        assert get_moods().label_for("very-calm") == "Very Calm"


def test_change_password_validates_locally(logged_in, api):
    resp = logged_in.post(
        "/settings/password",
        data={"current_password": "password", "new_password": "abc", "confirm_password": "abc"},
    )
    assert resp.status_code == 200
    assert b"at least 6 characters" in resp.data
    api.change_password.assert_not_called()

    resp = logged_in.post(
        "/settings/password",
        data={"current_password": "password", "new_password": "abcdef", "confirm_password": "abcdeg"},
    )
    assert b"Passwords do not match" in resp.data

    resp = logged_in.post(
        "/settings/password",
        data={"current_password": "password", "new_password": "abcdef", "confirm_password": "abcdef"},
    )
    assert resp.status_code == 302
    api.change_password.assert_called_once_with("password", "abcdef")


def test_export_download(logged_in, api):
    api.export_data.return_value = {"version": "1.0", "sections": []}
    resp = logged_in.get("/settings/export")
    assert resp.status_code == 200
    assert "reflection-diary-backup-" in resp.headers["Content-Disposition"]
    assert json.loads(resp.data) == {"version": "1.0", "sections": []}


def test_import_upload(logged_in, api):
    api.import_data.return_value = {"message": "ok", "imported": 3, "skippedSections": 0}
    backup = json.dumps({"version": "1.0", "sections": [{"name": "Life story", "entries": []}]}).encode()
    resp = logged_in.post(
        "/settings/import",
        data={"file": (io.BytesIO(backup), "backup.json")},
        content_type="multipart/form-data",
    )
    assert resp.status_code == 302
    sent = api.import_data.call_args.args[0]
    assert sent["sections"][0]["name"] == "Life story"


def test_theme_toggle(logged_in):
    logged_in.post("/settings/theme")
    resp = logged_in.get("/settings")
    assert b'<body class="dark">' in resp.data
