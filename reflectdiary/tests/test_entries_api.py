"""Entries API: CRUD, tag replacement, filters and pagination."""

from __future__ import annotations

import pytest

pytestmark = pytest.mark.integration

from reflectdiary.domains.diary.models import EntryTag


@pytest.fixture
def tag_ids(client, auth_headers):
    ids = []
    for name in ("one", "two", "three"):
        resp = client.post("/api/tags", json={"name": name}, headers=auth_headers)
        ids.append(resp.get_json()["id"])
    return ids


def _create(client, headers, **fields):
    resp = client.post("/api/entries", json=fields, headers=headers)
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()


def test_create_and_get_entry(client, auth_headers, section_ids):
    created = _create(
        client,
        auth_headers,
        title="First",
        content="Hello diary",
        mood="happy",
        intensity=7,
        sectionId=section_ids[0],
    )
    assert created["isDraft"] is False
    assert created["section"]["id"] == section_ids[0]

    resp = client.get(f"/api/entries/{created['id']}", headers=auth_headers)
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["title"] == "First"
    assert body["mood"] == "happy"
    assert body["intensity"] == 7
    assert body["answers"] == []
    assert body["subtopic"] is None


def test_intensity_zero_is_kept(client, auth_headers, section_ids):
    created = _create(client, auth_headers, content="calm", intensity=0, sectionId=section_ids[0])
    assert created["intensity"] == 0


def test_null_tag_ids_means_no_tags(client, auth_headers, section_ids):
    created = _create(client, auth_headers, content="plain", tagIds=None, sectionId=section_ids[0])
    assert created["tags"] == []


def test_create_entry_with_tags(client, auth_headers, section_ids, tag_ids):
    created = _create(client, auth_headers, content="x", sectionId=section_ids[0], tagIds=[tag_ids[1], tag_ids[0]])
    fetched = client.get(f"/api/entries/{created['id']}", headers=auth_headers).get_json()
    assert {t["tagId"] for t in fetched["tags"]} == {tag_ids[0], tag_ids[1]}
    assert {t["tag"]["name"] for t in fetched["tags"]} == {"one", "two"}


def test_update_replaces_tags(client, auth_headers, section_ids, tag_ids):
    created = _create(client, auth_headers, content="x", sectionId=section_ids[0], tagIds=tag_ids[:2])
    resp = client.put(
        f"/api/entries/{created['id']}",
        json={"content": "y", "sectionId": section_ids[0], "tagIds": tag_ids[1:]},
        headers=auth_headers,
    )
    assert resp.status_code == 200
    fetched = client.get(f"/api/entries/{created['id']}", headers=auth_headers).get_json()
    assert fetched["content"] == "y"
    assert {t["tagId"] for t in fetched["tags"]} == {tag_ids[1], tag_ids[2]}
    assert EntryTag.query.filter_by(entry_id=created["id"]).count() == 2


def test_update_can_clear_tags_and_move_section(client, auth_headers, section_ids, tag_ids):
    created = _create(client, auth_headers, content="x", sectionId=section_ids[0], tagIds=tag_ids)
    resp = client.put(
        f"/api/entries/{created['id']}",
        json={"content": "x", "sectionId": section_ids[2], "isDraft": True},
        headers=auth_headers,
    )
    body = resp.get_json()
    assert body["tags"] == []
    assert body["sectionId"] == section_ids[2]
    assert body["isDraft"] is True


def test_unknown_tag_rejects_whole_create(client, auth_headers, section_ids, tag_ids):
    resp = client.post(
        "/api/entries",
        json={"content": "x", "sectionId": section_ids[0], "tagIds": [tag_ids[0], 9999]},
        headers=auth_headers,
    )
    assert resp.status_code == 404
    listing = client.get("/api/entries", headers=auth_headers).get_json()
    assert listing["pagination"]["total"] == 0


def test_unknown_section_or_subtopic(client, auth_headers, section_ids):
    resp = client.post("/api/entries", json={"content": "x", "sectionId": 9999}, headers=auth_headers)
    assert resp.status_code == 404
    resp = client.post(
        "/api/entries",
        json={"content": "x", "sectionId": section_ids[0], "subtopicId": 9999},
        headers=auth_headers,
    )
    assert resp.status_code == 404


@pytest.mark.parametrize(
    "payload",
    [
        {"content": ""},
        {"content": "x", "intensity": 11},
        {"content": "x", "intensity": -1},
    ],
)
def test_invalid_payload_is_400(client, auth_headers, section_ids, payload):
    resp = client.post("/api/entries", json={**payload, "sectionId": section_ids[0]}, headers=auth_headers)
    assert resp.status_code == 400


def test_missing_section_is_400(client, auth_headers):
    resp = client.post("/api/entries", json={"content": "x"}, headers=auth_headers)
    assert resp.status_code == 400


def test_get_unknown_entry_is_404(client, auth_headers):
    resp = client.get("/api/entries/9999", headers=auth_headers)
    assert resp.status_code == 404
    assert "error" in resp.get_json()


def test_delete_entry(client, auth_headers, section_ids, tag_ids):
    created = _create(client, auth_headers, content="bye", sectionId=section_ids[0], tagIds=[tag_ids[0]])
    resp = client.delete(f"/api/entries/{created['id']}", headers=auth_headers)
    assert resp.status_code == 200
    assert client.get(f"/api/entries/{created['id']}", headers=auth_headers).status_code == 404
    assert EntryTag.query.count() == 0
    assert client.delete(f"/api/entries/{created['id']}", headers=auth_headers).status_code == 404


def test_search_matches_title_or_content(client, auth_headers, section_ids):
    _create(client, auth_headers, title="Apple pie", content="baking", sectionId=section_ids[0])
    _create(client, auth_headers, title="Walk", content="ate an apple", sectionId=section_ids[0])
    _create(client, auth_headers, title="Pear", content="nothing here", sectionId=section_ids[0])

    body = client.get("/api/entries?search=apple", headers=auth_headers).get_json()
    assert sorted(e["title"] for e in body["entries"]) == ["Apple pie", "Walk"]


def test_search_sensitive_mode(app, client, auth_headers, section_ids):
    app.config["ENTRY_SEARCH_MODE"] = "sensitive"
    _create(client, auth_headers, title="Apple pie", content="baking", sectionId=section_ids[0])
    _create(client, auth_headers, title="Walk", content="ate an apple", sectionId=section_ids[0])

    body = client.get("/api/entries?search=apple", headers=auth_headers).get_json()
    assert [e["title"] for e in body["entries"]] == ["Walk"]


def test_filters(client, auth_headers, section_ids, tag_ids):
    sub = client.post("/api/subtopics", json={"name": "s", "sectionId": section_ids[0]}, headers=auth_headers).get_json()
    _create(client, auth_headers, content="a", mood="happy", sectionId=section_ids[0], subtopicId=sub["id"])
    _create(client, auth_headers, content="b", mood="sad", sectionId=section_ids[0], tagIds=[tag_ids[0]])
    _create(client, auth_headers, content="c", mood="happy", sectionId=section_ids[1])

    def contents(query):
        body = client.get(f"/api/entries?{query}", headers=auth_headers).get_json()
        return sorted(e["content"] for e in body["entries"])

    assert contents(f"sectionId={section_ids[0]}") == ["a", "b"]
    assert contents(f"subtopicId={sub['id']}") == ["a"]
    assert contents(f"tagId={tag_ids[0]}") == ["b"]
    assert contents("mood=happy") == ["a", "c"]
    assert contents(f"mood=happy&sectionId={section_ids[1]}") == ["c"]
    assert contents("sectionId=&mood=") == ["a", "b", "c"]


def test_pagination(client, auth_headers, section_ids):
    for i in range(25):
        _create(client, auth_headers, content=f"entry {i}", sectionId=section_ids[0])

    body = client.get("/api/entries?page=2&limit=10", headers=auth_headers).get_json()
    assert len(body["entries"]) == 10
    assert body["pagination"] == {"page": 2, "limit": 10, "total": 25, "pages": 3}

    last = client.get("/api/entries?page=3&limit=10", headers=auth_headers).get_json()
    assert len(last["entries"]) == 5


def test_list_is_newest_first(client, auth_headers, section_ids):
    first = _create(client, auth_headers, content="first", sectionId=section_ids[0])
    second = _create(client, auth_headers, content="second", sectionId=section_ids[0])
    body = client.get("/api/entries", headers=auth_headers).get_json()
    assert [e["id"] for e in body["entries"]] == [second["id"], first["id"]]
    assert body["pagination"]["limit"] == 20
