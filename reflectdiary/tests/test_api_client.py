from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import requests

pytestmark = pytest.mark.unit

from reflectdiary.client.api_client import ApiClient, ApiError


def _response(status=200, json_body=None, content=b"{}"):
    resp = MagicMock()
    resp.status_code = status
    resp.ok = status < 400
    resp.content = content
    if isinstance(json_body, Exception):
        resp.json.side_effect = json_body
    else:
        resp.json.return_value = json_body
    return resp


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


def test_auth_header_and_json_body(session):
    session.request.return_value = _response(json_body={"token": "t", "user": {"id": 1}})
    client = ApiClient("http://localhost:3001/api/", session=session, timeout=5)

    client.login("pw")
    method, url = session.request.call_args.args
    kwargs = session.request.call_args.kwargs
    assert (method, url) == ("POST", "http://localhost:3001/api/auth/login")
    assert kwargs["json"] == {"password": "pw"}
    assert "Authorization" not in kwargs["headers"]
    assert kwargs["timeout"] == 5

    client.set_auth_token("abc")
    client.get_sections()
    assert session.request.call_args.kwargs["headers"]["Authorization"] == "Bearer abc"


def test_get_entries_omits_none_filters(session):
    session.request.return_value = _response(json_body={"entries": [], "pagination": {}})
    client = ApiClient("http://api", session=session)
    client.get_entries(sectionId=3, search=None, mood="happy", page=1)
    assert session.request.call_args.kwargs["params"] == {"sectionId": 3, "mood": "happy", "page": 1}


def test_error_message_from_body(session):
    session.request.return_value = _response(status=401, json_body={"error": "Invalid password"})
    client = ApiClient("http://api", session=session)
    with pytest.raises(ApiError) as excinfo:
        client.login("bad")
    assert excinfo.value.status == 401
    assert excinfo.value.message == "Invalid password"
    assert excinfo.value.is_auth_error


def test_error_without_json_body(session):
    session.request.return_value = _response(status=502, json_body=ValueError("no json"))
    client = ApiClient("http://api", session=session)
    with pytest.raises(ApiError) as excinfo:
        client.get_tags()
    assert excinfo.value.status == 502
    assert excinfo.value.message == "HTTP 502"


def test_network_error_is_status_zero(session):
    session.request.side_effect = requests.ConnectionError("refused")
    client = ApiClient("http://api", session=session)
    with pytest.raises(ApiError) as excinfo:
        client.get_sections()
    assert excinfo.value.status == 0
    assert excinfo.value.message == "Network error"


def test_import_wraps_payload(session):
    session.request.return_value = _response(json_body={"message": "ok"})
    client = ApiClient("http://api", session=session)
    client.import_data({"sections": []})
    assert session.request.call_args.kwargs["json"] == {"data": {"sections": []}}


def test_endpoint_paths(session):
    session.request.return_value = _response(json_body={})
    client = ApiClient("http://api", session=session)
    calls = [
        (lambda: client.update_entry(4, {}), ("PUT", "http://api/entries/4")),
        (lambda: client.delete_entry(4), ("DELETE", "http://api/entries/4")),
        (lambda: client.delete_subtopic(2), ("DELETE", "http://api/subtopics/2")),
        (lambda: client.export_data(), ("GET", "http://api/export")),
        (lambda: client.change_password("a", "b"), ("POST", "http://api/auth/change-password")),
    ]
    for call, expected in calls:
        call()
        assert session.request.call_args.args == expected
