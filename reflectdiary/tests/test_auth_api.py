from __future__ import annotations

from datetime import timedelta

import pytest
from flask_jwt_extended import create_access_token, decode_token

pytestmark = pytest.mark.integration

from reflectdiary.core.users.models import User
from reflectdiary.extensions import db


def test_login_with_default_password_returns_token(client):
    resp = client.post("/api/auth/login", json={"password": "password"})
    assert resp.status_code == 200
    body = resp.get_json()
    user = User.query.one()
    assert body["user"] == {"id": user.id}
    assert decode_token(body["token"])["sub"] == str(user.id)


def test_login_wrong_password(client):
    resp = client.post("/api/auth/login", json={"password": "nope"})
    assert resp.status_code == 401
    assert resp.get_json()["error"] == "Invalid password"


def test_login_missing_password(client):
    resp = client.post("/api/auth/login", json={})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Password is required"


def test_login_without_user(client):
    User.query.delete()
    db.session.commit()
    resp = client.post("/api/auth/login", json={"password": "password"})
    assert resp.status_code == 404


def test_missing_token_is_401(client):
    resp = client.get("/api/entries")
    assert resp.status_code == 401
    assert resp.get_json()["error"] == "Access token is missing"


@pytest.mark.parametrize("header", ["Bearer", "Bearer "])
def test_empty_bearer_token_is_401(client, header):
    resp = client.get("/api/entries", headers={"Authorization": header})
    assert resp.status_code == 401
    assert resp.get_json()["error"] == "Access token is missing"


def test_invalid_token_is_403(client):
    resp = client.get("/api/entries", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 403


def test_expired_token_is_403(client):
    user = User.query.one()
    token = create_access_token(identity=str(user.id), expires_delta=timedelta(seconds=-60))
    resp = client.get("/api/entries", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 403
    assert resp.get_json()["error"] == "Token has expired"


def test_change_password_flow(client, auth_headers):
    resp = client.post(
        "/api/auth/change-password",
        json={"currentPassword": "password", "newPassword": "secret123"},
        headers=auth_headers,
    )
    assert resp.status_code == 200
    assert client.post("/api/auth/login", json={"password": "password"}).status_code == 401
    assert client.post("/api/auth/login", json={"password": "secret123"}).status_code == 200


def test_change_password_wrong_current(client, auth_headers):
    resp = client.post(
        "/api/auth/change-password",
        json={"currentPassword": "wrong", "newPassword": "secret123"},
        headers=auth_headers,
    )
    assert resp.status_code == 401


def test_change_password_missing_fields(client, auth_headers):
    resp = client.post("/api/auth/change-password", json={"currentPassword": "password"}, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Current and new passwords are required"


def test_health_is_public(client):
    assert client.get("/api/health").get_json() == {"ok": True}
