from __future__ import annotations

import pytest

pytestmark = pytest.mark.integration

from reflectdiary.bootstrap import initialize_app
from reflectdiary.core.users.models import User
from reflectdiary.domains.diary.models import Section
from reflectdiary.domains.diary.seeds import DEFAULT_SECTIONS
from reflectdiary.extensions import db


def test_initialize_creates_user_and_sections(app):
    assert User.query.count() == 1
    assert Section.query.count() == len(DEFAULT_SECTIONS) == 12


def test_initialize_is_idempotent_and_keeps_edits(app):
    section = Section.query.filter_by(name="Life story").one()
    section.description = "Edited"
    db.session.commit()
    db.session.delete(Section.query.filter_by(name="Shadow side").one())
    db.session.commit()

    assert initialize_app() is True

    assert User.query.count() == 1
    assert Section.query.count() == 12
    assert Section.query.filter_by(name="Life story").one().description == "Edited"


def test_init_cli_command(app):
    runner = app.test_cli_runner()
    result = runner.invoke(args=["diary", "init"])
    assert result.exit_code == 0
    assert "Diary initialized" in result.output


def test_reset_password_cli(app, client):
    runner = app.test_cli_runner()
    result = runner.invoke(args=["diary", "reset-password", "--password", "newpass1"])
    assert result.exit_code == 0
    assert client.post("/api/auth/login", json={"password": "newpass1"}).status_code == 200


def test_reset_password_cli_rejects_short_password(app):
    runner = app.test_cli_runner()
    result = runner.invoke(args=["diary", "reset-password", "--password", "abc"])
    assert result.exit_code != 0
