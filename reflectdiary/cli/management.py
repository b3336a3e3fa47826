"""``flask diary`` management commands."""

from __future__ import annotations

import json
from pathlib import Path

import click
from flask.cli import with_appcontext

from reflectdiary.bootstrap import initialize_app
from reflectdiary.core.auth.auth_service import reset_password
from reflectdiary.core.errors import NotFoundError
from reflectdiary.domains.diary.schemas.diary_schemas import ImportData
from reflectdiary.domains.diary.services import transfer_service


@click.group("diary")
def diary_cli():
    """Reflection diary maintenance."""


@diary_cli.command("init")
@with_appcontext
def init_cli():
    """Create the default user and seed missing sections."""
    if not initialize_app():
        raise click.ClickException("Initialization failed; see the log for details")
    click.echo("Diary initialized")


@diary_cli.command("reset-password")
@click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
@with_appcontext
def reset_password_cli(password):
    """Overwrite the diary password without knowing the current one."""
    if len(password) < 6:
        raise click.BadParameter("Password must be at least 6 characters", param_hint="--password")
    try:
        reset_password(password)
    except NotFoundError:
        raise click.ClickException("No user yet; run `flask diary init` first")
    click.echo("Password reset")


@diary_cli.command("export")
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@with_appcontext
def export_cli(path: Path):
    """Write a JSON backup to PATH."""
    data = transfer_service.export_data()
    path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
    click.echo(f"Exported {sum(len(s['entries']) for s in data['sections'])} entries to {path}")


@diary_cli.command("import")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@with_appcontext
def import_cli(path: Path):
    """Merge the JSON backup at PATH into the diary."""
    raw = json.loads(path.read_text(encoding="utf-8"))
    result = transfer_service.import_data(ImportData.model_validate(raw.get("data", raw)))
    click.echo(f"Imported {result['imported']} entries, skipped {result['skippedSections']} sections")
