"""Settings: password, backup download/upload and theme."""

from __future__ import annotations

import json
from datetime import date

from flask import Response, flash, redirect, render_template, url_for

from reflectdiary.frontend.controllers.pages import pages_bp
from reflectdiary.frontend.forms import ActionForm, ChangePasswordForm, ImportForm
from reflectdiary.frontend.helpers import current_auth, get_client, get_theme, login_required


def _render_settings(password_form=None, import_form=None):
    return render_template(
        "settings.html",
        password_form=password_form if password_form is not None else ChangePasswordForm(formdata=None),
        import_form=import_form if import_form is not None else ImportForm(formdata=None),
        action_form=ActionForm(),
    )


@pages_bp.get("/settings")
@login_required
def settings():
    return _render_settings()


@pages_bp.post("/settings/password")
@login_required
def change_password():
    form = ChangePasswordForm()
    if form.validate_on_submit():
        ok, error = current_auth().change_password(form.current_password.data, form.new_password.data)
        if ok:
            flash("Password changed", "success")
            return redirect(url_for("pages.settings"))
        flash(error, "danger")
    return _render_settings(password_form=form)


@pages_bp.get("/settings/export")
@login_required
def export_backup():
    data = get_client().export_data()
    filename = f"reflection-diary-backup-{date.today().isoformat()}.json"
    return Response(
        json.dumps(data, ensure_ascii=False, indent=2),
        mimetype="application/json",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@pages_bp.post("/settings/import")
@login_required
def import_backup():
    form = ImportForm()
    if not form.validate_on_submit():
        flash("Choose a backup file to import", "danger")
        return _render_settings(import_form=form)
    try:
        raw = json.loads(form.file.data.read().decode("utf-8"))
    except (UnicodeDecodeError, ValueError):
        flash("The file is not valid JSON", "danger")
        return _render_settings(import_form=form)
    data = raw.get("data", raw) if isinstance(raw, dict) else raw
    result = get_client().import_data(data)
    flash(f"Imported {result.get('imported', 0)} entries", "success")
    return redirect(url_for("pages.settings"))


@pages_bp.post("/settings/theme")
@login_required
def toggle_theme():
    if ActionForm().validate_on_submit():
        get_theme().toggle()
    return redirect(url_for("pages.settings"))
