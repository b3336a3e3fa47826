"""Login and logout pages."""

from __future__ import annotations

from flask import redirect, render_template, url_for

from reflectdiary.frontend.controllers.pages import pages_bp
from reflectdiary.frontend.forms import LoginForm
from reflectdiary.frontend.helpers import current_auth


@pages_bp.route("/login", methods=["GET", "POST"])
def login():
    auth = current_auth()
    if auth.is_authenticated:
        return redirect(url_for("pages.dashboard"))
    form = LoginForm()
    error = None
    if form.validate_on_submit():
        ok, error = auth.login(form.password.data)
        if ok:
            return redirect(url_for("pages.dashboard"))
    elif form.errors:
        error = "Password is required"
    return render_template("login.html", form=form, error=error)


@pages_bp.get("/logout")
def logout():
    current_auth().logout()
    return redirect(url_for("pages.login"))
