"""Dashboard, entry list and entry editor pages."""

from __future__ import annotations

from collections import OrderedDict
from datetime import datetime

from flask import abort, current_app, flash, redirect, render_template, request, url_for

from reflectdiary.client.api_client import ApiError
from reflectdiary.client.stats import dashboard_stats
from reflectdiary.frontend.controllers.pages import pages_bp
from reflectdiary.frontend.forms import ActionForm, EntryForm, MoodForm, SubtopicForm, optional_int
from reflectdiary.frontend.helpers import error_status, get_client, get_moods, login_required

ALL_ENTRIES_LIMIT = 10000


def _selected_section(sections, section_id):
    for section in sections:
        if section["id"] == section_id:
            return section
    return None


def _group_by_subtopic(section, entries):
    """``[(subtopic or None, entries)]``; entries without a subtopic come last."""
    groups = OrderedDict((sub["id"], (sub, [])) for sub in section.get("subtopics", []))
    loose = []
    for entry in entries:
        bucket = groups.get(entry.get("subtopicId"))
        if bucket:
            bucket[1].append(entry)
        else:
            loose.append(entry)
    result = list(groups.values())
    if loose:
        result.append((None, loose))
    return result


@pages_bp.get("/")
@login_required
def dashboard():
    client = get_client()
    sections = client.get_sections()
    all_entries = client.get_entries(limit=ALL_ENTRIES_LIMIT)["entries"]
    stats = dashboard_stats(all_entries, datetime.utcnow())

    section_id = request.args.get("section", type=int)
    section = _selected_section(sections, section_id) if section_id else None
    groups = []
    if section:
        section_entries = client.get_entries(sectionId=section["id"], limit=ALL_ENTRIES_LIMIT)["entries"]
        groups = _group_by_subtopic(section, section_entries)
    return render_template(
        "dashboard.html",
        sections=sections,
        section=section,
        groups=groups,
        stats=stats,
        subtopic_form=SubtopicForm(formdata=None, section_id=section_id),
        mood_form=MoodForm(formdata=None),
        action_form=ActionForm(),
    )


@pages_bp.post("/subtopics")
@login_required
def create_subtopic():
    form = SubtopicForm()
    if form.validate_on_submit():
        get_client().create_subtopic(form.name.data.strip(), int(form.section_id.data), form.description.data or None)
        flash("Subtopic created", "success")
    else:
        flash("Subtopic name is required", "danger")
    return redirect(url_for("pages.dashboard", section=form.section_id.data))


@pages_bp.post("/subtopics/<int:subtopic_id>/rename")
@login_required
def rename_subtopic(subtopic_id: int):
    form = SubtopicForm()
    if form.validate_on_submit():
        get_client().update_subtopic(subtopic_id, form.name.data.strip(), form.description.data or None)
    else:
        flash("Subtopic name is required", "danger")
    return redirect(url_for("pages.dashboard", section=form.section_id.data))


@pages_bp.post("/subtopics/<int:subtopic_id>/delete")
@login_required
def delete_subtopic(subtopic_id: int):
    if ActionForm().validate_on_submit():
        get_client().delete_subtopic(subtopic_id)
        flash("Subtopic deleted", "success")
    return redirect(url_for("pages.dashboard", section=request.form.get("section_id")))


@pages_bp.post("/moods")
@login_required
def add_mood():
    form = MoodForm()
    if form.validate_on_submit() and get_moods().add(form.name.data):
        flash("Mood added", "success")
    else:
        flash("Mood is empty or already exists", "warning")
    return redirect(request.referrer or url_for("pages.dashboard"))


@pages_bp.post("/moods/<mood_id>/rename")
@login_required
def rename_mood(mood_id: str):
    form = MoodForm()
    if not (form.validate_on_submit() and get_moods().rename(mood_id, form.name.data)):
        flash("Could not rename mood", "warning")
    return redirect(request.referrer or url_for("pages.dashboard"))


@pages_bp.post("/moods/<mood_id>/delete")
@login_required
def delete_mood(mood_id: str):
    if ActionForm().validate_on_submit():
        get_moods().remove(mood_id)
    return redirect(request.referrer or url_for("pages.dashboard"))


def _entry_filters() -> dict:
    return {
        "search": request.args.get("search") or None,
        "sectionId": optional_int(request.args.get("section")),
        "subtopicId": optional_int(request.args.get("subtopic")),
        "mood": request.args.get("mood") or None,
        "page": request.args.get("page", 1, type=int),
    }


@pages_bp.get("/entries")
@login_required
def entries():
    client = get_client()
    try:
        filters = _entry_filters()
    except ValueError:
        abort(400)
    result = client.get_entries(**filters)
    sections = client.get_sections()
    subtopics = []
    if filters["sectionId"]:
        section = _selected_section(sections, filters["sectionId"])
        subtopics = section["subtopics"] if section else []
    return render_template(
        "entries.html",
        entries=result["entries"],
        pagination=result["pagination"],
        sections=sections,
        subtopics=subtopics,
        filters=request.args,
        action_form=ActionForm(),
    )


@pages_bp.post("/entries/<int:entry_id>/delete")
@login_required
def delete_entry(entry_id: int):
    if ActionForm().validate_on_submit():
        get_client().delete_entry(entry_id)
        flash("Entry deleted", "success")
    return redirect(url_for("pages.entries", **request.args.to_dict()))


def _prepare_entry_form(form: EntryForm, sections, tags) -> None:
    form.section_id.choices = [("", "Select a section")] + [(s["id"], s["name"]) for s in sections]
    subtopic_choices = [("", "No subtopic")]
    for section in sections:
        subtopic_choices += [(sub["id"], f"{section['name']} / {sub['name']}") for sub in section["subtopics"]]
    form.subtopic_id.choices = subtopic_choices
    form.mood.choices = [("", "No mood")] + [(m["id"], m["name"]) for m in get_moods().all()]
    form.tag_ids.choices = [(t["id"], t["name"]) for t in tags]


def _entry_to_form_data(entry: dict) -> dict:
    return {
        "title": entry.get("title"),
        "content": entry.get("content"),
        "mood": entry.get("mood") or "",
        "intensity": entry.get("intensity"),
        "section_id": entry.get("sectionId"),
        "subtopic_id": entry.get("subtopicId"),
        "tag_ids": [link["tagId"] for link in entry.get("tags", [])],
    }


@pages_bp.route("/entries/new", methods=["GET", "POST"])
@pages_bp.route("/entries/<int:entry_id>", methods=["GET", "POST"])
@login_required
def entry_editor(entry_id: int | None = None):
    client = get_client()
    sections = client.get_sections()
    tags = client.get_tags()
    entry = client.get_entry(entry_id) if entry_id else None

    if request.method == "POST":
        form = EntryForm()
    elif entry:
        form = EntryForm(formdata=None, data=_entry_to_form_data(entry))
    else:
        form = EntryForm(formdata=None, section_id=request.args.get("sectionId", type=int))
    _prepare_entry_form(form, sections, tags)

    if request.method == "POST" and form.validate():
        payload = form.to_payload()
        try:
            if entry_id:
                client.update_entry(entry_id, payload)
            else:
                client.create_entry(payload)
        except ApiError as exc:
            if exc.is_auth_error:
                raise
            current_app.logger.warning("Saving entry failed: %s", exc.message)
            return render_template("editor.html", form=form, entry=entry, save_error=exc.message), error_status(exc)
        flash("Draft saved" if payload["isDraft"] else "Entry saved", "success")
        return redirect(url_for("pages.dashboard", section=payload["sectionId"]))
    return render_template("editor.html", form=form, entry=entry)
