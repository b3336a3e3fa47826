from __future__ import annotations

from flask_wtf import FlaskForm
from flask_wtf.file import FileField, FileRequired
from wtforms import (
    HiddenField,
    IntegerField,
    PasswordField,
    SelectField,
    SelectMultipleField,
    StringField,
    SubmitField,
    TextAreaField,
)
from wtforms.validators import DataRequired, EqualTo, Length, NumberRange, Optional

MIN_PASSWORD_LENGTH = 6


def optional_int(value):
    if value in (None, ""):
        return None
    return int(value)


class LoginForm(FlaskForm):
    password = PasswordField(validators=[DataRequired(message="Password is required")])


class ActionForm(FlaskForm):
    """CSRF-only form for delete and toggle buttons."""


class SubtopicForm(FlaskForm):
    name = StringField(validators=[DataRequired(), Length(max=255)])
    description = StringField(validators=[Optional()])
    section_id = HiddenField(validators=[DataRequired()])


class MoodForm(FlaskForm):
    name = StringField(validators=[DataRequired(), Length(max=64)])


class EntryForm(FlaskForm):
    title = StringField(validators=[Optional(), Length(max=255)])
    content = TextAreaField(validators=[DataRequired(message="Content is required")])
    mood = SelectField(choices=[], validate_choice=False)
    intensity = IntegerField(validators=[Optional(), NumberRange(min=0, max=10)])
    section_id = SelectField(coerce=optional_int, validators=[DataRequired(message="Section is required")])
    subtopic_id = SelectField(coerce=optional_int, validate_choice=False)
    tag_ids = SelectMultipleField(coerce=int, validate_choice=False)
    save = SubmitField("Save")
    save_draft = SubmitField("Save as draft")

    def to_payload(self) -> dict:
        return {
            "title": self.title.data or None,
            "content": self.content.data,
            "mood": self.mood.data or None,
            "intensity": self.intensity.data,
            "sectionId": self.section_id.data,
            "subtopicId": self.subtopic_id.data,
            "tagIds": self.tag_ids.data or [],
            "isDraft": bool(self.save_draft.data),
        }


class ChangePasswordForm(FlaskForm):
    current_password = PasswordField(validators=[DataRequired()])
    new_password = PasswordField(
        validators=[
            DataRequired(),
            Length(min=MIN_PASSWORD_LENGTH, message=f"Password must be at least {MIN_PASSWORD_LENGTH} characters"),
        ]
    )
    confirm_password = PasswordField(validators=[EqualTo("new_password", message="Passwords do not match")])


class ImportForm(FlaskForm):
    file = FileField(validators=[FileRequired()])
