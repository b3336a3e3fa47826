"""Helpers for JSON request parsing and error payloads."""

from __future__ import annotations

from typing import Type, TypeVar

from flask import jsonify, request
from pydantic import BaseModel, ValidationError

M = TypeVar("M", bound=BaseModel)


def jsonable_errors(exc: ValidationError) -> list[dict]:
    errors = exc.errors(include_url=False)
    for err in errors:
        if "ctx" in err and isinstance(err["ctx"], dict):
            err["ctx"] = {k: str(v) for k, v in err["ctx"].items()}
        err.pop("input", None)
    return errors


def validation_error_response(exc: ValidationError):
    return jsonify({"error": "validation_error", "details": jsonable_errors(exc)}), 400


def parse_json(model: Type[M]) -> M:
    """Validate the JSON body against ``model``; ValidationError bubbles to the app handler."""
    payload = request.get_json(silent=True) or {}
    return model.model_validate(payload)


def parse_args(model: Type[M]) -> M:
    """Validate query-string args, treating empty values as absent."""
    args = {key: value for key, value in request.args.items() if value != ""}
    return model.model_validate(args)
