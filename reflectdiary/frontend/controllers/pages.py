"""The ``pages`` blueprint shared by the page controllers."""

from flask import Blueprint

pages_bp = Blueprint("pages", __name__)
