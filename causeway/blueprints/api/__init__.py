"""JSON API blueprint mounted at ``/api``."""

from flask import Blueprint

api_bp = Blueprint('api', __name__)

# Route modules register themselves on api_bp
from . import audit, auth, categories, health, pages, resources, search, uploads  # noqa: E402,F401

__all__ = ['api_bp']
