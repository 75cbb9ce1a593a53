"""Application factory for the Causeway content platform."""

from __future__ import annotations

import os

from flask import Flask, jsonify, render_template, request
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from causeway.blueprints.api import api_bp
from causeway.blueprints.public import public_bp
from causeway.config import Config
from causeway.errors import ApiError
from causeway.extensions import (
    db,
    migrate,
    login_manager,
    limiter,
)
from causeway.models import User
from causeway.security.config import (
    configure_security_headers,
    configure_secure_session,
    validate_input_length
)


def _wants_json() -> bool:
    return request.path.startswith('/api')


def register_error_handlers(app: Flask) -> None:
    """Map errors onto ``{success: false, error}`` for the API and HTML pages elsewhere."""

    @app.errorhandler(ApiError)
    def handle_api_error(error: ApiError):
        db.session.rollback()
        return jsonify({'success': False, 'error': error.message}), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error: HTTPException):
        db.session.rollback()
        if _wants_json():
            return jsonify({'success': False, 'error': error.description or error.name}), error.code
        if error.code == 404:
            return render_template('public/not_found.html'), 404
        return error

    @app.errorhandler(RequestEntityTooLarge)
    def handle_body_too_large(error: RequestEntityTooLarge):
        db.session.rollback()
        if _wants_json() and request.mimetype == 'multipart/form-data':
            # Same answer the upload validator gives for files just over the limit
            limit = app.config.get('MAX_UPLOAD_SIZE_MB', 15)
            return jsonify({'success': False, 'error': f"File too large. Maximum size is {limit}MB"}), 400
        return handle_http_error(error)

    @app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception):
        db.session.rollback()
        app.logger.exception(f"Unhandled error on {request.method} {request.path}: {error}")
        if _wants_json():
            return jsonify({'success': False, 'error': 'Internal server error'}), 500
        return render_template('public/error.html'), 500


def create_app(config_class=Config):
    """Create Flask application."""
    app = Flask(__name__, template_folder="templates")
    app.config.from_object(config_class)
    # Keep Arabic readable in JSON responses
    app.json.ensure_ascii = False

    # Initialize Flask extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    limiter.init_app(app)

    # Configure security
    configure_security_headers(app)
    configure_secure_session(app)
    validate_input_length(app)

    @login_manager.user_loader
    def load_user(user_id: str):
        return db.session.get(User, user_id)

    # Ensure models are registered for migrations
    import causeway.models  # noqa: F401

    if os.getenv("FLASK_ENV") == "development":
        app.config["TEMPLATES_AUTO_RELOAD"] = True
        app.jinja_env.auto_reload = True

    # Register blueprints
    app.register_blueprint(api_bp, url_prefix='/api')
    app.register_blueprint(public_bp)

    register_error_handlers(app)

    # Register CLI commands
    from causeway.commands import register_commands
    register_commands(app)

    return app


__all__ = ['create_app']
