"""File upload endpoint."""

from __future__ import annotations

from flask import request

from causeway.auth import auth_required
from causeway.extensions import limiter
from causeway.security import api_rate_limit
from causeway.services.uploads import serialize_upload, store_upload

from . import api_bp
from .helpers import success


@api_bp.route('/upload', methods=['POST'])
@limiter.limit(api_rate_limit)
@auth_required
def upload(auth):
    """Store a multipart ``file`` under an optional ``folder``."""
    record = store_upload(
        request.files.get('file'),
        request.form.get('folder'),
        auth.user_id,
    )
    return success(serialize_upload(record), 201)
