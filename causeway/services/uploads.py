"""File upload service: validation, storage and bookkeeping."""

from __future__ import annotations

import os
import re
from datetime import datetime, timezone

from flask import current_app
from werkzeug.datastructures import FileStorage

from causeway.errors import ValidationError
from causeway.extensions import db
from causeway.models import AuditAction, FileUpload
from causeway.services.audit import record_action
from causeway.services.slugs import timestamp_token
from causeway.services.storage import get_storage

ALLOWED_MIME_TYPES = {
    'application/pdf',
    'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
    'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
    'application/vnd.openxmlformats-officedocument.presentationml.presentation',
    'image/jpeg',
    'image/png',
    'image/webp',
    'image/svg+xml',
}
ALLOWED_TYPES_LABEL = 'PDF, DOCX, XLSX, PPTX, JPEG, PNG, WebP, SVG'
DEFAULT_FOLDER = 'uploads'


def max_upload_bytes() -> int:
    return int(current_app.config.get('MAX_UPLOAD_SIZE_MB', 15)) * 1024 * 1024


def _determine_size(file: FileStorage) -> int:
    stream = file.stream
    current = stream.tell()
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(current)
    return size


def sanitize_filename(name: str) -> str:
    return re.sub(r'[^a-zA-Z0-9._-]', '_', name)


def sanitize_folder(folder: str | None) -> str:
    """Relative folder made of safe segments; falls back to ``uploads``."""
    segments = [
        sanitize_filename(segment)
        for segment in (folder or '').replace('\\', '/').split('/')
        if segment and segment not in ('.', '..')
    ]
    return '/'.join(segments) or DEFAULT_FOLDER


def generate_storage_path(folder: str, file_name: str, now: datetime | None = None) -> str:
    """``{folder}/{YYYY}/{MM}/{base36 timestamp}-{sanitized name}``."""
    now = now or datetime.now(timezone.utc)
    token = timestamp_token(int(now.timestamp() * 1000))
    return f"{folder}/{now.year}/{now.month:02d}/{token}-{sanitize_filename(file_name)}"


def validate_upload(size: int, mime_type: str | None) -> None:
    """Raise ValidationError if the file is too large or of a disallowed type."""
    if size > max_upload_bytes():
        limit = current_app.config.get('MAX_UPLOAD_SIZE_MB', 15)
        raise ValidationError(f"File too large. Maximum size is {limit}MB")
    if mime_type not in ALLOWED_MIME_TYPES:
        raise ValidationError(f"File type not allowed. Allowed: {ALLOWED_TYPES_LABEL}")


def store_upload(file: FileStorage | None, folder: str | None, user_id: str | None) -> FileUpload:
    """
    Validate and store an uploaded file and record it.

    Nothing is written to storage when validation fails; the stored object
    is removed again if the database record cannot be created.

    Args:
        file: The ``file`` part of a multipart request
        folder: Optional destination folder, default ``uploads``
        user_id: Uploading user

    Returns:
        The persisted FileUpload
    """
    if file is None or not file.filename:
        raise ValidationError('No file provided')

    size = _determine_size(file)
    mime_type = file.mimetype
    validate_upload(size, mime_type)

    storage = get_storage()
    storage_path = generate_storage_path(sanitize_folder(folder), file.filename)
    file.stream.seek(0)
    url = storage.save(file.stream, storage_path, mime_type)

    record = FileUpload(
        original_name=file.filename,
        storage_path=storage_path,
        url=url,
        mime_type=mime_type,
        size=size,
        uploaded_by_id=user_id,
    )
    try:
        db.session.add(record)
        db.session.commit()
    except Exception:
        db.session.rollback()
        storage.delete(storage_path)
        raise

    record_action(
        AuditAction.UPLOAD,
        entity_type='File',
        entity_id=record.id,
        user_id=user_id,
        details={'fileName': record.original_name, 'size': size, 'mimeType': mime_type},
    )
    return record


def serialize_upload(record: FileUpload) -> dict:
    return {
        'id': record.id,
        'url': record.url,
        'name': record.original_name,
        'size': record.size,
        'mimeType': record.mime_type,
    }


__all__ = [
    'ALLOWED_MIME_TYPES',
    'generate_storage_path',
    'sanitize_filename',
    'sanitize_folder',
    'validate_upload',
    'store_upload',
    'serialize_upload',
]
