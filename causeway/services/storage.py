"""Blob storage backends for uploaded files."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import BinaryIO

from flask import current_app


class LocalStorage:
    """Stores files under ``UPLOAD_FOLDER``; served by the ``/uploads/<path>`` route."""

    url_prefix = '/uploads'

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def _target(self, key: str) -> Path:
        target = (self.root / key).resolve()
        # Keys must stay inside the upload root
        if not target.is_relative_to(self.root.resolve()):
            raise PermissionError('Attempted to write outside upload directory')
        return target

    def save(self, stream: BinaryIO, key: str, content_type: str) -> str:
        """
        Write ``stream`` to ``key`` and return its public URL.

        Args:
            stream: Readable binary stream positioned at the start
            key: Storage path relative to the root
            content_type: MIME type (unused on disk)
        """
        target = self._target(key)
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, 'wb') as f:
            shutil.copyfileobj(stream, f)
        return f"{self.url_prefix}/{key}"

    def delete(self, key: str) -> bool:
        target = self._target(key)
        if target.exists() and target.is_file():
            target.unlink()
            return True
        return False


class S3Storage:
    """S3 (or MinIO, via ``S3_ENDPOINT``) object storage."""

    def __init__(
        self,
        bucket: str,
        region: str,
        endpoint: str | None = None,
        access_key_id: str | None = None,
        secret_access_key: str | None = None,
    ):
        import boto3
        from botocore.config import Config as BotoConfig

        self.bucket = bucket
        self.region = region
        self.endpoint = endpoint.rstrip('/') if endpoint else None

        client_kwargs = {'region_name': region}
        if access_key_id and secret_access_key:
            client_kwargs['aws_access_key_id'] = access_key_id
            client_kwargs['aws_secret_access_key'] = secret_access_key
        if self.endpoint:
            # MinIO needs path-style addressing
            client_kwargs['endpoint_url'] = self.endpoint
            client_kwargs['config'] = BotoConfig(s3={'addressing_style': 'path'})
        self.client = boto3.client('s3', **client_kwargs)

    def public_url(self, key: str) -> str:
        if self.endpoint:
            return f"{self.endpoint}/{self.bucket}/{key}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"

    def save(self, stream: BinaryIO, key: str, content_type: str) -> str:
        self.client.upload_fileobj(
            stream,
            self.bucket,
            key,
            ExtraArgs={'ContentType': content_type},
        )
        return self.public_url(key)

    def delete(self, key: str) -> bool:
        self.client.delete_object(Bucket=self.bucket, Key=key)
        return True


def get_storage() -> LocalStorage | S3Storage:
    """Storage backend selected by ``STORAGE_BACKEND``."""
    config = current_app.config
    backend = config.get('STORAGE_BACKEND', 'local')
    if backend == 's3':
        return S3Storage(
            bucket=config['S3_BUCKET_NAME'],
            region=config.get('AWS_REGION', 'us-east-1'),
            endpoint=config.get('S3_ENDPOINT'),
            access_key_id=config.get('AWS_ACCESS_KEY_ID'),
            secret_access_key=config.get('AWS_SECRET_ACCESS_KEY'),
        )
    if backend != 'local':
        raise ValueError(f"Unknown storage backend: {backend}")
    return LocalStorage(config.get('UPLOAD_FOLDER', 'uploads'))


__all__ = ['LocalStorage', 'S3Storage', 'get_storage']
