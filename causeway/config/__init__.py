import json
import os
from dotenv import load_dotenv

load_dotenv()


def _json_serializer(value):
    # Keep Arabic text readable in JSON columns.
    return json.dumps(value, ensure_ascii=False)


class Config:
    # Provide a safe development fallback to avoid 500s when SECRET_KEY is missing.
    SECRET_KEY = os.getenv('SECRET_KEY') or 'dev-secret-key-change-me'
    DATABASE_URL = os.getenv('DATABASE_URL')
    SQLALCHEMY_DATABASE_URI = DATABASE_URL or 'sqlite:///causeway.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {'json_serializer': _json_serializer}
    SESSION_COOKIE_SECURE = os.getenv('SESSION_COOKIE_SECURE', 'true').lower() in ('1', 'true', 'yes')
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    REMEMBER_COOKIE_SECURE = SESSION_COOKIE_SECURE
    REMEMBER_COOKIE_HTTPONLY = True

    # Public site
    SITE_URL = os.getenv('SITE_URL', 'https://finance.causewaygrp.com').rstrip('/')

    # Rate limiting
    RATELIMIT_STORAGE_URI = os.getenv('RATELIMIT_STORAGE_URI', 'memory://')
    RATELIMIT_ENABLED = os.getenv('RATELIMIT_ENABLED', 'true').lower() in ('1', 'true', 'yes')

    # Audit log hand-off: "inline" writes in-process, "rq" defers to the worker
    AUDIT_DISPATCH = os.getenv('AUDIT_DISPATCH', 'inline')
    REDIS_URL = os.getenv('REDIS_URL', 'redis://localhost:6379/0')

    # Uploads
    STORAGE_BACKEND = os.getenv('STORAGE_BACKEND', 'local')
    UPLOAD_FOLDER = os.getenv('UPLOAD_FOLDER', os.path.join(os.getcwd(), 'uploads'))
    MAX_UPLOAD_SIZE_MB = int(os.getenv('MAX_UPLOAD_SIZE_MB', '15'))
    # Multipart bodies slightly above the upload limit still reach the validator.
    MAX_CONTENT_LENGTH = (MAX_UPLOAD_SIZE_MB + 1) * 1024 * 1024
    S3_BUCKET_NAME = os.getenv('S3_BUCKET_NAME', 'causeway-uploads')
    S3_ENDPOINT = os.getenv('S3_ENDPOINT')
    AWS_REGION = os.getenv('AWS_REGION', 'us-east-1')
    AWS_ACCESS_KEY_ID = os.getenv('AWS_ACCESS_KEY_ID')
    AWS_SECRET_ACCESS_KEY = os.getenv('AWS_SECRET_ACCESS_KEY')

    # Health checks
    LINK_CHECK_TIMEOUT = float(os.getenv('LINK_CHECK_TIMEOUT', '10'))


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = 'test-secret-key'
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SESSION_COOKIE_SECURE = False
    REMEMBER_COOKIE_SECURE = False
    RATELIMIT_ENABLED = False
    AUDIT_DISPATCH = 'inline'
    STORAGE_BACKEND = 'local'
    SITE_URL = 'https://example.test'
