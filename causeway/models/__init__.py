"""Database models for the Causeway content platform."""

from causeway.models.models import (
    AuditAction,
    AuditLog,
    BlockType,
    Category,
    FileUpload,
    LinkCheck,
    Page,
    PublishStatus,
    Resource,
    ResourceType,
    TimestampedBase,
    User,
    UserRole,
)

__all__ = [
    "AuditAction",
    "AuditLog",
    "BlockType",
    "Category",
    "FileUpload",
    "LinkCheck",
    "Page",
    "PublishStatus",
    "Resource",
    "ResourceType",
    "TimestampedBase",
    "User",
    "UserRole",
]
