from __future__ import annotations

import uuid
from datetime import date, datetime
from enum import Enum

from flask_login import UserMixin
from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Enum as SqlEnum,
    ForeignKey,
    Index,
    Integer,
    JSON,
    String,
    Text,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from causeway.extensions import db, bcrypt
from causeway.i18n import localized

JSONType = JSON().with_variant(JSONB, 'postgresql')


class TimestampedBase(db.Model):
    """Abstract base providing id/created/updated columns."""

    __abstract__ = True

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class UserRole(Enum):
    ADMIN = "ADMIN"
    EDITOR = "EDITOR"


class PublishStatus(Enum):
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    ARCHIVED = "ARCHIVED"


class ResourceType(Enum):
    REPORT = "REPORT"
    WHITEPAPER = "WHITEPAPER"
    ARTICLE = "ARTICLE"
    PRESENTATION = "PRESENTATION"
    DATA = "DATA"
    GUIDE = "GUIDE"
    VIDEO = "VIDEO"
    PODCAST = "PODCAST"
    INFOGRAPHIC = "INFOGRAPHIC"
    OTHER = "OTHER"


class AuditAction(Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    PUBLISH = "PUBLISH"
    UNPUBLISH = "UNPUBLISH"
    ARCHIVE = "ARCHIVE"
    LOGIN = "LOGIN"
    UPLOAD = "UPLOAD"
    REORDER = "REORDER"


class BlockType(Enum):
    HERO = "hero"
    TEXT = "text"
    CARDS = "cards"
    CTA = "cta"
    STATS = "stats"
    IMAGE = "image"
    FAQ = "faq"
    TEAM = "team"


class User(UserMixin, TimestampedBase):
    __tablename__ = "user"

    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    name: Mapped[str | None] = mapped_column(String(255))
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[UserRole] = mapped_column(
        SqlEnum(UserRole, name="user_role", native_enum=False),
        nullable=False,
        default=UserRole.EDITOR,
    )
    active: Mapped[bool] = mapped_column('is_active', Boolean, nullable=False, default=True)
    last_login_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    audit_logs: Mapped[list["AuditLog"]] = relationship(back_populates="user")

    def set_password(self, password: str) -> None:
        self.password_hash = bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt()).decode('utf-8')

    def check_password(self, password: str) -> bool:
        if not self.password_hash:
            return False
        return bcrypt.checkpw(password.encode('utf-8'), self.password_hash.encode('utf-8'))

    @property
    def is_active(self) -> bool:
        return bool(self.active)


class Category(TimestampedBase):
    __tablename__ = "category"
    __table_args__ = (
        Index("ix_category_enabled_sort", "enabled", "sort_order"),
    )

    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    name_en: Mapped[str] = mapped_column(String(255), nullable=False)
    name_ar: Mapped[str | None] = mapped_column(String(255))
    description_en: Mapped[str | None] = mapped_column(Text)
    description_ar: Mapped[str | None] = mapped_column(Text)
    icon: Mapped[str | None] = mapped_column(String(64))
    color: Mapped[str | None] = mapped_column(String(32))
    enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    parent_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("category.id"),
        index=True,
    )

    parent: Mapped["Category | None"] = relationship(
        remote_side="Category.id",
        back_populates="children",
    )
    children: Mapped[list["Category"]] = relationship(
        back_populates="parent",
        order_by="Category.sort_order",
    )
    resources: Mapped[list["Resource"]] = relationship(back_populates="category")

    name = localized('name_en', 'name_ar')
    description = localized('description_en', 'description_ar')


class Resource(TimestampedBase):
    """Downloadable or linkable content: reports, whitepapers, articles..."""
    __tablename__ = "resource"
    __table_args__ = (
        Index("ix_resource_status_published", "status", "published_at"),
        Index("ix_resource_featured_priority", "featured", "priority"),
    )

    slug: Mapped[str] = mapped_column(String(600), nullable=False, unique=True, index=True)
    title_en: Mapped[str] = mapped_column(String(500), nullable=False)
    title_ar: Mapped[str | None] = mapped_column(String(500))
    description_en: Mapped[str | None] = mapped_column(Text)
    description_ar: Mapped[str | None] = mapped_column(Text)
    content_en: Mapped[str | None] = mapped_column(Text)
    content_ar: Mapped[str | None] = mapped_column(Text)

    type: Mapped[ResourceType] = mapped_column(
        SqlEnum(ResourceType, name="resource_type", native_enum=False),
        nullable=False,
        default=ResourceType.REPORT,
    )
    status: Mapped[PublishStatus] = mapped_column(
        SqlEnum(PublishStatus, name="publish_status", native_enum=False),
        nullable=False,
        default=PublishStatus.DRAFT,
    )
    featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    priority: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    publisher: Mapped[str | None] = mapped_column(String(255))
    publish_date: Mapped[date | None] = mapped_column(Date)
    year: Mapped[int | None] = mapped_column(Integer)
    external_url: Mapped[str | None] = mapped_column(String(1024))
    tags: Mapped[list | None] = mapped_column(JSONType, default=list)

    category_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("category.id"),
        index=True,
    )

    # Attached file
    file_url: Mapped[str | None] = mapped_column(String(1024))
    file_name: Mapped[str | None] = mapped_column(String(255))
    file_size: Mapped[int | None] = mapped_column(Integer)
    file_mime_type: Mapped[str | None] = mapped_column(String(128))
    thumbnail_url: Mapped[str | None] = mapped_column(String(1024))

    # SEO & Meta
    meta_title_en: Mapped[str | None] = mapped_column(String(500))
    meta_title_ar: Mapped[str | None] = mapped_column(String(500))
    meta_desc_en: Mapped[str | None] = mapped_column(String(1000))
    meta_desc_ar: Mapped[str | None] = mapped_column(String(1000))

    created_by_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("user.id", ondelete="SET NULL"),
        index=True,
    )
    updated_by_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("user.id", ondelete="SET NULL"),
    )
    published_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    category: Mapped[Category | None] = relationship(back_populates="resources")
    created_by: Mapped[User | None] = relationship(foreign_keys=[created_by_id])
    updated_by: Mapped[User | None] = relationship(foreign_keys=[updated_by_id])

    title = localized('title_en', 'title_ar')
    description = localized('description_en', 'description_ar')
    content = localized('content_en', 'content_ar')
    meta_title = localized('meta_title_en', 'meta_title_ar')
    meta_desc = localized('meta_desc_en', 'meta_desc_ar')


class Page(TimestampedBase):
    """CMS page with rich-text content and/or structured blocks per locale."""
    __tablename__ = "page"
    __table_args__ = (
        Index("ix_page_status_sort", "status", "sort_order"),
    )

    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    title_en: Mapped[str] = mapped_column(String(500), nullable=False)
    title_ar: Mapped[str | None] = mapped_column(String(500))
    status: Mapped[PublishStatus] = mapped_column(
        SqlEnum(PublishStatus, name="publish_status", native_enum=False),
        nullable=False,
        default=PublishStatus.DRAFT,
    )
    template: Mapped[str] = mapped_column(String(64), nullable=False, default="default")
    show_in_nav: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    content_en: Mapped[str | None] = mapped_column(Text)
    content_ar: Mapped[str | None] = mapped_column(Text)
    # Ordered lists of {"id", "type", "data"} mappings
    blocks_en: Mapped[list | None] = mapped_column(JSONType, default=list)
    blocks_ar: Mapped[list | None] = mapped_column(JSONType, default=list)

    meta_title_en: Mapped[str | None] = mapped_column(String(500))
    meta_title_ar: Mapped[str | None] = mapped_column(String(500))
    meta_desc_en: Mapped[str | None] = mapped_column(String(1000))
    meta_desc_ar: Mapped[str | None] = mapped_column(String(1000))
    published_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    title = localized('title_en', 'title_ar')
    content = localized('content_en', 'content_ar')
    meta_title = localized('meta_title_en', 'meta_title_ar')
    meta_desc = localized('meta_desc_en', 'meta_desc_ar')


class AuditLog(TimestampedBase):
    """Append-only record of mutating actions."""
    __tablename__ = "audit_log"
    __table_args__ = (
        Index("ix_audit_log_entity", "entity_type", "entity_id"),
        Index("ix_audit_log_created", "created_at"),
    )

    action: Mapped[AuditAction] = mapped_column(
        SqlEnum(AuditAction, name="audit_action", native_enum=False),
        nullable=False,
    )
    entity_type: Mapped[str] = mapped_column(String(128), nullable=False)
    entity_id: Mapped[str | None] = mapped_column(String(80))
    user_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("user.id", ondelete="SET NULL"),
        index=True,
    )
    details: Mapped[dict | None] = mapped_column(JSONType, default=dict)
    ip_address: Mapped[str | None] = mapped_column(String(45))  # IPv6 max length

    user: Mapped[User | None] = relationship(back_populates="audit_logs")


class LinkCheck(TimestampedBase):
    """Latest reachability result for an external URL; id is "{source_id}-url"."""
    __tablename__ = "link_check"

    id: Mapped[str] = mapped_column(String(80), primary_key=True)
    url: Mapped[str] = mapped_column(String(1024), nullable=False)
    status: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    status_text: Mapped[str | None] = mapped_column(String(255))
    source_type: Mapped[str] = mapped_column(String(64), nullable=False)
    source_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    is_broken: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    last_checked: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )


class FileUpload(TimestampedBase):
    __tablename__ = "file_upload"

    original_name: Mapped[str] = mapped_column(String(255), nullable=False)
    storage_path: Mapped[str] = mapped_column(String(512), nullable=False, unique=True)
    url: Mapped[str] = mapped_column(String(1024), nullable=False)
    mime_type: Mapped[str] = mapped_column(String(128), nullable=False)
    size: Mapped[int] = mapped_column(Integer, nullable=False)
    uploaded_by_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("user.id", ondelete="SET NULL"),
        index=True,
    )

    uploaded_by: Mapped[User | None] = relationship()


__all__ = [name for name in globals() if name[0].isupper()]
