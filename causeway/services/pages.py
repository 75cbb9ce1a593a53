"""CMS page service, including per-locale block editing."""
from __future__ import annotations

from typing import Any

from sqlalchemy import or_, select

from causeway.errors import NotFoundError, ValidationError
from causeway.extensions import db
from causeway.i18n import LOCALES
from causeway.models import AuditAction, BlockType, Page, PublishStatus
from causeway.schemas import PageCreate, PageUpdate
from causeway.services import blocks as block_model
from causeway.services.audit import record_action
from causeway.services.pagination import PageParams, paginate
from causeway.services.publishing import apply_status, initial_status
from causeway.services.slugs import slug_taken, slugify, unique_slug


def serialize_page(page: Page) -> dict[str, Any]:
    return {
        'id': page.id,
        'slug': page.slug,
        'titleEn': page.title_en,
        'titleAr': page.title_ar,
        'status': page.status.value,
        'template': page.template,
        'showInNav': page.show_in_nav,
        'sortOrder': page.sort_order,
        'contentEn': page.content_en,
        'contentAr': page.content_ar,
        'blocksEn': list(page.blocks_en or []),
        'blocksAr': list(page.blocks_ar or []),
        'metaTitleEn': page.meta_title_en,
        'metaTitleAr': page.meta_title_ar,
        'metaDescEn': page.meta_desc_en,
        'metaDescAr': page.meta_desc_ar,
        'publishedAt': page.published_at.isoformat() if page.published_at else None,
        'createdAt': page.created_at.isoformat() if page.created_at else None,
        'updatedAt': page.updated_at.isoformat() if page.updated_at else None,
    }


def _block_payloads(fields: dict[str, Any], data: PageCreate | PageUpdate) -> None:
    # Store blocks as plain JSON mappings
    for column in ('blocks_en', 'blocks_ar'):
        if column in fields:
            blocks = getattr(data, column)
            fields[column] = [block.model_dump(mode='json') for block in blocks or []]


class PageService:
    """Service for page management."""

    @staticmethod
    def list_pages(params: PageParams, admin: bool = False) -> tuple[list[Page], int]:
        stmt = select(Page)
        if not admin:
            stmt = stmt.where(Page.status == PublishStatus.PUBLISHED)
        stmt = stmt.order_by(Page.sort_order, Page.created_at.desc(), Page.id)
        return paginate(stmt, params)

    @staticmethod
    def get_page(id_or_slug: str, public: bool = True) -> Page:
        """Fetch by id or slug; unpublished pages are hidden from public reads."""
        stmt = select(Page).where(or_(Page.id == id_or_slug, Page.slug == id_or_slug))
        page = db.session.execute(stmt).scalars().first()
        if page is None:
            raise NotFoundError('Page not found')
        if public and page.status is not PublishStatus.PUBLISHED:
            raise NotFoundError('Page not found')
        return page

    @staticmethod
    def get_published_by_slug(slug: str) -> Page | None:
        stmt = (
            select(Page)
            .where(Page.slug == slug)
            .where(Page.status == PublishStatus.PUBLISHED)
        )
        return db.session.execute(stmt).scalar_one_or_none()

    @staticmethod
    def create_page(data: PageCreate, user_id: str | None) -> Page:
        """
        Create a page.

        An explicit slug must be free; a slug derived from the title gets a
        timestamp suffix on collision instead.
        """
        fields = data.present_fields()
        status = fields.pop('status', None)
        explicit_slug = fields.pop('slug', None)
        _block_payloads(fields, data)

        if explicit_slug:
            if slug_taken(Page, explicit_slug):
                raise ValidationError('A page with this slug already exists')
            slug = explicit_slug
        else:
            slug = unique_slug(Page, slugify(data.title_en))

        fields.setdefault('blocks_en', [])
        fields.setdefault('blocks_ar', [])
        page = Page(**fields, slug=slug)
        actions = initial_status(page, status)

        db.session.add(page)
        db.session.commit()

        for action in actions:
            record_action(
                action,
                entity_type='Page',
                entity_id=page.id,
                user_id=user_id,
                details={'title': page.title_en, 'slug': page.slug},
            )
        return page

    @staticmethod
    def update_page(page_id: str, data: PageUpdate, user_id: str | None) -> Page:
        page = db.session.get(Page, page_id)
        if page is None:
            raise NotFoundError('Page not found')

        fields = data.present_fields()
        status = fields.pop('status', None)
        slug = fields.get('slug')
        if slug and slug != page.slug and slug_taken(Page, slug, exclude_id=page.id):
            raise ValidationError('A page with this slug already exists')
        _block_payloads(fields, data)

        for key, value in fields.items():
            setattr(page, key, value)
        action = apply_status(page, status)

        db.session.commit()

        record_action(
            action,
            entity_type='Page',
            entity_id=page.id,
            user_id=user_id,
            details={'title': page.title_en, 'changes': data.changed_keys()},
        )
        return page

    @staticmethod
    def delete_page(page_id: str, user_id: str | None) -> None:
        page = db.session.get(Page, page_id)
        if page is None:
            raise NotFoundError('Page not found')

        title = page.title_en
        db.session.delete(page)
        db.session.commit()

        record_action(
            AuditAction.DELETE,
            entity_type='Page',
            entity_id=page_id,
            user_id=user_id,
            details={'title': title},
        )

    # ============= Blocks =============

    @staticmethod
    def _editable_page(page_id: str, locale: str) -> Page:
        if locale not in LOCALES:
            raise ValidationError(f"locale: must be one of {', '.join(LOCALES)}")
        page = db.session.get(Page, page_id)
        if page is None:
            raise NotFoundError('Page not found')
        return page

    @staticmethod
    def _record_block_change(page: Page, locale: str, block_id: str, operation: str, user_id: str | None):
        record_action(
            AuditAction.UPDATE,
            entity_type='Page',
            entity_id=page.id,
            user_id=user_id,
            details={
                'title': page.title_en,
                'locale': locale,
                'blockId': block_id,
                'operation': operation,
            },
        )

    @staticmethod
    def add_block(page_id: str, locale: str, block_type: BlockType, user_id: str | None) -> block_model.Block:
        page = PageService._editable_page(page_id, locale)
        block = block_model.add_block(page, locale, block_type)
        db.session.commit()

        PageService._record_block_change(page, locale, block.id, 'add', user_id)
        return block

    @staticmethod
    def update_block(
        page_id: str,
        locale: str,
        block_id: str,
        partial: dict[str, Any],
        user_id: str | None,
    ) -> block_model.Block | None:
        """Merge ``partial`` into a block's data. Unknown ids leave the page untouched."""
        page = PageService._editable_page(page_id, locale)
        block = block_model.update_block(page, locale, block_id, partial)
        if block is None:
            return None
        db.session.commit()

        PageService._record_block_change(page, locale, block_id, 'update', user_id)
        return block

    @staticmethod
    def remove_block(page_id: str, locale: str, block_id: str, user_id: str | None) -> bool:
        page = PageService._editable_page(page_id, locale)
        if not block_model.remove_block(page, locale, block_id):
            return False
        db.session.commit()

        PageService._record_block_change(page, locale, block_id, 'remove', user_id)
        return True


__all__ = ['PageService', 'serialize_page']
