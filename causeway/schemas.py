"""Request payload schemas for the JSON API.

Payload keys are camelCase on the wire (``titleEn``) and snake_case in
Python (``title_en``). Unknown keys are ignored.
"""

from __future__ import annotations

from datetime import date
from typing import Annotated, Any, ClassVar

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StringConstraints, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from causeway.errors import ValidationError
from causeway.models import BlockType, PublishStatus, ResourceType
from causeway.services.slugs import slugify

RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class RequestSchema(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra='ignore',
    )
    not_null_fields: ClassVar[frozenset[str]] = frozenset()

    def changed_keys(self) -> list[str]:
        """Wire names of the fields present in the payload."""
        return list(self.model_dump(by_alias=True, exclude_unset=True).keys())

    def present_fields(self) -> dict[str, Any]:
        """Python-side values of the fields present in the payload."""
        fields = self.model_dump(exclude_unset=True)
        # Explicit nulls for NOT NULL columns leave the stored value alone
        return {
            key: value for key, value in fields.items()
            if value is not None or key not in self.not_null_fields
        }


def format_validation_errors(exc: PydanticValidationError) -> str:
    messages = []
    for error in exc.errors():
        location = '.'.join(str(part) for part in error['loc']) or 'body'
        messages.append(f"{location}: {error['msg']}")
    return ', '.join(messages)


def parse_payload(schema: type[RequestSchema], payload: Any) -> RequestSchema:
    """Validate a decoded JSON body, raising the API's ValidationError on failure."""
    if not isinstance(payload, dict):
        raise ValidationError('Request body must be a JSON object')
    try:
        return schema.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError(format_validation_errors(exc)) from exc


# ============= Resources =============

class ResourceFields(RequestSchema):
    not_null_fields: ClassVar[frozenset[str]] = frozenset({'title_en', 'type', 'featured', 'priority'})

    title_ar: str | None = None
    description_en: str | None = None
    description_ar: str | None = None
    content_en: str | None = None
    content_ar: str | None = None
    type: ResourceType | None = None
    status: PublishStatus | None = None
    featured: bool | None = None
    priority: int | None = None
    publisher: str | None = None
    publish_date: date | None = None
    year: int | None = None
    external_url: str | None = None
    tags: list[str] | None = None
    category_id: str | None = None
    meta_title_en: str | None = None
    meta_desc_en: str | None = None
    meta_title_ar: str | None = None
    meta_desc_ar: str | None = None
    file_url: str | None = None
    file_name: str | None = None
    file_size: int | None = None
    file_mime_type: str | None = None
    thumbnail_url: str | None = None


class ResourceCreate(ResourceFields):
    title_en: RequiredText


class ResourceUpdate(ResourceFields):
    title_en: RequiredText | None = None


# ============= Categories =============

class CategoryFields(RequestSchema):
    not_null_fields: ClassVar[frozenset[str]] = frozenset({'name_en', 'enabled', 'sort_order'})

    name_ar: str | None = None
    description_en: str | None = None
    description_ar: str | None = None
    icon: str | None = None
    color: str | None = None
    enabled: bool | None = None
    sort_order: int | None = None
    parent_id: str | None = None


class CategoryCreate(CategoryFields):
    name_en: RequiredText


class CategoryUpdate(CategoryFields):
    name_en: RequiredText | None = None


class CategoryReorder(RequestSchema):
    ids: list[str] = Field(min_length=1)


# ============= Pages & blocks =============

class BlockSchema(RequestSchema):
    id: RequiredText
    type: BlockType
    data: dict[str, Any] = Field(default_factory=dict)


def _unique_block_ids(blocks: list[BlockSchema] | None) -> list[BlockSchema] | None:
    if blocks is None:
        return blocks
    ids = [block.id for block in blocks]
    if len(ids) != len(set(ids)):
        raise ValueError('block ids must be unique within a locale')
    return blocks


BlockList = Annotated[list[BlockSchema], AfterValidator(_unique_block_ids)]


class PageFields(RequestSchema):
    not_null_fields: ClassVar[frozenset[str]] = frozenset(
        {'title_en', 'template', 'show_in_nav', 'sort_order', 'slug'}
    )

    title_ar: str | None = None
    slug: str | None = None
    status: PublishStatus | None = None
    template: str | None = None
    show_in_nav: bool | None = None
    sort_order: int | None = None
    content_en: str | None = None
    content_ar: str | None = None
    blocks_en: BlockList | None = None
    blocks_ar: BlockList | None = None
    meta_title_en: str | None = None
    meta_desc_en: str | None = None
    meta_title_ar: str | None = None
    meta_desc_ar: str | None = None

    @field_validator('slug')
    @classmethod
    def _clean_slug(cls, value: str | None) -> str | None:
        if value is None or not value.strip().strip('/'):
            return None
        slug = slugify(value.replace('/', ' '))
        if not slug:
            raise ValueError('must contain letters or digits')
        return slug


class PageCreate(PageFields):
    title_en: RequiredText


class PageUpdate(PageFields):
    title_en: RequiredText | None = None


class BlockCreate(RequestSchema):
    type: BlockType


class BlockUpdate(RequestSchema):
    data: dict[str, Any]


# ============= Auth =============

class LoginRequest(RequestSchema):
    email: RequiredText
    password: RequiredText


class LinkCheckRequest(RequestSchema):
    background: bool = False


__all__ = [
    'RequestSchema',
    'parse_payload',
    'format_validation_errors',
    'ResourceCreate',
    'ResourceUpdate',
    'CategoryCreate',
    'CategoryUpdate',
    'CategoryReorder',
    'BlockSchema',
    'PageCreate',
    'PageUpdate',
    'BlockCreate',
    'BlockUpdate',
    'LoginRequest',
    'LinkCheckRequest',
]
