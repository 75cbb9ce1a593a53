"""Structured content blocks stored per locale on a page.

Each locale holds an independent, ordered list of blocks; list order is the
render order. A block's ``data`` is an open mapping. Conventional keys used
by the templates are ``title``, ``content`` and ``items`` (a list of
mappings for cards/stats/faq/team blocks), plus ``image``/``url`` for
image and cta blocks.
"""

from __future__ import annotations

import copy
import time
from dataclasses import dataclass, field
from typing import Any, Iterable

from causeway.i18n import LOCALES
from causeway.models import BlockType, Page
from causeway.services.slugs import to_base36


def default_block_data() -> dict[str, Any]:
    return {'title': '', 'content': '', 'items': []}


@dataclass
class Block:
    id: str
    type: BlockType
    data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Block":
        return cls(
            id=str(raw['id']),
            type=BlockType(raw['type']),
            data=dict(raw.get('data') or {}),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            'id': self.id,
            'type': self.type.value,
            'data': copy.deepcopy(self.data),
        }


def _column_for(locale: str) -> str:
    if locale not in LOCALES:
        raise ValueError(f"Unsupported locale: {locale}")
    return 'blocks_ar' if locale == 'ar' else 'blocks_en'


def blocks_for(page: Page, locale: str) -> list[Block]:
    """Blocks of one locale, in render order."""
    raw = getattr(page, _column_for(locale)) or []
    return [Block.from_dict(item) for item in raw]


def _store(page: Page, locale: str, blocks: Iterable[Block]) -> None:
    column = _column_for(locale)
    setattr(page, column, [block.to_dict() for block in blocks])


def new_block_id(existing: Iterable[str], now_ms: int | None = None) -> str:
    """Timestamp-derived base-36 id, bumped until unused in ``existing``."""
    taken = set(existing)
    stamp = now_ms if now_ms is not None else time.time_ns() // 1_000_000
    candidate = to_base36(stamp)
    while candidate in taken:
        stamp += 1
        candidate = to_base36(stamp)
    return candidate


def add_block(page: Page, locale: str, block_type: BlockType) -> Block:
    blocks = blocks_for(page, locale)
    block = Block(
        id=new_block_id(b.id for b in blocks),
        type=block_type,
        data=default_block_data(),
    )
    blocks.append(block)
    _store(page, locale, blocks)
    return block


def update_block(page: Page, locale: str, block_id: str, partial: dict[str, Any]) -> Block | None:
    """Shallow-merge ``partial`` into the block's data; None if the id is unknown."""
    blocks = blocks_for(page, locale)
    updated = None
    for block in blocks:
        if block.id == block_id:
            block.data = {**block.data, **partial}
            updated = block
            break

    if updated is not None:
        _store(page, locale, blocks)
    return updated


def remove_block(page: Page, locale: str, block_id: str) -> bool:
    blocks = blocks_for(page, locale)
    remaining = [block for block in blocks if block.id != block_id]
    if len(remaining) == len(blocks):
        return False
    _store(page, locale, remaining)
    return True


def render_blocks(page: Page, locale: str) -> list[Block]:
    """Blocks to render for a locale; blocks never fall back across locales."""
    return blocks_for(page, locale)


__all__ = [
    'Block',
    'default_block_data',
    'blocks_for',
    'new_block_id',
    'add_block',
    'update_block',
    'remove_block',
    'render_blocks',
]
