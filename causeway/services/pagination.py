"""Page/limit parsing and paginated query helpers."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping

from sqlalchemy import func, select
from sqlalchemy.sql import Select

from causeway.extensions import db

DEFAULT_LIMIT = 20
MAX_LIMIT = 100


def _to_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class PageParams:
    page: int = 1
    limit: int = DEFAULT_LIMIT

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @classmethod
    def from_args(
        cls,
        args: Mapping[str, Any],
        default_limit: int = DEFAULT_LIMIT,
        max_limit: int = MAX_LIMIT,
    ) -> "PageParams":
        """Clamp ``page`` to >= 1 and ``limit`` to 1..max_limit."""
        page = max(_to_int(args.get('page'), 1), 1)
        limit = _to_int(args.get('limit'), default_limit)
        if limit < 1:
            limit = default_limit
        return cls(page=page, limit=min(limit, max_limit))


def paginate(stmt: Select, params: PageParams) -> tuple[list[Any], int]:
    """Run ``stmt`` for one page and return (items, total)."""
    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    total = db.session.execute(count_stmt).scalar_one()
    items = list(
        db.session.execute(stmt.offset(params.offset).limit(params.limit)).scalars()
    )
    return items, total


def page_envelope(data: list[Any], total: int, params: PageParams) -> dict[str, Any]:
    return {
        'success': True,
        'data': data,
        'total': total,
        'page': params.page,
        'limit': params.limit,
        'totalPages': math.ceil(total / params.limit) if params.limit else 0,
    }


__all__ = ['PageParams', 'paginate', 'page_envelope', 'DEFAULT_LIMIT', 'MAX_LIMIT']
