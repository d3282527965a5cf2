import math
from dataclasses import dataclass
from typing import Optional

from app.schemas.basic_schemas import PaginationSchema

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


@dataclass
class PageWindow:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def describe(self, total: int) -> PaginationSchema:
        return PaginationSchema(
            total=total,
            page=self.page,
            pages=math.ceil(total / self.limit) if total else 0,
            limit=self.limit,
        )


def clamp_page(
    page: Optional[int],
    limit: Optional[int],
    *,
    default_limit: int = DEFAULT_PAGE_SIZE,
    max_limit: int = MAX_PAGE_SIZE,
) -> PageWindow:
    """Page is at least 1, limit is kept within ``[1, max_limit]``."""
    page = max(1, page or 1)
    if limit is None:
        limit = default_limit
    limit = max(1, min(limit, max_limit))
    return PageWindow(page=page, limit=limit)
