from collections.abc import Sequence
from typing import Any, Generic, Optional, TypeVar

from fastapi import Query
from fastapi_pagination.bases import AbstractPage, AbstractParams, CursorRawParams
from fastapi_pagination.cursor import CursorParams
from fastapi_pagination.types import Cursor

from app.pagination.page_pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE

T = TypeVar("T")


class HistoryCursorParams(CursorParams):
    """
    Keyset pagination for order history and admin lists. The total is never
    counted, those tables only grow.
    """

    size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, description="Page size")

    def to_raw_params(self) -> CursorRawParams:
        raw_params = super().to_raw_params()
        raw_params.include_total = False
        return raw_params


class HistoryPage(AbstractPage[T], Generic[T]):
    """One page of a ``created_at``-ordered query with opaque next/previous cursors."""

    items: Sequence[T]
    next_page: Optional[str] = None
    previous_page: Optional[str] = None

    __params_type__ = HistoryCursorParams

    @classmethod
    def create(
        cls,
        items: Sequence[T],
        params: AbstractParams,
        *,
        next_: Optional[Cursor] = None,
        previous: Optional[Cursor] = None,
        **kwargs: Any,
    ) -> "HistoryPage[T]":
        if not isinstance(params, HistoryCursorParams):
            raise TypeError(f"{cls.__name__} expects {HistoryCursorParams.__name__}")

        for unused in ("params", "total", "current", "current_backwards"):
            kwargs.pop(unused, None)
        return cls(
            items=items,
            next_page=params.encode_cursor(next_),
            previous_page=params.encode_cursor(previous),
            **kwargs,
        )
