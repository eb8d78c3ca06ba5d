# backend/app/services/search/pagination.py
"""Page slicing for ranked search results."""
from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Generic, List, Sequence, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    items: List[T]
    total: int
    page: int
    per_page: int

    @property
    def total_pages(self) -> int:
        return max(1, math.ceil(self.total / self.per_page)) if self.per_page else 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def paginate(items: Sequence[T], page: int, per_page: int) -> Page[T]:
    """
    Slice [(page-1)*per_page, page*per_page) out of items.

    Out-of-range pages give an empty slice; total always counts every item.
    """
    page = max(1, page)
    per_page = max(1, per_page)
    start = (page - 1) * per_page
    return Page(
        items=list(items[start : start + per_page]),
        total=len(items),
        page=page,
        per_page=per_page,
    )
