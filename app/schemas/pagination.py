"""Generic paged response schema."""

from __future__ import annotations

import math
from typing import Generic, Sequence, TypeVar

from pydantic import BaseModel, Field, computed_field

ItemT = TypeVar("ItemT")


class PagedResponse(BaseModel, Generic[ItemT]):
    """One page of a sorted collection plus navigation metadata."""

    data: list[ItemT] = Field(default_factory=list, description="Items on this page.")
    page_number: int = Field(..., ge=1, description="1-based page index.")
    page_size: int = Field(..., ge=1, description="Maximum items per page.")
    total_count: int = Field(..., ge=0, description="Items across all pages.")
    total_pages: int = Field(..., ge=0, description="Number of pages (0 when empty).")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_previous_page(self) -> bool:
        return self.page_number > 1

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_next_page(self) -> bool:
        return self.page_number < self.total_pages

    @classmethod
    def from_items(
        cls,
        items: Sequence[ItemT],
        *,
        page_number: int,
        page_size: int,
    ) -> "PagedResponse[ItemT]":
        """Slice ``items`` into the requested page.

        Pages past the end come back with an empty ``data`` list.
        """
        total_count = len(items)
        start = (page_number - 1) * page_size
        return cls(
            data=list(items[start:start + page_size]),
            page_number=page_number,
            page_size=page_size,
            total_count=total_count,
            total_pages=math.ceil(total_count / page_size),
        )
