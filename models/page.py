"""
models/page.py
--------------
Pagination types. Page numbers are zero-based throughout the code;
only the Telegram handlers show one-based numbers to the user.
"""

from dataclasses import dataclass
from typing import Generic, Tuple, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class PageRequest:
    """A request for the `page`-th slice of `size` rows."""
    page: int
    size: int

    def __post_init__(self):
        if self.page < 0:
            raise ValueError(f"Page index must not be negative, got {self.page}")
        if self.size < 1:
            raise ValueError(f"Page size must be at least 1, got {self.size}")

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass(frozen=True)
class Page(Generic[T]):
    """
    One slice of a larger ordered result set.

    Attributes:
        items: The rows on this page, in result order.
        page: Zero-based page index.
        size: Requested page size (the last page may hold fewer items).
        total_elements: Row count of the whole result set.
    """
    items: Tuple[T, ...]
    page: int
    size: int
    total_elements: int

    @property
    def total_pages(self) -> int:
        return -(-self.total_elements // self.size)

    @property
    def number_of_elements(self) -> int:
        return len(self.items)

    @property
    def is_first(self) -> bool:
        return self.page == 0

    @property
    def is_last(self) -> bool:
        return not self.has_next

    @property
    def has_next(self) -> bool:
        return self.page + 1 < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 0

    def __iter__(self):
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)
