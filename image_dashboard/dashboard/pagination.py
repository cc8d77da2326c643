import math
from typing import List, Sequence, Tuple, TypeVar

T = TypeVar("T")

class Paginator:
    """
        Client-side pagination over a fixed page size.

        `current_page` is 1-indexed and is kept within
        [1, max(1, total_pages)] whenever the item count is synced, so
        emptying the last page moves back to the new last page.
    """
    def __init__(self, page_size: int = 12):
        if page_size < 1:
            raise ValueError("page_size must be positive")
        self.page_size = page_size
        self.current_page = 1

    def total_pages(self, count: int) -> int:
        return math.ceil(count / self.page_size)

    def last_page(self, count: int) -> int:
        return max(1, self.total_pages(count))

    def sync(self, count: int) -> int:
        self.current_page = min(max(1, self.current_page), self.last_page(count))
        return self.current_page

    def go_to(self, page: int, count: int) -> int:
        self.current_page = page
        return self.sync(count)

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    def has_next(self, count: int) -> bool:
        return self.current_page < self.total_pages(count)

    def page_numbers(self, count: int) -> List[int]:
        return list(range(1, self.total_pages(count) + 1))

    def bounds(self, count: int) -> Tuple[int, int]:
        """Zero-based [start, end) of the current page within `count` items."""
        start = (self.current_page - 1) * self.page_size
        return start, min(start + self.page_size, count)

    def slice(self, items: Sequence[T]) -> List[T]:
        start, end = self.bounds(len(items))
        return list(items[start:end])
