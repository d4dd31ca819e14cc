"""Fixed-size page window over the task store."""

from __future__ import annotations

import math
from collections.abc import Callable

from taskpad_cli.models.task import Task
from taskpad_cli.services.task_store import TaskStore

DEFAULT_PAGE_SIZE = 4


class PaginationView:
    """Derives the visible slice of the store's tasks.

    Only the current page number is kept; slices and page counts are
    recomputed on every call. The page is clamped back into range each
    time the store's list changes.
    """

    def __init__(self, store: TaskStore, page_size: int = DEFAULT_PAGE_SIZE):
        if page_size < 1:
            raise ValueError("page_size must be at least 1")
        self.store = store
        self.page_size = page_size
        self.current_page = 1
        self._unsubscribe: Callable[[], None] | None = store.subscribe(self.clamp)

    def total_pages(self) -> int:
        return max(1, math.ceil(len(self.store) / self.page_size))

    def visible_slice(self) -> list[Task]:
        start = (self.current_page - 1) * self.page_size
        return list(self.store.tasks[start : start + self.page_size])

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages()

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    def next(self) -> None:
        if self.has_next:
            self.current_page += 1

    def previous(self) -> None:
        if self.has_previous:
            self.current_page -= 1

    def go_to(self, page: int) -> None:
        """Jump to *page*, clamped into ``[1, total_pages()]``."""
        self.current_page = min(max(1, page), self.total_pages())

    def clamp(self) -> None:
        self.current_page = min(max(1, self.current_page), self.total_pages())

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
