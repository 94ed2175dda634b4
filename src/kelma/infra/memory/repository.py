"""In-memory review store for kelma."""

import threading

from kelma.interfaces.storage import ReviewStoreInterface
from kelma.models.review import ReviewItemDTO

__all__ = [
    "InMemoryReviewStore",
]


class InMemoryReviewStore(ReviewStoreInterface):
    """Dict-backed review store.

    A single lock guards the mapping, so concurrent readers never see
    a half-replaced entry. Dict ordering gives insertion order; replacing
    an item keeps its original position.
    """

    def __init__(self, items: list[ReviewItemDTO] | None = None) -> None:
        self._items: dict[str, ReviewItemDTO] = {}
        self._lock = threading.Lock()
        for item in items or []:
            self._items[item.item_id] = item

    def save_item(self, item: ReviewItemDTO) -> str:
        with self._lock:
            self._items[item.item_id] = item
        return item.item_id

    def get_item(self, item_id: str) -> ReviewItemDTO | None:
        with self._lock:
            return self._items.get(item_id)

    def item_exists(self, item_id: str) -> bool:
        with self._lock:
            return item_id in self._items

    def get_all_items(self) -> list[ReviewItemDTO]:
        with self._lock:
            return list(self._items.values())

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
