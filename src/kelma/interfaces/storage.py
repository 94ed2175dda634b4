"""Storage interface for kelma.

This module defines the Protocol for the review item collection.
"""

from typing import Protocol, runtime_checkable

from kelma.models.review import ReviewItemDTO

__all__ = [
    "ReviewStoreInterface",
]


@runtime_checkable
class ReviewStoreInterface(Protocol):
    """Contract for the review item collection.

    Items are keyed by ``item_id``. Implementations must replace a
    stored item atomically, so readers see either the old or the new
    value, and must return items in insertion order.
    """

    def save_item(self, item: ReviewItemDTO) -> str:
        """Insert or replace an item.

        Args:
            item: Item to store

        Returns:
            Item ID
        """
        ...

    def get_item(self, item_id: str) -> ReviewItemDTO | None:
        """Get an item by ID.

        Args:
            item_id: Item ID to retrieve

        Returns:
            ReviewItemDTO if found, None otherwise
        """
        ...

    def item_exists(self, item_id: str) -> bool:
        """Check if an item exists."""
        ...

    def get_all_items(self) -> list[ReviewItemDTO]:
        """Snapshot of every stored item, in insertion order."""
        ...

    def clear(self) -> None:
        """Remove every item."""
        ...
