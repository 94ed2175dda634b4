"""Review deck service for kelma.

The deck is the single owner of a learner's review items. It keeps
item IDs unique, routes every update through the scheduler and
serializes writes per item ID.
"""

import threading

from kelma.interfaces.storage import ReviewStoreInterface
from kelma.logging import get_logger
from kelma.models.review import ReviewItemDTO
from kelma.models.stats import ReviewStatsDTO
from kelma.services.scheduler import SrsScheduler

__all__ = [
    "ReviewDeck",
]

logger = get_logger(__name__)


class ReviewDeck:
    """Owning collection of review items.

    Writes to the same item ID are serialized with a per-item lock;
    writes to different IDs proceed independently. Each update is
    computed in full by the scheduler before it is saved, so queue and
    statistics snapshots never observe a partially updated item.
    Locks exist only for IDs that were added or found in the store;
    ``reset`` holds all of them while it clears the store.

    Example:
        deck = ReviewDeck(InMemoryReviewStore(), SrsScheduler())
        deck.add_item("bongu", "greetings-1", "unit-1")
        deck.submit("bongu", 4, "bongu", "Bongu", 1500)
        queue = deck.daily_queue()
    """

    def __init__(self, store: ReviewStoreInterface, scheduler: SrsScheduler) -> None:
        """Initialize deck with dependencies.

        Args:
            store: Item collection backend
            scheduler: Scheduling rules applied on every update
        """
        self._store = store
        self._scheduler = scheduler
        self._registry_lock = threading.Lock()
        self._item_locks: dict[str, threading.Lock] = {}

    def _lock_for(self, item_id: str, create: bool = True) -> "threading.Lock | None":
        """Return the write lock for an item ID.

        With ``create=False`` no lock is made for an ID the store does not
        know, so lookups of unknown IDs leave the lock map unchanged.
        """
        with self._registry_lock:
            lock = self._item_locks.get(item_id)
            if lock is None and (create or self._store.item_exists(item_id)):
                lock = self._item_locks[item_id] = threading.Lock()
            return lock

    def add_item(self, item_id: str, lesson_id: str, unit_id: str) -> ReviewItemDTO:
        """Schedule an item for the first time.

        Adding an ID that is already scheduled is a no-op and returns
        the stored item.
        """
        with self._lock_for(item_id):
            existing = self._store.get_item(item_id)
            if existing is not None:
                return existing

            item = self._scheduler.create_item(item_id, lesson_id, unit_id)
            self._store.save_item(item)

        logger.info("review_item_added", item_id=item_id, lesson_id=lesson_id, unit_id=unit_id)
        return item

    def submit(
        self,
        item_id: str,
        quality: int,
        user_answer: str = "",
        correct_answer: str = "",
        response_time_ms: int = 0,
    ) -> ReviewItemDTO:
        """Apply a graded review to a stored item.

        Raises:
            KeyError: If the item ID is not in the deck
            ValueError: If ``quality`` is outside 0-5
        """
        lock = self._lock_for(item_id, create=False)
        if lock is None:
            logger.warning("review_rejected_unknown_item", item_id=item_id)
            raise KeyError(f"No review item with id: {item_id}")

        with lock:
            # The item may have been dropped by a reset while waiting
            item = self._store.get_item(item_id)
            if item is None:
                logger.warning("review_rejected_unknown_item", item_id=item_id)
                raise KeyError(f"No review item with id: {item_id}")

            updated = self._scheduler.submit_review(
                item, quality, user_answer, correct_answer, response_time_ms
            )
            self._store.save_item(updated)

        return updated

    def get(self, item_id: str) -> ReviewItemDTO | None:
        return self._store.get_item(item_id)

    def items(self) -> list[ReviewItemDTO]:
        return self._store.get_all_items()

    def daily_queue(self, max_items: int | None = None) -> list[ReviewItemDTO]:
        """Today's review queue over a snapshot of the deck."""
        return self._scheduler.daily_queue(self._store.get_all_items(), max_items)

    def stats(self) -> ReviewStatsDTO:
        return self._scheduler.stats(self._store.get_all_items())

    def reset(self) -> None:
        """Drop every item from the deck.

        Waits for in-flight writes to finish, so no update is saved after
        the store has been cleared. Item locks are kept: a writer still
        waiting on one must share it with any later writer of that ID.
        """
        with self._registry_lock:
            locks = list(self._item_locks.values())
            for lock in locks:
                lock.acquire()
            try:
                self._store.clear()
            finally:
                for lock in locks:
                    lock.release()
        logger.info("deck_reset", items_locked=len(locks))

    def __len__(self) -> int:
        return len(self._store.get_all_items())
