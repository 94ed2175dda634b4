"""SM-2 review scheduler for kelma.

This module owns the scheduling math: it creates review items,
applies a graded review to produce the next item state, ranks due
items by priority and aggregates statistics over a collection.

All methods are pure with respect to their inputs: items are
immutable values and every update returns a new one.
"""

import math
import time
from collections import Counter
from collections.abc import Callable, Iterable, Sequence

from kelma.config import SchedulerSettings
from kelma.logging import get_logger
from kelma.models.review import SECONDS_PER_DAY, ReviewAttemptDTO, ReviewItemDTO
from kelma.models.stats import ReviewStatsDTO
from kelma.utils.hashing import generate_attempt_id

__all__ = [
    "SrsScheduler",
    "create_item",
    "daily_queue",
    "due_items",
    "priority",
    "priority_order",
    "stats",
    "submit_review",
    "validate_quality",
]

logger = get_logger(__name__)

MIN_QUALITY = 0
MAX_QUALITY = 5
PASSING_QUALITY = 3


def validate_quality(quality: object) -> int:
    """Check that a quality score is an int in [0, 5].

    Out-of-range values are rejected instead of clamped, since a bad
    score would corrupt the easiness and interval of the item.

    Raises:
        ValueError: If ``quality`` is not an integer between 0 and 5
    """
    if isinstance(quality, bool) or not isinstance(quality, int):
        raise ValueError(f"Quality must be an integer between 0 and 5, got {quality!r}")
    if not MIN_QUALITY <= quality <= MAX_QUALITY:
        raise ValueError(f"Quality must be between 0 and 5, got {quality}")
    return quality


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


class SrsScheduler:
    """SM-2 variant scheduler.

    Update rules for a review of quality q:
        repetitions' = repetitions + 1
        easiness'    = max(min_easiness,
                           easiness + f * (0.1 - (5 - q) * (0.08 + (5 - q) * 0.02)))
        interval'    = 1                              if q < 3
                       first_interval_days            if repetitions' == 1
                       round(interval * easiness')    otherwise
        due_date'    = now + interval' days

    The same easiness formula is applied to correct and incorrect
    answers; lapses are only penalized through the interval reset.

    Priority (higher = review sooner):
        days_overdue * 10 + (3 - easiness) * 5
        + max(0, 5 - repetitions) * 2 + max(0, 3 - avg_quality) * 3

    Example:
        scheduler = SrsScheduler()
        item = scheduler.create_item("bongu", "greetings-1", "unit-1")
        item = scheduler.submit_review(item, 5, "Bongu", "Bongu", 1200)
        queue = scheduler.daily_queue(all_items)
    """

    def __init__(
        self,
        settings: SchedulerSettings | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        """Initialize scheduler.

        Args:
            settings: SM-2 parameters and default queue size
            clock: Returns the current time in epoch seconds (default: time.time)
        """
        self._settings = settings or SchedulerSettings()
        self._clock = clock or time.time

    @property
    def settings(self) -> SchedulerSettings:
        return self._settings

    def _now(self, now: int | None) -> int:
        return int(self._clock()) if now is None else now

    def create_item(
        self,
        item_id: str,
        lesson_id: str,
        unit_id: str,
        now: int | None = None,
    ) -> ReviewItemDTO:
        """Create a fresh item, due one day from now."""
        now = self._now(now)
        due_date = now + SECONDS_PER_DAY

        item = ReviewItemDTO(
            item_id=item_id,
            lesson_id=lesson_id,
            unit_id=unit_id,
            quality=0,
            easiness=self._settings.initial_easiness,
            interval=1,
            repetitions=0,
            due_date=due_date,
            last_review=now,
            next_review=due_date,
        )

        logger.debug("review_item_created", item_id=item_id, lesson_id=lesson_id, unit_id=unit_id)
        return item

    def submit_review(
        self,
        item: ReviewItemDTO,
        quality: int,
        user_answer: str = "",
        correct_answer: str = "",
        response_time_ms: int = 0,
        now: int | None = None,
    ) -> ReviewItemDTO:
        """Apply one graded review and return the updated item.

        Args:
            item: Current item state (left untouched)
            quality: Answer quality, 0-5
            user_answer: Answer given by the user
            correct_answer: Reference answer
            response_time_ms: Time taken to answer
            now: Review time in epoch seconds (default: clock)

        Returns:
            New item with the attempt appended and the schedule advanced

        Raises:
            TypeError: If ``item`` is not a ReviewItemDTO
            ValueError: If ``quality`` is outside 0-5 or response time is negative
        """
        if not isinstance(item, ReviewItemDTO):
            raise TypeError(f"Expected ReviewItemDTO, got {type(item).__name__}")
        quality = validate_quality(quality)
        if response_time_ms < 0:
            raise ValueError(f"Response time must be non-negative, got {response_time_ms}")
        now = self._now(now)

        attempt = ReviewAttemptDTO(
            attempt_id=generate_attempt_id(item.item_id, len(item.attempts), now),
            timestamp=now,
            quality=quality,
            response_time_ms=response_time_ms,
            is_correct=quality >= PASSING_QUALITY,
            user_answer=user_answer,
            correct_answer=correct_answer,
        )

        repetitions = item.repetitions + 1
        easiness = self._next_easiness(item.easiness, quality)
        interval = self._next_interval(item.interval, easiness, repetitions, quality)
        due_date = now + interval * SECONDS_PER_DAY

        updated = item.model_copy(
            update={
                "quality": quality,
                "easiness": easiness,
                "interval": interval,
                "repetitions": repetitions,
                "due_date": due_date,
                "last_review": now,
                "next_review": due_date,
                "attempts": (*item.attempts, attempt),
            }
        )

        logger.debug(
            "review_submitted",
            item_id=item.item_id,
            quality=quality,
            old_interval=item.interval,
            new_interval=interval,
            easiness=round(easiness, 4),
            repetitions=repetitions,
        )

        return updated

    def _next_easiness(self, easiness: float, quality: int) -> float:
        # Shared by the correct and incorrect branches
        miss = MAX_QUALITY - quality
        delta = self._settings.easiness_factor * (0.1 - miss * (0.08 + miss * 0.02))
        return max(self._settings.min_easiness, easiness + delta)

    def _next_interval(
        self,
        interval: int,
        easiness: float,
        repetitions: int,
        quality: int,
    ) -> int:
        if quality < PASSING_QUALITY:
            return 1
        if repetitions == 1:
            return self._settings.first_interval_days
        return max(1, _round_half_up(interval * easiness))

    def priority(self, item: ReviewItemDTO, now: int | None = None) -> float:
        """Score how urgently an item should be reviewed (higher = sooner)."""
        now = self._now(now)
        days_overdue = max(0.0, (now - item.due_date) / SECONDS_PER_DAY)

        score = days_overdue * 10
        score += (3 - item.easiness) * 5
        score += max(0, 5 - item.repetitions) * 2
        score += max(0.0, 3 - item.average_quality) * 3
        return score

    def due_items(
        self,
        items: Iterable[ReviewItemDTO],
        now: int | None = None,
    ) -> list[ReviewItemDTO]:
        """Items whose due date is at or before ``now``, in collection order."""
        now = self._now(now)
        return [item for item in items if item.is_due(now)]

    def priority_order(
        self,
        items: Iterable[ReviewItemDTO],
        now: int | None = None,
    ) -> list[ReviewItemDTO]:
        """Sort items by descending priority.

        The sort is stable: items with equal priority keep their
        collection order.
        """
        now = self._now(now)
        return sorted(items, key=lambda item: self.priority(item, now), reverse=True)

    def daily_queue(
        self,
        items: Sequence[ReviewItemDTO],
        max_items: int | None = None,
        now: int | None = None,
    ) -> list[ReviewItemDTO]:
        """Build today's review queue.

        Only items already due are admitted; there is no lookahead.

        Raises:
            ValueError: If ``max_items`` is negative
        """
        limit = self._settings.daily_queue_size if max_items is None else max_items
        if limit < 0:
            raise ValueError(f"max_items must be non-negative, got {limit}")
        now = self._now(now)

        due = self.due_items(items, now)
        queue = self.priority_order(due, now)[:limit]

        logger.debug(
            "daily_queue_generated",
            total_items=len(items),
            due_items=len(due),
            queued=len(queue),
        )

        return queue

    def stats(
        self,
        items: Sequence[ReviewItemDTO],
        now: int | None = None,
    ) -> ReviewStatsDTO:
        """Aggregate statistics over the whole collection."""
        now = self._now(now)
        due = self.due_items(items, now)
        qualities = [attempt.quality for item in items for attempt in item.attempts]

        if qualities:
            avg_quality = sum(qualities) / len(qualities)
            retention_rate = sum(1 for q in qualities if q >= PASSING_QUALITY) / len(qualities)
        else:
            avg_quality = 0.0
            retention_rate = 0.0

        return ReviewStatsDTO(
            total=len(items),
            due=len(due),
            total_attempts=len(qualities),
            avg_quality=round(avg_quality, 2),
            retention_rate=round(retention_rate, 2),
            interval_histogram=dict(Counter(item.interval for item in items)),
            next_review_timestamp=min((item.due_date for item in due), default=None),
        )


_default_scheduler = SrsScheduler()


def create_item(
    item_id: str,
    lesson_id: str,
    unit_id: str,
    now: int | None = None,
) -> ReviewItemDTO:
    """Create a fresh item with default settings."""
    return _default_scheduler.create_item(item_id, lesson_id, unit_id, now)


def submit_review(
    item: ReviewItemDTO,
    quality: int,
    user_answer: str = "",
    correct_answer: str = "",
    response_time_ms: int = 0,
    now: int | None = None,
) -> ReviewItemDTO:
    """Apply one graded review with default settings."""
    return _default_scheduler.submit_review(
        item, quality, user_answer, correct_answer, response_time_ms, now
    )


def priority(item: ReviewItemDTO, now: int | None = None) -> float:
    return _default_scheduler.priority(item, now)


def due_items(items: Iterable[ReviewItemDTO], now: int | None = None) -> list[ReviewItemDTO]:
    return _default_scheduler.due_items(items, now)


def priority_order(items: Iterable[ReviewItemDTO], now: int | None = None) -> list[ReviewItemDTO]:
    return _default_scheduler.priority_order(items, now)


def daily_queue(
    items: Sequence[ReviewItemDTO],
    max_items: int = 20,
    now: int | None = None,
) -> list[ReviewItemDTO]:
    return _default_scheduler.daily_queue(items, max_items, now)


def stats(items: Sequence[ReviewItemDTO], now: int | None = None) -> ReviewStatsDTO:
    return _default_scheduler.stats(items, now)
