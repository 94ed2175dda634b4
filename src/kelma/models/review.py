"""Review models for kelma.

These models represent the spaced repetition state of a single
learnable item and the history of attempts made against it.
"""

from typing import Self

from pydantic import BaseModel, Field, model_validator

__all__ = [
    "MIN_EASINESS",
    "ReviewAttemptDTO",
    "ReviewItemDTO",
    "SECONDS_PER_DAY",
]

SECONDS_PER_DAY = 86400
MIN_EASINESS = 1.3


class ReviewAttemptDTO(BaseModel, frozen=True):
    """One answered review of an item.

    Attributes:
        attempt_id: Deterministic attempt ID (SHA256 of item, sequence, timestamp)
        timestamp: When the answer was submitted (epoch seconds)
        quality: Answer quality on the 0-5 scale
        response_time_ms: Time the user took to answer
        is_correct: True when quality >= 3
        user_answer: Raw answer as typed or spoken
        correct_answer: Reference answer the user was graded against
        schema_version: Schema version for forward compatibility
    """

    attempt_id: str
    timestamp: int = Field(description="Epoch seconds")
    quality: int = Field(ge=0, le=5)
    response_time_ms: int = Field(default=0, ge=0)
    is_correct: bool
    user_answer: str = ""
    correct_answer: str = ""
    schema_version: int = Field(default=1)


class ReviewItemDTO(BaseModel, frozen=True):
    """Scheduling state of one learnable item (SM-2 variant).

    Items are immutable values: every review produces a new instance
    and the owning collection swaps it in. The attempt history is
    append-only and grows by one entry per review without bound.

    Attributes:
        item_id: Opaque item ID, unique within a collection
        lesson_id: Owning lesson ID
        unit_id: Owning unit ID
        quality: Quality of the most recent review (0 for a fresh item)
        easiness: Easiness factor, never below MIN_EASINESS
        interval: Days between the last review and the due date
        repetitions: Number of reviews applied so far
        due_date: When the item is next due (epoch seconds)
        last_review: Last review, or creation time (epoch seconds)
        next_review: Mirrors due_date
        attempts: Review history, oldest first
        schema_version: Schema version for forward compatibility
    """

    item_id: str
    lesson_id: str
    unit_id: str
    quality: int = Field(default=0, ge=0, le=5)
    easiness: float = Field(default=2.5, ge=MIN_EASINESS)
    interval: int = Field(default=1, ge=1, description="Days")
    repetitions: int = Field(default=0, ge=0)
    due_date: int = Field(description="Epoch seconds")
    last_review: int = Field(description="Epoch seconds")
    next_review: int = Field(description="Epoch seconds")
    attempts: tuple[ReviewAttemptDTO, ...] = Field(default_factory=tuple)
    schema_version: int = Field(default=1)

    @model_validator(mode="after")
    def _check_schedule(self) -> Self:
        if self.next_review != self.due_date:
            raise ValueError(
                f"next_review ({self.next_review}) must equal due_date ({self.due_date})"
            )
        expected = self.last_review + self.interval * SECONDS_PER_DAY
        if self.due_date != expected:
            raise ValueError(
                f"due_date ({self.due_date}) must be last_review + interval days ({expected})"
            )
        return self

    @property
    def average_quality(self) -> float:
        """Mean quality over the full attempt history (0.0 without attempts)."""
        if not self.attempts:
            return 0.0
        return sum(a.quality for a in self.attempts) / len(self.attempts)

    def is_due(self, now: int) -> bool:
        """Check whether the item is due at ``now`` (epoch seconds)."""
        return self.due_date <= now
