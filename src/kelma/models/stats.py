"""Aggregate review statistics for kelma."""

from pydantic import BaseModel, Field

__all__ = [
    "ReviewStatsDTO",
]


class ReviewStatsDTO(BaseModel, frozen=True):
    """Statistics computed on demand over a whole item collection.

    Attributes:
        total: Number of items
        due: Number of items due now
        total_attempts: Attempts across all items
        avg_quality: Mean attempt quality, rounded to 2 decimals
        retention_rate: Share of attempts with quality >= 3, rounded to 2 decimals
        interval_histogram: Interval (days) -> number of items at that interval
        next_review_timestamp: Earliest due date among due items, None if none are due
        schema_version: Schema version for forward compatibility
    """

    total: int = Field(default=0, ge=0)
    due: int = Field(default=0, ge=0)
    total_attempts: int = Field(default=0, ge=0)
    avg_quality: float = Field(default=0.0, ge=0.0, le=5.0)
    retention_rate: float = Field(default=0.0, ge=0.0, le=1.0)
    interval_histogram: dict[int, int] = Field(default_factory=dict)
    next_review_timestamp: int | None = None
    schema_version: int = Field(default=1)
