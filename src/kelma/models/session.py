"""Exercise session models for kelma.

Sessions group the answers given while practising one lesson.
They are bookkeeping only and do not affect scheduling.
"""

from pydantic import BaseModel, Field

__all__ = [
    "CORRECT_ANSWER_POINTS",
    "ExerciseResultDTO",
    "ExerciseSessionDTO",
    "ProgressDTO",
]

CORRECT_ANSWER_POINTS = 10


class ExerciseResultDTO(BaseModel, frozen=True):
    """One graded answer within a session."""

    item_id: str
    user_answer: str
    correct_answer: str
    quality: int = Field(ge=0, le=5)
    is_correct: bool
    response_time_ms: int = Field(default=0, ge=0)
    suggestions: list[str] = Field(default_factory=list)
    schema_version: int = Field(default=1)


class ExerciseSessionDTO(BaseModel, frozen=True):
    """A practice session over the items of one lesson.

    Attributes:
        session_id: Deterministic session ID
        lesson_id: Lesson being practised
        started_at: Session start (epoch seconds)
        ended_at: Session end (epoch seconds), None while active
        item_ids: Items planned for the session; advisory, answers to
            other items are still recorded
        current_index: Number of results recorded so far
        results: Graded answers, oldest first
        score: CORRECT_ANSWER_POINTS per correct result
        is_completed: True once the session has been closed
        schema_version: Schema version for forward compatibility
    """

    session_id: str
    lesson_id: str
    started_at: int = Field(description="Epoch seconds")
    ended_at: int | None = None
    item_ids: tuple[str, ...] = Field(default_factory=tuple)
    current_index: int = Field(default=0, ge=0)
    results: tuple[ExerciseResultDTO, ...] = Field(default_factory=tuple)
    score: int = Field(default=0, ge=0)
    is_completed: bool = False
    schema_version: int = Field(default=1)

    def with_result(self, result: ExerciseResultDTO) -> "ExerciseSessionDTO":
        """Return a copy with ``result`` appended and the score updated."""
        return self.model_copy(
            update={
                "results": (*self.results, result),
                "current_index": self.current_index + 1,
                "score": self.score + (CORRECT_ANSWER_POINTS if result.is_correct else 0),
            }
        )


class ProgressDTO(BaseModel, frozen=True):
    """Completed lessons and units, in completion order."""

    completed_lessons: tuple[str, ...] = Field(default_factory=tuple)
    completed_units: tuple[str, ...] = Field(default_factory=tuple)
    schema_version: int = Field(default=1)
