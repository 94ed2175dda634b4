"""Evaluation models for kelma."""

from pydantic import BaseModel, Field

__all__ = [
    "EvaluationResultDTO",
]


class EvaluationResultDTO(BaseModel, frozen=True):
    """Outcome of grading one answer.

    Attributes:
        quality: Score on the 0-5 scale fed to the scheduler
        matched_answer: Reference answer the score was computed against
        similarity: Edit-distance similarity of the lenient forms
        suggestions: Correction hints, in report order
        schema_version: Schema version for forward compatibility
    """

    quality: int = Field(ge=0, le=5)
    matched_answer: str
    similarity: float = Field(ge=0.0, le=1.0)
    suggestions: list[str] = Field(default_factory=list)
    schema_version: int = Field(default=1)

    @property
    def is_correct(self) -> bool:
        return self.quality >= 3
