"""Public DTO models for kelma.

This module exports all public data transfer objects.
"""

from kelma.models.evaluation import EvaluationResultDTO
from kelma.models.review import MIN_EASINESS, SECONDS_PER_DAY, ReviewAttemptDTO, ReviewItemDTO
from kelma.models.session import ExerciseResultDTO, ExerciseSessionDTO, ProgressDTO
from kelma.models.stats import ReviewStatsDTO

__all__ = [
    "MIN_EASINESS",
    "SECONDS_PER_DAY",
    "EvaluationResultDTO",
    "ExerciseResultDTO",
    "ExerciseSessionDTO",
    "ProgressDTO",
    "ReviewAttemptDTO",
    "ReviewItemDTO",
    "ReviewStatsDTO",
]
