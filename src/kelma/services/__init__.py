"""Service layer for kelma.

This module exports the main service entry points.
"""

from kelma.services.deck import ReviewDeck
from kelma.services.evaluation import AnswerEvaluator
from kelma.services.scheduler import SrsScheduler, validate_quality

__all__ = [
    "AnswerEvaluator",
    "ReviewDeck",
    "SrsScheduler",
    "validate_quality",
]
