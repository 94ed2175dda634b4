"""kelma - Spaced repetition scheduling and Maltese answer evaluation.

This package provides tools for:
- Normalizing Maltese text with strict or lenient orthography rules
- Grading answers on the 0-5 quality scale with correction hints
- Scheduling review items with an SM-2 variant
- Building prioritized daily review queues and aggregate statistics

Example usage:
    from kelma import Kelma

    kelma = Kelma()
    kelma.add_item("bongu", "greetings-1", "unit-1")
    outcome = kelma.answer("bongu", "bongu", ["Bongu"])
    queue = kelma.daily_queue()

The function-level API works on plain item lists:
    from kelma import create_item, evaluate, submit_review

    item = create_item("bongu", "greetings-1", "unit-1")
    item = submit_review(item, evaluate("ghid", "għid"), "ghid", "għid", 1800)
"""

__version__ = "0.1.0"

from kelma.config import KelmaConfig
from kelma.infra.memory.repository import InMemoryReviewStore
from kelma.interfaces.speech import SpeechToTextInterface, TextToSpeechInterface
from kelma.interfaces.storage import ReviewStoreInterface
from kelma.language.normalize import NormalizationMode, extract_special_letters, normalize
from kelma.language.similarity import similarity
from kelma.models.evaluation import EvaluationResultDTO
from kelma.models.review import ReviewAttemptDTO, ReviewItemDTO
from kelma.models.stats import ReviewStatsDTO
from kelma.orchestrator import AnswerOutcome, Kelma
from kelma.services.deck import ReviewDeck
from kelma.services.evaluation import (
    AnswerEvaluator,
    acceptable,
    equivalent,
    evaluate,
    suggestions,
)
from kelma.services.scheduler import (
    SrsScheduler,
    create_item,
    daily_queue,
    due_items,
    priority,
    priority_order,
    stats,
    submit_review,
)

__all__ = [  # noqa: RUF022
    # Orchestrator
    "Kelma",
    "AnswerOutcome",
    "KelmaConfig",
    # Services
    "AnswerEvaluator",
    "ReviewDeck",
    "SrsScheduler",
    # Implementations
    "InMemoryReviewStore",
    # Interfaces
    "ReviewStoreInterface",
    "SpeechToTextInterface",
    "TextToSpeechInterface",
    # Models
    "EvaluationResultDTO",
    "ReviewAttemptDTO",
    "ReviewItemDTO",
    "ReviewStatsDTO",
    # Function-level API
    "NormalizationMode",
    "acceptable",
    "create_item",
    "daily_queue",
    "due_items",
    "equivalent",
    "evaluate",
    "extract_special_letters",
    "normalize",
    "priority",
    "priority_order",
    "similarity",
    "stats",
    "submit_review",
    "suggestions",
]
