"""Kelma orchestrator for practice sessions.

This module provides the main entry point for the kelma package,
wiring answer evaluation, scheduling and the review deck together
with session and progress bookkeeping.
"""

import threading
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from kelma.config import KelmaConfig
from kelma.infra.memory.repository import InMemoryReviewStore
from kelma.interfaces.speech import SpeechToTextInterface, TextToSpeechInterface
from kelma.interfaces.storage import ReviewStoreInterface
from kelma.language.normalize import NormalizationMode
from kelma.logging import get_logger
from kelma.models.evaluation import EvaluationResultDTO
from kelma.models.review import ReviewItemDTO
from kelma.models.session import ExerciseResultDTO, ExerciseSessionDTO, ProgressDTO
from kelma.models.stats import ReviewStatsDTO
from kelma.services.deck import ReviewDeck
from kelma.services.evaluation import AnswerEvaluator
from kelma.services.scheduler import SrsScheduler
from kelma.utils.hashing import generate_session_id

__all__ = ["AnswerOutcome", "Kelma"]

logger = get_logger(__name__)


@dataclass(frozen=True)
class AnswerOutcome:
    """Result of answering one review item."""

    item: ReviewItemDTO
    evaluation: EvaluationResultDTO


class Kelma:
    """Main orchestrator for a learner's practice.

    Config is loaded from the environment (and .env) unless given.
    Speech capabilities are optional and injected by the host.

    Example:
        kelma = Kelma()
        kelma.add_item("bongu", "greetings-1", "unit-1")
        outcome = kelma.answer("bongu", "bongu", ["Bongu"], response_time_ms=1400)
        for item in kelma.daily_queue():
            ...
    """

    def __init__(
        self,
        store: ReviewStoreInterface | None = None,
        *,
        config: KelmaConfig | None = None,
        text_to_speech: TextToSpeechInterface | None = None,
        speech_to_text: SpeechToTextInterface | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        """Initialize Kelma.

        Args:
            store: Review item collection (default: in-memory)
            config: Settings (default: loaded from environment)
            text_to_speech: Optional speech synthesis capability
            speech_to_text: Optional speech recognition capability
            clock: Returns the current time in epoch seconds (default: time.time)
        """
        self._config = config or KelmaConfig()
        self._clock = clock or time.time

        self._evaluator = AnswerEvaluator(self._config.evaluation)
        self._scheduler = SrsScheduler(self._config.scheduler, clock=self._clock)
        self._deck = ReviewDeck(store or InMemoryReviewStore(), self._scheduler)

        self._tts = text_to_speech
        self._stt = speech_to_text

        self._state_lock = threading.Lock()
        self._current_session: ExerciseSessionDTO | None = None
        self._completed_sessions: list[ExerciseSessionDTO] = []
        self._sessions_started = 0
        self._completed_lessons: list[str] = []
        self._completed_units: list[str] = []

    @property
    def config(self) -> KelmaConfig:
        return self._config

    @property
    def evaluator(self) -> AnswerEvaluator:
        return self._evaluator

    @property
    def scheduler(self) -> SrsScheduler:
        return self._scheduler

    @property
    def deck(self) -> ReviewDeck:
        return self._deck

    # === REVIEW WORKFLOW ===

    def add_item(self, item_id: str, lesson_id: str, unit_id: str) -> ReviewItemDTO:
        """Schedule an item (no-op if already scheduled)."""
        return self._deck.add_item(item_id, lesson_id, unit_id)

    def answer(
        self,
        item_id: str,
        user_input: str,
        correct_answers: str | Sequence[str],
        mode: NormalizationMode | str | None = None,
        response_time_ms: int = 0,
    ) -> AnswerOutcome:
        """Grade an answer and feed the score to the scheduler.

        If a session is open the graded answer is also recorded in it,
        whether or not the item is one of the session's planned items.

        Raises:
            KeyError: If the item is not scheduled
            ValueError: If no reference answer is given or the mode is unknown
        """
        evaluation = self._evaluator.assess(user_input, correct_answers, mode)
        item = self._deck.submit(
            item_id,
            evaluation.quality,
            user_answer=user_input,
            correct_answer=evaluation.matched_answer,
            response_time_ms=response_time_ms,
        )

        self._record_result(
            ExerciseResultDTO(
                item_id=item_id,
                user_answer=user_input,
                correct_answer=evaluation.matched_answer,
                quality=evaluation.quality,
                is_correct=evaluation.is_correct,
                response_time_ms=response_time_ms,
                suggestions=evaluation.suggestions,
            )
        )

        logger.info(
            "answer_recorded",
            item_id=item_id,
            quality=evaluation.quality,
            interval=item.interval,
            due_date=item.due_date,
        )

        return AnswerOutcome(item=item, evaluation=evaluation)

    def answer_spoken(
        self,
        item_id: str,
        correct_answers: str | Sequence[str],
        mode: NormalizationMode | str | None = None,
        response_time_ms: int = 0,
    ) -> AnswerOutcome:
        """Listen for a spoken answer and grade its transcript.

        Raises:
            RuntimeError: If no speech-to-text capability was injected
        """
        if self._stt is None:
            raise RuntimeError("No speech-to-text capability configured")
        transcript = self._stt.listen(self._config.speech.language)
        return self.answer(item_id, transcript, correct_answers, mode, response_time_ms)

    def speak(self, text: str, language: str | None = None) -> None:
        """Speak a prompt through the injected text-to-speech capability.

        Raises:
            RuntimeError: If no text-to-speech capability was injected
        """
        if self._tts is None:
            raise RuntimeError("No text-to-speech capability configured")
        self._tts.speak(text, language or self._config.speech.language)

    def daily_queue(self, max_items: int | None = None) -> list[ReviewItemDTO]:
        return self._deck.daily_queue(max_items)

    def stats(self) -> ReviewStatsDTO:
        return self._deck.stats()

    def get_item(self, item_id: str) -> ReviewItemDTO | None:
        return self._deck.get(item_id)

    def items(self) -> list[ReviewItemDTO]:
        return self._deck.items()

    # === SESSIONS ===

    def start_session(self, lesson_id: str, item_ids: Sequence[str]) -> ExerciseSessionDTO:
        """Open a practice session, replacing any session still open.

        ``item_ids`` is the planned order only. Every answer given while
        the session is open is recorded and scored, including answers for
        items outside the plan.
        """
        now = int(self._clock())
        with self._state_lock:
            if self._current_session is not None:
                logger.warning(
                    "session_abandoned",
                    session_id=self._current_session.session_id,
                    results=len(self._current_session.results),
                )
            session = ExerciseSessionDTO(
                session_id=generate_session_id(lesson_id, now, self._sessions_started),
                lesson_id=lesson_id,
                started_at=now,
                item_ids=tuple(item_ids),
            )
            self._sessions_started += 1
            self._current_session = session

        logger.info("session_started", session_id=session.session_id, lesson_id=lesson_id)
        return session

    @property
    def current_session(self) -> ExerciseSessionDTO | None:
        return self._current_session

    @property
    def completed_sessions(self) -> tuple[ExerciseSessionDTO, ...]:
        return tuple(self._completed_sessions)

    def complete_session(self) -> ExerciseSessionDTO | None:
        """Close the open session, if any, and return it."""
        now = int(self._clock())
        with self._state_lock:
            if self._current_session is None:
                return None
            session = self._current_session.model_copy(
                update={"ended_at": now, "is_completed": True}
            )
            self._completed_sessions.append(session)
            self._current_session = None

        logger.info(
            "session_completed",
            session_id=session.session_id,
            results=len(session.results),
            score=session.score,
        )
        return session

    def _record_result(self, result: ExerciseResultDTO) -> None:
        with self._state_lock:
            if self._current_session is not None:
                self._current_session = self._current_session.with_result(result)

    # === PROGRESS ===

    def mark_lesson_completed(self, lesson_id: str) -> None:
        with self._state_lock:
            if lesson_id not in self._completed_lessons:
                self._completed_lessons.append(lesson_id)

    def mark_unit_completed(self, unit_id: str) -> None:
        with self._state_lock:
            if unit_id not in self._completed_units:
                self._completed_units.append(unit_id)

    @property
    def progress(self) -> ProgressDTO:
        with self._state_lock:
            return ProgressDTO(
                completed_lessons=tuple(self._completed_lessons),
                completed_units=tuple(self._completed_units),
            )

    def reset_progress(self) -> None:
        """Forget completed lessons, units and sessions. Review items are kept."""
        with self._state_lock:
            self._completed_lessons.clear()
            self._completed_units.clear()
            self._completed_sessions.clear()
            self._current_session = None
        logger.info("progress_reset")

    def reset_srs(self) -> None:
        """Drop every review item."""
        self._deck.reset()
