"""Shared test fixtures for kelma.

This module provides pytest fixtures used across all tests.
"""

import pytest

from kelma.config import EvaluationSettings, KelmaConfig, SchedulerSettings, SpeechSettings
from kelma.infra.memory.repository import InMemoryReviewStore
from kelma.models.review import ReviewItemDTO
from kelma.services.deck import ReviewDeck
from kelma.services.evaluation import AnswerEvaluator
from kelma.services.scheduler import SrsScheduler
from mocks.mock_clock import DAY, NOW, FakeClock
from mocks.mock_speech import FakeTextToSpeech


# Infrastructure fixtures
@pytest.fixture
def clock() -> FakeClock:
    """Create clock fixed at NOW."""
    return FakeClock()


@pytest.fixture
def scheduler_settings() -> SchedulerSettings:
    return SchedulerSettings()


@pytest.fixture
def scheduler(scheduler_settings: SchedulerSettings, clock: FakeClock) -> SrsScheduler:
    """Create scheduler driven by the fake clock."""
    return SrsScheduler(scheduler_settings, clock=clock)


@pytest.fixture
def evaluator() -> AnswerEvaluator:
    return AnswerEvaluator(EvaluationSettings(default_mode="lenient"))


@pytest.fixture
def store() -> InMemoryReviewStore:
    return InMemoryReviewStore()


@pytest.fixture
def deck(store: InMemoryReviewStore, scheduler: SrsScheduler) -> ReviewDeck:
    return ReviewDeck(store, scheduler)


@pytest.fixture
def config() -> KelmaConfig:
    """Create config with library defaults, independent of the environment."""
    return KelmaConfig(
        scheduler=SchedulerSettings(),
        evaluation=EvaluationSettings(default_mode="lenient"),
        speech=SpeechSettings(language="mt-MT"),
    )


@pytest.fixture
def tts() -> FakeTextToSpeech:
    return FakeTextToSpeech()


# Sample data fixtures
@pytest.fixture
def fresh_item(scheduler: SrsScheduler) -> ReviewItemDTO:
    """Create a never-reviewed item scheduled at NOW."""
    return scheduler.create_item("bongu", "greetings-1", "unit-1")


@pytest.fixture
def due_item(fresh_item: ReviewItemDTO) -> ReviewItemDTO:
    """Create a never-reviewed item that became due exactly at NOW."""
    return fresh_item.model_copy(
        update={"due_date": NOW, "next_review": NOW, "last_review": NOW - DAY}
    )
