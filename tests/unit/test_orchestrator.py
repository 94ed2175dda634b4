"""Unit tests for Kelma orchestrator."""

from unittest.mock import MagicMock

import pytest

from kelma.config import EvaluationSettings, KelmaConfig, SchedulerSettings, SpeechSettings
from kelma.infra.memory.repository import InMemoryReviewStore
from kelma.interfaces.speech import TextToSpeechInterface
from kelma.orchestrator import AnswerOutcome, Kelma
from mocks.mock_clock import DAY, NOW, FakeClock
from mocks.mock_speech import FakeSpeechToText, FakeTextToSpeech


@pytest.fixture
def kelma(config: KelmaConfig, clock: FakeClock) -> Kelma:
    instance = Kelma(config=config, clock=clock)
    instance.add_item("bongu", "greetings-1", "unit-1")
    instance.add_item("ghid", "greetings-1", "unit-1")
    return instance


class TestKelmaInit:
    """Tests for Kelma construction."""

    def test_default_store_is_in_memory(self, config: KelmaConfig) -> None:
        kelma = Kelma(config=config)
        assert kelma.items() == []
        assert kelma.config is config

    def test_uses_injected_store(self, config: KelmaConfig, clock: FakeClock) -> None:
        store = InMemoryReviewStore()
        kelma = Kelma(store, config=config, clock=clock)

        kelma.add_item("bongu", "greetings-1", "unit-1")

        assert store.item_exists("bongu")

    def test_components_follow_config(self, clock: FakeClock) -> None:
        config = KelmaConfig(
            scheduler=SchedulerSettings(daily_queue_size=1),
            evaluation=EvaluationSettings(default_mode="strict"),
            speech=SpeechSettings(),
        )
        kelma = Kelma(config=config, clock=clock)

        assert kelma.scheduler.settings.daily_queue_size == 1
        assert kelma.evaluator.equivalent("bongu", "Bongu") is False


class TestAnswer:
    """Tests for the answer workflow."""

    def test_answer_updates_schedule(self, kelma: Kelma) -> None:
        outcome = kelma.answer("ghid", "ghid", ["għid"], response_time_ms=1200)

        assert isinstance(outcome, AnswerOutcome)
        assert outcome.evaluation.quality == 4
        assert outcome.item.interval == 6
        assert outcome.item.due_date == NOW + 6 * DAY
        assert kelma.get_item("ghid") == outcome.item

        attempt = outcome.item.attempts[0]
        assert attempt.user_answer == "ghid"
        assert attempt.correct_answer == "għid"
        assert attempt.response_time_ms == 1200
        assert attempt.is_correct is True

    def test_wrong_answer_is_due_tomorrow(self, kelma: Kelma) -> None:
        outcome = kelma.answer("bongu", "Le", "Bongu")

        assert outcome.evaluation.quality == 0
        assert outcome.item.interval == 1
        assert outcome.item.due_date == NOW + DAY

    def test_answer_in_strict_mode(self, kelma: Kelma) -> None:
        outcome = kelma.answer("bongu", "bongu", "Bongu", mode="strict")
        assert outcome.evaluation.quality == 4

    def test_unknown_item_raises(self, kelma: Kelma) -> None:
        with pytest.raises(KeyError):
            kelma.answer("missing", "Bongu", "Bongu")

    def test_no_reference_answer_leaves_item(self, kelma: Kelma) -> None:
        before = kelma.get_item("bongu")

        with pytest.raises(ValueError):
            kelma.answer("bongu", "Bongu", [])

        assert kelma.get_item("bongu") == before

    def test_queue_and_stats(self, kelma: Kelma, clock: FakeClock) -> None:
        kelma.answer("bongu", "Bongu", "Bongu")
        clock.advance(days=1)

        assert [i.item_id for i in kelma.daily_queue()] == ["ghid"]
        stats = kelma.stats()
        assert stats.total == 2
        assert stats.due == 1
        assert stats.avg_quality == 5.0


class TestSessions:
    """Tests for practice session bookkeeping."""

    def test_session_records_answers(self, kelma: Kelma) -> None:
        session = kelma.start_session("greetings-1", ["bongu", "ghid"])
        assert session.item_ids == ("bongu", "ghid")

        kelma.answer("bongu", "Bongu", "Bongu")
        kelma.answer("ghid", "xyz", "għid")

        current = kelma.current_session
        assert current is not None
        assert current.current_index == 2
        assert current.score == 10
        assert [r.item_id for r in current.results] == ["bongu", "ghid"]

    def test_unplanned_items_are_recorded(self, kelma: Kelma) -> None:
        kelma.start_session("greetings-1", ["bongu"])

        kelma.answer("ghid", "Għid", "Għid")

        current = kelma.current_session
        assert current is not None
        assert current.item_ids == ("bongu",)
        assert [r.item_id for r in current.results] == ["ghid"]
        assert current.current_index == 1
        assert current.score == 10

    def test_complete_session(self, kelma: Kelma, clock: FakeClock) -> None:
        kelma.start_session("greetings-1", ["bongu"])
        kelma.answer("bongu", "Bongu", "Bongu")
        clock.advance(seconds=90)

        session = kelma.complete_session()

        assert session is not None
        assert session.is_completed is True
        assert session.ended_at == NOW + 90
        assert session.score == 10
        assert kelma.current_session is None
        assert kelma.completed_sessions == (session,)

    def test_complete_without_session(self, kelma: Kelma) -> None:
        assert kelma.complete_session() is None

    def test_answers_outside_session_are_not_recorded(self, kelma: Kelma) -> None:
        kelma.answer("bongu", "Bongu", "Bongu")
        session = kelma.start_session("greetings-1", ["bongu"])
        assert session.results == ()

    def test_new_session_replaces_open_one(self, kelma: Kelma) -> None:
        first = kelma.start_session("greetings-1", ["bongu"])
        second = kelma.start_session("greetings-1", ["bongu"])

        assert first.session_id != second.session_id
        assert kelma.current_session == second
        assert kelma.completed_sessions == ()


class TestProgress:
    """Tests for lesson and unit progress."""

    def test_mark_completed_is_unique_and_ordered(self, kelma: Kelma) -> None:
        kelma.mark_lesson_completed("greetings-2")
        kelma.mark_lesson_completed("greetings-1")
        kelma.mark_lesson_completed("greetings-2")
        kelma.mark_unit_completed("unit-1")

        progress = kelma.progress
        assert progress.completed_lessons == ("greetings-2", "greetings-1")
        assert progress.completed_units == ("unit-1",)

    def test_reset_progress_keeps_items(self, kelma: Kelma) -> None:
        kelma.mark_lesson_completed("greetings-1")
        kelma.start_session("greetings-1", ["bongu"])
        kelma.complete_session()

        kelma.reset_progress()

        assert kelma.progress.completed_lessons == ()
        assert kelma.completed_sessions == ()
        assert len(kelma.items()) == 2

    def test_reset_srs_keeps_progress(self, kelma: Kelma) -> None:
        kelma.mark_unit_completed("unit-1")

        kelma.reset_srs()

        assert kelma.items() == []
        assert kelma.progress.completed_units == ("unit-1",)


class TestSpeech:
    """Tests for injected speech capabilities."""

    def test_speak_uses_configured_language(
        self, config: KelmaConfig, tts: FakeTextToSpeech
    ) -> None:
        kelma = Kelma(config=config, text_to_speech=tts)

        kelma.speak("Bongu")
        kelma.speak("Hello", language="en-GB")

        assert tts.spoken == [("Bongu", "mt-MT"), ("Hello", "en-GB")]

    def test_speak_with_mock_capability(self, config: KelmaConfig) -> None:
        tts = MagicMock(spec=TextToSpeechInterface)
        kelma = Kelma(config=config, text_to_speech=tts)

        kelma.speak("Grazzi")

        tts.speak.assert_called_once_with("Grazzi", "mt-MT")

    def test_speak_without_capability_raises(self, kelma: Kelma) -> None:
        with pytest.raises(RuntimeError):
            kelma.speak("Bongu")

    def test_answer_spoken(self, config: KelmaConfig, clock: FakeClock) -> None:
        stt = FakeSpeechToText(["ghid"])
        kelma = Kelma(config=config, speech_to_text=stt, clock=clock)
        kelma.add_item("ghid", "greetings-1", "unit-1")

        outcome = kelma.answer_spoken("ghid", "għid")

        assert stt.languages == ["mt-MT"]
        assert outcome.evaluation.quality == 4
        assert outcome.item.attempts[0].user_answer == "ghid"

    def test_answer_spoken_without_capability_raises(self, kelma: Kelma) -> None:
        with pytest.raises(RuntimeError):
            kelma.answer_spoken("bongu", "Bongu")


class TestConfig:
    """Tests for environment-driven settings."""

    def test_scheduler_settings_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KELMA_SCHEDULER_DAILY_QUEUE_SIZE", "5")
        monkeypatch.setenv("KELMA_SCHEDULER_MIN_EASINESS", "1.5")

        settings = SchedulerSettings()

        assert settings.daily_queue_size == 5
        assert settings.min_easiness == 1.5

    def test_evaluation_mode_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KELMA_EVALUATION_DEFAULT_MODE", "strict")
        assert EvaluationSettings().default_mode == "strict"

    def test_invalid_mode_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KELMA_EVALUATION_DEFAULT_MODE", "fuzzy")
        with pytest.raises(ValueError):
            EvaluationSettings()

    def test_speech_language_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KELMA_SPEECH_LANGUAGE", "en-GB")
        assert SpeechSettings().language == "en-GB"
