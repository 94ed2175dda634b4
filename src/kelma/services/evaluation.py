"""Answer evaluation service for kelma.

This module grades a user's answer against a Maltese reference answer
on the 0-5 quality scale consumed by the scheduler, and produces
correction hints for common orthography slips.
"""

from collections.abc import Sequence

from kelma.config import EvaluationSettings
from kelma.language.normalize import NormalizationMode, fold_case, normalize, parse_mode
from kelma.language.similarity import similarity
from kelma.logging import get_logger
from kelma.models.evaluation import EvaluationResultDTO

__all__ = [
    "AnswerEvaluator",
    "acceptable",
    "equivalent",
    "evaluate",
    "suggestions",
]

logger = get_logger(__name__)


class AnswerEvaluator:
    """Grades answers with Maltese-aware normalization.

    Scoring, in order:
        5: perfect match under the requested mode. In strict mode the
           strict forms are equal; in lenient mode the answers agree up
           to case and spacing, without needing orthographic folding.
        4: the lenient (folded) forms are equal, so the content is right
           but orthography or diacritics differ.
        3/2/1/0: lenient similarity above the high, medium or low
           threshold, or none of them.

    Example:
        evaluator = AnswerEvaluator()
        evaluator.evaluate("ghid", "għid")  # 4
        evaluator.acceptable("bongu", ["Bongu", "Bonġu"])  # True
    """

    def __init__(self, settings: EvaluationSettings | None = None) -> None:
        """Initialize evaluator.

        Args:
            settings: Thresholds, default mode and hint texts
        """
        self._settings = settings or EvaluationSettings()

    def _mode(self, mode: NormalizationMode | str | None) -> NormalizationMode:
        return parse_mode(self._settings.default_mode if mode is None else mode)

    def equivalent(
        self,
        user_input: str,
        correct_answer: str,
        mode: NormalizationMode | str | None = None,
    ) -> bool:
        """Check whether two texts normalize to the same form.

        In lenient mode this compares the fully folded forms, so
        ``equivalent("ghid", "għid")`` is True even though ``evaluate``
        scores that pair 4: a 5 needs agreement up to case and spacing.
        """
        mode = self._mode(mode)
        return normalize(user_input, mode) == normalize(correct_answer, mode)

    def acceptable(
        self,
        user_input: str,
        candidates: Sequence[str],
        mode: NormalizationMode | str | None = None,
    ) -> bool:
        """Check the input against every accepted answer.

        An empty candidate list is never acceptable.
        """
        mode = self._mode(mode)
        return any(self.equivalent(user_input, candidate, mode) for candidate in candidates)

    def evaluate(
        self,
        user_input: str,
        correct_answer: str,
        mode: NormalizationMode | str | None = None,
    ) -> int:
        """Score an answer on the 0-5 scale.

        Raises:
            ValueError: If ``mode`` is unknown
        """
        quality, _ = self._score(user_input, correct_answer, self._mode(mode))
        return quality

    def suggestions(self, user_input: str, correct_answer: str) -> list[str]:
        """Collect correction hints for an answer.

        Each check is independent; hints are returned in a fixed order:
        diacritics, the għ digraph, the x/sh pronunciation, stray spaces.
        """
        hints: list[str] = []

        if user_input.lower() == correct_answer.lower() and user_input != correct_answer:
            hints.append(self._settings.diacritics_hint)

        if "gh" in user_input and "għ" in correct_answer:
            hints.append(self._settings.digraph_hint)

        if "sh" in user_input and "x" in correct_answer:
            hints.append(self._settings.pronunciation_hint)

        if user_input != user_input.strip() and correct_answer == correct_answer.strip():
            hints.append(self._settings.whitespace_hint)

        return hints

    def assess(
        self,
        user_input: str,
        correct_answers: str | Sequence[str],
        mode: NormalizationMode | str | None = None,
    ) -> EvaluationResultDTO:
        """Grade an answer against one or more accepted answers.

        The best-scoring reference wins; on ties the earlier one is kept.

        Raises:
            ValueError: If no reference answer is given or ``mode`` is unknown
        """
        if isinstance(correct_answers, str):
            candidates = [correct_answers]
        else:
            candidates = list(correct_answers)
        if not candidates:
            raise ValueError("At least one reference answer is required")
        mode = self._mode(mode)

        best_answer = candidates[0]
        best_quality, best_similarity = self._score(user_input, best_answer, mode)
        for candidate in candidates[1:]:
            quality, ratio = self._score(user_input, candidate, mode)
            if (quality, ratio) > (best_quality, best_similarity):
                best_answer, best_quality, best_similarity = candidate, quality, ratio

        result = EvaluationResultDTO(
            quality=best_quality,
            matched_answer=best_answer,
            similarity=best_similarity,
            suggestions=self.suggestions(user_input, best_answer),
        )

        logger.debug(
            "answer_evaluated",
            mode=mode.value,
            quality=result.quality,
            similarity=round(result.similarity, 3),
            candidates=len(candidates),
        )

        return result

    def _score(
        self,
        user_input: str,
        correct_answer: str,
        mode: NormalizationMode,
    ) -> tuple[int, float]:
        """Return (quality, lenient similarity) for one reference answer."""
        if mode is NormalizationMode.STRICT:
            perfect = normalize(user_input, mode) == normalize(correct_answer, mode)
        else:
            perfect = fold_case(user_input) == fold_case(correct_answer)
        if perfect:
            return 5, 1.0

        lenient_input = normalize(user_input, NormalizationMode.LENIENT)
        lenient_answer = normalize(correct_answer, NormalizationMode.LENIENT)
        if lenient_input == lenient_answer:
            return 4, 1.0

        ratio = similarity(lenient_input, lenient_answer)
        if ratio > self._settings.high_similarity:
            return 3, ratio
        if ratio > self._settings.medium_similarity:
            return 2, ratio
        if ratio > self._settings.low_similarity:
            return 1, ratio
        return 0, ratio


_default_evaluator = AnswerEvaluator(EvaluationSettings(default_mode="lenient"))


def evaluate(
    user_input: str,
    correct_answer: str,
    mode: NormalizationMode | str = NormalizationMode.LENIENT,
) -> int:
    """Score an answer on the 0-5 scale with default settings."""
    return _default_evaluator.evaluate(user_input, correct_answer, mode)


def equivalent(
    user_input: str,
    correct_answer: str,
    mode: NormalizationMode | str = NormalizationMode.LENIENT,
) -> bool:
    """Check whether two texts normalize to the same form.

    Lenient equivalence does not imply a perfect ``evaluate`` score.
    """
    return _default_evaluator.equivalent(user_input, correct_answer, mode)


def acceptable(
    user_input: str,
    candidates: Sequence[str],
    mode: NormalizationMode | str = NormalizationMode.LENIENT,
) -> bool:
    """Check the input against a list of accepted answers."""
    return _default_evaluator.acceptable(user_input, candidates, mode)


def suggestions(user_input: str, correct_answer: str) -> list[str]:
    """Collect correction hints with the default hint texts."""
    return _default_evaluator.suggestions(user_input, correct_answer)
