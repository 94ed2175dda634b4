"""Maltese text normalization for kelma.

Two canonical forms are supported:

- strict: whitespace is collapsed and trimmed, everything else is kept
  exactly (case, diacritics).
- lenient: additionally lower-cased and folded with the Maltese
  orthography table below, so that answers typed on a keyboard without
  Maltese letters still compare equal to the reference.

Folding is a single simultaneous pass over the text. The letter ``għ``
is matched as a unit and maps to itself, which keeps the output of the
``gh -> għ`` rule (and any ``għ`` already present) from being folded
again by the ``ħ -> h`` rule.
"""

import re
import unicodedata
from enum import StrEnum

__all__ = [
    "MALTESE_SPECIAL_LETTERS",
    "NormalizationMode",
    "extract_special_letters",
    "fold_case",
    "normalize",
    "parse_mode",
]


class NormalizationMode(StrEnum):
    """Canonicalization modes."""

    STRICT = "strict"
    LENIENT = "lenient"


MALTESE_SPECIAL_LETTERS: tuple[str, ...] = ("ħ", "ġ", "ż", "għ")

# Order inside the alternation matters: "għ" must be tried before "ħ".
_FOLDING_TABLE: dict[str, str] = {
    "għ": "għ",
    "gh": "għ",
    "sh": "x",
    "ħ": "h",
    "ġ": "g",
    "ż": "z",
}
_FOLDING_PATTERN = re.compile("|".join(re.escape(key) for key in _FOLDING_TABLE))
_SPECIAL_LETTER_PATTERN = re.compile("għ|ħ|ġ|ż")
_WHITESPACE = re.compile(r"\s+")


def parse_mode(mode: NormalizationMode | str) -> NormalizationMode:
    """Coerce a mode value, failing on anything unknown.

    Raises:
        ValueError: If ``mode`` is not a known normalization mode
    """
    try:
        return NormalizationMode(mode)
    except ValueError:
        valid = ", ".join(m.value for m in NormalizationMode)
        raise ValueError(f"Unknown normalization mode {mode!r}. Expected one of: {valid}") from None


def _collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def fold_case(text: str) -> str:
    """Collapse whitespace, compose and lower-case, without orthographic folding."""
    if not text:
        return ""
    return unicodedata.normalize("NFC", _collapse_whitespace(text)).lower()


def _fold_orthography(text: str) -> str:
    return _FOLDING_PATTERN.sub(lambda m: _FOLDING_TABLE[m.group(0)], text)


def normalize(text: str, mode: NormalizationMode | str = NormalizationMode.LENIENT) -> str:
    """Normalize Maltese text for comparison.

    Args:
        text: Text to normalize
        mode: ``strict`` or ``lenient``

    Returns:
        Normalized text; empty or whitespace-only input gives ""

    Raises:
        ValueError: If ``mode`` is unknown
    """
    mode = parse_mode(mode)
    if not text:
        return ""
    if mode is NormalizationMode.STRICT:
        return _collapse_whitespace(text)
    return _fold_orthography(fold_case(text))


def extract_special_letters(text: str) -> list[str]:
    """List the distinct Maltese special letters in ``text``.

    Letters are reported lower-cased, in order of first appearance.
    ``għ`` counts as a single letter.
    """
    found: list[str] = []
    for match in _SPECIAL_LETTER_PATTERN.finditer(fold_case(text)):
        letter = match.group(0)
        if letter not in found:
            found.append(letter)
    return found
