"""Language helpers for kelma: Maltese normalization and string similarity."""

from kelma.language.normalize import (
    MALTESE_SPECIAL_LETTERS,
    NormalizationMode,
    extract_special_letters,
    fold_case,
    normalize,
    parse_mode,
)
from kelma.language.similarity import levenshtein_distance, similarity

__all__ = [
    "MALTESE_SPECIAL_LETTERS",
    "NormalizationMode",
    "extract_special_letters",
    "fold_case",
    "levenshtein_distance",
    "normalize",
    "parse_mode",
    "similarity",
]
