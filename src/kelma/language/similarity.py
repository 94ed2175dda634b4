"""Edit-distance similarity for kelma.

Strings are compared code point by code point, so every Maltese
letter with a precomposed form (ħ, ġ, ż) counts as one unit.
"""

__all__ = [
    "levenshtein_distance",
    "similarity",
]


def levenshtein_distance(a: str, b: str) -> int:
    """Classic edit distance with unit insertion, deletion and substitution costs.

    Iterative, keeping only two rows of the table.
    """
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    # Keep the shorter string along the row
    if len(a) < len(b):
        a, b = b, a

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            cost = 0 if char_a == char_b else 1
            current.append(
                min(
                    previous[j] + 1,  # deletion
                    current[j - 1] + 1,  # insertion
                    previous[j - 1] + cost,  # substitution
                )
            )
        previous = current
    return previous[-1]


def similarity(a: str, b: str) -> float:
    """Similarity in [0, 1] derived from the edit distance.

    1.0 iff the strings are equal (including both empty), 0.0 if only
    one of them is empty, otherwise ``1 - distance / max(len(a), len(b))``.
    """
    if a == b:
        return 1.0
    if not a or not b:
        return 0.0
    return 1.0 - levenshtein_distance(a, b) / max(len(a), len(b))
