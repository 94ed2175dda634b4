"""Hashing utilities for kelma.

This module provides deterministic hash functions for generating
stable identifiers for review attempts and exercise sessions.
"""

import hashlib
from typing import Any

__all__ = [
    "generate_attempt_id",
    "generate_session_id",
    "hash_text",
    "stable_hash",
]


def hash_text(text: str) -> str:
    """Generate SHA256 hash of text.

    Args:
        text: Input text to hash

    Returns:
        Hexadecimal SHA256 hash string
    """
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def generate_attempt_id(item_id: str, sequence: int, timestamp: int) -> str:
    """Generate deterministic attempt ID.

    The sequence number is the attempt's position in the item's history,
    so two attempts recorded within the same second still get distinct IDs.

    Args:
        item_id: Reviewed item ID
        sequence: Zero-based position of the attempt in the history
        timestamp: Attempt timestamp (epoch seconds)

    Returns:
        Hexadecimal SHA256 hash string
    """
    return stable_hash("attempt", item_id, sequence, timestamp)


def generate_session_id(lesson_id: str, started_at: int, sequence: int) -> str:
    """Generate deterministic exercise session ID.

    Args:
        lesson_id: Lesson the session practises
        started_at: Session start (epoch seconds)
        sequence: Number of sessions started before this one

    Returns:
        Hexadecimal SHA256 hash string
    """
    return stable_hash("session", lesson_id, started_at, sequence)


def stable_hash(*args: Any) -> str:
    """Generate a stable hash from multiple arguments.

    Converts all arguments to strings and joins them with pipe separator.

    Args:
        *args: Values to include in the hash

    Returns:
        Hexadecimal SHA256 hash string
    """
    combined = "|".join(str(arg) for arg in args)
    return hash_text(combined)
