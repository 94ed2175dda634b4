"""Utility functions for kelma.

This module contains internal utility functions.
"""

from kelma.utils.hashing import (
    generate_attempt_id,
    generate_session_id,
    hash_text,
    stable_hash,
)

__all__ = [
    "generate_attempt_id",
    "generate_session_id",
    "hash_text",
    "stable_hash",
]
