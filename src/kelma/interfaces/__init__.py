"""Interface contracts for kelma.

This module exports all Protocol-based interfaces for dependency injection.
"""

from kelma.interfaces.speech import SpeechToTextInterface, TextToSpeechInterface
from kelma.interfaces.storage import ReviewStoreInterface

__all__ = [
    "ReviewStoreInterface",
    "SpeechToTextInterface",
    "TextToSpeechInterface",
]
