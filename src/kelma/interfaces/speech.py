"""Speech capability interfaces for kelma.

Speech synthesis and recognition are device concerns. The library
only consumes them as text sinks and sources injected by the host.
"""

from typing import Protocol, runtime_checkable

__all__ = [
    "SpeechToTextInterface",
    "TextToSpeechInterface",
]


@runtime_checkable
class TextToSpeechInterface(Protocol):
    """Speaks text aloud."""

    def speak(self, text: str, language: str) -> None:
        """Speak ``text`` in ``language`` (a BCP 47 tag such as "mt-MT")."""
        ...


@runtime_checkable
class SpeechToTextInterface(Protocol):
    """Turns one spoken utterance into text."""

    def listen(self, language: str) -> str:
        """Capture one utterance and return its transcript."""
        ...
