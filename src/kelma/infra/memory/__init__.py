"""In-memory storage implementation for kelma."""

from kelma.infra.memory.repository import InMemoryReviewStore

__all__ = ["InMemoryReviewStore"]
