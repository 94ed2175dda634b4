"""Infrastructure implementations for kelma."""
