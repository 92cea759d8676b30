"""Data models for the labeler module."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of labeling one batch of cards.

    Attributes:
        attempted: Number of cards a mutation was dispatched for.
        labeled: Number of mutations that succeeded.
    """

    attempted: int = 0
    labeled: int = 0

    @property
    def failed(self) -> int:
        return self.attempted - self.labeled
