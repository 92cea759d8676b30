"""Data models for the Orchestrator module."""

from __future__ import annotations

from dataclasses import dataclass, field

from labelcards.config import Directive


@dataclass
class DirectiveResult:
    """Outcome of processing one directive.

    Attributes:
        directive: The directive that was processed.
        column_id: Resolved column id, None if resolution failed.
        cards: Number of issue cards found in the column.
        labeled: Number of issues successfully labeled.
        error: Why the directive was skipped, None if it ran.
    """

    directive: Directive
    column_id: int | None = None
    cards: int = 0
    labeled: int = 0
    error: str | None = None

    @property
    def skipped(self) -> bool:
        return self.error is not None


@dataclass
class RunSummary:
    """Outcome of a whole run."""

    results: list[DirectiveResult] = field(default_factory=list)

    @property
    def labeled(self) -> int:
        return sum(result.labeled for result in self.results)

    @property
    def skipped(self) -> int:
        return sum(1 for result in self.results if result.skipped)
