"""Orchestrator package - Drives directives through the labeling pipeline."""

from labelcards.orchestrator.models import DirectiveResult, RunSummary
from labelcards.orchestrator.orchestrator import Orchestrator

__all__ = [
    "DirectiveResult",
    "Orchestrator",
    "RunSummary",
]
