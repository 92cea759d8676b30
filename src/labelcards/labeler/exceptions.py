"""Exceptions for the labeler module."""


class LabelerError(Exception):
    """Base exception for labeling errors."""

    pass


class CardReferenceError(LabelerError):
    """Card has no issue reference (it is a note)."""

    pass


class IssueNumberError(LabelerError):
    """Issue number could not be extracted from a card's content URL."""

    pass
