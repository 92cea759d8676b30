"""Labeler - Resolves columns, collects issue cards and labels their issues."""

from labelcards.labeler.dispatcher import ThrottledDispatcher
from labelcards.labeler.exceptions import (
    CardReferenceError,
    IssueNumberError,
    LabelerError,
)
from labelcards.labeler.models import DispatchResult
from labelcards.labeler.mutator import extract_issue_number, label_card_issue
from labelcards.labeler.paginator import (
    CARDS_PER_PAGE,
    get_card_page,
    get_column_card_issues,
)
from labelcards.labeler.resolver import resolve_column_id

__all__ = [
    "CARDS_PER_PAGE",
    "CardReferenceError",
    "DispatchResult",
    "IssueNumberError",
    "LabelerError",
    "ThrottledDispatcher",
    "extract_issue_number",
    "get_card_page",
    "get_column_card_issues",
    "label_card_issue",
    "resolve_column_id",
]
