"""Issue label mutation for a single card."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from typing import TYPE_CHECKING

from labelcards.config import LabelAction
from labelcards.labeler.exceptions import CardReferenceError, IssueNumberError

if TYPE_CHECKING:
    from labelcards.kanban import Card, ProjectsClient

logger = logging.getLogger(__name__)

ISSUE_NUMBER_PATTERN = re.compile(r"/issues/(\d+)$")


def extract_issue_number(content_url: str) -> int:
    """Extract the issue number from a card's content URL.

    Raises:
        IssueNumberError: If the URL does not end in /issues/<digits>.
    """
    match = ISSUE_NUMBER_PATTERN.search(content_url or "")
    if not match:
        raise IssueNumberError(f"Failed to extract issue number from url: {content_url}")
    return int(match.group(1))


async def label_card_issue(
    client: ProjectsClient,
    card: Card,
    labels: Sequence[str],
    action: LabelAction = LabelAction.ADD,
) -> None:
    """Add labels to, or remove labels from, the issue behind a card.

    Adding a label the issue already has, or removing one it lacks, is not
    an error.

    Args:
        client: Projects client for the repository.
        card: An issue card.
        labels: Lower-cased label names.
        action: Whether to add or remove the labels.

    Raises:
        CardReferenceError: If the card has no content_url.
        IssueNumberError: If the issue number cannot be extracted.
        GitHubAPIError: If the mutation request fails.
    """
    if not card.content_url:
        raise CardReferenceError(f'Card with id: {card.id} is missing field "content_url"')

    issue_number = extract_issue_number(card.content_url)

    if action is LabelAction.ADD:
        await client.add_labels(issue_number, list(labels))
        logger.debug("Added %s to issue #%d", list(labels), issue_number)
        return

    # Label names are compared lower-cased; removal needs the stored name
    wanted = set(labels)
    current = await client.list_issue_labels(issue_number)
    for label in current:
        if label.name.lower() in wanted:
            await client.remove_label(issue_number, label.name)
            logger.debug("Removed %r from issue #%d", label.name, issue_number)
