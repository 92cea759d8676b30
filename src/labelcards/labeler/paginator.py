"""Card pagination - collects the issue cards of a column."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from labelcards.kanban import Card, ProjectsClient

logger = logging.getLogger(__name__)

CARDS_PER_PAGE = 100


def _coerce_int(value: Any, name: str, minimum: int) -> int:
    """Validate an integer parameter, accepting numeric strings.

    Raises:
        TypeError: If value is not an integer or numeric string.
        ValueError: If value is below minimum.
    """
    if isinstance(value, str):
        text = value.strip()
        # Plain ASCII digits only; a leading minus is kept so the range check reports it
        digits = text[1:] if text.startswith("-") else text
        if not (digits.isascii() and digits.isdecimal()):
            raise TypeError(f"Param {name} is not an integer")
        value = int(text)

    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"Param {name} is not an integer")

    if value < minimum:
        raise ValueError(f"Param {name} cannot be less than {minimum}")

    return value


async def get_card_page(
    client: ProjectsClient,
    column_id: Any,
    page: Any = 1,
    per_page: int = CARDS_PER_PAGE,
) -> list[Card]:
    """Fetch one page of non-archived cards from a column.

    Raises:
        TypeError: If column_id or page is not an integer.
        ValueError: If column_id is negative or page is less than 1.
        GitHubAPIError: If the request fails.
    """
    column_id = _coerce_int(column_id, "column_id", 0)
    page = _coerce_int(page, "page", 1)

    return await client.list_cards(
        column_id,
        page=page,
        per_page=per_page,
        archived_state="not_archived",
    )


async def get_column_card_issues(
    client: ProjectsClient,
    column_id: Any,
    per_page: int = CARDS_PER_PAGE,
) -> list[Card]:
    """List every non-archived card in a column that references an issue.

    Pages are fetched until one comes back short. Note cards are dropped.

    Args:
        client: Projects client for the repository.
        column_id: Column id; numeric strings are accepted.
        per_page: Page size.

    Returns:
        Issue cards in board order.

    Raises:
        TypeError: If column_id is not an integer.
        ValueError: If column_id is negative.
        GitHubAPIError: If a page request fails.
    """
    column_id = _coerce_int(column_id, "column_id", 0)

    issue_cards: list[Card] = []
    page = 1
    while True:
        cards = await get_card_page(client, column_id, page, per_page=per_page)
        issue_cards.extend(card for card in cards if card.is_issue)
        if len(cards) < per_page:
            break
        page += 1

    logger.info(
        "Found %d issue card(s) in column %d across %d page(s)",
        len(issue_cards),
        column_id,
        page,
    )
    return issue_cards
