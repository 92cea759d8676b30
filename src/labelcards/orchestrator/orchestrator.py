"""Orchestrator - Runs every directive through resolve, paginate and label."""

from __future__ import annotations

import functools
import logging
from typing import TYPE_CHECKING, Any

from labelcards.config import validate_directives
from labelcards.kanban.exceptions import KanbanError
from labelcards.labeler import (
    ThrottledDispatcher,
    get_column_card_issues,
    label_card_issue,
    resolve_column_id,
)
from labelcards.orchestrator.models import DirectiveResult, RunSummary

if TYPE_CHECKING:
    from labelcards.config import Directive
    from labelcards.kanban import ProjectsClient

logger = logging.getLogger(__name__)


class Orchestrator:
    """Processes directives one after another.

    A directive whose column cannot be resolved or whose cards cannot be
    fetched is logged and skipped; only an invalid configuration stops
    the run.
    """

    def __init__(
        self,
        client: ProjectsClient,
        dispatcher: ThrottledDispatcher | None = None,
    ) -> None:
        """Initialize the Orchestrator.

        Args:
            client: Projects client for the repository.
            dispatcher: Batch dispatcher; defaults to one labeling through client.
        """
        self.client = client
        self.dispatcher = dispatcher or ThrottledDispatcher(
            functools.partial(label_card_issue, client)
        )

    async def run(self, raw_directives: Any) -> RunSummary:
        """Validate the configuration and process every directive.

        Args:
            raw_directives: JSON text or decoded list of directive objects.

        Returns:
            RunSummary with one result per valid directive.

        Raises:
            ConfigError: If no valid directive is found.
        """
        directives = validate_directives(raw_directives)
        logger.info("Processing %d directive(s)", len(directives))

        summary = RunSummary()
        for directive in directives:
            summary.results.append(await self.process(directive))

        logger.info(
            "Run complete: labeled %d issue(s), skipped %d directive(s)",
            summary.labeled,
            summary.skipped,
        )
        return summary

    async def process(self, directive: Directive) -> DirectiveResult:
        """Resolve, paginate and label for a single directive."""
        logger.info("Labeling a column: %s", directive.describe())
        result = DirectiveResult(directive=directive)

        try:
            result.column_id = await resolve_column_id(self.client, directive.target)
        except KanbanError as e:
            logger.error("Failed to find column, skipping directive: %s", e)
            result.error = str(e)
            return result

        try:
            cards = await get_column_card_issues(self.client, result.column_id)
        except (KanbanError, TypeError, ValueError) as e:
            logger.error(
                "Failed to fetch card data for column %s, skipping directive: %s",
                result.column_id,
                e,
            )
            result.error = str(e)
            return result

        result.cards = len(cards)
        dispatched = await self.dispatcher.dispatch(cards, directive.labels, directive.action)
        result.labeled = dispatched.labeled

        logger.info(
            "Labeled/relabeled %d of %d card issue(s) in column %d",
            dispatched.labeled,
            len(cards),
            result.column_id,
        )
        return result
