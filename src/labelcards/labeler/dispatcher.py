"""ThrottledDispatcher - Labels a batch of cards under a rate-limit spacing policy."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import TYPE_CHECKING

from labelcards.config import LabelAction
from labelcards.labeler.models import DispatchResult
from labelcards.labeler.paginator import CARDS_PER_PAGE

if TYPE_CHECKING:
    from labelcards.kanban import Card

logger = logging.getLogger(__name__)

Mutator = Callable[["Card", Sequence[str], LabelAction], Awaitable[None]]
Sleep = Callable[[float], Awaitable[None]]

DEFAULT_THROTTLE_THRESHOLD = CARDS_PER_PAGE
DEFAULT_THROTTLE_DELAY = 1.0  # seconds


class ThrottledDispatcher:
    """Runs one label mutation per card, spacing out large batches.

    Each mutation is started as its own task, so requests may overlap once
    the spacing delay has passed. Failures are logged per card and never
    stop the batch.
    """

    def __init__(
        self,
        mutator: Mutator,
        throttle_threshold: int = DEFAULT_THROTTLE_THRESHOLD,
        throttle_delay: float = DEFAULT_THROTTLE_DELAY,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            mutator: Coroutine function labeling one card.
            throttle_threshold: Batch size from which dispatches are spaced out.
            throttle_delay: Seconds between dispatch starts for large batches.
            sleep: Coroutine used to wait between dispatches.
        """
        self.mutator = mutator
        self.throttle_threshold = throttle_threshold
        self.throttle_delay = throttle_delay
        self._sleep = sleep

    def delay_for(self, batch_size: int) -> float:
        """Delay between dispatches for a batch of the given size."""
        return self.throttle_delay if batch_size >= self.throttle_threshold else 0.0

    async def _attempt(self, card: Card, labels: Sequence[str], action: LabelAction) -> bool:
        try:
            await self.mutator(card, labels, action)
        except Exception as e:
            logger.warning("Failed to label card with id: %s: %s", card.id, e)
            return False
        return True

    async def dispatch(
        self,
        cards: Sequence[Card],
        labels: Sequence[str],
        action: LabelAction = LabelAction.ADD,
    ) -> DispatchResult:
        """Label every card in the batch.

        Args:
            cards: Issue cards, labeled in this order.
            labels: Labels to add or remove.
            action: Mutation direction.

        Returns:
            DispatchResult once every attempt has settled.

        Raises:
            TypeError: If cards or labels is not a list or tuple.
        """
        if not isinstance(cards, (list, tuple)):
            raise TypeError("Param cards must be a list")

        if not isinstance(labels, (list, tuple)):
            raise TypeError("Param labels must be a list")

        if not cards:
            return DispatchResult(attempted=0, labeled=0)

        delay = self.delay_for(len(cards))
        if delay:
            logger.info(
                "A large number of label requests (%d) will be sent. Throttling requests.",
                len(cards),
            )

        tasks: list[asyncio.Task[bool]] = []
        for index, card in enumerate(cards):
            if index and delay:
                await self._sleep(delay)
            tasks.append(asyncio.create_task(self._attempt(card, labels, action)))

        outcomes = await asyncio.gather(*tasks)

        return DispatchResult(attempted=len(outcomes), labeled=sum(outcomes))
