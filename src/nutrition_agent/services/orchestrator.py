"""Single-food lookup and two-food comparison."""

import asyncio
import logging
from collections.abc import Awaitable
from dataclasses import dataclass, field
from typing import TypeVar

from nutrition_agent.domain.errors import FdcPayloadError, FoodLookupError
from nutrition_agent.domain.nutrition import (
    FoodDetail,
    LookupOutcome,
    LookupStatus,
    ToolResult,
)
from nutrition_agent.services.formatter import NutrientFormatter
from nutrition_agent.services.lookup import FoodLookupClient

COMPARISON_HEADER = "**Nutrition Comparison:**"
COMPARISON_NOT_FOUND = (
    "Could not find one or both foods for comparison. "
    "Please try more specific names."
)

_T = TypeVar("_T")

_logger = logging.getLogger(__name__)


def not_found_message(food_name: str) -> str:
    """Suggestion shown when a search returns no candidates."""
    return (
        f'No nutrition data found for "{food_name}". Try being more specific '
        '(e.g., "chicken breast raw", "black beans cooked").'
    )


@dataclass
class LookupOrchestrator:
    """Runs lookups against FDC and renders them as text outcomes.

    ``lookup_food`` and ``compare_foods`` return typed outcomes so callers can
    tell not-found from transport or payload failures. The ``*_tool`` methods
    flatten those to plain text for the agent runtime and never raise
    :class:`FoodLookupError`.
    """

    lookup_client: FoodLookupClient
    formatter: NutrientFormatter = field(default_factory=NutrientFormatter)

    async def lookup_food(self, food_name: str) -> LookupOutcome:
        """Look up the best FDC match for ``food_name``."""
        try:
            candidates = await self.lookup_client.search(food_name)
            if not candidates:
                message = not_found_message(food_name)
                _logger.info("No FDC match: query=%r", food_name)
                return LookupOutcome(status=LookupStatus.NOT_FOUND, text=message)

            top = candidates[0]
            _logger.info("Top match: query=%r match=%r", food_name, top.description)
            detail = await self.lookup_client.fetch_details(top.fdc_id)
        except FoodLookupError as exc:
            _logger.error("Lookup failed: query=%r error=%s", food_name, exc.message)
            return _failure(
                exc, f"Unable to fetch nutrition data: {exc.message}. Please try again."
            )

        return LookupOutcome(
            status=LookupStatus.FOUND,
            text=self.formatter.format(detail),
            details=(detail,),
        )

    async def compare_foods(self, food1: str, food2: str) -> LookupOutcome:
        """Compare the top FDC matches of two foods, ``food1`` first."""
        _logger.info("Comparing: %r vs %r", food1, food2)
        try:
            results1, results2 = await _join_all(
                self.lookup_client.search(food1, limit=1),
                self.lookup_client.search(food2, limit=1),
            )
            if not results1 or not results2:
                _logger.info("Comparison incomplete: %r vs %r", food1, food2)
                return LookupOutcome(
                    status=LookupStatus.NOT_FOUND, text=COMPARISON_NOT_FOUND
                )

            _logger.info(
                "Found: %r & %r", results1[0].description, results2[0].description
            )
            details: list[FoodDetail] = await _join_all(
                self.lookup_client.fetch_details(results1[0].fdc_id),
                self.lookup_client.fetch_details(results2[0].fdc_id),
            )
        except FoodLookupError as exc:
            _logger.error(
                "Comparison failed: %r vs %r error=%s", food1, food2, exc.message
            )
            return _failure(
                exc, f"Unable to compare foods: {exc.message}. Please try again."
            )

        # _join_all preserves argument order, so index 0 is always food1.
        reports = [self.formatter.format(detail) for detail in details]
        text = f"{COMPARISON_HEADER}\n\n" + reports[0] + "\n\n" + reports[1]
        return LookupOutcome(
            status=LookupStatus.FOUND, text=text, details=tuple(details)
        )

    async def search_food_tool(self, food_name: str) -> ToolResult:
        """Text-only entry point for the ``searchFood`` tool."""
        outcome = await self.lookup_food(food_name)
        return ToolResult(text=outcome.text)

    async def compare_foods_tool(self, food1: str, food2: str) -> ToolResult:
        """Text-only entry point for the ``compareFoods`` tool."""
        outcome = await self.compare_foods(food1, food2)
        return ToolResult(text=outcome.text)


def _failure(exc: FoodLookupError, text: str) -> LookupOutcome:
    status = (
        LookupStatus.MALFORMED_PAYLOAD
        if isinstance(exc, FdcPayloadError)
        else LookupStatus.TRANSPORT_ERROR
    )
    return LookupOutcome(status=status, text=text)


async def _join_all(*awaitables: Awaitable[_T]) -> list[_T]:
    """Await all concurrently; on the first failure cancel the rest."""
    tasks = [asyncio.ensure_future(awaitable) for awaitable in awaitables]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        raise
