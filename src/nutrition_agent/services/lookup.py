"""Food lookup client: FDC search and details with uniform error translation."""

import asyncio
import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

import httpx

from nutrition_agent.adapters.fdc_client import FdcClient
from nutrition_agent.domain.errors import FdcPayloadError, FdcTransportError
from nutrition_agent.domain.nutrition import FoodDetail, FoodSummary, NutrientReading

SEARCH_FAILED = "Failed to search food database"
DETAILS_FAILED = "Failed to get food details"

_RETRYABLE_STATUS = 429

_logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable


@dataclass
class FoodLookupClient:
    """Searches FDC and fetches food details.

    Transport problems surface as :class:`FdcTransportError` and malformed
    bodies as :class:`FdcPayloadError`; both carry only a generic message.
    """

    fdc_client: FdcClient
    retry_attempts: int = 2
    retry_delay_seconds: float = 0.3

    async def search(self, query: str, limit: int = 5) -> list[FoodSummary]:
        """Search FDC foods, best match first."""
        _logger.info("Searching FDC: query=%r limit=%s", query, limit)
        payload = await self._call_with_retry(
            lambda: self.fdc_client.search_foods(query, page_size=limit),
            action="search",
            failure_message=SEARCH_FAILED,
        )
        try:
            foods = _parse_search(payload)
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            _logger.error("FDC search payload malformed: query=%r error=%s", query, exc)
            raise FdcPayloadError(SEARCH_FAILED) from exc
        _logger.info("FDC search results: query=%r count=%s", query, len(foods))
        return foods

    async def fetch_details(self, fdc_id: int) -> FoodDetail:
        """Retrieve the description and nutrient readings of a food."""
        _logger.info("Fetching FDC food: fdc_id=%s", fdc_id)
        payload = await self._call_with_retry(
            lambda: self.fdc_client.get_food(fdc_id),
            action=f"get_food:{fdc_id}",
            failure_message=DETAILS_FAILED,
        )
        try:
            return _parse_detail(payload)
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            _logger.error(
                "FDC food payload malformed: fdc_id=%s error=%s", fdc_id, exc
            )
            raise FdcPayloadError(DETAILS_FAILED) from exc

    async def _call_with_retry(
        self,
        func: "Callable[[], Awaitable[dict[str, object]]]",
        *,
        action: str,
        failure_message: str,
    ) -> dict[str, object]:
        """Call FDC with bounded exponential backoff on transient failures."""
        attempt = 0
        while True:
            try:
                return await func()
            except ValueError as exc:
                # Undecodable JSON body; retrying will not help.
                _logger.error("FDC %s returned invalid JSON: %s", action, exc)
                raise FdcPayloadError(failure_message) from exc
            except httpx.HTTPError as exc:
                attempt += 1
                status_code = _status_code_from_exception(exc)
                if not _is_retryable(exc) or attempt > self.retry_attempts:
                    _logger.error(
                        "FDC %s failed (status=%s): %s", action, status_code, exc
                    )
                    raise FdcTransportError(failure_message) from exc
                _logger.warning(
                    "FDC %s failed (attempt %s/%s, status=%s): %s",
                    action,
                    attempt,
                    self.retry_attempts + 1,
                    status_code,
                    exc,
                )
                await asyncio.sleep(self.retry_delay_seconds * 2 ** (attempt - 1))


def _is_retryable(exc: httpx.HTTPError) -> bool:
    """Network errors, 5xx and 429 are retried; other statuses are final."""
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        return status >= 500 or status == _RETRYABLE_STATUS
    return True


def _status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"


def _parse_search(payload: dict[str, object]) -> list[FoodSummary]:
    foods = payload.get("foods") or []
    if not isinstance(foods, list):
        raise TypeError("'foods' is not a list")
    return [
        FoodSummary(
            fdc_id=int(food["fdcId"]),
            description=str(food.get("description", "")),
            data_type=food.get("dataType"),
        )
        for food in foods
    ]


def _parse_detail(payload: dict[str, object]) -> FoodDetail:
    food_nutrients = payload.get("foodNutrients") or []
    if not isinstance(food_nutrients, list):
        raise TypeError("'foodNutrients' is not a list")
    readings = []
    for nutrient in food_nutrients:
        reading = _parse_reading(nutrient)
        if reading is not None:
            readings.append(reading)
    return FoodDetail(
        description=str(payload.get("description", "")),
        nutrients=tuple(readings),
    )


def _parse_reading(nutrient: dict[str, object]) -> NutrientReading | None:
    """Read a nutrient in either the detail or the abridged/search shape."""
    nutrient_info = nutrient.get("nutrient") or {}
    name = nutrient_info.get("name") or nutrient.get("nutrientName")
    if not name:
        return None
    amount = nutrient.get("amount")
    if amount is None:
        amount = nutrient.get("value")
    if amount is None:
        return NutrientReading(name=str(name), amount=None)
    value = float(amount)
    if not math.isfinite(value):
        raise ValueError(f"non-finite amount for {name!r}: {amount!r}")
    return NutrientReading(name=str(name), amount=value)
