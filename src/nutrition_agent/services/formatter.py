"""Render food details into the nutrition report text."""

import math
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal, localcontext

from nutrition_agent.domain.nutrition import (
    DEFAULT_ALLOWLIST,
    FoodDetail,
    NutrientAllowlist,
    NutrientReading,
)

_TWO_PLACES = Decimal("0.01")


@dataclass(frozen=True)
class NutrientFormatter:
    """Formats a food detail using a fixed allowlist of nutrients.

    Lines follow allowlist order, not payload order. Nutrients missing from
    the payload are skipped. Names match exactly and case-sensitively.
    """

    allowlist: NutrientAllowlist = field(default=DEFAULT_ALLOWLIST)

    def format(self, detail: FoodDetail) -> str:
        """Return the markdown report for a single food."""
        text = f"**{detail.description}**\n\n"
        text += "**Per 100g serving:**\n"
        for name, unit in self.allowlist:
            reading = _find_reading(detail.nutrients, name)
            if reading is None:
                continue
            text += f"- {name}: {format_amount(reading.amount)} {unit}\n"
        return text


def format_amount(amount: float | None) -> str:
    """Fix an amount to two decimals, rounding half up.

    Missing and non-finite amounts render as ``N/A``.
    """
    if amount is None or not math.isfinite(amount):
        return "N/A"
    value = Decimal(str(amount))
    with localcontext() as ctx:
        # Room for every integer digit plus the two decimals.
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        quantized = value.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)
    return format(quantized, "f")


def _find_reading(
    nutrients: tuple[NutrientReading, ...], name: str
) -> NutrientReading | None:
    for reading in nutrients:
        if reading.name == name:
            return reading
    return None
