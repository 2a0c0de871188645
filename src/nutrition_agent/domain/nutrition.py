"""Nutrition domain models."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class FoodSummary:
    """Summary information about a food from an FDC search."""

    fdc_id: int
    description: str
    data_type: str | None = None


@dataclass(frozen=True)
class NutrientReading:
    """A single named nutrient amount from a food detail record."""

    name: str
    amount: float | None


@dataclass(frozen=True)
class FoodDetail:
    """Food description with its nutrient readings (per 100g)."""

    description: str
    nutrients: tuple[NutrientReading, ...] = ()


@dataclass(frozen=True)
class NutrientAllowlist:
    """Ordered, immutable set of nutrient names and their display units."""

    entries: tuple[tuple[str, str], ...]

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self.entries)


DEFAULT_ALLOWLIST = NutrientAllowlist(
    entries=(
        ("Energy", "kcal"),
        ("Protein", "g"),
        ("Total lipid (fat)", "g"),
        ("Carbohydrate, by difference", "g"),
        ("Fiber, total dietary", "g"),
        ("Sugars, total including NLEA", "g"),
        ("Calcium, Ca", "mg"),
        ("Iron, Fe", "mg"),
        ("Sodium, Na", "mg"),
        ("Vitamin C, total ascorbic acid", "mg"),
        ("Vitamin A, IU", "IU"),
    )
)


class LookupStatus(str, Enum):
    """Outcome category of a lookup or comparison."""

    FOUND = "found"
    NOT_FOUND = "not_found"
    TRANSPORT_ERROR = "transport_error"
    MALFORMED_PAYLOAD = "malformed_payload"


@dataclass(frozen=True)
class LookupOutcome:
    """Typed result of an orchestrated lookup, rendered text included."""

    status: LookupStatus
    text: str
    details: tuple[FoodDetail, ...] = field(default=())


@dataclass(frozen=True)
class ToolResult:
    """Text payload handed back to the agent runtime."""

    text: str
