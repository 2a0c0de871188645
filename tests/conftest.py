"""Shared test fixtures."""

import asyncio
from dataclasses import dataclass, field

import pytest

from nutrition_agent.adapters.fdc_client import FdcClient
from nutrition_agent.agent.agent import ChatClient, ChatTurn
from nutrition_agent.agent.tools import ToolDispatcher
from nutrition_agent.config import Settings
from nutrition_agent.containers import AppContainer
from nutrition_agent.services.lookup import FoodLookupClient
from nutrition_agent.services.orchestrator import LookupOrchestrator

CHICKEN_ID = 171077
TOFU_ID = 172475


def chicken_payload() -> dict[str, object]:
    return {
        "fdcId": CHICKEN_ID,
        "description": "Chicken, broilers or fryers, breast, meat only, raw",
        "foodNutrients": [
            {"nutrient": {"name": "Protein"}, "amount": 22.5},
            {"nutrient": {"name": "Energy"}, "amount": 120},
            {"nutrient": {"name": "Total lipid (fat)"}, "amount": 2.62},
            {"nutrient": {"name": "Zinc, Zn"}, "amount": 0.68},
            {"nutrient": {"name": "Sodium, Na"}, "amount": 45},
        ],
    }


def tofu_payload() -> dict[str, object]:
    return {
        "fdcId": TOFU_ID,
        "description": "Tofu, raw, firm, prepared with calcium sulfate",
        "foodNutrients": [
            {"nutrient": {"name": "Energy"}, "amount": 144},
            {"nutrient": {"name": "Protein"}, "amount": 17.3},
            {"nutrient": {"name": "Calcium, Ca"}, "amount": 683},
        ],
    }


@dataclass
class FakeFdcClient(FdcClient):
    """Fake FDC client with in-memory responses and call recording."""

    searches: dict[str, list[dict[str, object]]] = field(
        default_factory=lambda: {
            "chicken breast": [
                {
                    "fdcId": CHICKEN_ID,
                    "description": (
                        "Chicken, broilers or fryers, breast, meat only, raw"
                    ),
                    "dataType": "SR Legacy",
                },
                {"fdcId": 1, "description": "Chicken, breast, roasted"},
            ],
            "tofu": [
                {
                    "fdcId": TOFU_ID,
                    "description": "Tofu, raw, firm, prepared with calcium sulfate",
                    "dataType": "SR Legacy",
                }
            ],
        }
    )
    foods: dict[int, dict[str, object]] = field(
        default_factory=lambda: {
            CHICKEN_ID: chicken_payload(),
            TOFU_ID: tofu_payload(),
        }
    )
    food_delays: dict[int, float] = field(default_factory=dict)
    search_error: Exception | None = None
    food_error: Exception | None = None
    food_errors: dict[int, Exception] = field(default_factory=dict)
    search_calls: list[tuple[str, int]] = field(default_factory=list)
    food_calls: list[int] = field(default_factory=list)
    completed_foods: list[int] = field(default_factory=list)
    cancelled_foods: list[int] = field(default_factory=list)

    async def search_foods(self, query: str, page_size: int = 5) -> dict[str, object]:
        self.search_calls.append((query, page_size))
        if self.search_error is not None:
            raise self.search_error
        return {"foods": self.searches.get(query, [])[:page_size]}

    async def get_food(self, fdc_id: int) -> dict[str, object]:
        self.food_calls.append(fdc_id)
        if self.food_error is not None:
            raise self.food_error
        if fdc_id in self.food_errors:
            raise self.food_errors[fdc_id]
        try:
            await asyncio.sleep(self.food_delays.get(fdc_id, 0))
        except asyncio.CancelledError:
            self.cancelled_foods.append(fdc_id)
            raise
        self.completed_foods.append(fdc_id)
        return self.foods[fdc_id]


@dataclass
class ScriptedChatClient(ChatClient):
    """Fake chat client that replays a fixed list of turns."""

    turns: list[ChatTurn] = field(default_factory=list)
    requests: list[list[dict[str, object]]] = field(default_factory=list)

    async def complete(
        self,
        *,
        model: str,
        messages: list[dict[str, object]],
        tools: list[dict[str, object]],
    ) -> ChatTurn:
        self.requests.append(list(messages))
        return self.turns.pop(0)


@pytest.fixture
def settings() -> Settings:
    return Settings(fdc_api_key="fdc-key", openai_api_key=None)


@pytest.fixture
def fdc_client() -> FakeFdcClient:
    return FakeFdcClient()


@pytest.fixture
def orchestrator(fdc_client: FakeFdcClient) -> LookupOrchestrator:
    lookup_client = FoodLookupClient(fdc_client, retry_delay_seconds=0)
    return LookupOrchestrator(lookup_client=lookup_client)


@pytest.fixture
def container(
    settings: Settings, orchestrator: LookupOrchestrator
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        lookup_client=orchestrator.lookup_client,
        orchestrator=orchestrator,
        tool_dispatcher=ToolDispatcher(orchestrator),
        agent=None,
        close_resources=close_resources,
    )
