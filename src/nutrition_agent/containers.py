"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from nutrition_agent.adapters.fdc_client import HttpxFdcClient
from nutrition_agent.adapters.openai_chat_client import OpenAIChatClient
from nutrition_agent.agent.agent import NutritionAgent
from nutrition_agent.agent.tools import ToolDispatcher
from nutrition_agent.config import Settings
from nutrition_agent.domain.nutrition import DEFAULT_ALLOWLIST
from nutrition_agent.services.formatter import NutrientFormatter
from nutrition_agent.services.lookup import FoodLookupClient
from nutrition_agent.services.orchestrator import LookupOrchestrator


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    lookup_client: FoodLookupClient
    orchestrator: LookupOrchestrator
    tool_dispatcher: ToolDispatcher
    agent: NutritionAgent | None
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container.

    Loading settings here raises immediately when ``FDC_API_KEY`` is missing.
    """
    resolved_settings = settings or Settings()
    fdc_client = HttpxFdcClient.create(
        api_key=resolved_settings.fdc_api_key,
        base_url=resolved_settings.fdc_base_url,
        timeout_seconds=resolved_settings.fdc_timeout_seconds,
    )
    lookup_client = FoodLookupClient(
        fdc_client=fdc_client,
        retry_attempts=resolved_settings.fdc_retry_attempts,
        retry_delay_seconds=resolved_settings.fdc_retry_delay_seconds,
    )
    orchestrator = LookupOrchestrator(
        lookup_client=lookup_client,
        formatter=NutrientFormatter(DEFAULT_ALLOWLIST),
    )
    tool_dispatcher = ToolDispatcher(orchestrator)

    chat_client: OpenAIChatClient | None = None
    agent: NutritionAgent | None = None
    if resolved_settings.is_chat_configured:
        chat_client = OpenAIChatClient.create(resolved_settings.openai_api_key)
        agent = NutritionAgent(
            client=chat_client,
            dispatcher=tool_dispatcher,
            model=resolved_settings.openai_model,
            max_tool_rounds=resolved_settings.agent_max_tool_rounds,
        )

    async def close_resources() -> None:
        await fdc_client.close()
        if chat_client is not None:
            await chat_client.close()

    return AppContainer(
        settings=resolved_settings,
        lookup_client=lookup_client,
        orchestrator=orchestrator,
        tool_dispatcher=tool_dispatcher,
        agent=agent,
        close_resources=close_resources,
    )
