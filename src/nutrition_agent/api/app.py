"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, status

from nutrition_agent.api.models import (
    ChatRequest,
    ChatResponse,
    CompareFoodsRequest,
    SearchFoodRequest,
    ToolResponse,
)
from nutrition_agent.app_logging import configure_logging
from nutrition_agent.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/tools/searchFood")
    async def search_food(body: SearchFoodRequest, request: Request) -> ToolResponse:
        """Look up nutrition facts for a single food."""
        state_container: AppContainer = request.app.state.container
        result = await state_container.orchestrator.search_food_tool(body.food_name)
        return ToolResponse(text=result.text)

    @app.post("/tools/compareFoods")
    async def compare_foods(
        body: CompareFoodsRequest, request: Request
    ) -> ToolResponse:
        """Compare nutrition facts of two foods."""
        state_container: AppContainer = request.app.state.container
        result = await state_container.orchestrator.compare_foods_tool(
            body.food1, body.food2
        )
        return ToolResponse(text=result.text)

    @app.post("/chat")
    async def chat(body: ChatRequest, request: Request) -> ChatResponse:
        """Answer a nutrition question with the LLM agent."""
        state_container: AppContainer = request.app.state.container
        if state_container.agent is None:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Chat is not configured.",
            )
        messages = [message.model_dump() for message in body.messages]
        try:
            reply = await state_container.agent.reply(messages)
        except Exception as exc:
            logger.exception("Agent reply failed")
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="The assistant is unavailable. Please try again.",
            ) from exc
        return ChatResponse(reply=reply)

    return app
