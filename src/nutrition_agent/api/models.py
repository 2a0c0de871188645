"""Pydantic models for the HTTP tool and chat endpoints."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class SearchFoodRequest(BaseModel):
    """Body of ``POST /tools/searchFood``."""

    model_config = ConfigDict(populate_by_name=True)

    food_name: str = Field(
        alias="foodName",
        description='The name of the food to search for (e.g., "apple")',
    )


class CompareFoodsRequest(BaseModel):
    """Body of ``POST /tools/compareFoods``."""

    food1: str = Field(description="First food to compare")
    food2: str = Field(description="Second food to compare")


class ToolResponse(BaseModel):
    """Text result of a tool invocation."""

    text: str


class ChatMessage(BaseModel):
    """One message of the caller-held conversation."""

    role: Literal["user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    """Body of ``POST /chat``."""

    messages: list[ChatMessage] = Field(min_length=1)


class ChatResponse(BaseModel):
    """Assistant reply for ``POST /chat``."""

    reply: str
