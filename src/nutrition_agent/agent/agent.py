"""LLM-driven nutrition assistant that calls the lookup tools."""

import logging
from dataclasses import dataclass, field
from typing import Protocol

from nutrition_agent.agent.tools import TOOL_DEFINITIONS, ToolDispatcher

AGENT_INSTRUCTIONS = """\
You are a helpful nutrition assistant that provides accurate nutritional \
information using the USDA FoodData Central database.

Your capabilities:
- Look up nutrition facts for any food item
- Compare nutritional values between foods
- Provide dietary information about calories, macronutrients, vitamins, and minerals
- Help users make informed dietary choices

When users ask about food:
1. Use the searchFood tool to get nutrition data from USDA
2. Present the information clearly and concisely
3. If they mention multiple foods, use the compareFoods tool
4. Always mention that values are "per 100g serving" from USDA database
5. If no data is found, suggest alternative food names

Guidelines:
- Always use the tools to get real USDA data (never make up nutrition facts)
- Be encouraging and supportive about healthy eating
- Clarify when you need more specific food names
- Explain nutrition concepts in simple terms
- Remind users to consult healthcare professionals for personalized medical advice
"""

GAVE_UP_REPLY = "Sorry, I couldn't finish looking that up. Please try again."

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolCall:
    """A function call requested by the model."""

    id: str
    name: str
    arguments: str


@dataclass(frozen=True)
class ChatTurn:
    """One model response: text and/or tool calls."""

    content: str | None
    tool_calls: tuple[ToolCall, ...] = ()


class ChatClient(Protocol):
    """Interface for tool-calling chat completions."""

    async def complete(
        self,
        *,
        model: str,
        messages: list[dict[str, object]],
        tools: list[dict[str, object]],
    ) -> ChatTurn:
        """Return the next model turn for the conversation."""


@dataclass
class NutritionAgent:
    """Runs the model/tool loop for a single user request."""

    client: ChatClient
    dispatcher: ToolDispatcher
    model: str
    max_tool_rounds: int = 5
    instructions: str = field(default=AGENT_INSTRUCTIONS)

    async def reply(self, messages: list[dict[str, object]]) -> str:
        """Answer the latest user message, running tools as requested."""
        conversation: list[dict[str, object]] = [
            {"role": "system", "content": self.instructions},
            *messages,
        ]
        for _ in range(self.max_tool_rounds + 1):
            turn = await self.client.complete(
                model=self.model, messages=conversation, tools=TOOL_DEFINITIONS
            )
            if not turn.tool_calls:
                return turn.content or ""

            conversation.append(_assistant_message(turn))
            for call in turn.tool_calls:
                result = await self.dispatcher.dispatch(call.name, call.arguments)
                conversation.append(
                    {"role": "tool", "tool_call_id": call.id, "content": result.text}
                )

        _logger.warning("Agent exceeded %s tool rounds", self.max_tool_rounds)
        return GAVE_UP_REPLY


def _assistant_message(turn: ChatTurn) -> dict[str, object]:
    return {
        "role": "assistant",
        "content": turn.content,
        "tool_calls": [
            {
                "id": call.id,
                "type": "function",
                "function": {"name": call.name, "arguments": call.arguments},
            }
            for call in turn.tool_calls
        ],
    }
