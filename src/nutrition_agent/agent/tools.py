"""Tool schemas and dispatch for the nutrition agent."""

import json
import logging
from dataclasses import dataclass

from nutrition_agent.domain.nutrition import ToolResult
from nutrition_agent.services.orchestrator import LookupOrchestrator

SEARCH_FOOD_TOOL = "searchFood"
COMPARE_FOODS_TOOL = "compareFoods"

TOOL_DEFINITIONS: list[dict[str, object]] = [
    {
        "type": "function",
        "function": {
            "name": SEARCH_FOOD_TOOL,
            "description": (
                "Search for food items in the USDA database and get nutrition facts"
            ),
            "parameters": {
                "type": "object",
                "properties": {
                    "foodName": {
                        "type": "string",
                        "description": (
                            "The name of the food to search for "
                            '(e.g., "apple", "chicken breast raw")'
                        ),
                    }
                },
                "required": ["foodName"],
                "additionalProperties": False,
            },
        },
    },
    {
        "type": "function",
        "function": {
            "name": COMPARE_FOODS_TOOL,
            "description": "Compare nutrition facts between two different foods",
            "parameters": {
                "type": "object",
                "properties": {
                    "food1": {
                        "type": "string",
                        "description": "First food to compare",
                    },
                    "food2": {
                        "type": "string",
                        "description": "Second food to compare",
                    },
                },
                "required": ["food1", "food2"],
                "additionalProperties": False,
            },
        },
    },
]

_logger = logging.getLogger(__name__)


@dataclass
class ToolDispatcher:
    """Routes model tool calls to the lookup orchestrator."""

    orchestrator: LookupOrchestrator

    async def dispatch(self, name: str, arguments: str) -> ToolResult:
        """Run the named tool with JSON-encoded arguments."""
        _logger.info("Tool call: %s %s", name, arguments)
        try:
            parsed = json.loads(arguments or "{}")
        except json.JSONDecodeError:
            return ToolResult(text=f"Invalid arguments for tool {name}.")
        if not isinstance(parsed, dict):
            return ToolResult(text=f"Invalid arguments for tool {name}.")

        if name == SEARCH_FOOD_TOOL:
            food_name = parsed.get("foodName")
            if not isinstance(food_name, str):
                return ToolResult(text="searchFood requires a string 'foodName'.")
            return await self.orchestrator.search_food_tool(food_name)

        if name == COMPARE_FOODS_TOOL:
            food1 = parsed.get("food1")
            food2 = parsed.get("food2")
            if not isinstance(food1, str) or not isinstance(food2, str):
                return ToolResult(
                    text="compareFoods requires string 'food1' and 'food2'."
                )
            return await self.orchestrator.compare_foods_tool(food1, food2)

        _logger.warning("Unknown tool requested: %s", name)
        return ToolResult(text=f"Unknown tool: {name}.")
