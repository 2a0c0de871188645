"""OpenAI Chat Completions client for tool-calling turns."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from nutrition_agent.agent.agent import ChatClient, ChatTurn, ToolCall


@dataclass
class OpenAIChatClient(ChatClient):
    """Chat client backed by the OpenAI Chat Completions API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIChatClient":
        """Create an OpenAI chat client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def complete(
        self,
        *,
        model: str,
        messages: list[dict[str, object]],
        tools: list[dict[str, object]],
    ) -> ChatTurn:
        """Call Chat Completions with the tool definitions attached."""
        response = await self.client.chat.completions.create(
            model=model,
            messages=messages,
            tools=tools,
        )
        if not response.choices:
            raise RuntimeError("OpenAI returned no choices")
        message = response.choices[0].message
        tool_calls = tuple(
            ToolCall(
                id=call.id,
                name=call.function.name,
                arguments=call.function.arguments,
            )
            for call in message.tool_calls or []
        )
        return ChatTurn(content=message.content, tool_calls=tool_calls)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
