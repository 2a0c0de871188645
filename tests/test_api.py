"""Tests for the HTTP tool and chat endpoints."""

import httpx
from fastapi.testclient import TestClient

from nutrition_agent.agent.agent import ChatTurn, NutritionAgent
from nutrition_agent.api.app import create_app
from tests.conftest import FakeFdcClient, ScriptedChatClient


def test_health(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_search_food_endpoint(container) -> None:
    client = TestClient(create_app(container))

    response = client.post("/tools/searchFood", json={"foodName": "chicken breast"})

    assert response.status_code == 200
    assert response.json()["text"].startswith("**Chicken, broilers")


def test_search_food_endpoint_not_found(container, fdc_client: FakeFdcClient) -> None:
    client = TestClient(create_app(container))

    response = client.post("/tools/searchFood", json={"foodName": "dragon fruit pie"})

    assert response.status_code == 200
    assert 'No nutrition data found for "dragon fruit pie"' in response.json()["text"]
    assert fdc_client.food_calls == []


def test_search_food_endpoint_upstream_failure_is_text(
    container, fdc_client: FakeFdcClient
) -> None:
    request = httpx.Request("GET", "https://api.test/foods/search")
    fdc_client.search_error = httpx.ConnectError("refused", request=request)
    client = TestClient(create_app(container))

    response = client.post("/tools/searchFood", json={"foodName": "tofu"})

    assert response.status_code == 200
    assert response.json()["text"].startswith("Unable to fetch nutrition data:")


def test_compare_foods_endpoint(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/tools/compareFoods", json={"food1": "chicken breast", "food2": "tofu"}
    )

    assert response.status_code == 200
    text = response.json()["text"]
    assert text.index("**Chicken") < text.index("**Tofu")


def test_search_food_endpoint_requires_string(container) -> None:
    client = TestClient(create_app(container))

    response = client.post("/tools/searchFood", json={"foodName": 42})

    assert response.status_code == 422


def test_chat_without_agent_is_unavailable(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/chat", json={"messages": [{"role": "user", "content": "Hi"}]}
    )

    assert response.status_code == 503


def test_chat_returns_agent_reply(container) -> None:
    container.agent = NutritionAgent(
        client=ScriptedChatClient(turns=[ChatTurn(content="Ask me about food!")]),
        dispatcher=container.tool_dispatcher,
        model="test-model",
    )
    client = TestClient(create_app(container))

    response = client.post(
        "/chat", json={"messages": [{"role": "user", "content": "Hi"}]}
    )

    assert response.status_code == 200
    assert response.json() == {"reply": "Ask me about food!"}
