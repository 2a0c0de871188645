"""ASGI entrypoint for the nutrition agent API."""

from nutrition_agent.api.app import create_app
from nutrition_agent.containers import build_container

app = create_app(build_container())
