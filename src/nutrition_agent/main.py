"""Run the nutrition agent API with uvicorn."""

import uvicorn

from nutrition_agent.config import Settings


def main(settings: Settings | None = None) -> None:
    """Serve the ASGI app on the configured host and port."""
    resolved_settings = settings or Settings()
    uvicorn.run(
        "nutrition_agent.api.asgi:app",
        host=resolved_settings.host,
        port=resolved_settings.port,
        log_level="info",
    )


if __name__ == "__main__":
    main()
