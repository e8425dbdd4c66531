"""Entry point for the Flock Records API.

Starts the FastAPI application under Uvicorn.  Host and port come from
the ``API_HOST`` and ``API_PORT`` environment variables (defaults
``0.0.0.0`` and ``8000``); see ``flock_records_api/app/core/config.py``
for the other supported variables.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from flock_records_api.app.core.config import settings
from flock_records_api.app.main import app


async def run_api() -> None:
    """Serve the API until the process is stopped."""
    config = Config(
        app=app,
        host=settings.api_host,
        port=settings.api_port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


async def main() -> None:
    try:
        await run_api()
    except Exception:
        logging.exception("API server stopped with an error")
        raise


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
