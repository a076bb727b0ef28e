"""Entry point serving the Food Delivery API with Uvicorn.

Host and port are read from the ``API_HOST`` and ``API_PORT``
environment variables; defaults are ``0.0.0.0`` and ``8000``.  Other
settings (database path, secret key, log level) are described in
``food_delivery_api/app/core/config.py``.

Usage:
    python run.py
"""
import asyncio
import logging
import os

from uvicorn import Config, Server

from food_delivery_api.app.core.config import settings
from food_delivery_api.app.main import app


async def main() -> None:
    host = os.getenv("API_HOST", "0.0.0.0")
    port = int(os.getenv("API_PORT", "8000"))
    config = Config(
        app=app,
        host=host,
        port=port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logging.getLogger(__name__).info("Stopped")
