#!/usr/bin/env python3
"""Entry point that serves The Game backend with uvicorn"""

import logging
import os

import uvicorn

logger = logging.getLogger(__name__)


def server_settings() -> dict:
    """Read process settings from the environment."""
    return {
        "host": os.getenv("HOST", "0.0.0.0"),
        "port": int(os.getenv("PORT", 8000)),
        "reload": os.getenv("RELOAD", "false").lower() == "true",
        "log_level": os.getenv("LOG_LEVEL", "info").lower(),
    }


def main():
    settings = server_settings()
    logging.basicConfig(level=settings["log_level"].upper())
    logger.info(
        f"Serving The Game on {settings['host']}:{settings['port']} "
        f"(websocket at /ws, health at /health)"
    )
    uvicorn.run("thegame_engine.main:app", **settings)


if __name__ == "__main__":
    main()
