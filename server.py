"""
REST API server entry point.

Run with:
    python server.py

Or directly with uvicorn:
    uvicorn server:app --host 0.0.0.0 --port 9000

Host, port and log level come from API_HOST, API_PORT and API_LOG_LEVEL.
The engine is built from the same settings when the app starts.
"""
from __future__ import annotations

import logging
import sys

import uvicorn

from api.app import create_app
from config.settings import settings

logging.basicConfig(
    level=getattr(logging, settings.API_LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stdout,
)

app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "server:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        log_level=settings.API_LOG_LEVEL.lower(),
    )
