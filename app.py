"""
SplatStream server entry point.

    python app.py
"""
from __future__ import annotations

import logging

from backend.src.adapters.inbound.fastapi_app import app, settings

logger = logging.getLogger(__name__)

__all__ = ["app"]


if __name__ == "__main__":
    import uvicorn

    host = settings.web.host
    port = settings.web.port

    logger.info("Starting SplatStream on %s:%s", host, port)

    uvicorn.run(
        "app:app",
        host=host,
        port=port,
        reload=settings.app_env == "development",
        log_level=settings.logging.level.lower(),
    )
