#!/usr/bin/env python3
"""
Simple script to run the Rest Timer API

Usage:
    python run_rest_timer_api.py

Or with uvicorn directly:
    uvicorn rest_timer_api:app --reload --port 8080
"""

import logging

import uvicorn

from config import HOST, LOG_LEVEL, PORT, RELOAD

logger = logging.getLogger(__name__)


def main():
    """Run the FastAPI rest timer service"""
    logging.basicConfig(
        level=LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Starting Rest Timer API on %s:%d (reload=%s)", HOST, PORT, RELOAD)
    logger.info("API Documentation: http://%s:%d/docs", HOST, PORT)

    uvicorn.run(
        "rest_timer_api:app",
        host=HOST,
        port=PORT,
        reload=RELOAD,
        log_level=LOG_LEVEL,
    )


if __name__ == "__main__":
    main()
