#!/usr/bin/env python3
"""
Main entry point for URL shortener service.

Short links and click analytics live in process memory: they are lost on
restart and are not shared between processes, so the server always runs a
single uvicorn worker.

Usage:
    python app.py

Environment variables:
    BASE_URL - Base URL for short links
    PORT - Port to listen on (default 3000)
    SHORT_CODE_LENGTH - Length of generated short codes
    DEFAULT_VALIDITY_MINUTES - Validity when a request gives none
    LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import Config, load_config
from shortener.database.memory import InMemoryURLStore
from shortener.service import URLShortenerService
from shortener.shortcode import ShortCodeGenerator
from shortener.common.logging_config import setup_logging
from web_app import create_app


def build_service(config: Config, logger) -> URLShortenerService:
    """Wire the store, generator and service from configuration."""
    return URLShortenerService(
        store=InMemoryURLStore(logger=logger),
        short_code_generator=ShortCodeGenerator(default_length=config.short_code_length),
        logger=logger,
        base_url=config.base_url,
        path_prefix=config.path_prefix,
        enable_custom_codes=config.enable_custom_codes,
        max_collision_retries=config.max_collision_retries,
        default_validity_minutes=config.default_validity_minutes,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    logger = app.state.logger
    config = app.state.config

    logger.info(f"URL shortener listening on {config.base_url}")
    logger.info(f"Statistics API: {config.base_url.rstrip('/')}/api/statistics")

    yield

    logger.info("Shutting down URL shortener service...")
    await app.state.service.close()
    logger.info("Service stopped")


def main():
    """Main entry point."""
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("URL Shortener Service")
    logger.info(f"Configuration: {config.model_dump()}")

    if config.workers > 1:
        logger.warning(
            f"WORKERS={config.workers} ignored: the in-memory store cannot be shared between processes"
        )

    service = build_service(config, logger)
    app = create_app(service_instance=service, config=config, lifespan=lifespan)
    app.state.logger = logger

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        workers=1,
        log_level=config.log_level.lower(),
        access_log=True,
    )

    server = uvicorn.Server(uvicorn_config)

    # Setup signal handlers for graceful shutdown
    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
