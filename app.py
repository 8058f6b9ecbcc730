#!/usr/bin/env python3
"""
Main entry point for the short link service.

Concurrency: requests are handled concurrently via async I/O (FastAPI +
asyncpg connection pool). Set WORKERS > 1 for multi-process scaling; each
worker opens its own store.

Usage:
    python app.py

Environment variables:
    DATABASE_URL - PostgreSQL connection URL (memory:// for in-process store)
    CREATE_TABLES - Create the links table on startup
    BASE_URL - Base URL for short links
    PORT - Port to listen on
    WORKERS - Number of uvicorn worker processes (default 1)
    LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import load_config
from shortlinks.database import create_store
from shortlinks.service import LinkService
from shortlinks.shortcode import ShortCodeGenerator
from shortlinks.common.logging_config import setup_logging
from web_app import create_app


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the store on startup and close it on shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting short link service...")

    store = create_store(
        config.database_url,
        create_tables=config.create_tables,
        pool_max_size=config.db_pool_max_size,
        timeout_seconds=config.db_timeout_seconds,
        logger=logger,
    )
    await store.open()

    generator = ShortCodeGenerator(default_length=config.short_code_length)
    service = LinkService(
        store=store,
        short_code_generator=generator,
        logger=logger,
        max_allocation_attempts=config.max_allocation_attempts,
    )

    app.state.store = store
    app.state.service = service

    logger.info("Service started successfully")

    yield

    logger.info("Shutting down short link service...")
    await service.close()
    logger.info("Service stopped")


def main():
    """Main entry point."""
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("Short Link Service")
    logger.info(f"Configuration: {config.model_dump(exclude={'database_url'})}")

    # Store and service are created in the lifespan
    app = create_app(
        store_instance=None,
        service_instance=None,
        config=config,
        logger=logger,
    )
    app.router.lifespan_context = lifespan

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        workers=config.workers,
        log_level=config.log_level.lower(),
        access_log=True,
    )

    server = uvicorn.Server(uvicorn_config)

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
