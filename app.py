#!/usr/bin/env python3
"""
Main entry point for the TinyLink service.

Concurrency: The server handles multiple connections simultaneously via async I/O
(FastAPI + asyncpg connection pool or redis.asyncio). Set WORKERS > 1 for
multi-process scaling across CPU cores (each worker has its own store connections).

Usage:
    python app.py

Environment variables:
    DATABASE_URL - Store URL (postgresql://, redis:// or memory://)
    DATABASE_CREATE_TABLES - Set to 1 to create the PostgreSQL schema on startup
    PORT - Port to listen on (default 3000)
    WORKERS - Number of uvicorn worker processes (default 1)
    LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import load_config
from tinylink.database import create_store
from tinylink.service import LinkService
from tinylink.shortcode import ShortCodeGenerator
from tinylink.common.logging_config import setup_logging
from web_app import create_app


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect the store on startup and release it on shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting TinyLink service...")

    store = create_store(
        config.database_url,
        logger=logger,
        create_tables=config.database_create_tables,
        pool_max_size=config.database_pool_max_size,
    )
    logger.info(f"Connecting to store: {type(store).__name__}")
    await store.connect()

    generator = ShortCodeGenerator(default_length=config.short_code_length)
    service = LinkService(
        store=store,
        short_code_generator=generator,
        logger=logger,
        max_collision_retries=config.max_collision_retries,
    )

    app.state.store = store
    app.state.service = service

    logger.info("Service started successfully")

    yield

    logger.info("Shutting down TinyLink service...")
    await service.close()
    logger.info("Service stopped")


def build_app(config=None) -> FastAPI:
    """Build the app with store wiring deferred to the lifespan."""
    config = config or load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    app = create_app(
        store_instance=None,  # Set in lifespan
        service_instance=None,
        config=config,
    )

    app.state.config = config
    app.state.logger = logger
    app.router.lifespan_context = lifespan

    return app


def main():
    """Main entry point."""
    config = load_config()
    app = build_app(config)
    logger = app.state.logger

    logger.info("TinyLink URL shortener")
    logger.info(f"Configuration: {config.model_dump(exclude={'database_url'})}")

    if config.workers > 1:
        # uvicorn only forks workers from an import string; each worker
        # rebuilds the app and opens its own store connections.
        logger.info(f"TinyLink running on {config.host}:{config.port} with {config.workers} workers")
        uvicorn.run(
            "app:build_app",
            factory=True,
            host=config.host,
            port=config.port,
            workers=config.workers,
            log_level=config.log_level.lower(),
            access_log=True,
        )
        return

    # async handles many concurrent connections in this single process.
    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
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
        logger.info(f"TinyLink running on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
