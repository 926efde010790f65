#!/usr/bin/env python3
"""
Main entry point for the TinyLink service.

Concurrency: the server handles many connections simultaneously via async I/O
(FastAPI + asyncpg connection pool). With the postgres backend, WORKERS > 1
runs multiple processes, each with its own pool; uniqueness and click counts
are enforced by the database. The memory backend is single-process only.

Usage:
    python app.py

Environment variables (all prefixed with TINYLINK_):
    STORE_BACKEND - 'memory' or 'postgres'
    DATABASE_URL - PostgreSQL connection URL
    DATABASE_CREATE_TABLES - 'true' to create the links table on startup
    BASE_URL - Base URL for short links
    PORT - Port to listen on
    WORKERS - Number of uvicorn worker processes (default 1)
    LOG_LEVEL - Logging level
"""

import logging
import signal
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI

from config import Config, load_config
from tinylink.database import InMemoryLinkStore, LinkStoreBase, PostgresLinkStore
from tinylink.service import LinkService
from tinylink.shortcode import ShortCodeGenerator
from tinylink.common.logging_config import setup_logging
from web_app import create_app


def build_store(config: Config, logger: logging.Logger) -> LinkStoreBase:
    """Create the link store selected by the configuration."""
    if config.store_backend == "postgres":
        logger.info("Using PostgreSQL link store")
        return PostgresLinkStore(
            db_config=config.database_url,
            pool_max_size=config.database_pool_max_size,
            create_tables=config.database_create_tables,
            logger=logger,
        )

    logger.info("Using in-memory link store (data is lost on restart)")
    return InMemoryLinkStore(logger=logger)


def build_service(config: Config, store: LinkStoreBase, logger: logging.Logger) -> LinkService:
    """Wire generator, store and service together."""
    generator = ShortCodeGenerator(
        default_length=config.short_code_length,
        alphabet=config.short_code_alphabet,
    )
    return LinkService(
        store=store,
        short_code_generator=generator,
        logger=logger,
        enable_custom_codes=config.enable_custom_codes,
        max_generation_attempts=config.max_generation_attempts,
        custom_code_min_length=config.custom_code_min_length,
        custom_code_max_length=config.custom_code_max_length,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting TinyLink service...")

    store = build_store(config, logger)
    if isinstance(store, PostgresLinkStore) and config.database_create_tables:
        await store.ensure_tables()

    service = build_service(config, store, logger)

    # Update app state
    app.state.store = store
    app.state.service = service

    logger.info("Service started successfully")

    yield

    logger.info("Shutting down TinyLink service...")
    await service.close()
    logger.info("Service stopped")


def build_app(config: Optional[Config] = None) -> FastAPI:
    """Create the served application; also used as the uvicorn factory for worker processes."""
    config = config or load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    # Store and service are created inside the lifespan, on the server's loop
    app = create_app(
        store_instance=None,
        service_instance=None,
        config=config,
    )
    app.state.logger = logger
    app.router.lifespan_context = lifespan
    return app


def main():
    """Main entry point."""
    config = load_config()
    app = build_app(config)
    logger = app.state.logger

    logger.info("TinyLink Service")
    logger.info(f"Configuration: {config.model_dump(exclude={'database_url'})}")

    if config.workers > 1:
        # Each worker process builds its own app (and pool) from the environment
        logger.info(f"Starting {config.workers} workers on {config.host}:{config.port}")
        uvicorn.run(
            "app:build_app",
            factory=True,
            host=config.host,
            port=config.port,
            workers=config.workers,
            log_level=config.log_level.lower(),
            access_log=False,
        )
        return

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        access_log=False,  # LoggingMiddleware logs every request
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
