#!/usr/bin/env python3
"""
Barnacles - Main FastAPI Application

Local API over the project scanner and the project database
"""

import argparse
import logging
import os
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Add the backend directory to Python path
current_dir = os.path.dirname(os.path.abspath(__file__))
backend_dir = os.path.dirname(current_dir)

if backend_dir not in sys.path:
    sys.path.insert(0, backend_dir)

from barnacles.config import ServerConfig, get_settings
from barnacles.config.logging_config import LoggingConfig
from barnacles.utils.exceptions import register_exception_handlers
from barnacles.utils.model.response_model import BaseResponse
from barnacles.db.base import init_db, dispose_db
from barnacles.service.rescan_scheduler import RescanScheduler
from barnacles.api import project_router, technology_router

# Initialize logging
LoggingConfig().setup_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifecycle

    Startup creates the tables and, when enabled, starts the rescan
    scheduler; shutdown stops it and closes the engine.
    """
    logger.info("=" * 80)
    logger.info("Starting Barnacles...")
    logger.info("=" * 80)

    await init_db()
    logger.info("Database initialized successfully")

    settings = get_settings()
    scheduler: Optional[RescanScheduler] = None
    if settings.rescan_enabled:
        scheduler = RescanScheduler(
            interval_minutes=settings.rescan_interval_minutes,
            initial_delay_seconds=settings.rescan_initial_delay_seconds,
        )
        await scheduler.start()
    app.state.rescan_scheduler = scheduler

    logger.info("Application startup complete")
    logger.info(f"Server URL: {ServerConfig.get_web_interface_url()}")
    logger.info(f"Documentation: {ServerConfig.get_web_interface_url()}/docs")
    logger.info("=" * 80)

    yield

    logger.info("Shutting down application...")

    if scheduler is not None:
        await scheduler.stop()

    try:
        await dispose_db()
        logger.info("Database connections closed")
    except Exception as e:
        logger.error(f"Error closing database: {e}")

    logger.info("Application shutdown complete")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version="1.0.0",
        description="Local developer project discovery and stats",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(project_router, prefix="/api")
    app.include_router(technology_router, prefix="/api")

    @app.get("/health", tags=["system"], summary="Liveness probe")
    async def health():
        return BaseResponse.success(data={"status": "ok"})

    return app


def run_api(host: str, port: int, **kwargs):
    """Run the API server with the given configuration"""
    try:
        uvicorn.run(
            "barnacles.main:app",
            host=host,
            port=port,
            reload=kwargs.get("reload") or ServerConfig.RELOAD
        )
    except Exception as e:
        logger.error(f"Failed to start API server: {e}")
        raise


def main() -> None:
    """Command line entry point"""
    parser = argparse.ArgumentParser(prog="barnacles", description="Barnacles Server")
    parser.add_argument("--host", type=str, default=ServerConfig.HOST)
    parser.add_argument("--port", type=int, default=ServerConfig.PORT)
    parser.add_argument("--reload", action="store_true", default=ServerConfig.RELOAD)
    args = parser.parse_args()

    logger.info(f"  - Server URL: http://{args.host}:{args.port}")
    logger.info(f"  - Documentation: http://{args.host}:{args.port}/docs")
    logger.info(f"  - Health Check: http://{args.host}:{args.port}/health")

    try:
        run_api(host=args.host, port=args.port, reload=args.reload)
    except KeyboardInterrupt:
        logger.info("Shutting down Barnacles gracefully...")
    except Exception as e:
        logger.error(f"Application startup failed: {e}")
        sys.exit(1)


app = create_app()

if __name__ == "__main__":
    main()
