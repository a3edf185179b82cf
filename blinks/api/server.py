"""
FastAPI application factory for the Blink Actions server.

Storage and the Solana RPC client are set up in the lifespan handler and
torn down on shutdown.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from .. import __version__
from ..actions.errors import BlinkError
from ..config import Settings, get_settings, validate_configuration
from ..infra.chain import close_chain_client, init_chain_client
from ..infra.db import close_database, init_database
from .routes import blink_error_handler, request_validation_handler, router


logger = logging.getLogger(__name__)


async def setup_system(settings: Settings):
    """Setup all system components."""
    logger.info("🔧 Setting up system components...")

    config = validate_configuration(settings)
    logger.info(f"Configuration: backend={config.backend_url}, rpc={'set' if config.rpc_url else 'unset'}")

    await init_database(config.db_path)
    logger.info("✅ Database initialized")

    init_chain_client(config.rpc_url, config.rpc_timeout_seconds)
    logger.info("✅ Solana RPC client initialized")


async def shutdown_system():
    """Shutdown all system components gracefully."""
    logger.info("🛑 Shutting down system...")
    await close_chain_client()
    await close_database()
    logger.info("✅ System shutdown complete")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """FastAPI lifespan context manager for startup and shutdown."""
    logger.info("🚀 Starting Blink Actions server...")
    await setup_system(app.state.settings)
    try:
        yield
    finally:
        await shutdown_system()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create the FastAPI application.

    `settings` defaults to the environment; routes and error handlers read
    it from `app.state.settings`.
    """
    app = FastAPI(
        title="Blink Actions API",
        description="Solana Actions metadata and unsigned transactions for stored blinks",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings or get_settings()
    app.add_exception_handler(BlinkError, blink_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.include_router(router)
    return app
