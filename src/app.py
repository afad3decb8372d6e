from fastapi import FastAPI
from typing import Any, AsyncGenerator
from .routers import commands
from contextlib import asynccontextmanager
import os
import logging
import httpx
from dotenv import load_dotenv

from src.commands.errors import ConfigurationError
from src.config.constants import (
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
    PACK_CONFIG_ENV,
    REQUEST_TIMEOUT_ENV,
)
from src.config.pack_loader import load_pack

# Configure logging at module level
logging.basicConfig(
    level=logging.WARNING,  # Set default to WARNING for all loggers
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler()],
)

# Set your application loggers to DEBUG
logging.getLogger("src").setLevel(logging.DEBUG)  # All src.* modules
logging.getLogger("__main__").setLevel(logging.DEBUG)  # Main module if needed

# Keep third-party loggers at INFO or WARNING to reduce noise
logging.getLogger("uvicorn.access").setLevel(logging.INFO)
logging.getLogger("uvicorn.error").setLevel(logging.INFO)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("asyncio").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


def get_request_timeout() -> float:
    raw_timeout = os.environ.get(REQUEST_TIMEOUT_ENV)
    if raw_timeout is None:
        return DEFAULT_REQUEST_TIMEOUT_SECONDS
    try:
        return float(raw_timeout)
    except ValueError as e:
        raise ConfigurationError(
            f"{REQUEST_TIMEOUT_ENV} must be a number, got '{raw_timeout}'"
        ) from e


# Compile the pack once at startup and share one HTTP client between commands
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[Any, Any]:
    # Load environment variables at startup
    env_path = os.path.join(os.path.dirname(__file__), "..", ".env")
    if os.path.exists(env_path):
        load_dotenv(env_path)
        logger.info(f"Loaded environment from {env_path}")
    else:
        logger.info(f"No .env file found at {env_path}, using system environment variables")

    config_path = os.environ.get(PACK_CONFIG_ENV)
    if not config_path:
        raise ConfigurationError(f"{PACK_CONFIG_ENV} environment variable is not set")

    timeout_seconds = get_request_timeout()
    async with httpx.AsyncClient(timeout=timeout_seconds) as client:
        app.state.command_registry = load_pack(
            config_path, client=client, timeout_seconds=timeout_seconds
        )
        yield
        app.state.command_registry = None


app = FastAPI(
    lifespan=lifespan,
    title="HTTP Command Pack",
    description="Runs the commands of a declarative pack document as templated HTTP requests and reports each outcome as a success or failure event",
    version="1.0.0",
)

# Include routers
app.include_router(commands.router)


@app.get("/")
async def root() -> dict[str, Any]:
    return {
        "message": "Welcome to the HTTP Command Pack API",
        "docs_url": "/docs",
        "endpoints": {"pack": "/pack"},
    }
