"""
Module 05 - FastAPI Application

Main application setup and configuration.

Usage:
    uvicorn api.app:app --reload

    # Or run directly
    python -m api.app
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.deps import load_runtime_config
from api.routes import health, tree, verify
from api.errors import (
    APIError,
    api_error_handler,
    generic_error_handler,
    whitelist_error_handler,
)
from core.config.runtime import LoggingConfig
from core.schemas.errors import WhitelistException


def _resolve_log_level(log_config: LoggingConfig) -> int:
    """Map the configured level name to a logging level, defaulting to INFO."""
    return getattr(logging, (log_config.level or "INFO").upper(), logging.INFO)


def setup_logging(log_config: LoggingConfig) -> None:
    """Configure logging from LoggingConfig (whitelist.yaml, then WHITELIST_LOG_* env)."""
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_config.file:
        handlers.append(logging.FileHandler(log_config.file))

    logging.basicConfig(
        level=_resolve_log_level(log_config),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=handlers,
    )


setup_logging(load_runtime_config().logging)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Whitelist Merkle API",
        description="""
HTTP API for committing to an address/amount whitelist with a Merkle tree.

## Endpoints

- **POST /tree** - Compute the root (and optionally layers and proofs)
- **POST /proof** - Inclusion proof for one entry, by index or address
- **POST /verify** - Check a proof against a root
- **GET /health** - Health check

## Leaf encoding

- `packed` - keccak256(address ++ uint256), as `abi.encodePacked` (default)
- `padded` - address left-padded to 32 bytes, as `abi.encode`
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register exception handlers
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(WhitelistException, whitelist_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(tree.router)
    app.include_router(verify.router)

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
