"""
FastAPI Application

Main application setup and configuration.

Usage:
    uvicorn api.app:app --reload

    # Or run directly
    python -m api.app
"""

import json
import logging
import os
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import health, distribution, claims
from api.errors import (
    APIError,
    api_error_handler,
    distributor_error_handler,
    generic_error_handler,
)
from core.schemas.errors import DistributorException


def _resolve_log_level() -> int:
    """Resolve log level from DISTRIBUTOR_LOG_LEVEL or distributor.json, defaulting to INFO."""
    raw = os.getenv("DISTRIBUTOR_LOG_LEVEL")
    if raw is None:
        cfg_path = Path.cwd() / "distributor.json"
        if cfg_path.exists():
            try:
                with open(cfg_path) as f:
                    raw = json.load(f).get("log_level")
            except (OSError, ValueError):
                raw = None
    return getattr(logging, (raw or "INFO").upper(), logging.INFO)


logging.basicConfig(
    level=_resolve_log_level(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Merkle Distributor API",
        description="""
HTTP API for a Merkle-committed one-time claim distributor.

## Endpoints

- **GET /distribution** - Published root and claim progress
- **GET /proofs/{index}** - Entry and inclusion proof for an index
- **GET /claims/{index}** - Whether an index has been claimed
- **POST /claims** - Redeem an entry with its proof
- **GET /health** - Health check

## Claim errors

- `400 INVALID_PROOF` - proof does not reconstruct the published root
- `409 ALREADY_CLAIMED` - the index has already been paid out
- `502 TRANSFER_FAILED` - the transfer could not be completed
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register exception handlers
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(DistributorException, distributor_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(distribution.router)
    app.include_router(claims.router)

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
