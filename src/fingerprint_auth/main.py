# src/fingerprint_auth/main.py
"""Main entry point for the fingerprint auth application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import PlainTextResponse

from fingerprint_auth.api import session_router
from fingerprint_auth.api.dependencies import FingerprintDep, build_session_policy
from fingerprint_auth.api.endpoints.session import attach_client_id
from fingerprint_auth.core.settings import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Fingerprint-keyed anonymous session API",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(session_router, prefix="/api")


@app.on_event("startup")
async def on_startup() -> None:
    app.state.session_policy = build_session_policy(settings)
    logger.info(
        "Session policy ready (store=%s, nonce_ttl_ms=%d)",
        settings.store_backend,
        settings.nonce_ttl_ms,
    )


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


# Registered last so that every route above takes precedence.
@app.get("/{full_path:path}", include_in_schema=False, response_class=PlainTextResponse)
async def fallback(full_path: str, fingerprint: FingerprintDep) -> PlainTextResponse:
    """Generic response for every path outside the API."""
    response = PlainTextResponse("Server app")
    attach_client_id(response, fingerprint)
    return response


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("fingerprint_auth.main:app", host="0.0.0.0", port=settings.port, reload=settings.debug)
