"""RigCheck — FastAPI application.

Mounts the builder gateway (/builder/*) on top of the compatibility
engine. The engine itself is pure; this layer only adapts HTTP.
"""

from __future__ import annotations

import logging
import math
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from rigcheck.api.builder import router as builder_router

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


# ──────────────────────────────────────────────
# Validation errors
# ──────────────────────────────────────────────


def _json_safe(value):
    """Replace inf/nan with their string form so the error body can be encoded."""
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    if isinstance(value, dict):
        return {k: _json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(v) for v in value]
    return value


async def validation_error_handler(request: Request, exc: RequestValidationError):
    """422 with the usual detail list; rejected inputs may be non-finite floats."""
    logger.info(
        "Rejected request to %s: %d validation errors",
        request.url.path, len(exc.errors()),
    )
    return JSONResponse(
        status_code=422,
        content={"detail": _json_safe(jsonable_encoder(exc.errors()))},
    )


# ──────────────────────────────────────────────
# Lifespan — startup / shutdown
# ──────────────────────────────────────────────


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging on startup."""
    level = os.getenv("RIGCHECK_LOG_LEVEL", "INFO").upper()
    logging.getLogger("rigcheck").setLevel(level)
    logger.info("RigCheck %s ready (log level %s)", VERSION, level)

    yield

    logger.info("Shutting down RigCheck")


# ──────────────────────────────────────────────
# App
# ──────────────────────────────────────────────


def create_app() -> FastAPI:
    """Factory function — creates and configures the FastAPI app."""
    app = FastAPI(
        title="RigCheck",
        description=(
            "Compatibility engine for custom PC builds.\n\n"
            "- `POST /builder/compatibility/check`: full rule evaluation\n"
            "- `POST /builder/compatibility/probe`: single-candidate pre-check\n"
            "- `POST /builder/summary`: price and power totals\n"
        ),
        version=VERSION,
        lifespan=lifespan,
    )

    # CORS — allow the builder frontend
    allowed_origins = os.getenv(
        "CORS_ORIGINS",
        "http://localhost:3000,http://localhost:5173",
    ).split(",")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in allowed_origins],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.include_router(builder_router)

    @app.get("/", tags=["Root"])
    async def root():
        return {
            "engine": "RigCheck",
            "version": VERSION,
            "routes": {
                "check": "/builder/compatibility/check",
                "probe": "/builder/compatibility/probe",
                "summary": "/builder/summary",
            },
        }

    return app


# ──────────────────────────────────────────────
# Entrypoint
# ──────────────────────────────────────────────

app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "rigcheck.api.app:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", "8000")),
        reload=True,
    )
