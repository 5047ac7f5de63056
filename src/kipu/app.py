"""Kipu — FastAPI gateway application.

Hands out public uids for internal row ids and resolves them back.
Callers never see row ids without going through this boundary.
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from kipu.auth import make_api_key_checker
from kipu.config import KipuConfig, load_config
from kipu.errors import UidError
from kipu.routes import ids, meta
from kipu.uid import UidCodec

logger = logging.getLogger("kipu")
audit_logger = logging.getLogger("kipu.audit")

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: build the uid codec from the configured key."""
    config: KipuConfig = app.state.config
    if not config.uid_key:
        raise ValueError("uid key is not configured (set KIPU_UID_KEY)")
    app.state.codec = UidCodec(config.uid_key)
    logger.info("Kipu gateway ready")
    yield
    logger.info("Kipu gateway shut down")


async def uid_error_handler(request: Request, exc: UidError) -> JSONResponse:
    """Every rejected id looks the same to the caller; only the log knows why."""
    logger.warning(
        "Rejected id on %s %s (%s)", request.method, request.url.path, exc.kind
    )
    return JSONResponse(status_code=400, content={"detail": "Invalid id"})


def create_app(config: KipuConfig | None = None) -> FastAPI:
    """Application factory."""
    if config is None:
        config = load_config()

    app = FastAPI(
        title="Kipu",
        description="Opaque uid gateway — public ids for internal row ids",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.config = config

    check_key = make_api_key_checker(config.api_key)

    # ── Exception handlers ────────────────────────────────────

    app.add_exception_handler(UidError, uid_error_handler)

    # ── Audit middleware ──────────────────────────────────────

    @app.middleware("http")
    async def audit_log(request: Request, call_next):
        start = time.monotonic()
        response = await call_next(request)
        elapsed = time.monotonic() - start
        audit_logger.info(
            "%s %s %d %.3fs",
            request.method,
            request.url.path,
            response.status_code,
            elapsed,
        )
        return response

    # ── Routers ───────────────────────────────────────────────

    app.include_router(meta.router, dependencies=[Depends(check_key)])
    app.include_router(ids.router, dependencies=[Depends(check_key)])

    return app
