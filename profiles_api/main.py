from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from . import __version__
from .access import ProfileError
from .config import Settings
from .passwords import PasswordVerifier, Sha256PasswordVerifier
from .router import router as profiles_router
from .store import JsonRecordStore, RecordStore, RecordStoreError

logger = logging.getLogger(__name__)


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request body"
    first = errors[0]
    loc = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    msg = first.get("msg", "invalid value")
    return f"Invalid request: {loc}: {msg}" if loc else f"Invalid request: {msg}"


def create_app(
    settings: Optional[Settings] = None,
    *,
    store: Optional[RecordStore] = None,
    verifier: Optional[PasswordVerifier] = None,
) -> FastAPI:
    """
    Build the API.

    store/verifier default to the JSON files under settings.data_dir and the
    unsalted SHA-256 verifier; tests pass their own.
    """
    settings = settings or Settings.from_env()

    app = FastAPI(
        title="Chat Profiles API",
        version=__version__,
    )

    app.state.settings = settings
    app.state.store = store if store is not None else JsonRecordStore.from_settings(settings)
    app.state.verifier = verifier if verifier is not None else Sha256PasswordVerifier()
    app.state.reserved_names = {name.strip().lower() for name in settings.reserved_names if name.strip()}

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ----------------------------
    # Exception handlers
    # ----------------------------

    @app.exception_handler(ProfileError)
    async def profile_error_handler(request: Request, exc: ProfileError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(RecordStoreError)
    async def store_error_handler(request: Request, exc: RecordStoreError) -> JSONResponse:
        logger.exception("Record store failure on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(status_code=500, content={"message": "Internal server error"})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"message": _validation_message(exc)})

    # ----------------------------
    # Mount routers
    # ----------------------------

    app.include_router(profiles_router)

    # Static assets last so /api routes win.
    if settings.public_dir.is_dir():
        app.mount("/", StaticFiles(directory=str(settings.public_dir), html=True), name="public")
    else:
        logger.info("Public directory %s not found; static files disabled", settings.public_dir)

    return app
