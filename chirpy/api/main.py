import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from chirpy import __version__
from chirpy.adapters.auth.passwords import Argon2PasswordHasher
from chirpy.adapters.auth.tokens import JWTTokenService
from chirpy.adapters.clock import SystemClock
from chirpy.adapters.sqlite.migrator import SQLiteMigrator
from chirpy.api.routes import admin, auth, chirps, health, users
from chirpy.app_shell.config import ConfigError, Settings, load_settings, validate_settings
from chirpy.app_shell.hit_counter import APP_PREFIX, HitCounter, HitCounterMiddleware
from chirpy.ports.clock import ClockPort

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings: Settings = app.state.settings

    # Validate config and prepare the schema on startup (fail-fast)
    try:
        validate_settings(settings)
        SQLiteMigrator(settings.db_path).run_migrations()
    except ConfigError as e:
        logger.critical("Configuration invalid: %s", e)
        raise
    logger.info("Chirpy started (platform=%s, db=%s)", settings.platform, settings.db_path)

    yield


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.debug("Rejected request body on %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "error decoding request json"},
    )


def create_app(
    settings: Settings | None = None,
    *,
    clock: ClockPort | None = None,
    password_hasher: Argon2PasswordHasher | None = None,
) -> FastAPI:
    settings = settings if settings is not None else load_settings()
    clock = clock if clock is not None else SystemClock()

    app = FastAPI(title="Chirpy API", version=__version__, lifespan=lifespan)

    app.state.settings = settings
    app.state.clock = clock
    app.state.hit_counter = HitCounter()
    app.state.password_hasher = password_hasher or Argon2PasswordHasher()
    app.state.token_service = JWTTokenService(clock=clock)

    app.add_exception_handler(StarletteHTTPException, http_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]

    # --- Routers ---
    app.include_router(health.router, prefix="/api", tags=["Health"])
    app.include_router(users.router, prefix="/api", tags=["Users"])
    app.include_router(auth.router, prefix="/api", tags=["Auth"])
    app.include_router(chirps.router, prefix="/api", tags=["Chirps"])
    app.include_router(admin.router, prefix="/admin", tags=["Admin"])

    # --- Static app surface (counted) ---
    app.mount(
        APP_PREFIX,
        StaticFiles(directory=settings.filepath_root, html=True, check_dir=False),
        name="app",
    )
    app.add_middleware(HitCounterMiddleware, counter=app.state.hit_counter)

    return app
