"""
Application factory.

Builds the FastAPI app from a Settings object: logging, database engine
and session factory, access gate, CORS and routers are wired here and
nowhere else.
"""
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional, Sequence
import logging
import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import make_url

from api import health, users
from config.settings import Settings, load_settings
from constants import APP_VERSION, ApiPaths, EnvKeys, LogConfig
from database import build_engine, build_session_factory
from exceptions import ConfigurationError
from init_db import init_database
from middleware.access_gate import AccessGateMiddleware, AccessRule
from utils.logging_utils import clear_logging_context, configure_logging, set_logging_context

logger = logging.getLogger(__name__)


def _ensure_sqlite_dir(database_url: str) -> None:
    url = make_url(database_url)
    if url.get_backend_name() == 'sqlite' and url.database and url.database != ':memory:':
        Path(url.database).expanduser().parent.mkdir(parents=True, exist_ok=True)


def create_app(
    settings: Optional[Settings] = None,
    access_rules: Optional[Sequence[AccessRule]] = None,
) -> FastAPI:
    """
    Create a configured application.

    Args:
        settings: Configuration (defaults to load_settings())
        access_rules: Access gate rules (defaults to protecting /api/**)

    Returns:
        FastAPI application

    Raises:
        ConfigurationError: If the access gate password is empty
    """
    settings = settings or load_settings()
    if not settings.auth_password:
        raise ConfigurationError("Access gate password is empty", missing_keys=[EnvKeys.AUTH_PASSWORD])

    configure_logging(settings.log_level, settings.log_dir if settings.log_to_file else None)

    _ensure_sqlite_dir(settings.database_url)
    engine = build_engine(settings.database_url)
    init_database(engine)

    if settings.auth_password_generated:
        logger.warning(f"Using generated security password: {settings.auth_password}")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"User Management API {APP_VERSION} started ({make_url(settings.database_url).get_backend_name()} backend)")
        yield
        engine.dispose()
        logger.info("Application shutdown complete")

    app = FastAPI(
        title="User Management API",
        description="CRUD service for user records",
        version=APP_VERSION,
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    app.add_middleware(
        AccessGateMiddleware,
        username=settings.auth_username,
        password=settings.auth_password,
        rules=access_rules,
        realm=settings.auth_realm,
    )

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        request_id = request.headers.get(LogConfig.REQUEST_ID_HEADER) or uuid.uuid4().hex[:12]
        set_logging_context(request_id=request_id)
        try:
            response = await call_next(request)
        finally:
            clear_logging_context()
        response.headers[LogConfig.REQUEST_ID_HEADER] = request_id
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(users.router, prefix=ApiPaths.API_PREFIX, tags=["users"])
    app.include_router(health.router, tags=["health"])

    return app
