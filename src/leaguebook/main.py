"""FastAPI application factory."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from leaguebook.api.history import router as history_router
from leaguebook.api.seasons import router as seasons_router
from leaguebook.api.standings import router as standings_router
from leaguebook.config import Settings
from leaguebook.core.errors import ConfigInvariantError
from leaguebook.db.engine import create_engine, create_tables

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: create engine and tables. Shutdown: dispose the engine."""
    settings: Settings = app.state.settings
    engine = create_engine(settings.database_url)
    await create_tables(engine)
    app.state.engine = engine
    logger.info(
        "leaguebook_started env=%s readonly=%s",
        settings.leaguebook_env,
        settings.leaguebook_readonly,
    )

    yield

    await engine.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the Leaguebook FastAPI application."""
    settings = settings or Settings()

    logging.basicConfig(
        level=getattr(logging, settings.leaguebook_log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="Leaguebook",
        version="0.1.0",
        description="Fantasy league standings, playoff seeding and prize settlement",
        docs_url="/docs" if settings.leaguebook_env != "production" else None,
        lifespan=lifespan,
    )
    app.state.settings = settings

    @app.exception_handler(ConfigInvariantError)
    async def _config_invariant(request: Request, exc: ConfigInvariantError) -> JSONResponse:
        return JSONResponse(
            status_code=422, content={"detail": str(exc), "field": exc.field}
        )

    app.include_router(standings_router)
    app.include_router(history_router)
    app.include_router(seasons_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok", "env": settings.leaguebook_env}

    return app


app = create_app()
