from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

import coachbook.models  # noqa: F401  register all models with Base.metadata
from coachbook.api.errors import register_error_handlers
from coachbook.api.routes.availability import router as availability_router
from coachbook.api.routes.bookings import router as bookings_router
from coachbook.api.routes.coaches import router as coaches_router
from coachbook.api.routes.profiles import router as profiles_router
from coachbook.config import get_settings
from coachbook.database import Base, engine
from coachbook.logging_config import configure_logging
from coachbook.schemas.system import StatusResponse


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    # Create tables on startup (dev convenience)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging()
    app = FastAPI(
        title="Coachbook",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    register_error_handlers(app)
    app.include_router(profiles_router)
    app.include_router(coaches_router)
    app.include_router(availability_router)
    app.include_router(bookings_router)

    @app.get("/api/system/status", response_model=StatusResponse)
    async def system_status() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()


def run() -> None:
    """Serve the API with uvicorn using host and port from settings."""
    settings = get_settings()
    uvicorn.run(
        "coachbook.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
