import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

import lessonbook.models  # noqa: F401  (registers all models with Base.metadata)
from lessonbook.api.routes.availability import router as availability_router
from lessonbook.api.routes.lessons import router as lessons_router
from lessonbook.api.routes.notifications import router as notifications_router
from lessonbook.api.routes.payments import router as payments_router
from lessonbook.api.routes.slots import router as slots_router
from lessonbook.api.routes.teachers import router as teachers_router
from lessonbook.api.routes.users import router as users_router
from lessonbook.config import get_settings
from lessonbook.database import Base, engine
from lessonbook.schemas.system import StatusResponse


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    # Create tables on startup; there are no migrations yet
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = FastAPI(
        title="Lessonbook",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.include_router(users_router)
    app.include_router(teachers_router)
    app.include_router(availability_router)
    app.include_router(slots_router)
    app.include_router(lessons_router)
    app.include_router(payments_router)
    app.include_router(notifications_router)

    @app.get("/api/system/status", response_model=StatusResponse)
    async def system_status() -> StatusResponse:
        return StatusResponse(status="ok")

    return app


app = create_app()
