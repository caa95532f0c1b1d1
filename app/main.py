import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from app.api.trips import router as trips_router
from app.config.settings import settings
from app.core.logger import setup_logger
from app.db.models import Base
from app.db.session import check_database_connection, get_engine
from scripts.migrate_add_trip_regen_lock import migrate_add_trip_regen_lock


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Ensure the schema exists before serving requests.

    Note: FastAPI requires async for lifespan context manager,
    even if no await operations are used.
    """
    check_database_connection()

    logger.info("Ensuring database tables exist")
    Base.metadata.create_all(bind=get_engine())
    logger.info("Database tables verified")

    # Databases created before the regeneration lock existed lack the column
    migrate_add_trip_regen_lock()

    await asyncio.sleep(0)
    yield


def create_app() -> FastAPI:
    setup_logger(level=settings.log_level, log_file=settings.log_file, serialize=settings.log_json)

    app = FastAPI(title="Trip Itinerary Planner", version="0.1.0", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    app.include_router(trips_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
