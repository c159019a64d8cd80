import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import Engine

from nessy_storage.config import Settings, settings
from nessy_storage.database import create_db_engine
from nessy_storage.emulator import EmulatorFactory
from nessy_storage.errors import NotFoundError, StorageError
from nessy_storage.routers import api_router
from nessy_storage.services.settings_store import SettingsStore
from nessy_storage.services.snapshot_service import StateSnapshotService
from nessy_storage.services.title_screen_cache import TitleScreenCache
from nessy_storage.store.blob_database import BlobDatabase
from nessy_storage.text_slot import FileTextSlot, TextSlot


def configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )
    for name in ("sqlalchemy.engine", "uvicorn.access"):
        logging.getLogger(name).setLevel(logging.WARNING)


logger = logging.getLogger(__name__)


def create_app(
    config: Settings = settings,
    *,
    engine: Engine | None = None,
    settings_slot: TextSlot | None = None,
    emulator_factory: EmulatorFactory | None = None,
) -> FastAPI:
    """Build the API; storage is opened in the lifespan, once per process."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        db = BlobDatabase(engine if engine is not None else create_db_engine(config.db_path))
        store = SettingsStore(settings_slot or FileTextSlot(config.settings_path))
        app.state.db = db
        app.state.settings_store = store
        app.state.snapshots = StateSnapshotService(db)
        app.state.title_screens = TitleScreenCache(db, frames=config.title_screen_frames)
        app.state.emulator_factory = emulator_factory
        logger.info("Application started")
        yield
        logger.info("Shutting down...")
        try:
            store.save()
        except OSError:
            logger.exception("Failed to persist settings")
        try:
            db.close()
            logger.info("Database engine disposed")
        except Exception:
            logger.exception("Failed to dispose database engine")
        logger.info("Shutdown complete")

    app = FastAPI(title="Nessy Storage", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:5173"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(NotFoundError)
    async def _not_found(_request: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(StorageError)
    async def _storage_error(_request: Request, exc: StorageError) -> JSONResponse:
        logger.error("Storage failure: %s", exc)
        return JSONResponse(status_code=500, content={"detail": "Storage failure"})

    app.include_router(api_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "healthy"}

    return app
