# taskboard/backend/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import text

from taskboard.backend.core.config import settings
from taskboard.backend.core.errors import register_exception_handlers
from taskboard.backend.core.logging_config import setup_logging
from taskboard.backend.db.session import create_all_tables, engine

# model import registers the table on SQLModel.metadata
from taskboard.backend.models import task as _m_task  # noqa: F401

from taskboard.backend.routers import task

setup_logging(settings.log_level.upper())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.db_auto_create:
        create_all_tables()
        logger.info("tables created (DB_AUTO_CREATE)")
    yield


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(task.router)


@app.get("/health")
def health_app():
    return {"ok": True}


@app.get("/health/db")
def health_db():
    # Schema migration is a deployment concern. Runtime only verifies connectivity.
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return {"ok": True}
    except Exception:
        logger.exception("database health check failed")
        raise HTTPException(status_code=500, detail="Database connection failed")
