"""
QC Dashboard API
Call scoring, team dashboard and coaching insights for the sales floor
"""
import logging
import os
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from app.api.v1.api import api_router
from app.core.config import settings
from app.db.session import engine

APP_VERSION = "1.0.0"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
QUIET_LOGGERS = ("urllib3", "sqlalchemy.engine", "aiosqlite", "multipart")


def setup_logging():
    """Rotating app.log under LOG_DIR plus console; DEBUG switches on verbose output"""
    os.makedirs(settings.LOG_DIR, exist_ok=True)

    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        format=LOG_FORMAT,
        handlers=[
            RotatingFileHandler(
                os.path.join(settings.LOG_DIR, "app.log"),
                maxBytes=10 * 1024 * 1024,
                backupCount=10,
                encoding="utf-8",
            ),
            logging.StreamHandler(),
        ],
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Schema comes from alembic or init_db.py, not from startup
    logger.info(f"QC Dashboard API {APP_VERSION} starting ({settings.ENVIRONMENT}, debug={settings.DEBUG})")
    yield
    await engine.dispose()
    logger.info("QC Dashboard API stopped, database connections closed")


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Call QC scoring, team dashboard and coaching insights API",
    version=APP_VERSION,
    debug=settings.DEBUG,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    docs_url=f"{settings.API_V1_STR}/docs",
    redoc_url=f"{settings.API_V1_STR}/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
# PDF reports and roster payloads
app.add_middleware(GZipMiddleware, minimum_size=1000)

app.include_router(api_router, prefix=settings.API_V1_STR)


@app.get("/health")
async def health_check():
    return {"status": "healthy", "service": "qc-dashboard-api", "version": APP_VERSION}


@app.get("/")
async def root():
    return {
        "message": settings.PROJECT_NAME,
        "docs": f"{settings.API_V1_STR}/docs",
        "health": "/health",
    }
