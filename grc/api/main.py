"""
FastAPI app assembly: logging, middleware, error handlers and router wiring.
"""
import logging
from contextlib import asynccontextmanager
import os

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from grc.utils.settings import get_settings

# Configure logging
LOG_LEVEL_NAME = get_settings().log_level
LOG_LEVEL = getattr(logging, LOG_LEVEL_NAME, logging.INFO)
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)
logger.setLevel(LOG_LEVEL)
logger.info("app_startup: log_level=%s", LOG_LEVEL_NAME)

from grc.db import database
from grc.db.filters import FilterError
from grc.db.repositories.base import EntityNotFound
from grc.api.cemeteries import router as cemeteries_router
from grc.api.graves import router as graves_router
from grc.api.burials import router as burials_router
from grc.api.covers import router as covers_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    # No migrations: the schema is created from the models on startup.
    database.init_db()
    logger.info("schema_ready: dialect=%s", database.engine.dialect.name)
    yield


app = FastAPI(
    title="Grave Registry Service",
    description="API for administering cemeteries, graves, burials and covers, with change logs and audit trails.",
    version="1.0.0",
    lifespan=lifespan,
)

# Avoid implicit trailing-slash redirects for predictable URLs
app.router.redirect_slashes = False

origins = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost,http://localhost:3000").split(",")
    if origin.strip()
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(FilterError)
async def filter_error_handler(request: Request, exc: FilterError):
    return JSONResponse({"detail": str(exc)}, status_code=status.HTTP_400_BAD_REQUEST)


@app.exception_handler(EntityNotFound)
async def entity_not_found_handler(request: Request, exc: EntityNotFound):
    return JSONResponse({"detail": str(exc)}, status_code=status.HTTP_404_NOT_FOUND)


app.include_router(cemeteries_router)
app.include_router(graves_router)
app.include_router(burials_router)
app.include_router(covers_router)


@app.get("/health")
def health_check():
    return {"status": "ok", "service": "grc-service"}
