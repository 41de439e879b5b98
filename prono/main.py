"""
API entry point
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from prono.core.config import get_settings
from prono.core.logging_config import setup_logging
from prono.database import Database, create_indexes

from prono.controllers.health_controller import router as health_router
from prono.controllers.users_controller import router as users_router
from prono.controllers.matches_controller import router as matches_router
from prono.controllers.predictions_controller import router as predictions_router
from prono.controllers.leaderboard_controller import router as leaderboard_router
from prono.controllers.admin_controller import router as admin_router

logger = logging.getLogger(__name__)

settings = get_settings()

CORS_ORIGINS = [
    origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()
]
# Frontend preview deployments get their own subdomain
CORS_ORIGIN_REGEX = r"https://.*\.vercel\.app" if settings.app_env == "production" else None


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.log_level)
    await Database.connect()
    await create_indexes()
    yield
    await Database.disconnect()

app = FastAPI(
    title="Prono API",
    description="Backend for the match prediction contest",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_origin_regex=CORS_ORIGIN_REGEX,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type"],
    max_age=86400,
)


@app.exception_handler(PyMongoError)
async def storage_error_handler(request: Request, exc: PyMongoError):
    # Not retried: the caller gets a 500 and may resubmit
    logger.error(
        "Database error on %s %s", request.method, request.url.path, exc_info=exc
    )
    return JSONResponse(status_code=500, content={"detail": "Database error"})


app.include_router(health_router)
app.include_router(users_router)
app.include_router(matches_router)
app.include_router(predictions_router)
app.include_router(leaderboard_router)
app.include_router(admin_router)


@app.get("/")
async def root():
    # Root endpoint, handy to check the API is up
    return {
        "name": "Prono API",
        "version": "1.0.0",
        "docs": "/docs"
    }
