"""
FastAPI app assembly: logging, middleware, error envelopes and router wiring.
"""
import logging
from datetime import datetime, timezone

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request

from clubhouse.api import envelope
from clubhouse.utils import config

# Configure logging
LOG_LEVEL_NAME = config.log_level_name()
LOG_LEVEL = getattr(logging, LOG_LEVEL_NAME, logging.INFO)
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)
logger.setLevel(LOG_LEVEL)
logger.info("app_startup: log_level=%s", LOG_LEVEL_NAME)

from clubhouse.api.events import router as events_router
from clubhouse.api.races import router as races_router
from clubhouse.api.stories import router as stories_router
from clubhouse.api.uploads import router as uploads_router
from clubhouse.api.users import router as auth_router
from clubhouse.api.yacht_classes import router as yacht_classes_router

# Database schema is managed by Alembic migrations.

app = FastAPI(
    title="Clubhouse Service",
    description="API for the yacht club: events, races and results, stories and uploads.",
    version=config.app_version(),
)

# Avoid implicit trailing-slash redirects for predictable URLs
app.router.redirect_slashes = False

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(GZipMiddleware, minimum_size=1000)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    client = request.client.host if request.client else "-"
    logger.info("request: %s %s client=%s", request.method, request.url.path, client)
    return await call_next(request)


def _format_validation_error(error: dict) -> str:
    loc = [str(part) for part in error.get("loc", ())]
    # Drop the leading "body"/"query"/"path" marker
    field = ".".join(loc[1:]) or ".".join(loc)
    message = error.get("msg", "Invalid value")
    return f"{field}: {message}" if field else message


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    message = ", ".join(_format_validation_error(e) for e in exc.errors())
    return envelope.failure(message or "Invalid request", status.HTTP_400_BAD_REQUEST)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    if exc.status_code == status.HTTP_404_NOT_FOUND and detail == "Not Found":
        detail = "Route not found"
    response = envelope.failure(detail, exc.status_code)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("unhandled_error: %s %s", request.method, request.url.path)
    return envelope.failure("Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR)


app.include_router(auth_router)
app.include_router(events_router)
app.include_router(yacht_classes_router)
app.include_router(races_router)
app.include_router(stories_router)
app.include_router(uploads_router)

_uploads_dir = config.uploads_dir()
_uploads_dir.mkdir(parents=True, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=str(_uploads_dir), check_dir=False), name="uploads")


@app.get("/health")
def health_check():
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": config.app_version(),
    }
