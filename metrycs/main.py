# metrycs/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from metrycs.core.config import settings
from metrycs.core.exceptions import MetrycsServiceError
from metrycs.core.runtime import get_current_time, get_rng
from metrycs.features import api
from metrycs.features.events.repository import build_sample_events, get_event_repository

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}...")

    repository = get_event_repository()
    if settings.SEED_SAMPLE_EVENTS and len(repository) == 0:
        events = build_sample_events(
            organization_id=settings.SAMPLE_ORGANIZATION_ID,
            creator_id=settings.SAMPLE_CREATOR_ID,
            now=get_current_time(),
            rng=get_rng(),
        )
        repository.add_many(events)
        logger.info(f"Seeded {len(events)} sample events")

    yield

    logger.info("Shutting down...")


app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION, lifespan=lifespan)


@app.exception_handler(MetrycsServiceError)
async def service_error_handler(request: Request, exc: MetrycsServiceError) -> JSONResponse:
    """Structured response for errors raised by the service layer."""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.message, "error_code": exc.error_code},
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


app.include_router(api.api_router, prefix=settings.API_PREFIX)


@app.get("/health")
def health_check():
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
