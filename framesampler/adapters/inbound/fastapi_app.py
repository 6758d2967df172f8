"""
FastAPI application - primary inbound adapter.
"""
from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from framesampler import __version__
from framesampler.core.exceptions import FrameSamplerError, UploadValidationError
from framesampler.infrastructure.config import Settings
from framesampler.infrastructure.logging_config import setup_logging

logger = logging.getLogger(__name__)

settings = Settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup/shutdown lifecycle."""
    setup_logging(settings.logging.level)
    logger.info("FrameSampler server starting up (env=%s)", settings.app_env)
    if not hasattr(app.state, "container"):
        from framesampler.infrastructure.container import ApplicationContainer
        app.state.container = ApplicationContainer(settings)
    # creates the upload directory
    app.state.container.file_storage()
    yield
    logger.info("FrameSampler server shutting down...")
    await app.state.container.task_queue().shutdown()


app = FastAPI(
    title="FrameSampler API",
    description="Upload a video and extract its frames as JPEG images",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.web.allowed_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_logging_middleware(request: Request, call_next):
    """Log each request with method, path, status, and duration."""
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    logger.info(
        "%s %s -> %d (%.1fms)",
        request.method,
        request.url.path,
        response.status_code,
        duration_ms,
    )
    return response


@app.exception_handler(UploadValidationError)
async def upload_validation_handler(request: Request, exc: UploadValidationError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(FrameSamplerError)
async def framesampler_error_handler(request: Request, exc: FrameSamplerError):
    logger.error("Server error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": str(exc) or "Internal server error"})


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled exception on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# ── API routes ─────────────────────────────────────────────────

from framesampler.adapters.inbound.api.uploads import router as uploads_router  # noqa: E402

app.include_router(uploads_router, tags=["uploads"])


@app.get("/health")
async def health():
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Serve the API with uvicorn (``framesampler-server`` entry point)."""
    import uvicorn

    uvicorn.run(
        "framesampler.adapters.inbound.fastapi_app:app",
        host=settings.web.host,
        port=settings.web.port,
    )
