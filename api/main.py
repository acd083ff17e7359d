"""FastAPI application entrypoint for the maternal health reminder registry."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.models.schemas import HealthResponse
from api.routes.patients import router as patients_router
from api.routes.reminders import router as reminders_router
from core.errors import ConfigurationError, NotFoundError, RegistryError, ValidationError
from core.logging_config import configure_logging
from core.settings import get_settings

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent.parent
STATIC_TYPES = {".js": "application/javascript", ".css": "text/css"}

settings = get_settings()
configure_logging(settings.log_level)

app = FastAPI(
    title=settings.app_name,
    version="0.1.0",
    description=(
        "Registry of antenatal patients with LMP-based pregnancy dating and "
        "prenatal visit reminders."
    ),
)

app.include_router(patients_router)
app.include_router(reminders_router)


@app.exception_handler(StarletteHTTPException)
def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    detail = exc.detail if exc.status_code != 404 or exc.detail != "Not Found" else "Endpoint not found"
    return JSONResponse(status_code=exc.status_code, content={"error": detail})


@app.exception_handler(RequestValidationError)
def request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": "Invalid request", "details": jsonable_encoder(exc.errors())})


@app.exception_handler(RegistryError)
def registry_error(request: Request, exc: RegistryError) -> JSONResponse:
    if isinstance(exc, ValidationError):
        return JSONResponse(status_code=400, content={"error": str(exc)})
    if isinstance(exc, NotFoundError):
        return JSONResponse(status_code=404, content={"error": "Patient not found"})
    if isinstance(exc, ConfigurationError):
        logger.error("Configuration error on %s: %s", request.url.path, exc)
        return JSONResponse(status_code=500, content={"error": "Server configuration error"})
    logger.error("Unhandled registry error on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=500, content={"error": "Something went wrong!"})


@app.exception_handler(Exception)
def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s", request.url.path)
    return JSONResponse(status_code=500, content={"error": "Something went wrong!"})


@app.get("/health", response_model=HealthResponse)
def healthcheck() -> HealthResponse:
    """Simple readiness probe used by deployment tooling."""

    return HealthResponse(
        status="OK",
        message=f"{settings.app_name} is running",
        timestamp=datetime.now(timezone.utc),
    )


@app.get("/", response_class=HTMLResponse)
def index() -> HTMLResponse:
    """Serve the registration and dashboard page."""

    html_path = BASE_DIR / "templates" / "index.html"
    if not html_path.exists():  # pragma: no cover - safety guard
        raise HTTPException(status_code=404, detail="UI template missing")
    return HTMLResponse(html_path.read_text(encoding="utf-8"))


@app.get("/static/{asset}")
def static_asset(asset: str) -> Response:
    """Serve static assets like the UI JavaScript."""

    file_path = BASE_DIR / "static" / Path(asset).name
    if not file_path.exists():
        raise HTTPException(status_code=404, detail="Static asset not found")
    media_type = STATIC_TYPES.get(file_path.suffix, "text/plain")
    return Response(file_path.read_text(encoding="utf-8"), media_type=media_type)
