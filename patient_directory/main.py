"""
Patient Directory - FastAPI Application Entry Point

Registers the patients router and the error handler for directory failures.
Serves the static browser client from the /static directory.
"""

import logging
from pathlib import Path

from dotenv import load_dotenv

# Resolve .env relative to project root (parent of patient_directory/)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=True)

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from patient_directory.config import PROJECT_ROOT, settings
from patient_directory.core.errors import DirectoryError, InvalidQuery
from patient_directory.models.schemas import ErrorResponse
from patient_directory.routers import patients

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Patient Directory")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)


@app.exception_handler(DirectoryError)
async def directory_error_handler(request: Request, exc: DirectoryError) -> JSONResponse:
    """Map store and query failures to a machine-readable error body."""
    if isinstance(exc, InvalidQuery):
        logger.warning("Rejected %s: %s", request.url.path, exc.detail)
    else:
        logger.error("%s failed (%s): %s", request.url.path, exc.code, exc.detail)
    body = ErrorResponse(error=exc.code, detail=exc.detail)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


# Register routers
app.include_router(patients.router, prefix="/api/patients", tags=["patients"])

# Serve the client at root - must be last so it doesn't shadow API routes
_static_dir = Path(settings.STATIC_DIR)
if not _static_dir.is_absolute():
    _static_dir = PROJECT_ROOT / _static_dir
app.mount("/", StaticFiles(directory=str(_static_dir), html=True), name="static")
