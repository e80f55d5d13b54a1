"""Minutes Studio API.

All feature routes are mounted under /api:

    POST /api/minutes           generate transcript, summary and minutes
    POST /api/upload-sign       presigned S3 upload URL for large audio files
    POST /api/export/{fmt}      html, docx (Word-compatible HTML) or txt download
    GET  /health
"""
import logging
import traceback

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from minutes_studio.config import get_settings
from minutes_studio.export.routes import router as export_router
from minutes_studio.minutes.routes import router as minutes_router
from minutes_studio.upload.routes import router as upload_router
from minutes_studio.utils.responses import error_response

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Minutes Studio API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(minutes_router, prefix="/api", tags=["minutes"])
app.include_router(upload_router, prefix="/api", tags=["upload"])
app.include_router(export_router, prefix="/api", tags=["export"])


@app.exception_handler(RequestValidationError)
async def invalid_request(request: Request, exc: RequestValidationError):
    return error_response(400, "invalid request body")


@app.exception_handler(Exception)
async def unhandled_exception(request: Request, exc: Exception):
    logging.getLogger(__name__).exception("Unhandled error on %s", request.url.path)
    return error_response(500, str(exc) or exc.__class__.__name__, "".join(traceback.format_exception(exc)))


@app.get("/health")
def health_check():
    return {"status": "ok", "ai": settings.ai_configured, "storage": settings.storage_configured}


def run() -> None:
    uvicorn.run("minutes_studio.main:app", host=settings.api_host, port=settings.api_port)
