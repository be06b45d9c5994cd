"""
HTTP surface for the extraction pipeline.

POST /extract takes a multipart form (`file`, optional `useLLM`) and answers
with {"ok": true, "summary": ..., "rawTextPreview": ...}.  Errors come back
as {"error", "details"}: 400 for bad uploads and undecodable or empty
documents, 500 for anything unexpected.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from .config import Settings, configure_logging, load_settings
from .errors import ResumeExtractError, UploadError
from .llm_client import CompletionClient
from .pipeline import extract_resume

logger = logging.getLogger(__name__)


def get_settings() -> Settings:
    """Read once per request so a changed .env/credential applies without restart."""
    return load_settings()


def get_completion_client() -> Optional[CompletionClient]:
    """None lets the structurer build the client from settings."""
    return None


async def resume_extract_exception_handler(request: Request, exc: ResumeExtractError) -> JSONResponse:
    logger.info("request rejected: %s (%s)", type(exc).__name__, exc.details)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, "details": exc.details},
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unexpected error on %s", request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Error interno del servidor", "details": str(exc) or type(exc).__name__},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ResumeExtractError, resume_extract_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)


def create_app() -> FastAPI:
    configure_logging(load_settings().log_level)

    app = FastAPI(
        title="Resume Extract API",
        description="Résumé document → structured record",
        version="0.1.0",
    )
    register_exception_handlers(app)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("Request: %s %s", request.method, request.url.path)
        response = await call_next(request)
        logger.info("Response: %s", response.status_code)
        return response

    @app.get("/health", include_in_schema=False)
    async def health():
        return {"status": "ok"}

    @app.post("/extract")
    async def extract(
        request: Request,
        settings: Settings = Depends(get_settings),
        client: Optional[CompletionClient] = Depends(get_completion_client),
    ):
        form = await request.form()
        upload = form.get("file")
        use_llm = form.get("useLLM") == "true"

        if not isinstance(upload, UploadFile):
            raise UploadError("el campo 'file' debe ser un archivo")

        data = await upload.read(settings.max_upload_bytes + 1)
        if len(data) > settings.max_upload_bytes:
            raise UploadError(
                f"más de {settings.max_upload_bytes} bytes",
                message="Archivo demasiado grande",
            )

        result = await run_in_threadpool(
            extract_resume,
            data,
            settings,
            use_llm=use_llm,
            content_type=upload.content_type,
            client=client,
        )
        return result.to_response()

    return app


app = create_app()
