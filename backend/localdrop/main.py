"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from localdrop import __version__
from localdrop.config import Settings, settings as default_settings
from localdrop.errors import LocalDropError
from localdrop.registries import build_registries
from localdrop.routes.files import router as files_router
from localdrop.routes.messages import router as messages_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the blob area; registries start empty on every run."""
    settings: Settings = app.state.settings
    app.state.registries.files.storage.ensure_dir()
    logger.info(
        f"Blob area at {Path(settings.FILE_STORAGE_PATH).resolve()}, "
        f"upload limit {settings.MAX_UPLOAD_BYTES} bytes"
    )
    yield
    registries = app.state.registries
    logger.info(
        f"Shutting down, dropping {len(registries.messages)} message(s) "
        f"and {len(registries.files)} file record(s)"
    )


def _error_body(message: str) -> dict:
    return {"success": False, "message": message, "data": None}


async def handle_localdrop_error(request: Request, exc: LocalDropError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected ({exc.status_code}): {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=_error_body(exc.message))


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    detail = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}" for err in errors
    )
    logger.warning(f"{request.method} {request.url.path} rejected (400): {detail}")
    return JSONResponse(status_code=400, content=_error_body(detail or "Invalid request"))


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the app with its own empty registries."""
    settings = settings or default_settings

    app = FastAPI(
        title="LocalDrop API",
        version=__version__,
        description="Share text messages and files with everyone on the local network.",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.registries = build_registries(settings)

    # CORS
    origins = [o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(LocalDropError, handle_localdrop_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)

    @app.get("/api/health")
    async def health_check():
        """Liveness plus current registry sizes."""
        registries = app.state.registries
        return {
            "status": "ok",
            "messages": len(registries.messages),
            "files": len(registries.files),
        }

    app.include_router(messages_router)
    app.include_router(files_router)

    # Browser UI goes last so it never shadows the API
    if settings.STATIC_DIR:
        static_dir = Path(settings.STATIC_DIR)
        if static_dir.is_dir():
            app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
        else:
            logger.warning(f"STATIC_DIR {static_dir} does not exist, UI not served")

    return app


app = create_app()
