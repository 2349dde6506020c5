"""BuildDost API - FastAPI app."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import structlog

from builddost.config import get_settings
from builddost.errors import BuildDostError
from builddost.logging_config import setup_logging_from_settings
from builddost.storage import seed_defaults

from . import routers
from .dependencies import get_storage
from .middleware import CorrelationMiddleware

API_VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    # Fails fast on missing LLM_API_KEY
    settings = get_settings()
    setup_logging_from_settings(settings)

    storage = get_storage()
    await storage.init()
    await seed_defaults(storage)
    yield
    await storage.close()


app = FastAPI(
    title="BuildDost API",
    description="AI project generation, template gallery and code export",
    version=API_VERSION,
    lifespan=lifespan,
)

app.add_middleware(CorrelationMiddleware)


def failure(status_code: int, message: str) -> JSONResponse:
    """The ``{success: false, error}`` envelope."""
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


@app.exception_handler(BuildDostError)
async def builddost_error_handler(request: Request, exc: BuildDostError) -> JSONResponse:
    logger = structlog.get_logger()
    if exc.status_code >= 500:  # noqa: PLR2004
        logger.error("request_error", error=exc.message, error_type=type(exc).__name__)
    else:
        logger.warning("request_error", error=exc.message, error_type=type(exc).__name__)
    return failure(exc.status_code, exc.public_message)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = format_validation_errors(exc.errors())
    structlog.get_logger().warning("request_validation_failed", error=message)
    return failure(status.HTTP_400_BAD_REQUEST, message)


def format_validation_errors(errors: list[dict]) -> str:
    """One line per invalid field, e.g. ``prompt: Field required``."""
    lines = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        field = ".".join(loc)
        lines.append(f"{field}: {error.get('msg')}" if field else str(error.get("msg")))
    return "; ".join(lines) or "Invalid request"


@app.get("/")
async def root():
    """Root endpoint - API information."""
    return {
        "name": "BuildDost API",
        "version": API_VERSION,
        "description": "AI project generation, template gallery and code export",
    }


app.include_router(routers.health.router)
app.include_router(routers.users.router, prefix="/api")
app.include_router(routers.projects.router, prefix="/api")
app.include_router(routers.templates.router, prefix="/api")
app.include_router(routers.components.router, prefix="/api")
app.include_router(routers.ai.router, prefix="/api")


def run() -> None:
    """Console entrypoint: serve the app with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run("builddost.api.main:app", host=settings.api_host, port=settings.api_port)
