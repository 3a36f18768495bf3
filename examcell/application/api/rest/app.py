import logging
from contextlib import asynccontextmanager

import logfire
from dishka import AsyncContainer
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from examcell.application.api.v1.errors import map_examcell_error
from examcell.application.api.v1.routes import health, question_papers
from examcell.application.di import create_container
from examcell.config import Config, configure_logging
from examcell.domain.shared.authorization.startup import validate_all_handlers
from examcell.domain.shared.error import ExamCellError
from examcell.util.di.fastapi import setup_dishka

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await app.state.dishka_container.close()


def create_app(config: Config | None = None, container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application."""
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()  # type: ignore[call-arg]

    configure_logging(config.logging)
    logger.info("Starting exam cell server: %s v%s", config.server.name, config.server.version)

    # Every handler must declare its gate and every capability must have a rule
    validate_all_handlers()

    app_instance = FastAPI(
        title=config.server.name,
        description=config.server.description,
        version=config.server.version,
        lifespan=lifespan,
    )

    logfire.instrument_fastapi(app_instance)

    setup_dishka(container or create_container(config), app_instance)

    app_instance.include_router(health.router, prefix="/api/v1")
    app_instance.include_router(question_papers.router, prefix="/api/v1")

    # Maps domain and infrastructure errors to HTTP responses
    @app_instance.exception_handler(ExamCellError)
    async def examcell_error_handler(request: Request, exc: ExamCellError):
        http_exc = map_examcell_error(exc)
        return JSONResponse(
            status_code=http_exc.status_code,
            content=http_exc.detail,
            headers=http_exc.headers,
        )

    @app_instance.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(
            "Unhandled exception on %s %s",
            request.method,
            request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )

    return app_instance


# Create app instance for uvicorn
app = create_app()
