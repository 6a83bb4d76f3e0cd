"""HTTP API for Wiki Docs."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from wikidocs import __version__
from wikidocs.api.routes import documents, folders, github, reviews, users
from wikidocs.config import get_settings
from wikidocs.exceptions import (
    DatabaseError,
    DuplicateError,
    NotFoundError,
    PreconditionError,
    RemoteTransportError,
    ValidationError,
)
from wikidocs.logging_config import setup_logging
from wikidocs.storage.database import Database, get_db
from wikidocs.storage.seed import seed_database

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


def register_exception_handlers(app: FastAPI) -> None:
    """Map service exceptions onto HTTP status codes."""

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return _error(status.HTTP_400_BAD_REQUEST, "Invalid request data")

    @app.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError):
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(PreconditionError)
    async def precondition_handler(request: Request, exc: PreconditionError):
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return _error(status.HTTP_404_NOT_FOUND, f"{exc.resource_type} not found")

    @app.exception_handler(DuplicateError)
    async def duplicate_handler(request: Request, exc: DuplicateError):
        return _error(status.HTTP_409_CONFLICT, str(exc))

    @app.exception_handler(RemoteTransportError)
    async def remote_handler(request: Request, exc: RemoteTransportError):
        logger.error(
            f"GitHub sync failed on {request.url.path}: {exc}",
            exc_info=exc,
            extra={"remote_status": exc.status},
        )
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to sync with GitHub")

    @app.exception_handler(DatabaseError)
    async def database_handler(request: Request, exc: DatabaseError):
        logger.error(f"Database error on {request.url.path}: {exc}", exc_info=exc)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def create_app(database: Database | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        database: Database to serve from; defaults to the global instance
    """
    settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings.log_level, settings.log_format)
        if app.state.database is None:
            app.state.database = get_db()
        app.state.database.create_tables()
        with app.state.database.session() as session:
            seed_database(session, include_samples=settings.seed_sample_data)
        logger.info("Wiki Docs API started", extra={"environment": settings.environment})
        yield

    app = FastAPI(
        title="Wiki Docs",
        description="Documentation review workflow with GitHub synchronization",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.database = database

    register_exception_handlers(app)
    for module in (documents, folders, reviews, github, users):
        app.include_router(module.router)

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "service": "wiki-docs"}

    return app


app = create_app()


def main() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    main()
