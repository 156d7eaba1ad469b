from __future__ import annotations

# Standard library
import os
import logging as _logging
from contextlib import asynccontextmanager
from typing import Final, Any, AsyncIterator

# Third-party
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from strawberry.fastapi import GraphQLRouter

# Local application imports
from domain.activity.application import ActivityService
from domain.activity.exceptions import (
    ConfigurationError,
    InvalidActivityError,
    PersistenceError,
)
from graphql_api.context import GraphQLContext, create_context
from graphql_api.schema import schema
from infrastructure.config import get_log_level, get_repository_backend
from infrastructure.persistence.activity_repository_factory import (
    get_activity_repository,
    reset_activity_repository,
)
from infrastructure.persistence.mongodb import (
    MongoActivityRepository,
    close_mongo_client,
)
from api.activities import router as activities_router

# --- Basic logging configuration (minimal) ---
_LOG_LEVEL = get_log_level()
_logging.basicConfig(
    level=getattr(_logging, _LOG_LEVEL, _logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)

_lg = _logging.getLogger("startup")
if _lg.level == 0:  # not set explicitly
    _lg.setLevel(getattr(_logging, _LOG_LEVEL, _logging.INFO))

# Versione letta da env (Docker build ARG -> ENV APP_VERSION)
APP_VERSION = os.getenv("APP_VERSION", "0.0.0-dev")

# Explicit export per mypy/tests
__all__: list[str] = []


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    """Application lifecycle: repository startup and MongoDB client cleanup.

    STARTUP:
      - risolve il repository (REPOSITORY_BACKEND); un URI malformato
        solleva ConfigurationError e blocca l'avvio
      - con backend mongodb assicura l'indice su userId
    SHUTDOWN:
      - chiude il client MongoDB condiviso (no-op se mai creato)
    """
    logger = _logging.getLogger("startup")
    backend = get_repository_backend()

    logger.info("lifespan.startup", extra={"repository_backend": backend})

    repository = get_activity_repository()
    if isinstance(repository, MongoActivityRepository):
        await repository.ensure_indexes()
        logger.info(
            "lifespan.mongodb_ready",
            extra={"database": repository.context.database_name},
        )

    logger.info("lifespan.ready", extra={"status": "serving"})
    try:
        yield
    finally:
        logger.info("lifespan.shutdown", extra={"status": "cleanup"})
        close_mongo_client()
        reset_activity_repository()


app = FastAPI(
    title="Fitness Activity Backend",
    version=APP_VERSION,
    lifespan=lifespan,
)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/version")
async def version() -> dict[str, str]:
    return {"version": APP_VERSION}


@app.exception_handler(PersistenceError)
async def persistence_error_handler(_: Request, exc: PersistenceError) -> JSONResponse:
    return JSONResponse(
        status_code=503,
        content={"error": "persistence_error", "operation": exc.operation, "detail": str(exc)},
    )


@app.exception_handler(InvalidActivityError)
async def invalid_activity_handler(_: Request, exc: InvalidActivityError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={"error": "invalid_activity", "field": exc.field, "detail": str(exc)},
    )


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(_: Request, exc: ConfigurationError) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={"error": "configuration_error", "detail": str(exc)},
    )


# ============================================
# GraphQL Context Setup
# ============================================


def get_graphql_context(request: Request) -> GraphQLContext:
    """Create GraphQL context bound to the process-wide activity repository."""
    return create_context(
        activity_service=ActivityService(get_activity_repository()),
        request=request,
    )


graphql_app: Final[GraphQLRouter[Any, Any]] = GraphQLRouter(
    schema, context_getter=get_graphql_context
)
app.include_router(graphql_app, prefix="/graphql")

# REST API: Activity endpoints
app.include_router(activities_router)


# ============================================
# Run with uvicorn
# ============================================

if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", "8080"))
    uvicorn.run(
        "app:app",
        host="0.0.0.0",
        port=port,
        reload=os.getenv("ENVIRONMENT") == "development",
    )
