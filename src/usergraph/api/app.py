"""
Main FastAPI application for the usergraph service
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import Settings, get_settings
from ..database import Database
from ..logging import configure_logging, get_logger
from ..middleware import LoggingContextMiddleware
from ..repository import SqlAlchemyUserRepository, UserRepository

logger = get_logger(__name__)


def create_app(
    settings: Settings | None = None,
    *,
    repository: UserRepository | None = None,
    database: Database | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use; read from the environment when omitted
        repository: Storage handle for the resolvers. When omitted, a
            SqlAlchemyUserRepository over ``database`` is built.
        database: Database to back the default repository; built from
            ``settings`` when omitted. Ignored if ``repository`` is given.
    """
    settings = settings or get_settings()
    configure_logging(debug=settings.debug, level=settings.log_level)

    if repository is None:
        database = database or Database.from_settings(settings)
        repository = SqlAlchemyUserRepository(database)
    else:
        database = None

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        logger.info("Starting usergraph API...")

        if database is not None:
            if settings.db_sync:
                await database.create_schema()

            ok, error_message = await database.check_connection()
            if ok:
                logger.info("Database connection validation successful")
            else:
                logger.error(
                    "Database connection validation failed - requests will fail until it recovers",
                    error=error_message,
                )

        yield

        logger.info("Shutting down usergraph API...")
        if database is not None:
            await database.dispose()

    app = FastAPI(
        title="usergraph API",
        description="GraphQL CRUD service for users",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )
    app.state.settings = settings
    app.state.database = database
    app.state.repository = repository

    app.add_middleware(LoggingContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():  # pyright: ignore [reportUnusedFunction]
        """Health check endpoint."""
        if database is not None:
            ok, error_message = await database.check_connection()
            if not ok:
                return JSONResponse(
                    status_code=503,
                    content={
                        "status": "unhealthy",
                        "version": __version__,
                        "error": error_message,
                    },
                )
        return {"status": "healthy", "version": __version__}

    try:
        from ..graphql.schema import create_graphql_router, validate_schema

        logger.info("Validating GraphQL schema...")
        validate_schema()

        graphql_router = create_graphql_router(repository, graphiql=settings.debug)
        app.include_router(graphql_router, prefix="")
        logger.info("GraphQL endpoint initialized successfully", endpoint="/graphql")
    except Exception as e:  # pragma: no cover
        logger.error("Failed to initialize GraphQL endpoint", error=str(e))
        raise

    return app


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run(
        "usergraph.api.app:create_app",
        factory=True,
        host=_settings.host,
        port=_settings.port,
        reload=_settings.reload,
        log_level=_settings.log_level.lower(),
    )
