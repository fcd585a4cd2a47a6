"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures middleware, exception handlers, and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, Response, status

from src.adapters.repository.connection import ConnectionProvider
from src.api.errors import register_exception_handlers
from src.api.routes import CONFIGURATION_MESSAGE, INTERNAL_ERROR_MESSAGE, router
from src.config.settings import Settings, get_settings
from src.domain.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "registration",
        "description": "Professional pre-registration intake",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    The connection pool opens lazily on first use, so startup does not
    touch the database. Shutdown closes the pool if it was opened.
    """
    logger.info("Application startup complete")

    yield

    logger.info("Shutting down application...")
    app.state.connections.close()


def add_cors_headers(app: FastAPI, settings: Settings) -> None:
    """Attach permissive CORS headers to every response, errors included."""
    cors_headers = {
        "Access-Control-Allow-Origin": settings.cors_allow_origin,
        "Access-Control-Allow-Methods": settings.cors_allow_methods,
        "Access-Control-Allow-Headers": settings.cors_allow_headers,
    }

    @app.middleware("http")
    async def cors_middleware(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        response = await call_next(request)
        response.headers.update(cors_headers)
        return response


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application with its connection provider, handlers and routes."""
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level)

    application = FastAPI(
        title="precadastro",
        description="Professional pre-registration API - Sign-up intake for a services marketplace",
        version="0.1.0",
        openapi_tags=tags_metadata,
        lifespan=lifespan,
    )
    application.state.connections = ConnectionProvider(settings)

    register_exception_handlers(application)
    add_cors_headers(application, settings)
    application.include_router(router)

    @application.get("/health")
    def health_check(request: Request) -> dict[str, str]:
        """
        Health check endpoint with database validation.

        Returns 200 OK if application and database are healthy.
        """
        try:
            with request.app.state.connections.connection() as conn:
                conn.execute("SELECT 1")
        except ConfigurationError:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=CONFIGURATION_MESSAGE,
            ) from None
        except Exception:
            logger.exception("Health check failed")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=INTERNAL_ERROR_MESSAGE,
            ) from None

        return {"status": "healthy"}

    return application


app = create_app()
