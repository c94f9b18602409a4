"""
FastAPI application entry point.

Sets up the app, lifespan (DB connect/disconnect), CORS, logging, the error
translation handlers, and includes API routers.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from meetup.api import events, users
from meetup.config import Settings, get_settings
from meetup.database import close_mongo_connection, connect_to_mongo, create_mongo_client
from meetup.errors import AppError, ValidationError
from meetup.schemas.validation import format_errors
from meetup.services.event_gateway import EventGateway
from meetup.services.user_gateway import UserGateway

# Configure logging - single place for log format and level
logging.basicConfig(
    level=logging.DEBUG if get_settings().debug else logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def _warn_on_weak_secret(settings: Settings) -> None:
    secret = settings.jwt_secret or ""
    if not secret:
        logger.warning("JWT_SECRET is not set; every authenticated route will return 401.")
    elif len(secret) < 32 or "secret" in secret.lower() or "your-" in secret.lower():
        logger.warning("JWT_SECRET looks like a placeholder. Set a long random value in .env.")


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        error = ValidationError(errors=format_errors(exc.errors()))
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # Only the router raises these; a 404 means no route matched
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            message = f"Route {request.method} {request.url.path} not found"
        else:
            message = str(exc.detail)
        return JSONResponse(status_code=exc.status_code, content={"message": message})

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal server error"},
        )


def create_application(
    settings: Optional[Settings] = None,
    mongo_client=None,
) -> FastAPI:
    """
    Factory for the FastAPI app.

    mongo_client: an already constructed Motor-compatible client. When
    omitted, one is created at startup and closed at shutdown.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Lifespan context: runs on startup and shutdown.
        We use it to connect to MongoDB at start and disconnect at end.
        """
        owns_client = mongo_client is None
        client = create_mongo_client(settings) if owns_client else mongo_client
        await connect_to_mongo(client, settings.mongodb_database)
        app.state.mongo_client = client
        app.state.user_gateway = UserGateway()
        app.state.event_gateway = EventGateway()
        _warn_on_weak_secret(settings)
        yield
        if owns_client:
            await close_mongo_connection(client)

    app = FastAPI(
        title=settings.app_name,
        description="Events and social meetups: users, events, join/leave.",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_exception_handlers(app)

    app.include_router(events.router, prefix="/events", tags=["events"])
    app.include_router(users.router, prefix="/users", tags=["users"])

    return app


app = create_application()
