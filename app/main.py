# app/main.py

"""Blog API - users, blog posts and comments with filtering and sorting."""

from typing import Annotated

from fastapi import Depends, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.exceptions import HTTPException as StarletteHTTPException
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from app.configs import WELCOME_MESSAGE, settings
from app.db import get_session
from app.errors import (
    BaseAppError,
    DatabaseError,
    app_exception_handler,
    database_exception_handler,
    http_exception_handler,
    store_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from app.middleware import (
    LoggingMiddleware,
    SecurityHeadersMiddleware,
    configure_cors,
    lifespan,
)
from app.routes import blog_router, user_router
from app.schemas import HealthCheckResponse, WelcomeResponse
from app.utils.helpers import today_str

app = FastAPI(
    title=settings.APP_NAME,
    description="REST API for users, blog posts and comments",
    version=settings.APP_VERSION,
    lifespan=lifespan,
    default_response_class=ORJSONResponse,
    swagger_ui_parameters={
        "docExpansion": "none",
        "operationsSorter": "method",
    },
)

configure_cors(app)

app.add_middleware(LoggingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(ProxyHeadersMiddleware, trusted_hosts="*")


routes = [
    user_router,
    blog_router,
]

_ = [app.include_router(router) for router in routes]

errors = [
    (DatabaseError, database_exception_handler),
    (BaseAppError, app_exception_handler),
    (RequestValidationError, validation_exception_handler),
    (StarletteHTTPException, http_exception_handler),
    (SQLAlchemyError, store_exception_handler),
    (Exception, unhandled_exception_handler),
]

_ = [app.add_exception_handler(exc_type, handler) for exc_type, handler in errors]


@app.get(
    "/health",
    tags=["🩺 Health"],
    summary="Health check endpoint",
    response_model=HealthCheckResponse,
    response_class=ORJSONResponse,
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "version": "1.0.0",
                        "status": "ok",
                        "timestamp": "2025-01-01 10:00:00",
                        "database": "ok",
                    },
                },
            },
        },
    },
    operation_id="health_check",
)
async def health_check(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> HealthCheckResponse:
    """
    Health check endpoint.

    Parameters
    ----------
    session : AsyncSession
        Database session used to probe connectivity.

    Returns
    -------
    HealthCheckResponse
        API version, overall status and database status.

    Examples
    --------
    Request
        GET /health
    Response
        200 OK
        {"version": "1.0.0", "status": "ok", "timestamp": "2025-01-01 10:00:00", "database": "ok"}
    """
    try:
        await session.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError:
        database = "unavailable"

    return HealthCheckResponse(
        version=app.version,
        status="ok" if database == "ok" else "degraded",
        timestamp=today_str(),
        database=database,
    )


@app.get(
    "/",
    tags=["🏠 Root"],
    summary="Root access",
    response_model=WelcomeResponse,
    response_class=ORJSONResponse,
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {"message": WELCOME_MESSAGE},
                },
            },
        },
    },
    operation_id="root_access",
)
async def root() -> WelcomeResponse:
    """
    Root endpoint.

    Returns
    -------
    WelcomeResponse
        Welcome message payload.

    Examples
    --------
    Request
        GET /
    Response
        200 OK
        {"message": "Blog API - Version REST"}
    """
    return WelcomeResponse(message=WELCOME_MESSAGE)


if __name__ == "__main__":
    from uvicorn import run

    run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level="info",
        reload=True,
        loop="uvloop",
        http="httptools",
    )
