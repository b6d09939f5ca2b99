from fastapi import FastAPI
from starlette.middleware.sessions import SessionMiddleware

from social_authorize.settings import get_settings
from social_authorize.api import auth_router, system_router
from social_authorize.middleware.request_id import RequestIDMiddleware
from social_authorize.app.exceptions import register_exception_handlers
from social_authorize.app.logging_config import configure_logging


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Google sign-in and contacts demo",
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        debug=settings.server.debug,
    )

    # Sessions
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session.secret_key,
        session_cookie=settings.session.cookie_name,
        https_only=settings.session.https_only,
    )

    # Routers
    app.include_router(system_router)
    app.include_router(auth_router)

    # Middleware
    app.add_middleware(RequestIDMiddleware)

    # Exceptions, logging
    register_exception_handlers(app)
    configure_logging(settings.logging.as_json, settings.server.log_level)

    return app
