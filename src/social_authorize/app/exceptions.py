from __future__ import annotations

from typing import Any, Dict

import httpx
from fastapi import FastAPI
from fastapi.responses import JSONResponse

from social_authorize.exceptions import (
    AuthenticationError,
    AuthorizeError,
    ConfigurationError,
    PaginationLimitExceeded,
)


def _error_body(exc: AuthorizeError) -> Dict[str, Any]:
    body: Dict[str, Any] = {"detail": str(exc)}
    if exc.error:
        body["error"] = exc.error
    if exc.description:
        body["error_description"] = exc.description
    return body


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AuthenticationError)
    async def authentication_error_handler(_, exc: AuthenticationError):
        return JSONResponse(status_code=401, content=_error_body(exc))

    @app.exception_handler(ConfigurationError)
    async def configuration_error_handler(_, exc: ConfigurationError):
        return JSONResponse(status_code=500, content=_error_body(exc))

    @app.exception_handler(PaginationLimitExceeded)
    async def pagination_error_handler(_, exc: PaginationLimitExceeded):
        return JSONResponse(status_code=502, content=_error_body(exc))

    @app.exception_handler(httpx.HTTPError)
    async def httpx_error_handler(_, exc: httpx.HTTPError):
        return JSONResponse(status_code=502, content={"detail": f"External API error: {str(exc)}"})
