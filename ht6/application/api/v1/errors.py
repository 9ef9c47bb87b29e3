"""Centralized error rendering for API routes.

Every failure that leaves the API goes through ErrorResponder, which picks the
redacted or the full rendering of an ApiError depending on who is asking.
"""

import logging
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from ht6.config import Config
from ht6.domain.auth.model.role import Role
from ht6.domain.auth.model.value import identity_from_authorization
from ht6.domain.auth.service.role_resolver import RoleResolver
from ht6.domain.shared.error import (
    ApiError,
    DatabaseError,
    ErrorDetail,
    ErrorResponse,
    GenericError,
)
from ht6.util.di.fastapi import resolve

logger = logging.getLogger(__name__)


class ErrorResponder:
    """Turns any exception into the JSON error envelope."""

    def __init__(self, config: Config) -> None:
        self.config = config

    async def respond(self, error: BaseException, request: Request) -> JSONResponse:
        is_admin = await self._is_admin(request)

        if isinstance(error, ApiError):
            if error.status_code >= 500 or isinstance(error, DatabaseError):
                logger.error(
                    "%s on %s %s: %r",
                    type(error).__name__,
                    request.method,
                    request.url.path,
                    error,
                    exc_info=error.__cause__ is not None,
                )
            body = error.to_admin_dict() if is_admin else error.to_dict()
            return JSONResponse(status_code=error.status_code, content=body)

        logger.exception(
            "Unhandled exception on %s %s",
            request.method,
            request.url.path,
            exc_info=error,
        )
        generic = GenericError(str(error))
        body = generic.to_admin_dict() if is_admin else generic.to_dict()
        return JSONResponse(status_code=generic.status_code, content=body)

    async def _is_admin(self, request: Request) -> bool:
        if self.config.dev:
            return True

        identity = identity_from_authorization(request.headers.get("Authorization"))
        if identity is None:
            return False

        try:
            resolver = await resolve(request, RoleResolver)
            return await resolver.resolve(identity, None, Role.ADMIN)
        except Exception:
            # The original error still gets rendered, just redacted.
            logger.warning("Admin check failed while rendering an error", exc_info=True)
            return False


def error_responses(*statuses: int) -> dict[int | str, dict[str, Any]]:
    """OpenAPI ``responses`` entries documenting the error envelope."""
    return {
        status: {"model": ErrorResponse, "description": HTTPStatus(status).phrase}
        for status in statuses
    }


def validation_error(exc: RequestValidationError) -> ApiError:
    details = [
        ErrorDetail(
            code="VALIDATION_ERROR",
            message=f"Invalid value for '{'.'.join(str(part) for part in err['loc'])}'",
            detail=err.get("msg"),
        )
        for err in exc.errors()
    ]
    return ApiError(400, details)


def http_error(exc: StarletteHTTPException) -> ApiError:
    return ApiError(
        exc.status_code,
        ErrorDetail(code=f"HTTP_{exc.status_code}", message=str(exc.detail)),
    )


class UnhandledErrorMiddleware:
    """Renders exceptions that escaped every exception handler.

    Sits inside ContainerMiddleware so the request's container is still open
    while the responder runs its admin check. If the response has already
    started there is nothing left to render and the exception propagates.
    """

    def __init__(self, app: ASGIApp, responder: ErrorResponder) -> None:
        self.app = app
        self.responder = responder

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            return await self.app(scope, receive, send)

        response_started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as exc:
            if response_started:
                raise
            request = Request(scope, receive=receive)
            response = await self.responder.respond(exc, request)
            await response(scope, receive, send)


def register_error_handlers(app: FastAPI, responder: ErrorResponder) -> None:
    """Route every error type through the responder.

    Must be called before the DI middleware is installed.
    """

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        return await responder.respond(exc, request)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return await responder.respond(validation_error(exc), request)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        response = await responder.respond(http_error(exc), request)
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    app.add_middleware(UnhandledErrorMiddleware, responder=responder)
