"""Custom Dishka FastAPI integration using Scope.UOW."""

from typing import TypeVar

from dishka import AsyncContainer
from starlette.requests import HTTPConnection, Request
from starlette.types import ASGIApp, Receive, Scope, Send
from starlette.websockets import WebSocket

from ht6.util.di.scope import Scope as HT6Scope

T = TypeVar("T")


class ContainerMiddleware:
    """ASGI middleware that creates a Scope.UOW container for each request.

    A custom version of dishka.integrations.starlette.ContainerMiddleware that
    uses Scope.UOW instead of dishka.Scope.REQUEST. Everything UOW-scoped
    (session, RequestAuthCache, RoleResolver) lives exactly as long as one request.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(
        self,
        scope: Scope,
        receive: Receive,
        send: Send,
    ) -> None:
        if scope["type"] not in ("http", "websocket"):
            return await self.app(scope, receive, send)

        request: Request | WebSocket
        context: dict[type[Request | WebSocket], Request | WebSocket]

        if scope["type"] == "http":
            request = Request(scope, receive=receive, send=send)
            context = {Request: request}
        else:
            request = WebSocket(scope, receive, send)
            context = {WebSocket: request}

        async with request.app.state.dishka_container(
            context,
            scope=HT6Scope.UOW,
        ) as request_container:
            request.state.dishka_container = request_container
            return await self.app(scope, receive, send)


def setup_dishka(container: AsyncContainer, app) -> None:
    """Setup Dishka DI with custom Scope.UOW middleware.

    Must be called after every middleware that needs the request container, so
    that ContainerMiddleware ends up outside of them.
    """
    app.add_middleware(ContainerMiddleware)
    app.state.dishka_container = container


async def resolve(connection: HTTPConnection, dependency: type[T]) -> T:
    """Get a dependency from the current request's UOW container."""
    container: AsyncContainer = connection.state.dishka_container
    return await container.get(dependency)
