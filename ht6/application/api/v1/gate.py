"""Role gate for API routes.

Usage::

    @router.get("/seasons/{season_code}", dependencies=[Depends(require_roles(Role.ADMIN))])
    async def get_season(...): ...

A request passes when the caller holds at least one of the listed roles.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable

from fastapi import Request

from ht6.domain.auth.model.role import Role
from ht6.domain.auth.model.value import identity_from_authorization, season_code_or_none
from ht6.domain.auth.service.role_resolver import RoleResolver
from ht6.domain.shared.error import ApiError, ErrorDetail
from ht6.util.di.fastapi import resolve

logger = logging.getLogger(__name__)


def forbidden(roles: Iterable[Role]) -> ApiError:
    return ApiError(
        403,
        ErrorDetail(
            code="FORBIDDEN",
            message="You do not have authorization access",
            detail=f"Required role(s): {', '.join(role.value for role in roles)}",
            suggestion="Check your user type",
        ),
    )


async def any_true(checks: Iterable[Awaitable[bool]]) -> bool:
    """Run checks concurrently. Stop at the first True.

    Checks still pending when the outcome is known are cancelled. An exception
    from any check cancels the rest and propagates.
    """
    tasks = [asyncio.ensure_future(check) for check in checks]
    try:
        for next_done in asyncio.as_completed(tasks):
            if await next_done:
                return True
        return False
    finally:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)


def require_roles(*roles: Role) -> Callable[[Request], Awaitable[None]]:
    """Build a FastAPI dependency that admits callers holding any of ``roles``."""
    if not roles:
        raise ValueError("require_roles() needs at least one role")

    # dict.fromkeys keeps declaration order
    wanted = tuple(dict.fromkeys(roles))
    public = Role.PUBLIC in wanted

    async def gate(request: Request) -> None:
        if public:
            return

        identity = identity_from_authorization(request.headers.get("Authorization"))
        scope = season_code_or_none(request.path_params.get("season_code"))
        resolver = await resolve(request, RoleResolver)

        if await any_true(resolver.resolve(identity, scope, role) for role in wanted):
            logger.debug("Access granted: %s %s", request.method, request.url.path)
            return

        logger.warning(
            "Access denied: %s %s, authenticated=%s, season=%s, required=%s",
            request.method,
            request.url.path,
            identity is not None,
            scope,
            ",".join(wanted),
        )
        raise forbidden(wanted)

    return gate
