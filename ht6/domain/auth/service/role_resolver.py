"""Role resolution for the current caller, memoized per request."""

import asyncio
import logging

from ht6.domain.auth.model.role import Role
from ht6.domain.auth.model.value import CallerIdentity, SeasonCode
from ht6.domain.auth.port.membership_repository import MembershipRepository
from ht6.domain.auth.service.role_cache import RequestAuthCache
from ht6.domain.shared.error import ApiError, DatabaseError, ErrorDetail
from ht6.domain.shared.service import Service
from ht6.infrastructure.persistence.db_error import translate_db_error

logger = logging.getLogger(__name__)


class RoleResolver(Service):
    """Decides whether a caller holds a role.

    Bound to one request: the cache is that request's RequestAuthCache, so a given
    role is looked up in storage at most once per request.
    """

    _membership_repo: MembershipRepository
    _cache: RequestAuthCache
    _timeout: float | None = None

    async def resolve(
        self,
        identity: CallerIdentity | None,
        scope: SeasonCode | None,
        role: Role,
    ) -> bool:
        if role is Role.PUBLIC:
            return True
        if identity is None:
            return False
        if role is Role.USER:
            # Every authenticated caller counts as a user for now.
            return True

        cached = self._cache.get(role)
        if cached is not None:
            logger.debug("Role cache hit: role=%s, result=%s", role, cached)
            return cached

        if role.season_scoped and scope is None:
            return False

        found = await self._query(role, identity, scope if role.season_scoped else None)
        return self._cache.set(role, found)

    async def _query(
        self,
        role: Role,
        identity: CallerIdentity,
        scope: SeasonCode | None,
    ) -> bool:
        logger.debug("Role lookup: role=%s, season=%s", role, scope)
        try:
            return await asyncio.wait_for(
                self._membership_repo.exists(role, identity, scope),
                timeout=self._timeout,
            )
        except TimeoutError as exc:
            logger.error("Role lookup timed out after %ss: role=%s", self._timeout, role)
            raise DatabaseError(
                503,
                ErrorDetail(
                    code="DATABASE_TIMEOUT",
                    message="The role check did not complete in time.",
                    detail=f"Membership query for role '{role}' exceeded {self._timeout}s",
                ),
            ) from exc
        except ApiError:
            raise
        except Exception as exc:
            raise translate_db_error(exc) from exc
