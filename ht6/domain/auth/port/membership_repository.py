"""Repository port for role membership lookups."""

from abc import abstractmethod
from typing import Protocol

from ht6.domain.auth.model.role import Role
from ht6.domain.auth.model.value import CallerIdentity, SeasonCode


class MembershipRepository(Protocol):
    """Answers "does at least one membership row exist" for a role."""

    @abstractmethod
    async def exists(
        self,
        role: Role,
        user_id: CallerIdentity,
        season_code: SeasonCode | None = None,
    ) -> bool:
        """Return True if the user holds ``role``.

        ``season_code`` is required for season-scoped roles and ignored for ADMIN.
        Storage failures are raised as-is; callers translate them.
        """
        ...
