"""Global test fixtures."""

import asyncio
import os

# Must be set before any test module imports the app module, which builds an
# app from Config() at import time.
os.environ.setdefault("HT6_DATABASE__URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("HT6_SERVER__ENV", "test")

import pytest  # noqa: E402

from ht6.domain.auth.model.role import Role  # noqa: E402
from ht6.domain.auth.service.role_cache import RequestAuthCache  # noqa: E402
from ht6.domain.auth.service.role_resolver import RoleResolver  # noqa: E402


class FakeMembershipRepository:
    """In-memory MembershipRepository that records every query."""

    def __init__(self) -> None:
        self.members: set[tuple[Role, str, str | None]] = set()
        self.calls: list[tuple[Role, str, str | None]] = []
        self.delays: dict[Role, float] = {}
        self.failures: dict[Role, BaseException] = {}
        self.cancelled: list[Role] = []

    def grant(self, role: Role, user_id: str, season_code: str | None = None) -> None:
        self.members.add((role, user_id, season_code if role.season_scoped else None))

    def calls_for(self, role: Role) -> int:
        return sum(1 for called_role, _, _ in self.calls if called_role is role)

    async def exists(self, role, user_id, season_code=None) -> bool:
        self.calls.append((role, user_id, season_code))
        try:
            if role in self.delays:
                await asyncio.sleep(self.delays[role])
        except asyncio.CancelledError:
            self.cancelled.append(role)
            raise
        if role in self.failures:
            raise self.failures[role]
        return (role, user_id, season_code) in self.members


@pytest.fixture
def membership_repo() -> FakeMembershipRepository:
    return FakeMembershipRepository()


@pytest.fixture
def auth_cache() -> RequestAuthCache:
    return RequestAuthCache()


@pytest.fixture
def resolver(membership_repo: FakeMembershipRepository, auth_cache: RequestAuthCache) -> RoleResolver:
    return RoleResolver(_membership_repo=membership_repo, _cache=auth_cache, _timeout=1.0)
