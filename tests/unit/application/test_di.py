"""Tests for the application container."""

from unittest.mock import MagicMock

import pytest
from starlette.requests import Request

from ht6.application.di import create_container
from ht6.config import AuthConfig, Config, DatabaseConfig
from ht6.domain.auth.port.membership_repository import MembershipRepository
from ht6.domain.auth.service.role_cache import RequestAuthCache
from ht6.domain.auth.service.role_resolver import RoleResolver
from ht6.infrastructure.persistence.repository.membership import PostgresMembershipRepository
from ht6.util.di.scope import Scope


@pytest.fixture
def config() -> Config:
    return Config(
        database=DatabaseConfig(url="sqlite+aiosqlite:///:memory:"),
        auth=AuthConfig(role_check_timeout=2.5),
    )


class TestContainer:
    @pytest.mark.asyncio
    async def test_each_request_gets_its_own_cache(self, config):
        container = create_container(config)
        try:
            async with container(context={Request: MagicMock(spec=Request)}, scope=Scope.UOW) as first:
                cache_a = await first.get(RequestAuthCache)
                resolver = await first.get(RoleResolver)
                assert await first.get(RequestAuthCache) is cache_a
                assert resolver._cache is cache_a

            async with container(context={Request: MagicMock(spec=Request)}, scope=Scope.UOW) as second:
                assert await second.get(RequestAuthCache) is not cache_a
        finally:
            await container.close()

    @pytest.mark.asyncio
    async def test_resolver_uses_configured_timeout(self, config):
        container = create_container(config)
        try:
            async with container(context={Request: MagicMock(spec=Request)}, scope=Scope.UOW) as request_container:
                resolver = await request_container.get(RoleResolver)
            assert resolver._timeout == 2.5
        finally:
            await container.close()

    @pytest.mark.asyncio
    async def test_membership_repository_is_shared(self, config):
        container = create_container(config)
        try:
            repo = await container.get(MembershipRepository)
            assert isinstance(repo, PostgresMembershipRepository)
            assert await container.get(MembershipRepository) is repo
        finally:
            await container.close()
