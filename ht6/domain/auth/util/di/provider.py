"""DI provider for auth domain."""

from dishka import from_context, provide
from starlette.requests import Request

from ht6.config import Config
from ht6.domain.auth.port.membership_repository import MembershipRepository
from ht6.domain.auth.service.role_cache import RequestAuthCache
from ht6.domain.auth.service.role_resolver import RoleResolver
from ht6.util.di.base import Provider
from ht6.util.di.scope import Scope


class AuthProvider(Provider):
    """DI provider for per-request authorization state."""

    request = from_context(provides=Request, scope=Scope.UOW)

    # Fresh, empty cache for every request
    auth_cache = provide(RequestAuthCache, scope=Scope.UOW)

    @provide(scope=Scope.UOW)
    def get_role_resolver(
        self,
        config: Config,
        membership_repo: MembershipRepository,
        auth_cache: RequestAuthCache,
    ) -> RoleResolver:
        return RoleResolver(
            _membership_repo=membership_repo,
            _cache=auth_cache,
            _timeout=config.auth.role_check_timeout,
        )
