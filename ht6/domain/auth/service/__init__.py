"""Auth domain services."""

from .role_cache import RequestAuthCache
from .role_resolver import RoleResolver

__all__ = ["RequestAuthCache", "RoleResolver"]
