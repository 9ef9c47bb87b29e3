"""Auth domain models."""

from .role import SEASON_ROLES, Role
from .value import CallerIdentity, SeasonCode

__all__ = [
    "CallerIdentity",
    "Role",
    "SEASON_ROLES",
    "SeasonCode",
]
