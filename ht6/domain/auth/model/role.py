"""Roles a caller can hold."""

from enum import StrEnum


class Role(StrEnum):
    """Capability tags.

    USER, PUBLIC and ADMIN are global. The rest only exist within a season.
    """

    USER = "user"
    PUBLIC = "public"
    ADMIN = "admin"
    HACKER = "hacker"
    SPONSOR = "sponsor"
    MENTOR = "mentor"
    VOLUNTEER = "volunteer"

    @property
    def season_scoped(self) -> bool:
        return self in SEASON_ROLES


SEASON_ROLES: frozenset[Role] = frozenset(
    {Role.HACKER, Role.SPONSOR, Role.MENTOR, Role.VOLUNTEER}
)
