"""SQL implementation of MembershipRepository."""

from sqlalchemy import Table, exists, insert, select
from sqlalchemy.ext.asyncio import AsyncEngine

from ht6.domain.auth.model.role import Role
from ht6.domain.auth.model.value import CallerIdentity, SeasonCode
from ht6.domain.auth.port.membership_repository import MembershipRepository
from ht6.infrastructure.persistence.tables import (
    admin_table,
    hacker_table,
    mentor_table,
    sponsor_table,
    volunteer_table,
)

# Role -> table holding its membership rows. Fixed at import time.
MEMBERSHIP_TABLES: dict[Role, Table] = {
    Role.ADMIN: admin_table,
    Role.HACKER: hacker_table,
    Role.SPONSOR: sponsor_table,
    Role.MENTOR: mentor_table,
    Role.VOLUNTEER: volunteer_table,
}


class PostgresMembershipRepository(MembershipRepository):
    """Existence queries against the membership tables.

    Uses its own pooled connection per query (not the request's session) so
    that several role checks of one request can run concurrently.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine

    async def exists(
        self,
        role: Role,
        user_id: CallerIdentity,
        season_code: SeasonCode | None = None,
    ) -> bool:
        table = MEMBERSHIP_TABLES.get(role)
        if table is None:
            raise ValueError(f"Role {role!s} has no membership table")

        condition = table.c.user_id == str(user_id)
        if role.season_scoped:
            if season_code is None:
                raise ValueError(f"Role {role!s} requires a season code")
            condition = condition & (table.c.season_code == str(season_code))

        stmt = select(exists().where(condition))
        async with self.engine.connect() as conn:
            result = await conn.execute(stmt)
            return bool(result.scalar())

    async def add(
        self,
        role: Role,
        user_id: CallerIdentity,
        season_code: SeasonCode | None = None,
    ) -> None:
        """Insert a membership row. Used by operator tooling, not by request handling."""
        table = MEMBERSHIP_TABLES.get(role)
        if table is None:
            raise ValueError(f"Role {role!s} has no membership table")

        values: dict[str, str] = {"user_id": str(user_id)}
        if role.season_scoped:
            if season_code is None:
                raise ValueError(f"Role {role!s} requires a season code")
            values["season_code"] = str(season_code)

        async with self.engine.begin() as conn:
            await conn.execute(insert(table).values(**values))
