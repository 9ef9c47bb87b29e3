"""SQL implementation of SeasonRepository."""

import uuid

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ht6.domain.auth.model.value import SeasonCode
from ht6.domain.season.model.season import Season
from ht6.domain.season.port.repository import SeasonRepository
from ht6.infrastructure.persistence.db_error import translate_db_error
from ht6.infrastructure.persistence.tables import season_table


def _row_to_season(row: dict) -> Season:
    return Season(
        season_id=row["season_id"],
        season_code=SeasonCode(row["season_code"]),
        hacker_application_form_id=row["hacker_application_form_id"],
        rsvp_form_id=row["rsvp_form_id"],
    )


class PostgresSeasonRepository(SeasonRepository):
    """Season persistence. Works against PostgreSQL and SQLite."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _insert(self):
        dialect = self.session.bind.dialect.name if self.session.bind is not None else ""
        if dialect == "sqlite":
            return sqlite_insert(season_table)
        return pg_insert(season_table)

    async def create(self, season_code: SeasonCode) -> Season | None:
        stmt = (
            self._insert()
            .values(season_id=str(uuid.uuid4()), season_code=str(season_code))
            .on_conflict_do_nothing(index_elements=["season_code"])
            .returning(*season_table.c)
        )
        try:
            result = await self.session.execute(stmt)
            row = result.mappings().first()
            await self.session.flush()
        except SQLAlchemyError as exc:
            await self.session.rollback()
            raise translate_db_error(exc) from exc
        return _row_to_season(dict(row)) if row else None

    async def get(self, season_code: SeasonCode) -> Season | None:
        stmt = select(season_table).where(season_table.c.season_code == str(season_code))
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as exc:
            raise translate_db_error(exc) from exc
        row = result.mappings().first()
        return _row_to_season(dict(row)) if row else None
