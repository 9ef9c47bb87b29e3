from typing import AsyncIterable

from dishka import from_context, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from ht6.config import Config
from ht6.domain.auth.port.membership_repository import MembershipRepository
from ht6.domain.season.port.repository import SeasonRepository
from ht6.infrastructure.persistence.database import (
    create_db_engine,
    create_session_factory,
)
from ht6.infrastructure.persistence.repository.membership import (
    PostgresMembershipRepository,
)
from ht6.infrastructure.persistence.repository.season import PostgresSeasonRepository
from ht6.util.di.base import Provider
from ht6.util.di.scope import Scope


class PersistenceProvider(Provider):
    config = from_context(provides=Config, scope=Scope.APP)

    # APP-scoped factories
    @provide(scope=Scope.APP)
    async def get_engine(self, config: Config) -> AsyncIterable[AsyncEngine]:
        engine = create_db_engine(config.database)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(self, engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    # UOW-scoped session (one per request)
    @provide(scope=Scope.UOW)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterable[AsyncSession]:
        async with session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise
            else:
                await session.commit()

    # Membership checks use the engine directly, one connection per query
    @provide(scope=Scope.APP)
    def get_membership_repo(self, engine: AsyncEngine) -> MembershipRepository:
        return PostgresMembershipRepository(engine)

    season_repo = provide(PostgresSeasonRepository, scope=Scope.UOW, provides=SeasonRepository)
