from dishka import provide

from ht6.domain.season.port.repository import SeasonRepository
from ht6.domain.season.service.season import SeasonService
from ht6.util.di.base import Provider
from ht6.util.di.scope import Scope


class SeasonProvider(Provider):
    @provide(scope=Scope.UOW)
    def get_season_service(self, season_repo: SeasonRepository) -> SeasonService:
        return SeasonService(_season_repo=season_repo)
