"""Season service."""

import logging

from ht6.domain.auth.model.value import SeasonCode
from ht6.domain.season.model.season import Season
from ht6.domain.season.port.repository import SeasonRepository
from ht6.domain.shared.error import ApiError, ErrorDetail
from ht6.domain.shared.service import Service

logger = logging.getLogger(__name__)


class SeasonService(Service):
    _season_repo: SeasonRepository

    async def create_season(self, season_code: SeasonCode) -> Season:
        """Create a season. Raises a 409 ApiError if the code already exists."""
        season = await self._season_repo.create(season_code)
        if season is None:
            raise ApiError(
                409,
                ErrorDetail(
                    code="CONFLICT",
                    message="Conflicting seasonCode",
                    detail=f"Season '{season_code}' already exists",
                    suggestion="Pick an unused season code.",
                ),
            )
        logger.info("Season created: %s", season_code)
        return season

    async def get_season(self, season_code: SeasonCode) -> Season:
        season = await self._season_repo.get(season_code)
        if season is None:
            raise ApiError(
                404,
                ErrorDetail(
                    code="NOT_FOUND",
                    message="Season not found",
                    detail=f"No season with code '{season_code}'",
                    suggestion="Check the season code.",
                ),
            )
        return season
