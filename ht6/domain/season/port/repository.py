"""Repository port for Season persistence."""

from abc import abstractmethod
from typing import Protocol

from ht6.domain.auth.model.value import SeasonCode
from ht6.domain.season.model.season import Season


class SeasonRepository(Protocol):
    """Repository for Season persistence.

    Storage failures are raised as ApiErrors already translated by the adapter.
    """

    @abstractmethod
    async def create(self, season_code: SeasonCode) -> Season | None:
        """Insert a season. Returns None if the season code is already taken."""
        ...

    @abstractmethod
    async def get(self, season_code: SeasonCode) -> Season | None:
        ...
