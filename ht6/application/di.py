from dishka import AsyncContainer, Provider, make_async_container

from ht6.config import Config
from ht6.domain.auth.util.di.provider import AuthProvider
from ht6.domain.season.util.di.provider import SeasonProvider
from ht6.infrastructure.persistence.di import PersistenceProvider
from ht6.util.di.scope import Scope


def create_container(config: Config | None = None, *overrides: Provider) -> AsyncContainer:
    """Build the application container.

    ``overrides`` are registered last, so their factories replace the defaults
    (tests swap in fake repositories this way).
    """
    if config is None:
        # Pydantic Settings populates from env vars at runtime
        config = Config()  # type: ignore[call-arg]

    return make_async_container(
        PersistenceProvider(),
        AuthProvider(),
        SeasonProvider(),
        *overrides,
        context={Config: config},
        scopes=Scope,  # type: ignore[arg-type]  # Custom scope class
    )
