"""Database management commands."""

import asyncio
import sys

import cyclopts
from sqlalchemy.exc import SQLAlchemyError

from ht6.cli.console import get_console
from ht6.config import Config, configure_logging
from ht6.domain.auth.model.role import Role
from ht6.domain.auth.model.value import CallerIdentity
from ht6.infrastructure.persistence.database import create_db_engine, create_tables
from ht6.infrastructure.persistence.db_error import translate_db_error
from ht6.infrastructure.persistence.repository.membership import (
    PostgresMembershipRepository,
)

app = cyclopts.App(name="db", help="Database management commands")


async def _init(config: Config) -> None:
    engine = create_db_engine(config.database)
    try:
        await create_tables(engine)
    finally:
        await engine.dispose()


async def _grant_admin(config: Config, user_id: CallerIdentity) -> None:
    engine = create_db_engine(config.database)
    try:
        await PostgresMembershipRepository(engine).add(Role.ADMIN, user_id)
    finally:
        await engine.dispose()


@app.command
def init() -> None:
    """Create all tables that do not exist yet."""
    console = get_console()
    config = Config()  # type: ignore[call-arg]
    configure_logging(config.logging)

    try:
        asyncio.run(_init(config))
    except SQLAlchemyError as e:
        error = translate_db_error(e)
        console.error(f"Could not create tables ({error.code})", hint=str(e))
        sys.exit(1)

    console.success(f"Tables ready at {config.database.url}")


@app.command
def grant_admin(user_id: str) -> None:
    """Give a user the global admin role.

    Args:
        user_id: Identity of the user, as sent in their bearer credential.
    """
    console = get_console()
    config = Config()  # type: ignore[call-arg]
    configure_logging(config.logging)

    try:
        asyncio.run(_grant_admin(config, CallerIdentity(user_id)))
    except SQLAlchemyError as e:
        error = translate_db_error(e)
        console.error(f"Could not grant admin to {user_id} ({error.code})", hint=str(e))
        sys.exit(1)

    console.success(f"{user_id} is now an admin")
