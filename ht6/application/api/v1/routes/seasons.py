"""Season routes."""

import asyncio
from typing import Annotated

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, Path, Request
from pydantic import BaseModel, Field

from ht6.application.api.v1.errors import error_responses
from ht6.application.api.v1.gate import require_roles
from ht6.domain.auth.model.role import Role
from ht6.domain.auth.model.value import (
    SEASON_CODE_LENGTH,
    SeasonCode,
    identity_from_authorization,
)
from ht6.domain.auth.service.role_resolver import RoleResolver
from ht6.domain.season.service.season import SeasonService

router = APIRouter(prefix="/seasons", tags=["Seasons"], route_class=DishkaRoute)

SeasonCodeParam = Annotated[
    str,
    Path(min_length=SEASON_CODE_LENGTH, max_length=SEASON_CODE_LENGTH),
]


class CreateSeasonRequest(BaseModel):
    """Request body for creating a season."""

    season_code: str = Field(min_length=SEASON_CODE_LENGTH, max_length=SEASON_CODE_LENGTH)


class MessageResponse(BaseModel):
    message: str


class SeasonResponse(BaseModel):
    """A season and its attached form ids."""

    season_id: str
    season_code: str
    hacker_application_form_id: str | None
    rsvp_form_id: str | None


class SeasonRolesResponse(BaseModel):
    """Roles the caller holds within one season."""

    season_code: str
    roles: list[Role]


@router.post(
    "",
    response_model=MessageResponse,
    dependencies=[Depends(require_roles(Role.ADMIN))],
    responses=error_responses(400, 403, 409, 500),
)
async def create_season(
    body: CreateSeasonRequest,
    service: FromDishka[SeasonService],
) -> MessageResponse:
    """Create a season. Requires Admin role."""
    await service.create_season(SeasonCode(body.season_code))
    return MessageResponse(message="success")


@router.get(
    "/{season_code}",
    response_model=SeasonResponse,
    dependencies=[Depends(require_roles(Role.ADMIN))],
    responses=error_responses(400, 403, 404, 500),
)
async def get_season(
    season_code: SeasonCodeParam,
    service: FromDishka[SeasonService],
) -> SeasonResponse:
    """Get a season by code. Requires Admin role."""
    season = await service.get_season(SeasonCode(season_code))
    return SeasonResponse(
        season_id=season.season_id,
        season_code=season.season_code,
        hacker_application_form_id=season.hacker_application_form_id,
        rsvp_form_id=season.rsvp_form_id,
    )


@router.get(
    "/{season_code}/roles",
    response_model=SeasonRolesResponse,
    dependencies=[Depends(require_roles(Role.PUBLIC))],
    responses=error_responses(400, 500),
)
async def get_my_roles(
    season_code: SeasonCodeParam,
    request: Request,
    resolver: FromDishka[RoleResolver],
) -> SeasonRolesResponse:
    """List the roles the caller holds in a season. Open to everyone."""
    identity = identity_from_authorization(request.headers.get("Authorization"))
    scope = SeasonCode(season_code)

    found = await asyncio.gather(*(resolver.resolve(identity, scope, role) for role in Role))
    held = [role for role, has_role in zip(Role, found) if has_role]
    return SeasonRolesResponse(season_code=season_code, roles=held)
