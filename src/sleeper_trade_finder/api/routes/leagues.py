"""
League API Routes

Endpoints for finding a user's leagues and the managers in a league.
"""

from typing import Annotated

from fastapi import APIRouter, Path, Query

from sleeper_trade_finder.api.dependencies import LeagueContextDep, SettingsDep, SleeperClientDep
from sleeper_trade_finder.models import League, User

router = APIRouter()


@router.get(
    "/user/{username}",
    response_model=list[League],
    summary="Get user's leagues",
    description="Get all leagues for a user in a given season.",
)
async def get_user_leagues(
    username: Annotated[str, Path(description="Sleeper username")],
    client: SleeperClientDep,
    settings: SettingsDep,
    season: Annotated[
        int | None, Query(description="NFL season year", ge=2009, le=2030)
    ] = None,
) -> list[League]:
    """Get all leagues for a user."""
    user = await client.get_user(username)
    if not user:
        return []

    return await client.get_user_leagues(user.user_id, season or settings.default_season)


@router.get(
    "/{league_id}/users",
    response_model=list[User],
    summary="Get league users",
    description="Get all users/managers in a league.",
)
async def get_league_users(
    ctx: LeagueContextDep,
) -> list[User]:
    """Get all users in the league."""
    return ctx.users
