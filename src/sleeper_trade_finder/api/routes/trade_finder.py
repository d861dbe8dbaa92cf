"""
Trade Finder API Routes

Endpoints for team strength profiles, trade recommendations and
manual trade analysis.
"""

from typing import Annotated

from fastapi import APIRouter, HTTPException, Query

from sleeper_trade_finder.api.dependencies import SeasonQuery, TradeFinderDep, WeightsDep
from sleeper_trade_finder.models import (
    ManualTradeRequest,
    TeamProfile,
    TradeAnalysis,
    TradeCandidate,
)

router = APIRouter()


@router.get(
    "/{league_id}/profiles",
    response_model=list[TeamProfile],
    summary="Get team strength profiles",
    description="Positional strength and surplus/deficit labels for every team.",
)
async def get_team_profiles(
    service: TradeFinderDep,
    season: SeasonQuery = None,
) -> list[TeamProfile]:
    """Get strength profiles for every team in the league."""
    return await service.compute_team_profiles(season)


@router.get(
    "/{league_id}/recommendations",
    response_model=list[TradeCandidate],
    summary="Get trade recommendations",
    description=(
        "Ranked trades between the user's team and the rest of the league. "
        "Position weights can be tuned with the qb/rb/wr/te parameters."
    ),
)
async def get_trade_recommendations(
    service: TradeFinderDep,
    weights: WeightsDep,
    username: Annotated[str, Query(description="Sleeper username or display name")],
    season: SeasonQuery = None,
) -> list[TradeCandidate]:
    """Get ranked trade recommendations for a user's team."""
    team_name = service.resolve_user_team(username)
    if team_name is None:
        raise HTTPException(
            status_code=404,
            detail=f"User {username} has no team in league {service.ctx.league_id}",
        )
    return await service.find_trade_recommendations(team_name, season, weights)


@router.post(
    "/{league_id}/analyze",
    response_model=TradeAnalysis,
    summary="Analyze a manual trade",
    description="Value a hand-built trade with the recommendation engine's formulas.",
)
async def analyze_manual_trade(
    service: TradeFinderDep,
    request: ManualTradeRequest,
) -> TradeAnalysis:
    """Value a trade given the player IDs each side sends."""
    analysis = await service.analyze_trade(
        request.team1_gives,
        request.team2_gives,
        season=request.season,
        weights=request.weights,
    )
    if analysis is None:
        raise HTTPException(
            status_code=404,
            detail="Each side must send at least one rostered QB, RB, WR or TE",
        )
    return analysis
