"""
API Dependencies

Shared dependencies for FastAPI route handlers including
client management, league context creation and position weights.
"""

import logging
from typing import Annotated

from fastapi import Depends, HTTPException, Path, Query

from sleeper_trade_finder.clients.sleeper import LeagueContext, SleeperAPIError, SleeperClient
from sleeper_trade_finder.config import Settings, get_settings
from sleeper_trade_finder.models import PositionWeights
from sleeper_trade_finder.services.trade_finder import TradeFinderService

logger = logging.getLogger(__name__)

_DEFAULTS = PositionWeights()


class ClientManager:
    """
    Manages SleeperClient lifecycle for the application.

    Creates a single client instance that can be reused across requests,
    so the player directory and season stats caches are shared.
    """

    _client: SleeperClient | None = None

    @classmethod
    async def get_client(cls) -> SleeperClient:
        """Get or create the SleeperClient instance."""
        if cls._client is None:
            cls._client = SleeperClient()
            await cls._client.__aenter__()
        return cls._client

    @classmethod
    async def close_client(cls) -> None:
        """Close the SleeperClient instance."""
        if cls._client is not None:
            await cls._client.__aexit__(None, None, None)
            cls._client = None


async def get_sleeper_client() -> SleeperClient:
    """Dependency to get the SleeperClient."""
    return await ClientManager.get_client()


async def get_league_context(
    league_id: Annotated[str, Path(description="Sleeper league ID")],
    client: Annotated[SleeperClient, Depends(get_sleeper_client)],
) -> LeagueContext:
    """
    Dependency to create a LeagueContext for a given league.

    Raises HTTPException 404 if the league is not found, 502 if Sleeper fails.
    """
    try:
        return await LeagueContext.create(client, league_id)
    except SleeperAPIError as e:
        if e.status_code == 404:
            raise HTTPException(status_code=404, detail=f"League not found: {league_id}")
        logger.error("Failed to load league %s: %s", league_id, e.message)
        raise HTTPException(
            status_code=502,
            detail=f"Sleeper API error for league {league_id}: {e.message}",
        )


def get_trade_finder(
    client: Annotated[SleeperClient, Depends(get_sleeper_client)],
    ctx: Annotated[LeagueContext, Depends(get_league_context)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> TradeFinderService:
    """Dependency to get a TradeFinderService bound to the requested league."""
    return TradeFinderService(client, ctx, settings)


def get_position_weights(
    qb: Annotated[float, Query(description="QB scarcity weight", gt=0)] = _DEFAULTS.QB,
    rb: Annotated[float, Query(description="RB scarcity weight", gt=0)] = _DEFAULTS.RB,
    wr: Annotated[float, Query(description="WR scarcity weight", gt=0)] = _DEFAULTS.WR,
    te: Annotated[float, Query(description="TE scarcity weight", gt=0)] = _DEFAULTS.TE,
) -> PositionWeights:
    """Dependency building PositionWeights from query parameters."""
    return PositionWeights(QB=qb, RB=rb, WR=wr, TE=te)


# Type aliases for cleaner route signatures
SleeperClientDep = Annotated[SleeperClient, Depends(get_sleeper_client)]
LeagueContextDep = Annotated[LeagueContext, Depends(get_league_context)]
TradeFinderDep = Annotated[TradeFinderService, Depends(get_trade_finder)]
WeightsDep = Annotated[PositionWeights, Depends(get_position_weights)]
SettingsDep = Annotated[Settings, Depends(get_settings)]


# Common query parameters
SeasonQuery = Annotated[
    int | None,
    Query(description="NFL season year (defaults to the league's season)", ge=2009, le=2030),
]
