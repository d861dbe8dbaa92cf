"""API package - FastAPI routes and dependencies."""

from sleeper_trade_finder.api.dependencies import (
    ClientManager,
    LeagueContextDep,
    SettingsDep,
    SleeperClientDep,
    TradeFinderDep,
    WeightsDep,
    get_league_context,
    get_position_weights,
    get_sleeper_client,
    get_trade_finder,
)

__all__ = [
    "ClientManager",
    "get_sleeper_client",
    "get_league_context",
    "get_trade_finder",
    "get_position_weights",
    "SleeperClientDep",
    "LeagueContextDep",
    "TradeFinderDep",
    "WeightsDep",
    "SettingsDep",
]
