"""Pydantic models and schemas."""

from sleeper_trade_finder.models.league import League, Roster, User
from sleeper_trade_finder.models.player import (
    Player,
    Position,
    ScoringType,
    SeasonPlayer,
    StatLine,
)
from sleeper_trade_finder.models.trade import (
    BestPlayerBonus,
    FairnessGrade,
    LikelyDrop,
    ManualTradeRequest,
    PositionStats,
    PositionStatus,
    PositionWeights,
    Side,
    TeamProfile,
    TeamRoster,
    TradeAnalysis,
    TradeCandidate,
    TradeGive,
    TradeType,
)

__all__ = [
    # League
    "League",
    "Roster",
    "User",
    # Player
    "Player",
    "Position",
    "ScoringType",
    "SeasonPlayer",
    "StatLine",
    # Trade
    "BestPlayerBonus",
    "FairnessGrade",
    "LikelyDrop",
    "ManualTradeRequest",
    "PositionStats",
    "PositionStatus",
    "PositionWeights",
    "Side",
    "TeamProfile",
    "TeamRoster",
    "TradeAnalysis",
    "TradeCandidate",
    "TradeGive",
    "TradeType",
]
