"""Business logic services."""

from sleeper_trade_finder.services.candidates import CandidateGenerator, TradeProposal
from sleeper_trade_finder.services.profiler import build_team_profiles, compute_league_stats
from sleeper_trade_finder.services.scoring import TradeScorer, value_trade
from sleeper_trade_finder.services.session import InteractiveTradeSession
from sleeper_trade_finder.services.trade_finder import (
    TradeFinderService,
    compute_team_profiles,
    create_session,
    find_trade_recommendations,
)
from sleeper_trade_finder.services.valuation import (
    DEFAULT_WEIGHTS,
    adjusted_value,
    fantasy_points_per_game,
    resolve_scoring_type,
)

__all__ = [
    # Valuation
    "DEFAULT_WEIGHTS",
    "adjusted_value",
    "fantasy_points_per_game",
    "resolve_scoring_type",
    # Profiles
    "build_team_profiles",
    "compute_league_stats",
    # Candidates and scoring
    "CandidateGenerator",
    "TradeProposal",
    "TradeScorer",
    "value_trade",
    # Session
    "InteractiveTradeSession",
    # Facade
    "TradeFinderService",
    "compute_team_profiles",
    "create_session",
    "find_trade_recommendations",
]
