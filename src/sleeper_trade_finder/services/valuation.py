"""
Player Valuation

Turns a season stat line into points per game and a position-weighted
value used to compare players across positions.
"""

from collections.abc import Mapping

from sleeper_trade_finder.models import (
    Player,
    Position,
    PositionWeights,
    ScoringType,
    SeasonPlayer,
    StatLine,
)

DEFAULT_WEIGHTS = PositionWeights()


def resolve_scoring_type(scoring_settings: Mapping | None) -> ScoringType:
    """
    Pick which season point total is canonical for a league.

    Sleeper's ``rec`` setting is points per reception: 1.0 is PPR, 0.5 is
    half-PPR and 0 is standard. Leagues that don't say default to PPR.
    """
    rec = (scoring_settings or {}).get("rec")
    if rec is None:
        return ScoringType.PPR

    rec = float(rec)
    if rec >= 1.0:
        return ScoringType.PPR
    if rec > 0:
        return ScoringType.HALF_PPR
    return ScoringType.STANDARD


def fantasy_points_per_game(
    stat_line: StatLine | None, scoring: ScoringType = ScoringType.PPR
) -> float:
    """Season points divided by games played; 0 without games or stats."""
    if stat_line is None or stat_line.gp <= 0:
        return 0.0
    return stat_line.total_points(scoring) / stat_line.gp


def adjusted_value(
    player: SeasonPlayer,
    position: Position | None = None,
    weights: PositionWeights | None = None,
) -> float:
    """Points per game scaled by the scarcity weight of the position."""
    weights = weights or DEFAULT_WEIGHTS
    return player.fantasy_points_per_game * weights.weight(position or player.position)


def build_season_player(
    player_id: str,
    player: Player | None,
    stat_line: StatLine | None,
    scoring: ScoringType = ScoringType.PPR,
) -> SeasonPlayer | None:
    """
    Snapshot a rostered player for one season.

    Returns None for unresolved IDs and for positions that don't take
    part in trades (K, DEF, ...).
    """
    if player is None or player.position not in Position.__members__:
        return None

    return SeasonPlayer(
        player_id=player_id,
        full_name=player.display_name,
        position=Position(player.position),
        team=player.team or "FA",
        fantasy_points_per_game=fantasy_points_per_game(stat_line, scoring),
    )
