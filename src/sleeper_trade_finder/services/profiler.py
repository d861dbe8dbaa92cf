"""
Team Strength Profiler

Aggregates each roster into positional strength numbers and labels every
position as surplus, deficit or balanced against the rest of the league.
"""

import logging
from collections.abc import Iterable, Sequence

import numpy as np

from sleeper_trade_finder.models import (
    Position,
    PositionStats,
    PositionStatus,
    SeasonPlayer,
    TeamProfile,
    TeamRoster,
)

logger = logging.getLogger(__name__)

# Number of players that make up each position's strength
STRENGTH_DEPTH: dict[Position, int] = {
    Position.QB: 1,
    Position.RB: 3,
    Position.WR: 4,
    Position.TE: 1,
}

# Waiver-wire points per game standing in for an empty slot after a trade
REPLACEMENT_LEVEL: dict[Position, float] = {
    Position.QB: 12.0,
    Position.RB: 6.0,
    Position.WR: 8.0,
    Position.TE: 5.0,
}


def sort_by_ppg(players: Iterable[SeasonPlayer]) -> list[SeasonPlayer]:
    return sorted(players, key=lambda p: p.fantasy_points_per_game, reverse=True)


def strength_value(players: Sequence[SeasonPlayer], position: Position) -> float:
    """
    Mean PPG of the top-N players at a position.

    Always divides by N, so a team short of N players is penalized by the
    empty slots counting as zero.
    """
    depth = STRENGTH_DEPTH[position]
    top = sort_by_ppg(players)[:depth]
    return sum(p.fantasy_points_per_game for p in top) / depth


def simulation_value(players: Sequence[SeasonPlayer], position: Position) -> float:
    """Like strength_value, but empty slots are filled at replacement level."""
    depth = STRENGTH_DEPTH[position]
    top = [p.fantasy_points_per_game for p in sort_by_ppg(players)[:depth]]
    top.extend([REPLACEMENT_LEVEL[position]] * (depth - len(top)))
    return sum(top) / depth


def compute_league_stats(
    strengths: Iterable[dict[Position, float]],
) -> dict[Position, PositionStats]:
    """Population mean and standard deviation of every position's strength."""
    strengths = list(strengths)
    stats: dict[Position, PositionStats] = {}
    for pos in Position:
        values = np.array([s.get(pos, 0.0) for s in strengths], dtype=float)
        if values.size == 0:
            stats[pos] = PositionStats(mean=0.0, std_dev=0.0)
            continue
        stats[pos] = PositionStats(
            mean=float(np.mean(values)),
            std_dev=float(np.std(values)),
        )
    return stats


def classify_strength(strength: float, stats: PositionStats) -> PositionStatus:
    """Label a strength one standard deviation above/below the league mean."""
    if strength > stats.upper:
        return PositionStatus.SURPLUS
    if strength < stats.lower:
        return PositionStatus.DEFICIT
    return PositionStatus.BALANCED


def group_by_position(players: Iterable[SeasonPlayer]) -> dict[Position, list[SeasonPlayer]]:
    """Bucket players by position, each bucket sorted best first."""
    grouped: dict[Position, list[SeasonPlayer]] = {pos: [] for pos in Position}
    for player in players:
        grouped[player.position].append(player)
    return {pos: sort_by_ppg(group) for pos, group in grouped.items()}


def build_team_profiles(rosters: Iterable[TeamRoster]) -> list[TeamProfile]:
    """
    Profile every roster in one league.

    Strengths are computed first so the league statistics cover all teams,
    then each team/position is labelled against them.

    Args:
        rosters: Every roster in the league, resolved for one season

    Returns:
        One TeamProfile per roster, in input order
    """
    rosters = list(rosters)

    grouped = [group_by_position(r.players) for r in rosters]
    strengths = [
        {pos: strength_value(players[pos], pos) for pos in Position}
        for players in grouped
    ]
    league_stats = compute_league_stats(strengths)

    profiles = []
    for roster, players, strength in zip(rosters, grouped, strengths):
        profiles.append(
            TeamProfile(
                team_name=roster.team_name,
                roster_id=roster.roster_id,
                position_strength=strength,
                position_status={
                    pos: classify_strength(strength[pos], league_stats[pos])
                    for pos in Position
                },
                players_by_position=players,
            )
        )

    logger.debug("Profiled %d teams", len(profiles))
    return profiles


def league_stats_for(profiles: Iterable[TeamProfile]) -> dict[Position, PositionStats]:
    """Recompute the league statistics behind a set of profiles."""
    return compute_league_stats(p.position_strength for p in profiles)
