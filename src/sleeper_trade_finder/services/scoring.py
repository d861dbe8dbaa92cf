"""
Trade Validation and Scoring

Validates generated proposals against a post-trade roster simulation,
values them with a best-player bonus, grades fairness and ranks the
survivors. The valuation formulas here are shared with the interactive
trade session.
"""

import logging
from collections.abc import Iterable, Sequence

from sleeper_trade_finder.models import (
    BestPlayerBonus,
    FairnessGrade,
    LikelyDrop,
    Position,
    PositionStatus,
    PositionWeights,
    SeasonPlayer,
    Side,
    TeamProfile,
    TradeAnalysis,
    TradeCandidate,
    TradeGive,
    TradeType,
)
from sleeper_trade_finder.services.candidates import TradeProposal
from sleeper_trade_finder.services.profiler import simulation_value
from sleeper_trade_finder.services.valuation import adjusted_value

logger = logging.getLogger(__name__)

# Largest accepted value difference per shape
ACCEPTANCE_CAP: dict[TradeType, float] = {
    TradeType.ONE_FOR_ONE: 6.0,
    TradeType.TWO_FOR_ONE: 8.0,
    TradeType.THREE_FOR_TWO: 10.0,
}

BEST_PLAYER_BONUS: dict[TradeType, float] = {
    TradeType.ONE_FOR_ONE: 1.0,
    TradeType.TWO_FOR_ONE: 3.0,
    TradeType.THREE_FOR_TWO: 3.0,
}

# (Fair, Good) upper bounds on the value difference; anything above is Moderate
FAIRNESS_CUTOFFS: dict[TradeType, tuple[float, float]] = {
    TradeType.ONE_FOR_ONE: (2.0, 4.0),
    TradeType.TWO_FOR_ONE: (3.0, 5.0),
    TradeType.THREE_FOR_TWO: (4.0, 7.0),
}

SURPLUS_TO_DEFICIT_SCORE = 10.0
SURPLUS_TO_BALANCED_SCORE = 5.0
FAIRNESS_SCORE_CEILING = 5.0


# ==================== Valuation ====================


def best_player_bonus(
    team1_gives: Sequence[TradeGive],
    team2_gives: Sequence[TradeGive],
    trade_type: TradeType,
) -> BestPlayerBonus:
    """Credit the side sending the single highest-value player."""
    sides = [(Side.TEAM1, g) for g in team1_gives] + [(Side.TEAM2, g) for g in team2_gives]
    best_side, best = sides[0]
    for side, give in sides[1:]:
        if give.adjusted_value > best.adjusted_value:
            best_side, best = side, give

    bonus = BEST_PLAYER_BONUS[trade_type]
    return BestPlayerBonus(
        player_id=best.player.player_id,
        player_name=best.player.full_name,
        side=best_side,
        bonus_value=bonus,
        team1_bonus=bonus if best_side is Side.TEAM1 else 0.0,
        team2_bonus=bonus if best_side is Side.TEAM2 else 0.0,
    )


def grade_fairness(value_difference: float, trade_type: TradeType) -> FairnessGrade:
    fair, good = FAIRNESS_CUTOFFS[trade_type]
    if value_difference <= fair:
        return FairnessGrade.FAIR
    if value_difference <= good:
        return FairnessGrade.GOOD
    return FairnessGrade.MODERATE


def value_trade(
    team1_gives: Sequence[TradeGive],
    team2_gives: Sequence[TradeGive],
    trade_type: TradeType,
) -> TradeAnalysis:
    """
    Value both sides of a trade.

    Each side's value is the adjusted value it sends plus any best-player
    bonus. Both sides must send at least one player.
    """
    bonus = best_player_bonus(team1_gives, team2_gives, trade_type)
    team1_value = sum(g.adjusted_value for g in team1_gives) + bonus.team1_bonus
    team2_value = sum(g.adjusted_value for g in team2_gives) + bonus.team2_bonus
    value_difference = abs(team1_value - team2_value)

    return TradeAnalysis(
        trade_type=trade_type,
        team1_value=team1_value,
        team2_value=team2_value,
        value_difference=value_difference,
        fairness=grade_fairness(value_difference, trade_type),
        best_player_bonus=bonus,
    )


# ==================== Simulation ====================


def simulate_net_change(
    profile: TeamProfile,
    outgoing: Iterable[SeasonPlayer],
    incoming: Iterable[SeasonPlayer],
) -> float:
    """Change in summed simulation value across all positions after a swap."""
    outgoing_ids = {p.player_id for p in outgoing}
    incoming = list(incoming)

    net = 0.0
    for pos in Position:
        before = profile.players(pos)
        after = [p for p in before if p.player_id not in outgoing_ids]
        after.extend(p for p in incoming if p.position == pos)
        net += simulation_value(after, pos) - simulation_value(before, pos)
    return net


def passes_simulation(proposal: TradeProposal) -> bool:
    """Both teams must come out of the swap stronger overall."""
    team1_out = [g.player for g in proposal.team1_gives]
    team2_out = [g.player for g in proposal.team2_gives]
    team1_net = simulate_net_change(proposal.team1, team1_out, team2_out)
    team2_net = simulate_net_change(proposal.team2, team2_out, team1_out)
    return team1_net > 0 and team2_net > 0


# ==================== Scoring ====================


def find_likely_dropped(
    proposal: TradeProposal, weights: PositionWeights | None = None
) -> LikelyDrop | None:
    """
    Lowest-value player the side taking on extra bodies would cut.

    Only asymmetric trades produce a drop; the candidate pool is the
    receiving team's remaining roster, not the players it takes in.
    """
    team1_count, team2_count = len(proposal.team1_gives), len(proposal.team2_gives)
    if team1_count == team2_count:
        return None

    receiver = Side.TEAM1 if team2_count > team1_count else Side.TEAM2
    team = proposal.team(receiver)
    outgoing_ids = {g.player.player_id for g in proposal.gives(receiver)}
    remaining = [p for p in team.all_players() if p.player_id not in outgoing_ids]
    if not remaining:
        return None

    dropped = min(remaining, key=lambda p: adjusted_value(p, weights=weights))
    return LikelyDrop(
        team_name=team.team_name,
        player=dropped,
        adjusted_value=adjusted_value(dropped, weights=weights),
    )


def _need_score(gives: Sequence[TradeGive], giver: TeamProfile, receiver: TeamProfile) -> float:
    score = 0.0
    for give in gives:
        if not giver.is_surplus(give.position):
            continue
        status = receiver.status(give.position)
        if status == PositionStatus.DEFICIT:
            score += SURPLUS_TO_DEFICIT_SCORE
        elif status == PositionStatus.BALANCED:
            score += SURPLUS_TO_BALANCED_SCORE
    return score


def rank_score(proposal: TradeProposal, value_difference: float) -> float:
    """Prefer surplus-to-deficit moves, then the most even trades."""
    score = _need_score(proposal.team1_gives, proposal.team1, proposal.team2)
    score += _need_score(proposal.team2_gives, proposal.team2, proposal.team1)
    score += max(0.0, FAIRNESS_SCORE_CEILING - value_difference)
    return score


class TradeScorer:
    """
    Validates, values and ranks generated trade proposals.

    A proposal survives only if both teams gain in the post-trade
    simulation and its value difference is within the cap for its shape.
    """

    def __init__(
        self,
        weights: PositionWeights | None = None,
        max_recommendations: int = 15,
    ):
        self.weights = weights or PositionWeights()
        self.max_recommendations = max_recommendations

    def evaluate(self, proposal: TradeProposal) -> TradeCandidate | None:
        """Validate and value one proposal, or None if it is rejected."""
        if not passes_simulation(proposal):
            return None

        analysis = value_trade(
            proposal.team1_gives, proposal.team2_gives, proposal.trade_type
        )
        if analysis.value_difference > ACCEPTANCE_CAP[proposal.trade_type]:
            return None

        return TradeCandidate(
            trade_type=proposal.trade_type,
            team1=proposal.team1.team_name,
            team2=proposal.team2.team_name,
            team1_gives=list(proposal.team1_gives),
            team2_gives=list(proposal.team2_gives),
            team1_value=analysis.team1_value,
            team2_value=analysis.team2_value,
            best_player_bonus=analysis.best_player_bonus,
            value_difference=analysis.value_difference,
            fairness=analysis.fairness,
            likely_dropped=find_likely_dropped(proposal, self.weights),
            rank_score=rank_score(proposal, analysis.value_difference),
        )

    def rank(self, proposals: Iterable[TradeProposal]) -> list[TradeCandidate]:
        """
        Evaluate every proposal and return the best-scoring survivors.

        Args:
            proposals: Proposals from CandidateGenerator

        Returns:
            At most max_recommendations candidates, highest rank_score first
        """
        proposals = list(proposals)
        candidates = [c for c in map(self.evaluate, proposals) if c is not None]
        logger.info(
            "%d of %d proposals passed validation", len(candidates), len(proposals)
        )

        ranked = sorted(candidates, key=lambda c: c.rank_score, reverse=True)
        return ranked[: self.max_recommendations]
