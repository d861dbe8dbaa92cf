"""
Trade Candidate Generator

Enumerates structurally valid trade shapes between the user's team and
every other team in the league. Proposals only move players out of
positions where the giving team is in surplus.

Generation runs in two stages:
- propose: raw 1-for-1, 2-for-1 and 3-for-2 shapes from position pairings
- rebalance: uneven 1-for-1 proposals grow into larger shapes by adding
  the weaker side's cheapest surplus players

Proposals are not valuated here beyond the structural checks; see
services/scoring.py for the simulation gate and the scoring formulas.
"""

import logging
from collections.abc import Iterable, Iterator, Sequence
from itertools import combinations, combinations_with_replacement

from pydantic import BaseModel

from sleeper_trade_finder.models import (
    Position,
    PositionStatus,
    PositionWeights,
    SeasonPlayer,
    Side,
    TeamProfile,
    TradeGive,
    TradeType,
)
from sleeper_trade_finder.services.valuation import adjusted_value

logger = logging.getLogger(__name__)

# 1-for-1 proposals at least this far apart go to the rebalancer
REBALANCE_GAP = 2.0

# Smaller side's value must reach this share of the larger side's value
PACKAGE_RATIO_FLOOR: dict[TradeType, float] = {
    TradeType.TWO_FOR_ONE: 0.80,
    TradeType.THREE_FOR_TWO: 0.75,
}

# A rebalanced shape is kept once its raw value gap drops below this
REBALANCE_LIMIT: dict[TradeType, float] = {
    TradeType.TWO_FOR_ONE: REBALANCE_GAP,
    TradeType.THREE_FOR_TWO: 10.0,
}

SHAPES: dict[tuple[int, int], TradeType] = {
    (1, 1): TradeType.ONE_FOR_ONE,
    (2, 1): TradeType.TWO_FOR_ONE,
    (1, 2): TradeType.TWO_FOR_ONE,
    (3, 2): TradeType.THREE_FOR_TWO,
    (2, 3): TradeType.THREE_FOR_TWO,
}


class TradeProposal(BaseModel):
    """A trade shape awaiting validation. team1 is always the user's team."""

    trade_type: TradeType
    team1: TeamProfile
    team2: TeamProfile
    team1_gives: list[TradeGive]
    team2_gives: list[TradeGive]

    def gives(self, side: Side) -> list[TradeGive]:
        return self.team1_gives if side is Side.TEAM1 else self.team2_gives

    def team(self, side: Side) -> TeamProfile:
        return self.team1 if side is Side.TEAM1 else self.team2

    def total(self, side: Side) -> float:
        return sum(g.adjusted_value for g in self.gives(side))

    @property
    def raw_gap(self) -> float:
        """Value gap before any best-player bonus."""
        return abs(self.total(Side.TEAM1) - self.total(Side.TEAM2))

    @property
    def weaker_side(self) -> Side:
        if self.total(Side.TEAM1) < self.total(Side.TEAM2):
            return Side.TEAM1
        return Side.TEAM2

    @property
    def player_ids(self) -> set[str]:
        return {g.player.player_id for g in self.team1_gives + self.team2_gives}

    @property
    def key(self) -> str:
        team1_ids = ",".join(sorted(g.player.player_id for g in self.team1_gives))
        team2_ids = ",".join(sorted(g.player.player_id for g in self.team2_gives))
        return f"{self.team1.team_name}|{self.team2.team_name}|{team1_ids}|{team2_ids}"


def best_available(
    profile: TeamProfile, position: Position, used: set[str]
) -> SeasonPlayer | None:
    """Highest-PPG player at a position who isn't already in the trade."""
    for player in profile.players(position):
        if player.player_id not in used:
            return player
    return None


def pick_players(
    profile: TeamProfile, positions: Sequence[Position]
) -> list[SeasonPlayer] | None:
    """
    Best available player for each position slot.

    A repeated position takes the next-best player there. Returns None if
    any slot can't be filled.
    """
    used: set[str] = set()
    picked = []
    for pos in positions:
        player = best_available(profile, pos, used)
        if player is None:
            return None
        used.add(player.player_id)
        picked.append(player)
    return picked


def meets_package_ratio(proposal: TradeProposal) -> bool:
    """The side sending fewer players must return enough of the package's value."""
    floor = PACKAGE_RATIO_FLOOR.get(proposal.trade_type)
    if floor is None:
        return True

    if len(proposal.team1_gives) > len(proposal.team2_gives):
        package, single = Side.TEAM1, Side.TEAM2
    else:
        package, single = Side.TEAM2, Side.TEAM1
    return proposal.total(single) >= floor * proposal.total(package)


class CandidateGenerator:
    """
    Proposes trades between the user's team and every other team.

    Only positions where the giving team is in surplus can start a
    proposal. Combinations that can't be filled are skipped silently.
    """

    def __init__(
        self,
        weights: PositionWeights | None = None,
        max_examined: int = 5000,
    ):
        self.weights = weights or PositionWeights()
        self.max_examined = max_examined
        self._examined = 0

    def generate(
        self, profiles: Iterable[TeamProfile], user_team_name: str
    ) -> list[TradeProposal]:
        """
        Generate deduplicated proposals for the user's team.

        Args:
            profiles: Every TeamProfile in the league
            user_team_name: Team name of the acting user

        Returns:
            Proposals in generation order, first occurrence of each trade kept
        """
        profiles = list(profiles)
        user = next((p for p in profiles if p.team_name == user_team_name), None)
        if user is None:
            logger.info("Team %r not found in league; no proposals", user_team_name)
            return []

        self._examined = 0
        seen: set[str] = set()
        proposals: list[TradeProposal] = []

        for other in profiles:
            if other.roster_id == user.roster_id:
                continue
            for proposal in self._propose_pair(user, other):
                if proposal.key in seen:
                    continue
                seen.add(proposal.key)
                proposals.append(proposal)

        logger.debug(
            "Examined %d shapes, kept %d proposals for %s",
            self._examined,
            len(proposals),
            user_team_name,
        )
        return proposals

    # ==================== Budget ====================

    def _take_budget(self) -> bool:
        if self._examined >= self.max_examined:
            if self._examined == self.max_examined:
                logger.warning(
                    "Candidate cap of %d reached; remaining shapes skipped",
                    self.max_examined,
                )
                self._examined += 1
            return False
        self._examined += 1
        return True

    # ==================== Propose ====================

    def _propose_pair(self, user: TeamProfile, other: TeamProfile) -> Iterator[TradeProposal]:
        yield from self._one_for_one(user, other)
        yield from self._two_for_one(user, other, user_sends_package=True)
        yield from self._two_for_one(user, other, user_sends_package=False)
        yield from self._three_for_two(user, other, user_sends_package=True)
        yield from self._three_for_two(user, other, user_sends_package=False)

    def _one_for_one(self, user: TeamProfile, other: TeamProfile) -> Iterator[TradeProposal]:
        for pos1 in Position:
            for pos2 in Position:
                if pos1 == pos2:
                    continue

                # user sheds surplus at pos1, or other sheds surplus at pos2
                direct = user.is_surplus(pos1) and not other.is_surplus(pos1)
                cross = other.is_surplus(pos2) and not user.is_surplus(pos2)
                if not (direct or cross):
                    continue
                if not self._take_budget():
                    return

                user_player = best_available(user, pos1, set())
                other_player = best_available(other, pos2, set())
                if user_player is None or other_player is None:
                    continue

                proposal = self._build(user, other, [user_player], [other_player])
                if proposal.raw_gap < REBALANCE_GAP:
                    yield proposal
                    continue

                rebalanced = self._rebalance(proposal)
                if rebalanced is not None:
                    yield rebalanced

    def _two_for_one(
        self, user: TeamProfile, other: TeamProfile, user_sends_package: bool
    ) -> Iterator[TradeProposal]:
        sender, receiver = (user, other) if user_sends_package else (other, user)
        surplus = [pos for pos in Position if sender.is_surplus(pos)]
        open_positions = [
            pos for pos in Position if receiver.status(pos) != PositionStatus.DEFICIT
        ]

        for package_positions in combinations(surplus, 2):
            for single_position in open_positions:
                if not self._take_budget():
                    return
                proposal = self._package_proposal(
                    user, other, sender, receiver, package_positions, [single_position]
                )
                if proposal is not None and meets_package_ratio(proposal):
                    yield proposal

    def _three_for_two(
        self, user: TeamProfile, other: TeamProfile, user_sends_package: bool
    ) -> Iterator[TradeProposal]:
        sender, receiver = (user, other) if user_sends_package else (other, user)
        surplus = [pos for pos in Position if sender.is_surplus(pos)]
        open_positions = [
            pos for pos in Position if receiver.status(pos) != PositionStatus.DEFICIT
        ]

        for package_positions in combinations_with_replacement(surplus, 3):
            for return_positions in combinations_with_replacement(open_positions, 2):
                if not self._take_budget():
                    return
                proposal = self._package_proposal(
                    user, other, sender, receiver, package_positions, return_positions
                )
                if proposal is not None and meets_package_ratio(proposal):
                    yield proposal

    def _package_proposal(
        self,
        user: TeamProfile,
        other: TeamProfile,
        sender: TeamProfile,
        receiver: TeamProfile,
        package_positions: Sequence[Position],
        return_positions: Sequence[Position],
    ) -> TradeProposal | None:
        package = pick_players(sender, package_positions)
        returned = pick_players(receiver, return_positions)
        if package is None or returned is None:
            return None
        if sender is user:
            return self._build(user, other, package, returned)
        return self._build(user, other, returned, package)

    # ==================== Rebalance ====================

    def _rebalance(self, seed: TradeProposal) -> TradeProposal | None:
        """
        Grow an uneven 1-for-1 into a larger shape.

        The weaker side always receives the adds: first one player
        (2-for-1); if the gap is still REBALANCE_GAP or more, two players
        against one from the stronger side (3-for-2). The first shape under
        its REBALANCE_LIMIT is returned.
        """
        weaker = seed.weaker_side
        for adds in ({weaker: 1}, {weaker: 2, weaker.other: 1}):
            if not self._take_budget():
                return None
            attempt = self._extend(seed, adds)
            if attempt is None:
                continue
            if attempt.raw_gap < REBALANCE_LIMIT[attempt.trade_type] and meets_package_ratio(
                attempt
            ):
                return attempt
        return None

    def _extend(self, seed: TradeProposal, adds: dict[Side, int]) -> TradeProposal | None:
        used = set(seed.player_ids)
        extra: dict[Side, list[SeasonPlayer]] = {Side.TEAM1: [], Side.TEAM2: []}

        for side, count in adds.items():
            spares = self._spare_players(seed.team(side), used)
            if len(spares) < count:
                return None
            extra[side] = spares[:count]
            used.update(p.player_id for p in extra[side])

        return self._build(
            seed.team1,
            seed.team2,
            [g.player for g in seed.team1_gives] + extra[Side.TEAM1],
            [g.player for g in seed.team2_gives] + extra[Side.TEAM2],
        )

    def _spare_players(self, profile: TeamProfile, used: set[str]) -> list[SeasonPlayer]:
        """Unused scoring players from surplus positions, cheapest first."""
        spares = [
            p
            for pos in Position
            if profile.is_surplus(pos)
            for p in profile.players(pos)
            if p.player_id not in used and p.fantasy_points_per_game > 0
        ]
        return sorted(spares, key=lambda p: adjusted_value(p, weights=self.weights))

    # ==================== Helpers ====================

    def _build(
        self,
        team1: TeamProfile,
        team2: TeamProfile,
        team1_players: Sequence[SeasonPlayer],
        team2_players: Sequence[SeasonPlayer],
    ) -> TradeProposal:
        return TradeProposal(
            trade_type=SHAPES[(len(team1_players), len(team2_players))],
            team1=team1,
            team2=team2,
            team1_gives=[self._give(p) for p in team1_players],
            team2_gives=[self._give(p) for p in team2_players],
        )

    def _give(self, player: SeasonPlayer) -> TradeGive:
        return TradeGive(
            player=player,
            position=player.position,
            adjusted_value=adjusted_value(player, weights=self.weights),
        )
