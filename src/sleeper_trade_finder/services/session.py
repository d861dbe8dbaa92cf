"""
Interactive Trade Session

Manual trade builder. Holds the players each side sends and revalues the
trade after every edit using the same formulas as the recommendation
engine. Nothing is rejected here: a user may knowingly build an uneven
trade and only the numbers change.
"""

import logging

from sleeper_trade_finder.models import (
    Position,
    PositionWeights,
    SeasonPlayer,
    Side,
    TradeAnalysis,
    TradeCandidate,
    TradeGive,
    TradeType,
)
from sleeper_trade_finder.services.scoring import value_trade
from sleeper_trade_finder.services.valuation import adjusted_value

logger = logging.getLogger(__name__)


class InteractiveTradeSession:
    """
    Single-user trade builder with live valuation.

    Example:
        session = InteractiveTradeSession(team1="Alpha", team2="Beta")
        session.add_give(Side.TEAM1, josh_allen)
        session.add_give(Side.TEAM2, ja_marr_chase)
        analysis = session.get_analysis()
    """

    def __init__(
        self,
        seed: TradeCandidate | None = None,
        weights: PositionWeights | None = None,
        team1: str | None = None,
        team2: str | None = None,
    ):
        self.weights = weights or PositionWeights()
        self.team1 = seed.team1 if seed else team1
        self.team2 = seed.team2 if seed else team2
        self._gives: dict[Side, list[TradeGive]] = {Side.TEAM1: [], Side.TEAM2: []}
        self._analysis: TradeAnalysis | None = None

        if seed is not None:
            for give in seed.team1_gives:
                self._append(Side.TEAM1, give.player, give.position)
            for give in seed.team2_gives:
                self._append(Side.TEAM2, give.player, give.position)
        self._recompute()

    @property
    def team1_gives(self) -> list[TradeGive]:
        return list(self._gives[Side.TEAM1])

    @property
    def team2_gives(self) -> list[TradeGive]:
        return list(self._gives[Side.TEAM2])

    def side_of(self, player_id: str) -> Side | None:
        """Which side currently sends the player, if any."""
        for side, gives in self._gives.items():
            if any(g.player.player_id == player_id for g in gives):
                return side
        return None

    def is_available(self, player_id: str) -> bool:
        """A player can be added only while on neither side."""
        return self.side_of(player_id) is None

    # ==================== Edits ====================

    def add_give(
        self,
        side: Side | str,
        player: SeasonPlayer,
        position: Position | None = None,
    ) -> bool:
        """Add a player to a side. No-op if the player is already in the trade."""
        if not self.is_available(player.player_id):
            logger.debug("Player %s already in trade", player.player_id)
            return False
        self._append(Side(side), player, position or player.position)
        self._recompute()
        return True

    def remove_give(self, player_id: str) -> bool:
        side = self.side_of(player_id)
        if side is None:
            return False
        self._gives[side] = [g for g in self._gives[side] if g.player.player_id != player_id]
        self._recompute()
        return True

    def move_give(self, player_id: str) -> bool:
        """Move a player to the opposite side of the trade."""
        side = self.side_of(player_id)
        if side is None:
            return False
        give = next(g for g in self._gives[side] if g.player.player_id == player_id)
        self._gives[side].remove(give)
        self._gives[side.other].append(give)
        self._recompute()
        return True

    def set_weights(self, weights: PositionWeights) -> None:
        """Change the position weights and revalue every player in the trade."""
        self.weights = weights
        for side, gives in self._gives.items():
            self._gives[side] = [self._make_give(g.player, g.position) for g in gives]
        self._recompute()

    def clear(self) -> None:
        self._gives = {Side.TEAM1: [], Side.TEAM2: []}
        self._recompute()

    # ==================== Analysis ====================

    def get_analysis(self) -> TradeAnalysis | None:
        """Current valuation, or None until both sides send someone."""
        return self._analysis

    def _recompute(self) -> None:
        team1_gives, team2_gives = self._gives[Side.TEAM1], self._gives[Side.TEAM2]
        if not team1_gives or not team2_gives:
            self._analysis = None
            return

        trade_type = TradeType.from_player_count(len(team1_gives) + len(team2_gives))
        self._analysis = value_trade(team1_gives, team2_gives, trade_type)

    def _append(self, side: Side, player: SeasonPlayer, position: Position) -> None:
        self._gives[side].append(self._make_give(player, position))

    def _make_give(self, player: SeasonPlayer, position: Position) -> TradeGive:
        return TradeGive(
            player=player,
            position=position,
            adjusted_value=adjusted_value(player, position, self.weights),
        )
