"""
Trade Finder Models

Team strength profiles, trade candidates and manual trade analysis.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from sleeper_trade_finder.models.player import Position, SeasonPlayer


class PositionStatus(str, Enum):
    """A team's standing at a position relative to the league."""

    SURPLUS = "surplus"
    BALANCED = "balanced"
    DEFICIT = "deficit"


class TradeType(str, Enum):
    """Player-count shape of a trade."""

    ONE_FOR_ONE = "1-for-1"
    TWO_FOR_ONE = "2-for-1"
    THREE_FOR_TWO = "3-for-2"

    @classmethod
    def from_player_count(cls, total_players: int) -> "TradeType":
        """Infer the shape from the number of players on both sides."""
        if total_players <= 2:
            return cls.ONE_FOR_ONE
        if total_players == 3:
            return cls.TWO_FOR_ONE
        return cls.THREE_FOR_TWO


class FairnessGrade(str, Enum):
    """Trade fairness classification."""

    FAIR = "Fair"
    GOOD = "Good"
    MODERATE = "Moderate"


class Side(str, Enum):
    """Side of a trade. The user's team is always team1."""

    TEAM1 = "team1"
    TEAM2 = "team2"

    @property
    def other(self) -> "Side":
        return Side.TEAM2 if self is Side.TEAM1 else Side.TEAM1


class PositionWeights(BaseModel):
    """Position scarcity multipliers used for cross-position comparison."""

    QB: float = Field(default=0.625, gt=0)
    RB: float = Field(default=1.0, gt=0)
    WR: float = Field(default=0.95, gt=0)
    TE: float = Field(default=1.05, gt=0)

    def weight(self, position: Position | str) -> float:
        """Multiplier for a position; positions outside the table weigh 1.0."""
        key = position.value if isinstance(position, Position) else str(position)
        if key not in Position.__members__:
            return 1.0
        return float(getattr(self, key))


class PositionStats(BaseModel):
    """League-wide population statistics for one position."""

    mean: float
    std_dev: float

    @property
    def upper(self) -> float:
        return self.mean + self.std_dev

    @property
    def lower(self) -> float:
        return self.mean - self.std_dev


class TeamRoster(BaseModel):
    """A roster resolved to season snapshots, ready for profiling."""

    roster_id: int
    team_name: str
    players: list[SeasonPlayer] = Field(default_factory=list)


class TeamProfile(BaseModel):
    """Positional strength profile for one roster."""

    team_name: str
    roster_id: int
    position_strength: dict[Position, float]
    position_status: dict[Position, PositionStatus]
    players_by_position: dict[Position, list[SeasonPlayer]]

    def status(self, position: Position) -> PositionStatus:
        return self.position_status.get(position, PositionStatus.BALANCED)

    def is_surplus(self, position: Position) -> bool:
        return self.status(position) == PositionStatus.SURPLUS

    def players(self, position: Position) -> list[SeasonPlayer]:
        return self.players_by_position.get(position, [])

    def all_players(self) -> list[SeasonPlayer]:
        """Every player on the roster at a trade position."""
        return [p for pos in Position for p in self.players(pos)]


class TradeGive(BaseModel):
    """A player one side sends in a trade."""

    model_config = ConfigDict(frozen=True)

    player: SeasonPlayer
    position: Position
    adjusted_value: float


class BestPlayerBonus(BaseModel):
    """Value credit for the side holding the best player in the trade."""

    player_id: str
    player_name: str
    side: Side
    bonus_value: float
    team1_bonus: float
    team2_bonus: float


class LikelyDrop(BaseModel):
    """Probable waiver casualty for the side receiving extra players."""

    team_name: str
    player: SeasonPlayer
    adjusted_value: float


class TradeCandidate(BaseModel):
    """A validated, scored trade recommendation."""

    model_config = ConfigDict(frozen=True)

    trade_type: TradeType
    team1: str
    team2: str
    team1_gives: list[TradeGive]
    team2_gives: list[TradeGive]
    team1_value: float = Field(description="Team 1 outgoing value incl. bonus")
    team2_value: float = Field(description="Team 2 outgoing value incl. bonus")
    best_player_bonus: BestPlayerBonus
    value_difference: float
    fairness: FairnessGrade
    likely_dropped: LikelyDrop | None = None
    rank_score: float = 0.0


class TradeAnalysis(BaseModel):
    """Live valuation of a manually built trade."""

    trade_type: TradeType
    team1_value: float
    team2_value: float
    value_difference: float
    fairness: FairnessGrade
    best_player_bonus: BestPlayerBonus


class ManualTradeRequest(BaseModel):
    """Body of a manual trade analysis request."""

    team1_gives: list[str] = Field(min_length=1, description="Player IDs team 1 sends")
    team2_gives: list[str] = Field(min_length=1, description="Player IDs team 2 sends")
    season: int | None = Field(default=None, description="Stats season")
    weights: PositionWeights = Field(default_factory=PositionWeights)
