"""
Player-related Pydantic models.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Position(str, Enum):
    """Positions that take part in trade analysis."""

    QB = "QB"
    RB = "RB"
    WR = "WR"
    TE = "TE"


class ScoringType(str, Enum):
    """Which season point total is canonical for a league."""

    PPR = "ppr"
    HALF_PPR = "half_ppr"
    STANDARD = "standard"


class Player(BaseModel):
    """NFL Player information from Sleeper."""

    player_id: str
    first_name: str | None = None
    last_name: str | None = None
    full_name: str | None = None
    position: str | None = None
    team: str | None = None
    age: int | None = None
    years_exp: int | None = None
    status: str | None = None
    injury_status: str | None = None
    number: int | None = None
    depth_chart_order: int | None = None
    fantasy_positions: list[str] | None = None

    @property
    def display_name(self) -> str:
        """Get display name for the player."""
        if self.full_name:
            return self.full_name
        if self.first_name and self.last_name:
            return f"{self.first_name} {self.last_name}"
        return self.player_id


class StatLine(BaseModel):
    """A player's season stat line from the Sleeper stats endpoint."""

    model_config = ConfigDict(extra="ignore")

    pts_ppr: float = Field(default=0.0, description="Total PPR points")
    pts_half_ppr: float = Field(default=0.0, description="Total half-PPR points")
    pts_std: float = Field(default=0.0, description="Total standard points")
    gp: float = Field(default=0.0, description="Games played")

    def total_points(self, scoring: ScoringType = ScoringType.PPR) -> float:
        """Season total under the given scoring type."""
        if scoring == ScoringType.HALF_PPR:
            return self.pts_half_ppr
        if scoring == ScoringType.STANDARD:
            return self.pts_std
        return self.pts_ppr


class SeasonPlayer(BaseModel):
    """Immutable per-season snapshot of a rostered player."""

    model_config = ConfigDict(frozen=True)

    player_id: str
    full_name: str
    position: Position
    team: str = "FA"
    fantasy_points_per_game: float = Field(default=0.0, description="Points per game")
