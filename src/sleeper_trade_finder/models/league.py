"""
League-related Pydantic models.
"""

from pydantic import BaseModel, Field


class League(BaseModel):
    """Sleeper league information."""

    league_id: str
    name: str
    status: str
    sport: str = "nfl"
    season: str
    season_type: str = "regular"
    total_rosters: int
    roster_positions: list[str] = Field(default_factory=list)
    scoring_settings: dict = Field(default_factory=dict)
    settings: dict = Field(default_factory=dict)
    avatar: str | None = None
    draft_id: str | None = None
    previous_league_id: str | None = None


class User(BaseModel):
    """Sleeper user information."""

    user_id: str
    username: str | None = None
    display_name: str
    avatar: str | None = None
    metadata: dict | None = Field(default_factory=dict)
    is_owner: bool | None = False

    @property
    def team_name(self) -> str:
        """Get team name from metadata or display name."""
        if self.metadata and self.metadata.get("team_name"):
            return self.metadata["team_name"]
        return self.display_name


class Roster(BaseModel):
    """League roster information."""

    roster_id: int
    owner_id: str | None = None
    league_id: str | None = None
    players: list[str] | None = Field(default_factory=list)
    starters: list[str] | None = Field(default_factory=list)
    reserve: list[str] | None = None
    taxi: list[str] | None = None
    settings: dict = Field(default_factory=dict)
    metadata: dict | None = Field(default_factory=dict)

    @property
    def player_ids(self) -> list[str]:
        """Rostered player IDs; Sleeper sends null for empty rosters."""
        return list(self.players or [])

