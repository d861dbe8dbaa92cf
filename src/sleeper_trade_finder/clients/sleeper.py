"""
Async Sleeper API Client

Handles all API interactions with the Sleeper Fantasy Football platform.
Uses httpx for async HTTP requests with connection pooling.

API Documentation: https://docs.sleeper.com/
"""

import asyncio
import logging
from typing import Any

import httpx
from pydantic import ValidationError

from sleeper_trade_finder.clients.cache import TTLCache
from sleeper_trade_finder.config import Settings, get_settings
from sleeper_trade_finder.models import League, Player, Roster, StatLine, User

logger = logging.getLogger(__name__)


class SleeperAPIError(Exception):
    """Exception raised for Sleeper API errors."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class SleeperClient:
    """
    Async client for the Sleeper Fantasy Football API.

    Usage:
        async with SleeperClient() as client:
            user = await client.get_user("username")
            leagues = await client.get_user_leagues(user.user_id, 2024)
    """

    def __init__(
        self,
        settings: Settings | None = None,
        cache: TTLCache | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings or get_settings()
        self.cache = cache if cache is not None else TTLCache(
            default_ttl=self.settings.players_cache_ttl
        )
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "SleeperClient":
        """Create HTTP client on context entry."""
        self._client = httpx.AsyncClient(
            base_url=self.settings.sleeper_base_url,
            timeout=httpx.Timeout(self.settings.sleeper_timeout),
            headers={"Accept": "application/json"},
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Close HTTP client on context exit."""
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get the HTTP client, raising if not initialized."""
        if self._client is None:
            raise RuntimeError(
                "SleeperClient must be used as async context manager: "
                "async with SleeperClient() as client: ..."
            )
        return self._client

    async def _get(self, endpoint: str) -> Any:
        """Make a GET request to the Sleeper API."""
        response = await self.client.get(endpoint)

        if response.status_code == 404:
            return None

        if response.status_code != 200:
            logger.warning(
                "Sleeper request failed: %s (%s)", endpoint, response.status_code
            )
            raise SleeperAPIError(
                f"API request failed: {endpoint}",
                status_code=response.status_code,
            )

        return response.json()

    # ==================== User Endpoints ====================

    async def get_user(self, username: str) -> User | None:
        """
        Get user information by username or user_id.

        Args:
            username: Sleeper username or user ID

        Returns:
            User object or None if not found
        """
        data = await self._get(f"/user/{username}")
        if data is None:
            return None
        return User(**data)

    async def get_user_leagues(
        self, user_id: str, season: int, sport: str = "nfl"
    ) -> list[League]:
        """
        Get all leagues for a user in a given season.

        Args:
            user_id: Sleeper user ID
            season: Season year (e.g., 2024)
            sport: Sport type (default: nfl)

        Returns:
            List of League objects
        """
        data = await self._get(f"/user/{user_id}/leagues/{sport}/{season}")
        if data is None:
            return []
        return [League(**league) for league in data]

    # ==================== League Endpoints ====================

    async def get_league(self, league_id: str) -> League | None:
        """
        Get league information, including scoring settings.

        Args:
            league_id: Sleeper league ID

        Returns:
            League object or None if not found
        """
        data = await self._get(f"/league/{league_id}")
        if data is None:
            return None
        return League(**data)

    async def get_league_rosters(self, league_id: str) -> list[Roster]:
        """
        Get all rosters in a league.

        Args:
            league_id: Sleeper league ID

        Returns:
            List of Roster objects
        """
        data = await self._get(f"/league/{league_id}/rosters")
        if data is None:
            return []
        return [Roster(**roster) for roster in data]

    async def get_league_users(self, league_id: str) -> list[User]:
        """
        Get all users in a league.

        Args:
            league_id: Sleeper league ID

        Returns:
            List of User objects
        """
        data = await self._get(f"/league/{league_id}/users")
        if data is None:
            return []
        return [User(**user) for user in data]

    # ==================== Player Endpoints ====================

    async def get_all_players(self, force_refresh: bool = False) -> dict[str, Player]:
        """
        Get all NFL players with caching.

        This endpoint returns a large payload (~15MB) so we cache it.

        Args:
            force_refresh: Force refresh of cache

        Returns:
            Dict mapping player_id to Player object
        """
        cache_key = "players:nfl"
        if not force_refresh and self.cache.has(cache_key):
            return self.cache.get(cache_key)

        data = await self._get("/players/nfl")
        if data is None:
            return {}

        players: dict[str, Player] = {}
        for player_id, player_data in data.items():
            try:
                player_data_copy = {**player_data}
                player_data_copy.pop("player_id", None)
                players[player_id] = Player(player_id=player_id, **player_data_copy)
            except (TypeError, ValidationError):
                continue

        logger.info("Loaded %d players into directory cache", len(players))
        self.cache.set(cache_key, players, ttl=self.settings.players_cache_ttl)
        return players

    async def get_season_stats(
        self, season: int, force_refresh: bool = False
    ) -> dict[str, StatLine]:
        """
        Get regular-season stat lines for every player (cached).

        Args:
            season: Season year (e.g., 2024)
            force_refresh: Force refresh of cache

        Returns:
            Dict mapping player_id to StatLine
        """
        cache_key = f"stats:nfl:regular:{season}"
        if not force_refresh and self.cache.has(cache_key):
            return self.cache.get(cache_key)

        data = await self._get(f"/stats/nfl/regular/{season}")
        if data is None:
            return {}

        stats: dict[str, StatLine] = {}
        for player_id, line in data.items():
            if not isinstance(line, dict):
                continue
            try:
                stats[player_id] = StatLine(
                    **{k: v for k, v in line.items() if v is not None}
                )
            except ValidationError:
                continue

        logger.info("Loaded %d stat lines for %s", len(stats), season)
        self.cache.set(cache_key, stats, ttl=self.settings.stats_cache_ttl)
        return stats


class LeagueContext:
    """
    Helper class to hold league context and provide convenient lookups.

    Caches league data and provides methods to resolve roster IDs to team names,
    player IDs to player info, and usernames to rosters.
    """

    def __init__(
        self,
        league: League,
        users: list[User],
        rosters: list[Roster],
        players: dict[str, Player],
    ):
        self.league = league
        self.users = users
        self.rosters = rosters
        self.players = players

        self._user_map: dict[str, User] = {u.user_id: u for u in users}
        self._roster_to_user: dict[int, str] = {}

        for roster in rosters:
            if roster.owner_id:
                self._roster_to_user[roster.roster_id] = roster.owner_id

    @classmethod
    async def create(cls, client: SleeperClient, league_id: str) -> "LeagueContext":
        """
        Factory method to create a LeagueContext by fetching all required data.

        Args:
            client: SleeperClient instance
            league_id: Sleeper league ID

        Returns:
            Initialized LeagueContext
        """
        league, users, rosters, players = await asyncio.gather(
            client.get_league(league_id),
            client.get_league_users(league_id),
            client.get_league_rosters(league_id),
            client.get_all_players(),
        )

        if league is None:
            raise SleeperAPIError(f"League not found: {league_id}", status_code=404)

        return cls(league=league, users=users, rosters=rosters, players=players)

    @property
    def league_id(self) -> str:
        return self.league.league_id

    @property
    def league_name(self) -> str:
        return self.league.name

    def get_team_name(self, roster_id: int) -> str:
        """Get team name from roster ID."""
        user_id = self._roster_to_user.get(roster_id)
        if user_id and user_id in self._user_map:
            return self._user_map[user_id].team_name
        return f"Team {roster_id}"

    def get_player(self, player_id: str) -> Player | None:
        """Get player by ID."""
        return self.players.get(player_id)

    def find_roster_for_user(self, username: str) -> Roster | None:
        """Find the roster owned by a Sleeper username or display name."""
        needle = username.lower()
        for roster in self.rosters:
            user = self._user_map.get(roster.owner_id or "")
            if user is None:
                continue
            names = {user.display_name.lower(), (user.username or "").lower()}
            if needle in names:
                return roster
        return None
