"""
Trade Finder Service

Entry points for the trade recommendation engine. The module-level
functions are pure and operate on already-built profiles; TradeFinderService
wires them to a Sleeper league.
"""

import logging
from collections.abc import Iterable, Sequence

from sleeper_trade_finder.clients.sleeper import LeagueContext, SleeperClient
from sleeper_trade_finder.config import Settings, get_settings
from sleeper_trade_finder.models import (
    PositionWeights,
    ScoringType,
    SeasonPlayer,
    Side,
    TeamProfile,
    TeamRoster,
    TradeAnalysis,
    TradeCandidate,
)
from sleeper_trade_finder.services.candidates import CandidateGenerator
from sleeper_trade_finder.services.profiler import build_team_profiles
from sleeper_trade_finder.services.scoring import TradeScorer
from sleeper_trade_finder.services.session import InteractiveTradeSession
from sleeper_trade_finder.services.valuation import build_season_player, resolve_scoring_type

logger = logging.getLogger(__name__)


def compute_team_profiles(rosters: Iterable[TeamRoster]) -> list[TeamProfile]:
    """Profile every roster of one league for one season."""
    return build_team_profiles(rosters)


def find_trade_recommendations(
    team_profiles: Iterable[TeamProfile],
    user_team_name: str,
    weights: PositionWeights | None = None,
    max_recommendations: int = 15,
    max_examined: int = 5000,
) -> list[TradeCandidate]:
    """
    Ranked trade recommendations between the user's team and the league.

    Args:
        team_profiles: Every TeamProfile in the league
        user_team_name: Team name of the acting user (always team1)
        weights: Position scarcity weights
        max_recommendations: Number of candidates to keep
        max_examined: Cap on trade shapes examined

    Returns:
        Up to max_recommendations candidates, best first
    """
    weights = weights or PositionWeights()
    generator = CandidateGenerator(weights, max_examined=max_examined)
    scorer = TradeScorer(weights, max_recommendations=max_recommendations)
    return scorer.rank(generator.generate(team_profiles, user_team_name))


def create_session(
    seed: TradeCandidate | None = None,
    weights: PositionWeights | None = None,
    team1: str | None = None,
    team2: str | None = None,
) -> InteractiveTradeSession:
    """Start a manual trade builder, optionally from a recommendation."""
    return InteractiveTradeSession(seed=seed, weights=weights, team1=team1, team2=team2)


class TradeFinderService:
    """
    Service for trade recommendations in a Sleeper league.

    Provides methods to:
    - Build positional strength profiles for every team
    - Recommend trades for a user's team
    - Value a manually built trade
    """

    def __init__(
        self,
        client: SleeperClient,
        context: LeagueContext,
        settings: Settings | None = None,
    ):
        self.client = client
        self.ctx = context
        self.settings = settings or get_settings()

    @property
    def scoring_type(self) -> ScoringType:
        return resolve_scoring_type(self.ctx.league.scoring_settings)

    def _season(self, season: int | None) -> int:
        if season is not None:
            return season
        try:
            return int(self.ctx.league.season)
        except ValueError:
            return self.settings.default_season

    async def load_team_rosters(self, season: int | None = None) -> list[TeamRoster]:
        """
        Resolve every roster's player IDs to season snapshots.

        Unknown player IDs and non-trade positions are skipped.
        """
        season = self._season(season)
        stats = await self.client.get_season_stats(season)
        scoring = self.scoring_type

        rosters = []
        for roster in self.ctx.rosters:
            players = [
                build_season_player(pid, self.ctx.get_player(pid), stats.get(pid), scoring)
                for pid in roster.player_ids
            ]
            rosters.append(
                TeamRoster(
                    roster_id=roster.roster_id,
                    team_name=self.ctx.get_team_name(roster.roster_id),
                    players=[p for p in players if p is not None],
                )
            )

        logger.info(
            "Resolved %d rosters for %s (%s, %s scoring)",
            len(rosters),
            self.ctx.league_name,
            season,
            scoring.value,
        )
        return rosters

    async def compute_team_profiles(self, season: int | None = None) -> list[TeamProfile]:
        """Strength profiles for every team in the league."""
        return compute_team_profiles(await self.load_team_rosters(season))

    async def find_trade_recommendations(
        self,
        user_team_name: str,
        season: int | None = None,
        weights: PositionWeights | None = None,
    ) -> list[TradeCandidate]:
        """
        Ranked trade recommendations for a team in this league.

        Args:
            user_team_name: Team name of the acting user
            season: Stats season (defaults to the league's season)
            weights: Position scarcity weights

        Returns:
            Up to max_recommendations TradeCandidates
        """
        profiles = await self.compute_team_profiles(season)
        return find_trade_recommendations(
            profiles,
            user_team_name,
            weights,
            max_recommendations=self.settings.max_recommendations,
            max_examined=self.settings.max_candidates_examined,
        )

    async def analyze_trade(
        self,
        team1_gives: Sequence[str],
        team2_gives: Sequence[str],
        season: int | None = None,
        weights: PositionWeights | None = None,
    ) -> TradeAnalysis | None:
        """
        Value a manual trade given each side's outgoing player IDs.

        Unknown IDs are ignored. Returns None unless both sides send at
        least one known player.
        """
        rosters = await self.load_team_rosters(season)
        owners: dict[str, tuple[str, SeasonPlayer]] = {
            p.player_id: (r.team_name, p) for r in rosters for p in r.players
        }

        session = create_session(weights=weights)
        for side, player_ids in ((Side.TEAM1, team1_gives), (Side.TEAM2, team2_gives)):
            for pid in player_ids:
                if pid not in owners:
                    continue
                team_name, player = owners[pid]
                session.add_give(side, player)
                if side is Side.TEAM1:
                    session.team1 = session.team1 or team_name
                else:
                    session.team2 = session.team2 or team_name

        return session.get_analysis()

    def resolve_user_team(self, username: str) -> str | None:
        """Team name owned by a Sleeper username or display name."""
        roster = self.ctx.find_roster_for_user(username)
        if roster is None:
            return None
        return self.ctx.get_team_name(roster.roster_id)

    def create_session(
        self,
        seed: TradeCandidate | None = None,
        weights: PositionWeights | None = None,
    ) -> InteractiveTradeSession:
        return create_session(seed=seed, weights=weights)
