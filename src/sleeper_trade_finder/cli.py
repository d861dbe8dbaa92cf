"""
Sleeper Trade Finder CLI

Command-line interface for trade recommendations and manual trade
analysis without running the API server.
"""

import argparse
import asyncio
import sys
from typing import Any

from sleeper_trade_finder.clients.sleeper import LeagueContext, SleeperAPIError, SleeperClient
from sleeper_trade_finder.config import configure_logging, get_settings
from sleeper_trade_finder.models import (
    Position,
    PositionWeights,
    TeamProfile,
    TradeAnalysis,
    TradeCandidate,
)
from sleeper_trade_finder.services.trade_finder import TradeFinderService


class TradeFinder:
    """
    Main class for finding trades in Sleeper fantasy football leagues.

    Can be used as a library or via CLI.

    Example:
        async with TradeFinder(season=2024) as finder:
            await finder.set_league("1127116641403351040")
            trades = await finder.get_recommendations("michaelburps")
            for trade in trades:
                print(trade.trade_type, trade.fairness, trade.value_difference)
    """

    def __init__(self, season: int | None = None, weights: PositionWeights | None = None):
        self.season = season
        self.weights = weights or PositionWeights()
        self.client: SleeperClient | None = None
        self.ctx: LeagueContext | None = None
        self.service: TradeFinderService | None = None

    async def __aenter__(self):
        self.client = SleeperClient()
        await self.client.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.client:
            await self.client.__aexit__(exc_type, exc_val, exc_tb)

    async def get_user_leagues(self, username: str) -> list[dict[str, Any]]:
        """Get all leagues for a user in the selected season."""
        if not self.client:
            raise RuntimeError("Client not initialized. Use 'async with' context.")

        user = await self.client.get_user(username)
        if user is None:
            return []
        season = self.season or get_settings().default_season
        leagues = await self.client.get_user_leagues(user.user_id, season)
        return [league.model_dump() for league in leagues]

    async def set_league(self, league_id: str) -> dict[str, Any]:
        """Set the active league for analysis."""
        if not self.client:
            raise RuntimeError("Client not initialized. Use 'async with' context.")

        self.ctx = await LeagueContext.create(self.client, league_id)
        self.service = TradeFinderService(self.client, self.ctx)
        return self.ctx.league.model_dump()

    def _require_league(self) -> TradeFinderService:
        """Ensure a league is set."""
        if self.service is None:
            raise RuntimeError("No league set. Call set_league() first.")
        return self.service

    async def get_profiles(self) -> list[TeamProfile]:
        return await self._require_league().compute_team_profiles(self.season)

    async def get_recommendations(self, username: str) -> list[TradeCandidate] | None:
        """Ranked trades for a user's team, or None if the user has no team."""
        service = self._require_league()
        team_name = service.resolve_user_team(username)
        if team_name is None:
            return None
        return await service.find_trade_recommendations(team_name, self.season, self.weights)

    async def analyze(
        self, team1_gives: list[str], team2_gives: list[str]
    ) -> TradeAnalysis | None:
        """Value a manual trade given the player IDs each side sends."""
        return await self._require_league().analyze_trade(
            team1_gives, team2_gives, self.season, self.weights
        )


def _format_gives(candidate: TradeCandidate, side: str) -> str:
    gives = candidate.team1_gives if side == "team1" else candidate.team2_gives
    return ", ".join(
        f"{g.player.full_name} ({g.position.value}, {g.adjusted_value:.1f})" for g in gives
    )


def print_profiles(profiles: list[TeamProfile]) -> None:
    header = f"{'Team':<25}" + "".join(f"{pos.value:>14}" for pos in Position)
    print(header)
    print("-" * len(header))
    for profile in profiles:
        cells = "".join(
            f"{profile.position_strength[pos]:>6.1f} {profile.status(pos).value:<7}"
            for pos in Position
        )
        print(f"{profile.team_name:<25}{cells}")


def print_recommendations(trades: list[TradeCandidate]) -> None:
    if not trades:
        print("No trades found.")
        return

    for i, trade in enumerate(trades, 1):
        print(
            f"{i:>2}. {trade.trade_type.value} with {trade.team2} - {trade.fairness.value} "
            f"(diff {trade.value_difference:.1f}, score {trade.rank_score:.1f})"
        )
        print(f"    You send:    {_format_gives(trade, 'team1')}")
        print(f"    You receive: {_format_gives(trade, 'team2')}")
        bonus = trade.best_player_bonus
        print(f"    Best player: {bonus.player_name} (+{bonus.bonus_value:.1f})")
        if trade.likely_dropped:
            drop = trade.likely_dropped
            print(f"    {drop.team_name} likely drops {drop.player.full_name}")
        print()


def print_analysis(analysis: TradeAnalysis) -> None:
    print(f"Type:        {analysis.trade_type.value}")
    print(f"Team 1 value: {analysis.team1_value:.1f}")
    print(f"Team 2 value: {analysis.team2_value:.1f}")
    print(f"Difference:  {analysis.value_difference:.1f} ({analysis.fairness.value})")
    bonus = analysis.best_player_bonus
    print(f"Best player: {bonus.player_name} (+{bonus.bonus_value:.1f} to {bonus.side.value})")


def positive_float(value: str) -> float:
    """argparse type for position weights, which must be greater than zero."""
    try:
        weight = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} is not a number") from None
    if not weight > 0:
        raise argparse.ArgumentTypeError(f"weight must be greater than 0, got {value}")
    return weight


def build_parser() -> argparse.ArgumentParser:
    defaults = PositionWeights()
    parser = argparse.ArgumentParser(
        description="Sleeper Fantasy Football Trade Finder CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List leagues for a user
  sleeper-trade-finder leagues michaelburps --season 2024

  # Show positional strength for every team
  sleeper-trade-finder profiles 1127116641403351040

  # Recommend trades for a user's team
  sleeper-trade-finder trades 1127116641403351040 michaelburps --qb 0.7

  # Value a manual trade (player IDs each side sends)
  sleeper-trade-finder analyze 1127116641403351040 --team1 4984 --team2 6794 7564
        """,
    )

    parser.add_argument(
        "--season",
        type=int,
        default=None,
        help="NFL season year (default: the league's season)",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default: INFO)")
    parser.add_argument("--qb", type=positive_float, default=defaults.QB, help="QB weight")
    parser.add_argument("--rb", type=positive_float, default=defaults.RB, help="RB weight")
    parser.add_argument("--wr", type=positive_float, default=defaults.WR, help="WR weight")
    parser.add_argument("--te", type=positive_float, default=defaults.TE, help="TE weight")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # leagues command
    leagues_parser = subparsers.add_parser("leagues", help="List user's leagues")
    leagues_parser.add_argument("username", help="Sleeper username")

    # profiles command
    profiles_parser = subparsers.add_parser("profiles", help="Show team strength profiles")
    profiles_parser.add_argument("league_id", help="Sleeper league ID")

    # trades command
    trades_parser = subparsers.add_parser("trades", help="Recommend trades for a team")
    trades_parser.add_argument("league_id", help="Sleeper league ID")
    trades_parser.add_argument("username", help="Sleeper username or display name")

    # analyze command
    analyze_parser = subparsers.add_parser("analyze", help="Value a manual trade")
    analyze_parser.add_argument("league_id", help="Sleeper league ID")
    analyze_parser.add_argument(
        "--team1", nargs="+", required=True, help="Player IDs team 1 sends"
    )
    analyze_parser.add_argument(
        "--team2", nargs="+", required=True, help="Player IDs team 2 sends"
    )

    return parser


async def cli_main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    configure_logging(args.log_level)
    weights = PositionWeights(QB=args.qb, RB=args.rb, WR=args.wr, TE=args.te)

    async with TradeFinder(season=args.season, weights=weights) as finder:
        if args.command == "leagues":
            print(f"🔍 Looking up leagues for {args.username}...\n")
            leagues = await finder.get_user_leagues(args.username)

            if not leagues:
                print("No leagues found.")
                return 0

            print(f"Found {len(leagues)} league(s):\n")
            for i, league in enumerate(leagues, 1):
                print(f"  {i}. {league['name']}")
                print(f"     ID: {league['league_id']}")
                print(f"     Teams: {league['total_rosters']}")
                print()
            return 0

        try:
            await finder.set_league(args.league_id)
        except SleeperAPIError as e:
            print(f"❌ {e.message}", file=sys.stderr)
            return 1

        if args.command == "profiles":
            print(f"📊 {finder.ctx.league_name} - Team Profiles\n")
            print_profiles(await finder.get_profiles())

        elif args.command == "trades":
            print(f"📊 {finder.ctx.league_name} - Trade Ideas for {args.username}\n")
            trades = await finder.get_recommendations(args.username)
            if trades is None:
                print(f"❌ {args.username} has no team in this league", file=sys.stderr)
                return 1
            print_recommendations(trades)

        elif args.command == "analyze":
            analysis = await finder.analyze(args.team1, args.team2)
            if analysis is None:
                print("❌ Each side must send at least one rostered player", file=sys.stderr)
                return 1
            print_analysis(analysis)

    return 0


def run_cli():
    """Entry point for CLI."""
    sys.exit(asyncio.run(cli_main()))


if __name__ == "__main__":
    run_cli()
