"""
Tests for the Sleeper client, league context and TTL cache.

HTTP is faked with httpx.MockTransport; async code runs under asyncio.run.
"""

import asyncio
from collections import Counter

import pytest

from sleeper_trade_finder.clients.cache import TTLCache
from sleeper_trade_finder.clients.sleeper import LeagueContext, SleeperAPIError

from sleeper_data import make_client


# ==================== Cache ====================


def test_cache_entries_expire_on_injected_clock():
    now = [100.0]
    cache = TTLCache(default_ttl=10, clock=lambda: now[0])

    cache.set("players", {"1": "Josh Allen"})
    cache.set("stats", {"1": 20.0}, ttl=60)
    assert cache.has("players")

    now[0] = 110.0
    assert not cache.has("players")
    assert cache.get("players", "missing") == "missing"
    assert cache.get("stats") == {"1": 20.0}


def test_cache_delete_and_clear():
    cache = TTLCache()
    cache.set("a", 1)
    cache.set("b", 2)

    cache.delete("a")
    assert not cache.has("a")
    assert len(cache) == 1

    cache.clear()
    assert len(cache) == 0


def test_cache_set_evicts_expired_entries():
    now = [0.0]
    cache = TTLCache(default_ttl=10, clock=lambda: now[0])

    cache.set("stats:nfl:regular:2022", {"1": 20.0})
    cache.set("stats:nfl:regular:2023", {"1": 21.0}, ttl=100)
    now[0] = 50.0
    cache.set("stats:nfl:regular:2024", {"1": 22.0})

    # the 2022 entry is gone without ever being read again
    assert len(cache) == 2
    assert cache.get("stats:nfl:regular:2023") == {"1": 21.0}


# ==================== Client ====================


def test_get_user_and_leagues():
    async def run():
        async with make_client() as client:
            user = await client.get_user("alpha_user")
            leagues = await client.get_user_leagues(user.user_id, 2024)
            missing = await client.get_user("nobody")
            return user, leagues, missing

    user, leagues, missing = asyncio.run(run())

    assert user.team_name == "Alpha"
    assert [league.league_id for league in leagues] == ["L1"]
    assert missing is None


def test_season_stats_are_cached():
    calls = Counter()

    async def run():
        async with make_client(calls) as client:
            first = await client.get_season_stats(2024)
            second = await client.get_season_stats(2024)
            await client.get_season_stats(2024, force_refresh=True)
            return first, second

    first, second = asyncio.run(run())

    assert first is second
    assert first["a_qb1"].pts_ppr == pytest.approx(280.0)
    assert first["a_qb1"].gp == 10
    assert calls["/stats/nfl/regular/2024"] == 2


def test_player_directory_is_cached():
    calls = Counter()

    async def run():
        async with make_client(calls) as client:
            await client.get_all_players()
            return await client.get_all_players()

    players = asyncio.run(run())

    assert players["b_wr1"].full_name == "Beta Receiver"
    assert players["k1"].position == "K"
    assert calls["/players/nfl"] == 1


def test_server_error_raises():
    async def run():
        async with make_client() as client:
            await client.get_season_stats(2020)

    with pytest.raises(SleeperAPIError) as exc_info:
        asyncio.run(run())
    assert exc_info.value.status_code == 500


def test_client_requires_context_manager():
    client = make_client()
    with pytest.raises(RuntimeError):
        client.client


# ==================== League Context ====================


def test_league_context_lookups():
    async def run():
        async with make_client() as client:
            return await LeagueContext.create(client, "L1")

    ctx = asyncio.run(run())

    assert ctx.league_name == "Test League"
    assert ctx.get_team_name(1) == "Alpha"
    assert ctx.get_team_name(2) == "Beta"
    assert ctx.get_team_name(42) == "Team 42"
    assert ctx.find_roster_for_user("ALPHA_USER").roster_id == 1
    assert ctx.find_roster_for_user("Gamma").roster_id == 3
    assert ctx.find_roster_for_user("nobody") is None


def test_league_context_unknown_league():
    async def run():
        async with make_client() as client:
            return await LeagueContext.create(client, "NOPE")

    with pytest.raises(SleeperAPIError) as exc_info:
        asyncio.run(run())
    assert exc_info.value.status_code == 404
