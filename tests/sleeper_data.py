"""
Fake Sleeper API for tests.

A three-team PPR league: Alpha is deep at QB, Beta is thin at QB and
deep at WR, Gamma sits in the middle. Requests are answered by an
httpx.MockTransport handler so no network is touched.
"""

from collections import Counter

import httpx

from sleeper_trade_finder.clients.sleeper import SleeperClient
from sleeper_trade_finder.config import Settings

GAMES = 10

# player_id -> (full_name, position, team, points per game)
PLAYERS = {
    "a_qb1": ("Alpha Quarterback", "QB", "BUF", 28.0),
    "a_qb2": ("Alpha Backup", "QB", "KC", 26.0),
    "a_wr1": ("Alpha Receiver", "WR", "MIA", 8.0),
    "b_qb1": ("Beta Quarterback", "QB", "NYJ", 12.0),
    "b_wr1": ("Beta Receiver", "WR", "CIN", 18.5),
    "g_qb1": ("Gamma Quarterback", "QB", "DAL", 18.0),
    "g_wr1": ("Gamma Receiver", "WR", "DET", 10.0),
    "k1": ("Alpha Kicker", "K", "BAL", 9.0),
}

LEAGUE = {
    "league_id": "L1",
    "name": "Test League",
    "status": "in_season",
    "season": "2024",
    "total_rosters": 3,
    "scoring_settings": {"rec": 1.0},
}

USERS = [
    {
        "user_id": "u1",
        "username": "alpha_user",
        "display_name": "AlphaGM",
        "metadata": {"team_name": "Alpha"},
    },
    {"user_id": "u2", "username": "beta_user", "display_name": "Beta", "metadata": {}},
    {"user_id": "u3", "username": "gamma_user", "display_name": "Gamma", "metadata": None},
]

ROSTERS = [
    {"roster_id": 1, "owner_id": "u1", "players": ["a_qb1", "a_qb2", "a_wr1", "k1"]},
    {"roster_id": 2, "owner_id": "u2", "players": ["b_qb1", "b_wr1", "9999"]},
    {"roster_id": 3, "owner_id": "u3", "players": ["g_qb1", "g_wr1"]},
]


def players_payload() -> dict:
    return {
        pid: {"player_id": pid, "full_name": name, "position": pos, "team": team}
        for pid, (name, pos, team, _) in PLAYERS.items()
    }


def stats_payload() -> dict:
    return {
        pid: {
            "pts_ppr": ppg * GAMES,
            "pts_half_ppr": ppg * GAMES - 5,
            "pts_std": ppg * GAMES - 10,
            "gp": GAMES,
        }
        for pid, (_, _, _, ppg) in PLAYERS.items()
    }


def make_handler(calls: Counter | None = None):
    """MockTransport handler serving the fake league; counts hits per path."""
    calls = calls if calls is not None else Counter()

    routes = {
        "/league/L1": LEAGUE,
        "/league/L1/users": USERS,
        "/league/L1/rosters": ROSTERS,
        "/players/nfl": players_payload(),
        "/stats/nfl/regular/2024": stats_payload(),
        "/user/alpha_user": USERS[0],
        "/user/u1/leagues/nfl/2024": [LEAGUE],
    }

    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path.removeprefix("/v1")
        calls[path] += 1
        # the 2020 stats feed is down
        if path == "/stats/nfl/regular/2020":
            return httpx.Response(500, json={"error": "unavailable"})
        if path not in routes:
            return httpx.Response(404, json=None)
        return httpx.Response(200, json=routes[path])

    return handler


def make_client(calls: Counter | None = None) -> SleeperClient:
    """SleeperClient wired to the fake league. Use as an async context manager."""
    return SleeperClient(
        settings=Settings(), transport=httpx.MockTransport(make_handler(calls))
    )
