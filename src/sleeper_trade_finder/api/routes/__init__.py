"""API route handlers."""

from sleeper_trade_finder.api.routes import leagues, trade_finder

__all__ = [
    "leagues",
    "trade_finder",
]
