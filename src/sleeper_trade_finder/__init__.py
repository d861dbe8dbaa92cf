"""Sleeper Trade Finder - trade recommendations for Sleeper fantasy leagues."""

__version__ = "0.1.0"
