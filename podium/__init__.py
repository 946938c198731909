"""Podium - sports event schedule, leaderboard and betting ledger API"""

__version__ = "0.1.0"
