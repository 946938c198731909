"""
Database enums
"""

import enum


class AccountRole(enum.Enum):
    """Account role enum"""
    USER = "user"
    ADMIN = "admin"


class WagerTarget(enum.Enum):
    """What a wager was placed on"""
    EVENT = "event"
    SPECIAL = "special"
