# Models Package
from .account import Account
from .event import Event
from .special_bet import SpecialBet
from .wager import Wager
from .audit_log import AuditLog
from .photo import Photo

__all__ = [
    "Account",
    "Event",
    "SpecialBet",
    "Wager",
    "AuditLog",
    "Photo"
]
