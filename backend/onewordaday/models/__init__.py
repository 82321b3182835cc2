from .words import DailyWord, WordBankEntry
from .users import UserProfile
from .feedback import Feedback
from .usage import AIUsage


__all__ = [
    "DailyWord",
    "WordBankEntry",
    "UserProfile",
    "Feedback",
    "AIUsage",
]
