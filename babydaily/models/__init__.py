from .baby import Baby, BabyCreate, BabyUpdate
from .diaper import Diaper, DiaperCreate
from .feeding import Feeding, FeedingCreate
from .growth import Growth, GrowthCreate
from .sleep import Sleep, SleepCreate
from .user import LoginRequest, RegisterRequest, ResetPasswordRequest, SecurityAnswers, UserSession

__all__ = [
    "Baby", "BabyCreate", "BabyUpdate",
    "Diaper", "DiaperCreate",
    "Feeding", "FeedingCreate",
    "Growth", "GrowthCreate",
    "Sleep", "SleepCreate",
    "LoginRequest", "RegisterRequest", "ResetPasswordRequest", "SecurityAnswers", "UserSession",
]
