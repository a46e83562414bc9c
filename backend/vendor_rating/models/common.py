"""Shared enums for rating, ranking and trend models."""
from enum import Enum


class VerificationStatus(str, Enum):
    """Vendor verification state."""
    VERIFIED = "VERIFIED"
    PENDING = "PENDING"
    REJECTED = "REJECTED"


class TrendDirection(str, Enum):
    """Direction of a rating or booking trend."""
    up = "up"
    down = "down"
    stable = "stable"


class RatingPosition(str, Enum):
    """Vendor rating relative to its category benchmark."""
    BELOW_AVERAGE = "BELOW_AVERAGE"
    AVERAGE = "AVERAGE"
    ABOVE_AVERAGE = "ABOVE_AVERAGE"
