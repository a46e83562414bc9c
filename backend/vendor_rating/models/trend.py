"""Pydantic models for trending vendors."""
from pydantic import BaseModel, ConfigDict, Field

from .common import TrendDirection


class TrendResult(BaseModel):
    """Recent-performance signal for one vendor."""

    model_config = ConfigDict(frozen=True)

    vendor_id: str
    business_name: str = ""
    trend_score: float
    recent_rating: float = Field(..., ge=0, le=5)
    rating_trend: TrendDirection
    booking_trend: TrendDirection
    recent_review_count: int = Field(0, ge=0)
