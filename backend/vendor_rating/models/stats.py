"""Pydantic models for review statistics and competitive position."""
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from .common import RatingPosition


class ReviewStatistics(BaseModel):
    """Descriptive statistics over a vendor's reviews."""

    model_config = ConfigDict(frozen=True)

    vendor_id: str
    total_reviews: int = Field(0, ge=0)
    average_rating: float = Field(0.0, ge=0, le=5)
    rating_distribution: Dict[int, int] = Field(default_factory=dict, description="Star -> count")
    verified_purchase_pct: float = Field(0.0, ge=0, le=100)


class CompetitivePosition(BaseModel):
    """Where a vendor stands against its primary category."""

    model_config = ConfigDict(frozen=True)

    vendor_id: str
    category: Optional[str] = None
    vendor_rating: float
    category_average_rating: float
    rating_position: RatingPosition
    market_rank: int = Field(..., ge=1, description="Position by rating * ln(review_count + 1)")
    total_competitors: int = Field(0, ge=0)
