"""Pydantic models for weighted ratings and category benchmarks."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..config.constants import DEFAULT_RATING_WEIGHTS


class RatingWeights(BaseModel):
    """How strongly each adjustment moves the base rating."""

    model_config = ConfigDict(frozen=True)

    recency: float = Field(DEFAULT_RATING_WEIGHTS['recency'], ge=0, le=1)
    credibility: float = Field(DEFAULT_RATING_WEIGHTS['credibility'], ge=0, le=1)
    category: float = Field(DEFAULT_RATING_WEIGHTS['category'], ge=0, le=1)
    volume: float = Field(DEFAULT_RATING_WEIGHTS['volume'], ge=0, le=1)


class RatingAdjustments(BaseModel):
    """Signed adjustments applied to the base rating (2 decimals)."""

    model_config = ConfigDict(frozen=True)

    recency: float = 0.0
    credibility: float = 0.0
    category: float = 0.0
    volume: float = 0.0


class WeightedRatingResult(BaseModel):
    """Weighted rating and confidence for a single vendor."""

    model_config = ConfigDict(frozen=True)

    vendor_id: Optional[str] = Field(None, description="Vendor ID")
    weighted_rating: float = Field(..., ge=0, le=5, description="0 when there are no reviews, else 1-5")
    base_rating: float = Field(..., ge=0, le=5, description="Simple review average")
    adjustments: RatingAdjustments = Field(default_factory=RatingAdjustments)
    confidence: float = Field(..., ge=0, le=1, description="Trust in the weighted rating (0-1)")
    review_count: int = Field(0, ge=0)

    @property
    def has_reviews(self) -> bool:
        return self.review_count > 0


class CategoryBenchmarks(BaseModel):
    """Category-wide averages over verified, reviewed vendors."""

    model_config = ConfigDict(frozen=True)

    category: Optional[str] = None
    average_rating: float
    average_review_count: float
    average_completion_rate: float
    average_response_time: float
    peer_count: int = Field(0, ge=0, description="Vendors the averages were taken over (0 = defaults)")
