"""Pydantic models for discovery ranking."""
from pydantic import BaseModel, ConfigDict, Field

from .common import VerificationStatus


class VendorRankingFactors(BaseModel):
    """Inputs to the overall score."""

    model_config = ConfigDict(frozen=True)

    rating: float = Field(..., ge=0, le=5, description="Freshly computed weighted rating")
    review_count: int = Field(..., ge=0)
    verification_status: VerificationStatus
    completion_rate: float = Field(..., ge=0, le=100)
    response_time_hours: float = Field(..., ge=0)
    category_rank: int = Field(..., ge=1, description="1-based position among category peers")


class RankingEntry(BaseModel):
    """A ranked vendor."""

    model_config = ConfigDict(frozen=True)

    vendor_id: str
    business_name: str = ""
    overall_score: float = Field(..., description="Composite score (0-100)")
    rank: int = Field(..., ge=1)
    factors: VendorRankingFactors
