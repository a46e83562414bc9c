"""Pydantic models for the read-only vendor snapshot handed to the engine."""
from datetime import datetime, timezone
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .common import VerificationStatus


class Review(BaseModel):
    """A single review plus the reviewer's activity facts."""

    model_config = ConfigDict(frozen=True)

    rating: int = Field(..., ge=1, le=5, description="Star rating (1-5)")
    created_at: datetime = Field(..., description="When the review was written")
    verified_purchase: bool = Field(False, description="Reviewer booked through the platform")
    reviewer_event_count: int = Field(0, ge=0, description="Events organized by the reviewer")
    reviewer_registration_count: int = Field(0, ge=0, description="Event registrations of the reviewer")

    @field_validator("created_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # Naive timestamps from storage are UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class VendorSnapshot(BaseModel):
    """Everything the engine knows about one vendor for one computation."""

    model_config = ConfigDict(frozen=True)

    vendor_id: str = Field(..., min_length=1, description="Vendor ID")
    business_name: str = Field("", description="Display name")
    reviews: Tuple[Review, ...] = Field(default_factory=tuple)
    service_categories: Tuple[str, ...] = Field(
        default_factory=tuple, description="Service categories; the first one is primary"
    )
    completion_rate: float = Field(0.0, ge=0, le=100, description="Completed bookings (%)")
    response_time_hours: float = Field(0.0, ge=0, description="Average response time (hours)")
    verification_status: VerificationStatus = VerificationStatus.PENDING
    rating: float = Field(0.0, ge=0, le=5, description="Stored lifetime rating")
    review_count: int = Field(0, ge=0, description="Stored review count")
    city: Optional[str] = Field(None, description="Business address city")
    recent_booking_count: int = Field(0, ge=0, description="Booking requests in the trend window")

    @model_validator(mode="before")
    @classmethod
    def _default_review_count(cls, data):
        if isinstance(data, dict) and data.get("review_count") is None:
            data = {**data, "review_count": len(data.get("reviews") or ())}
        return data

    @property
    def primary_category(self) -> Optional[str]:
        return self.service_categories[0] if self.service_categories else None

    @property
    def is_verified(self) -> bool:
        return self.verification_status == VerificationStatus.VERIFIED
