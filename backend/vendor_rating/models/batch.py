"""Pydantic models for the batch rating update report."""
from typing import List, Optional

from pydantic import BaseModel, Field


class BatchUpdateDetail(BaseModel):
    """Outcome for one vendor. On failure new_rating equals old_rating."""

    vendor_id: str
    old_rating: float
    new_rating: float
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class BatchUpdateReport(BaseModel):
    """Summary of a batch run, one detail per vendor attempted."""

    updated: int = 0
    errors: int = 0
    cancelled: bool = Field(False, description="Run stopped before every vendor was attempted")
    details: List[BatchUpdateDetail] = Field(default_factory=list)

    @property
    def attempted(self) -> int:
        return len(self.details)
