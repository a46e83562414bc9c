"""
Data-access contract for the rating engine.

Services depend on this protocol only; the SQLite repository is one
implementation and tests substitute in-memory fakes.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Protocol, runtime_checkable

from pydantic import ValidationError

from ..errors import InvalidInputError
from ..models import VendorSnapshot


@runtime_checkable
class VendorRepository(Protocol):
    """Narrow read/write seam to vendor storage."""

    def load_vendor_snapshot(self, vendor_id: str) -> VendorSnapshot:
        """Return the full snapshot (with reviews). Raises NotFoundError."""
        ...

    def load_category_peers(self, category: str) -> list[VendorSnapshot]:
        """Return verified vendors listing the category, without reviews."""
        ...

    def load_all_ratable_vendors(self) -> list[str]:
        """Return IDs of vendors with at least one review."""
        ...

    def persist_vendor_rating(self, vendor_id: str, rating: float) -> None:
        """Store a new rating. Raises NotFoundError or PersistenceError."""
        ...

    def load_candidates(
        self,
        category: str | None = None,
        location: str | None = None,
        verified_only: bool = True,
        now: datetime | None = None,
    ) -> list[VendorSnapshot]:
        """Return full snapshots matching the optional filters, in stable ID order.

        recent_booking_count covers the trend window ending at `now`
        (the repository clock when omitted).
        """
        ...


def snapshot_from_record(record: dict[str, Any]) -> VendorSnapshot:
    """Build a VendorSnapshot, reporting malformed data as InvalidInputError."""
    try:
        return VendorSnapshot(**record)
    except ValidationError as exc:
        raise InvalidInputError(
            f"Malformed snapshot for vendor {record.get('vendor_id')!r}",
            details={"errors": [
                {"loc": ".".join(str(p) for p in err["loc"]), "msg": err["msg"]}
                for err in exc.errors()
            ]},
        ) from exc
