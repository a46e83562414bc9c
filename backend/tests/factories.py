"""
Builders and an in-memory repository shared by the rating engine tests.
"""
from datetime import datetime, timedelta, timezone

from vendor_rating.errors import NotFoundError, PersistenceError
from vendor_rating.models import Review, VendorSnapshot

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def make_review(rating, days_ago=0, verified=False, events=0, registrations=0):
    """Review written `days_ago` days before NOW."""
    return Review(
        rating=rating,
        created_at=NOW - timedelta(days=days_ago),
        verified_purchase=verified,
        reviewer_event_count=events,
        reviewer_registration_count=registrations,
    )


def make_vendor(vendor_id, ratings=(), days_ago=0, **fields):
    """Snapshot with one review per rating, all written `days_ago` days before NOW."""
    fields.setdefault("verification_status", "VERIFIED")
    reviews = fields.pop("reviews", None)
    if reviews is None:
        reviews = [make_review(r, days_ago=days_ago) for r in ratings]
    return VendorSnapshot(vendor_id=vendor_id, reviews=reviews, **fields)


class FakeVendorRepository:
    """In-memory VendorRepository with failure injection."""

    def __init__(self, vendors=(), fail_persist=(), fail_load=()):
        self.vendors = {v.vendor_id: v for v in vendors}
        self.fail_persist = set(fail_persist)
        self.fail_load = set(fail_load)
        self.persisted = {}
        self.peer_loads = []
        self.candidate_loads = []

    def load_vendor_snapshot(self, vendor_id):
        if vendor_id in self.fail_load:
            raise RuntimeError(f"storage unavailable for {vendor_id}")
        try:
            return self.vendors[vendor_id]
        except KeyError:
            raise NotFoundError(f"Vendor {vendor_id} not found") from None

    def load_category_peers(self, category):
        self.peer_loads.append(category)
        return [
            v.model_copy(update={"reviews": ()})
            for v in self.vendors.values()
            if v.is_verified and category in v.service_categories
        ]

    def load_all_ratable_vendors(self):
        return [v.vendor_id for v in self.vendors.values() if v.review_count > 0]

    def persist_vendor_rating(self, vendor_id, rating):
        if vendor_id in self.fail_persist:
            raise PersistenceError(f"write failed for {vendor_id}")
        self.persisted[vendor_id] = rating

    def load_candidates(self, category=None, location=None, verified_only=True, now=None):
        self.candidate_loads.append(now)
        result = []
        for v in self.vendors.values():
            if verified_only and not v.is_verified:
                continue
            if category and category not in v.service_categories:
                continue
            if location and v.city != location:
                continue
            result.append(v)
        return result
