"""
Domain errors for the vendor rating engine.

Single-vendor lookups and rankings let these propagate to the caller.
The batch updater is the only place that catches them and records the
message in its report.
"""


class DomainError(Exception):
    """Base class for domain-level errors."""
    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        return {
            "code": self.error_code,
            "message": self.message,
            "details": self.details if self.details else None,
        }


class NotFoundError(DomainError):
    """Vendor not found."""
    error_code = "NOT_FOUND"


class InvalidInputError(DomainError):
    """Malformed snapshot or call argument (negative counts, bad limits)."""
    error_code = "INVALID_INPUT"


class PersistenceError(DomainError):
    """Writing to storage failed."""
    error_code = "PERSISTENCE_FAILURE"
