"""
Tests for the shared plumbing: cache registry, domain errors, logging setup.
"""
import logging

from vendor_rating.cache import AppCache
from vendor_rating.errors import DomainError, InvalidInputError, NotFoundError, PersistenceError
from vendor_rating.logging_config import configure


class TestAppCache:
    """Test the named cache registry."""

    def test_get_or_load_calls_loader_once(self):
        cache = AppCache()
        calls = []

        def loader():
            calls.append(1)
            return ["peer"]

        assert cache.get_or_load("run", "CATERING", loader) == ["peer"]
        assert cache.get_or_load("run", "CATERING", loader) == ["peer"]
        assert len(calls) == 1

    def test_drop_removes_cache(self):
        cache = AppCache()
        cache.get_or_load("run", "a", lambda: 1)
        cache.drop("run")
        assert "run" not in cache._caches

    def test_get_cache_applies_bounds(self):
        peers = AppCache().get_cache("peers", maxsize=10, ttl=60)
        assert peers.maxsize == 10
        assert peers.ttl == 60


class TestDomainErrors:
    """Test error codes and serialization."""

    def test_error_codes(self):
        assert NotFoundError("x").error_code == "NOT_FOUND"
        assert InvalidInputError("x").error_code == "INVALID_INPUT"
        assert PersistenceError("x").error_code == "PERSISTENCE_FAILURE"

    def test_all_are_domain_errors(self):
        for cls in (NotFoundError, InvalidInputError, PersistenceError):
            assert issubclass(cls, DomainError)

    def test_to_dict(self):
        err = NotFoundError("Vendor v1 not found", details={"vendor_id": "v1"})
        assert err.to_dict() == {
            "code": "NOT_FOUND",
            "message": "Vendor v1 not found",
            "details": {"vendor_id": "v1"},
        }

    def test_to_dict_without_details(self):
        assert InvalidInputError("bad").to_dict()["details"] is None


class TestLoggingConfig:
    """Test structlog setup."""

    def test_sets_root_level(self):
        configure("DEBUG")
        assert logging.getLogger().level == logging.DEBUG
        configure("WARNING")
        assert logging.getLogger().level == logging.WARNING

    def test_quiets_noisy_loggers(self):
        configure("DEBUG")
        assert logging.getLogger("urllib3").level == logging.WARNING
