"""
Tests for domain exceptions.

Simple tests to ensure exceptions work correctly.
"""

from app.domain.exceptions import (
    CacheException,
    DecodeException,
    EmployeeNotFoundException,
    EmployeeServiceException,
    StoreException,
    ValidationException,
)


class TestExceptions:
    """Test custom exceptions."""

    def test_validation_exception(self):
        """Test ValidationException."""
        exc = ValidationException("Salary cannot be less than zero", field="salary")
        assert str(exc) == "Salary cannot be less than zero"
        assert exc.details == {"field": "salary", "reason": "Salary cannot be less than zero"}

    def test_decode_exception(self):
        """Test DecodeException."""
        exc = DecodeException("Invalid JSON")
        assert exc.reason == "Invalid JSON"
        assert isinstance(exc, EmployeeServiceException)

    def test_store_exception(self):
        """Test StoreException."""
        exc = StoreException("create_employee", "connection lost")
        assert "create_employee" in str(exc)
        assert "connection lost" in str(exc)

    def test_store_exception_without_cause(self):
        exc = StoreException("list_departments")
        assert str(exc) == "Store list_departments failed"

    def test_not_found_is_store_exception(self):
        """Test EmployeeNotFoundException."""
        exc = EmployeeNotFoundException(42)
        assert isinstance(exc, StoreException)
        assert exc.employee_id == 42
        assert "42" in str(exc)

    def test_cache_exception(self):
        """Test CacheException."""
        exc = CacheException("delete", "Connection failed")
        assert "delete" in str(exc)
        assert "Connection failed" in str(exc)
        assert not isinstance(exc, StoreException)
