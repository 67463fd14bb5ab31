"""
Custom exceptions for the employee service domain.

These exceptions represent domain-level errors and are independent
of infrastructure concerns (HTTP, database, cache). Callers branch on
the exception class, never on the message text.
"""

from typing import Optional


class EmployeeServiceException(Exception):
    """Base exception for all employee service errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationException(EmployeeServiceException):
    """Raised when a department or employee violates a business rule."""

    def __init__(self, reason: str, field: Optional[str] = None):
        self.reason = reason
        self.field = field
        super().__init__(message=reason, details={"field": field, "reason": reason})


class DecodeException(EmployeeServiceException):
    """Raised when a request body or path parameter cannot be decoded."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(message=reason, details={"reason": reason})


class StoreException(EmployeeServiceException):
    """Raised when the durable store fails."""

    def __init__(self, operation: str, cause: Optional[str] = None):
        self.operation = operation
        self.cause = cause
        message = f"Store {operation} failed"
        if cause:
            message += f": {cause}"
        super().__init__(
            message=message, details={"operation": operation, "cause": cause}
        )


class EmployeeNotFoundException(StoreException):
    """Raised when an employee id has no row in the store."""

    def __init__(self, employee_id: int):
        self.employee_id = employee_id
        super().__init__(operation="get_employee", cause=f"employee {employee_id} not found")


class CacheException(EmployeeServiceException):
    """Raised when cache operations fail."""

    def __init__(self, operation: str, reason: Optional[str] = None):
        self.operation = operation
        self.reason = reason
        message = f"Cache {operation} failed"
        if reason:
            message += f": {reason}"
        super().__init__(
            message=message, details={"operation": operation, "reason": reason}
        )
