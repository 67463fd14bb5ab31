"""
Business-rule validation for departments and employees.

Pure functions with no I/O. Each rule set is checked in order and the first
failing rule wins. A failing entity never reaches the store or the cache.
"""

import math

from .domain.entities import Department, Employee
from .domain.exceptions import ValidationException

# Department name constants
MIN_DEPARTMENT_NAME_LENGTH = 2

# Only addresses in this domain are accepted
EMAIL_DOMAIN_SUFFIX = "@gmail.com"


def validate_department(department: Department) -> None:
    """
    Validate a department before it is written.

    Raises:
        ValidationException: If the name is blank or shorter than two characters
    """
    name = department.name.strip()
    if not name:
        raise ValidationException("Department name cannot be empty", field="name")
    if len(name) < MIN_DEPARTMENT_NAME_LENGTH:
        raise ValidationException(
            f"Department name cannot be less than {MIN_DEPARTMENT_NAME_LENGTH} characters",
            field="name",
        )


def validate_employee(employee: Employee) -> None:
    """
    Validate an employee before it is created or replaced.

    Rules, in order:
    1. name is not blank
    2. email contains "@"
    3. email ends with ``EMAIL_DOMAIN_SUFFIX``
    4. email has a local part before the suffix
    5. phone is not blank
    6. salary is a finite number, not negative
    7. department_id is not negative
    8. status is not blank

    Raises:
        ValidationException: Carrying the reason of the first failing rule
    """
    if not employee.name.strip():
        raise ValidationException("Employee name cannot be empty", field="name")

    email = employee.email
    if "@" not in email:
        raise ValidationException("Email syntax is invalid", field="email")
    if not email.endswith(EMAIL_DOMAIN_SUFFIX):
        raise ValidationException(
            f"Invalid email. Must end with '{EMAIL_DOMAIN_SUFFIX}'", field="email"
        )
    if not email[: -len(EMAIL_DOMAIN_SUFFIX)]:
        raise ValidationException(
            f"Email must contain a prefix before '{EMAIL_DOMAIN_SUFFIX}'", field="email"
        )

    if not employee.phone.strip():
        raise ValidationException("Phone number is required", field="phone")
    if not math.isfinite(employee.salary):
        raise ValidationException("Salary must be a finite number", field="salary")
    if employee.salary < 0:
        raise ValidationException("Salary cannot be less than zero", field="salary")
    if employee.department_id < 0:
        raise ValidationException("Invalid department ID", field="department_id")
    if not employee.status.strip():
        raise ValidationException("Status cannot be empty", field="status")
