"""Cache key namespacing for departments and employees."""

# Aggregate views
DEPARTMENTS_ALL_KEY = "departments:all"
EMPLOYEES_ALL_KEY = "employees:all"


def employee_key(employee_id: int) -> str:
    """Generate cache key for a single employee."""
    return f"employee:{employee_id}"
