"""
Entity repository interface (Abstract Base Class).

Defines the contract for department and employee persistence
independent of the underlying storage mechanism. The durable store is the
source of truth; every failure surfaces as ``StoreException``.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..domain.entities import Department, Employee


class IEntityRepository(ABC):
    """
    Abstract repository interface for departments and employees.

    Each method maps to a single autocommit statement. No call spans a
    transaction with another call.
    """

    @abstractmethod
    async def create_department(self, name: str) -> int:
        """
        Insert a department.

        Returns:
            The store-assigned department id
        """

    @abstractmethod
    async def list_departments(self) -> List[Department]:
        """Return every department, in store-defined order."""

    @abstractmethod
    async def create_employee(self, employee: Employee) -> Employee:
        """
        Insert an employee.

        Args:
            employee: Employee fields; ``id`` and ``created_at`` are ignored

        Returns:
            The persisted employee with ``id`` and ``created_at`` set
        """

    @abstractmethod
    async def list_employees(self) -> List[Employee]:
        """Return every employee, in store-defined order."""

    @abstractmethod
    async def get_employee(self, employee_id: int) -> Optional[Employee]:
        """
        Find an employee by id.

        Returns:
            Employee if found, None otherwise
        """

    @abstractmethod
    async def update_employee(self, employee_id: int, employee: Employee) -> None:
        """
        Replace all mutable fields of an employee.

        Updating an id with no row is not an error.
        """

    @abstractmethod
    async def delete_employee(self, employee_id: int) -> None:
        """Hard-delete an employee. Deleting an absent id is not an error."""

    @abstractmethod
    async def ping(self) -> bool:
        """Return True when the store is reachable."""
