"""
Test configuration and fixtures
"""

from datetime import datetime, timezone
from typing import Dict, List, Optional

import pytest

from app.cache.memory_cache import MemoryCacheStore
from app.domain.entities import Department, Employee
from app.domain.exceptions import CacheException, StoreException
from app.repositories.entity_repository import IEntityRepository
from app.services.cache_aside import CacheAsideCoordinator


class InMemoryEntityRepository(IEntityRepository):
    """Dict-backed store that records every call it receives."""

    def __init__(self):
        self.departments: Dict[int, Department] = {}
        self.employees: Dict[int, Employee] = {}
        self.calls: List[str] = []
        self.fail_on: set = set()
        self._next_department_id = 1
        self._next_employee_id = 1

    def _record(self, operation: str) -> None:
        self.calls.append(operation)
        if operation in self.fail_on:
            raise StoreException(operation, "connection refused")

    async def create_department(self, name: str) -> int:
        self._record("create_department")
        department_id = self._next_department_id
        self._next_department_id += 1
        self.departments[department_id] = Department(id=department_id, name=name)
        return department_id

    async def list_departments(self) -> List[Department]:
        self._record("list_departments")
        return [self.departments[k] for k in sorted(self.departments)]

    async def create_employee(self, employee: Employee) -> Employee:
        self._record("create_employee")
        employee_id = self._next_employee_id
        self._next_employee_id += 1
        stored = Employee(
            id=employee_id,
            name=employee.name,
            email=employee.email,
            phone=employee.phone,
            salary=employee.salary,
            department_id=employee.department_id,
            status=employee.status,
            created_at=datetime(2024, 1, 15, 9, 30, tzinfo=timezone.utc),
        )
        self.employees[employee_id] = stored
        return stored

    async def list_employees(self) -> List[Employee]:
        self._record("list_employees")
        return [self.employees[k] for k in sorted(self.employees)]

    async def get_employee(self, employee_id: int) -> Optional[Employee]:
        self._record("get_employee")
        return self.employees.get(employee_id)

    async def update_employee(self, employee_id: int, employee: Employee) -> None:
        self._record("update_employee")
        current = self.employees.get(employee_id)
        if current is None:
            return
        self.employees[employee_id] = Employee(
            id=employee_id,
            name=employee.name,
            email=employee.email,
            phone=employee.phone,
            salary=employee.salary,
            department_id=employee.department_id,
            status=employee.status,
            created_at=current.created_at,
        )

    async def delete_employee(self, employee_id: int) -> None:
        self._record("delete_employee")
        self.employees.pop(employee_id, None)

    async def ping(self) -> bool:
        return "ping" not in self.fail_on


class FlakyCacheStore(MemoryCacheStore):
    """Memory cache whose operations can be switched to fail."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.fail_on: set = set()
        self.deleted: List[str] = []

    async def get(self, key):
        if "get" in self.fail_on:
            raise CacheException("get", "connection reset")
        return await super().get(key)

    async def set(self, key, value, ttl):
        if "set" in self.fail_on:
            raise CacheException("set", "connection reset")
        await super().set(key, value, ttl)

    async def delete(self, key):
        self.deleted.append(key)
        if "delete" in self.fail_on:
            raise CacheException("delete", "connection reset")
        return await super().delete(key)

    async def ping(self):
        return "ping" not in self.fail_on


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    """Controllable clock for TTL tests."""
    return FakeClock()


@pytest.fixture
def repository():
    """Fresh in-memory entity store."""
    return InMemoryEntityRepository()


@pytest.fixture
def cache(clock):
    """Fresh cache store driven by the fake clock."""
    return FlakyCacheStore(max_size=100, clock=clock)


@pytest.fixture
def coordinator(repository, cache):
    """Coordinator wired to in-memory collaborators."""
    return CacheAsideCoordinator(repository=repository, cache=cache, ttl_seconds=600)


@pytest.fixture
def sample_employee():
    """Valid employee fields."""
    return Employee(
        name="Jane Doe",
        email="jane@gmail.com",
        phone="+1-555-0100",
        salary=50000,
        department_id=1,
        status="active",
    )
