"""
Cache-aside coordinator for departments and employees.

Orchestrates validation, the durable store and the cache for every
operation:

- Reads consult the cache first. On a miss the store is queried, the
  serialized result is cached with a bounded TTL and returned.
- Writes are validated, committed to the store, and only then invalidate
  the affected cache keys. A failed write invalidates nothing.

Cache failures never fail a request. On reads they count as a miss, on
invalidation they are logged and the TTL is the backstop.

Consistency is read-your-writes at the granularity of key invalidation.
Between a store commit and the matching cache delete a concurrent read can
still see the previous payload. No lock closes that window, and concurrent
misses on the same key each query the store and each repopulate the cache.
"""

import time
from typing import Awaitable, Callable, List, Optional, TypeVar

import structlog

from ..cache.cache_store import ICacheStore
from ..cache.keys import DEPARTMENTS_ALL_KEY, EMPLOYEES_ALL_KEY, employee_key
from ..domain.entities import Department, Employee, serialize
from ..domain.exceptions import CacheException, EmployeeNotFoundException, StoreException
from ..metrics import (
    track_cache_error,
    track_cache_hit,
    track_cache_invalidation,
    track_cache_miss,
    track_store_operation,
)
from ..repositories.entity_repository import IEntityRepository
from ..validators import validate_department, validate_employee

logger = structlog.get_logger(__name__)

T = TypeVar("T")

DEFAULT_CACHE_TTL_SECONDS = 600

EMPLOYEE_UPDATED_MESSAGE = "Employee updated successfully."
EMPLOYEE_DELETED_MESSAGE = "Employee deleted successfully."


class CacheAsideCoordinator:
    """
    Read-through / write-invalidate layer over an entity store and a cache.

    Holds no per-request state, so one instance serves all concurrent
    requests. Shared mutable state lives in the store and the cache.
    """

    def __init__(
        self,
        repository: IEntityRepository,
        cache: ICacheStore,
        ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS,
    ):
        """
        Initialize coordinator.

        Args:
            repository: Durable store, the source of truth
            cache: Cache store holding serialized payloads
            ttl_seconds: Lifetime of every cache entry written on a miss
        """
        self.repository = repository
        self.cache = cache
        self.ttl_seconds = ttl_seconds

    # ------------------------------------------------------------------
    # Departments
    # ------------------------------------------------------------------

    async def create_department(self, department: Department) -> Department:
        """
        Validate and insert a department, then drop the department list.

        Raises:
            ValidationException: If the name fails validation
            StoreException: If the insert fails
        """
        validate_department(department)

        department_id = await self._store_call(
            "create_department", self.repository.create_department, department.name
        )
        await self._invalidate(DEPARTMENTS_ALL_KEY)

        logger.info("Department created", department_id=department_id)
        return Department(id=department_id, name=department.name)

    async def list_departments(self) -> str:
        """Return the department list as JSON text."""
        return await self._read_through(DEPARTMENTS_ALL_KEY, self._load_departments)

    async def _load_departments(self) -> str:
        departments: List[Department] = await self._store_call(
            "list_departments", self.repository.list_departments
        )
        return serialize(departments)

    # ------------------------------------------------------------------
    # Employees
    # ------------------------------------------------------------------

    async def create_employee(self, employee: Employee) -> Employee:
        """
        Validate and insert an employee, then drop the employee list.

        The per-id key is not populated here; it fills on first read.

        Raises:
            ValidationException: If any field fails validation
            StoreException: If the insert fails
        """
        validate_employee(employee)

        created: Employee = await self._store_call(
            "create_employee", self.repository.create_employee, employee
        )
        await self._invalidate(EMPLOYEES_ALL_KEY)

        logger.info("Employee created", employee_id=created.id)
        return created

    async def list_employees(self) -> str:
        """Return the employee list as JSON text."""
        return await self._read_through(EMPLOYEES_ALL_KEY, self._load_employees)

    async def _load_employees(self) -> str:
        employees: List[Employee] = await self._store_call(
            "list_employees", self.repository.list_employees
        )
        return serialize(employees)

    async def get_employee(self, employee_id: int) -> str:
        """
        Return one employee as JSON text.

        A missing row is not cached.

        Raises:
            EmployeeNotFoundException: If no employee has this id
            StoreException: If the lookup fails
        """

        async def load() -> str:
            employee: Optional[Employee] = await self._store_call(
                "get_employee", self.repository.get_employee, employee_id
            )
            if employee is None:
                raise EmployeeNotFoundException(employee_id)
            return serialize(employee)

        return await self._read_through(employee_key(employee_id), load)

    async def update_employee(self, employee_id: int, employee: Employee) -> str:
        """
        Replace all mutable fields of an employee.

        Invalidates both the employee list and the per-id entry.

        Returns:
            Confirmation message

        Raises:
            ValidationException: If any field fails validation
            StoreException: If the update fails
        """
        validate_employee(employee)

        await self._store_call(
            "update_employee", self.repository.update_employee, employee_id, employee
        )
        await self._invalidate(EMPLOYEES_ALL_KEY, employee_key(employee_id))

        logger.info("Employee updated", employee_id=employee_id)
        return EMPLOYEE_UPDATED_MESSAGE

    async def delete_employee(self, employee_id: int) -> str:
        """
        Hard-delete an employee.

        Invalidates both the employee list and the per-id entry.

        Returns:
            Confirmation message

        Raises:
            StoreException: If the delete fails
        """
        await self._store_call("delete_employee", self.repository.delete_employee, employee_id)
        await self._invalidate(EMPLOYEES_ALL_KEY, employee_key(employee_id))

        logger.info("Employee deleted", employee_id=employee_id)
        return EMPLOYEE_DELETED_MESSAGE

    # ------------------------------------------------------------------
    # Cache-aside plumbing
    # ------------------------------------------------------------------

    async def _read_through(self, key: str, loader: Callable[[], Awaitable[str]]) -> str:
        """Serve ``key`` from cache, or load, cache and return it."""
        cached = await self._cache_get(key)
        if cached is not None:
            track_cache_hit(key)
            logger.debug("Cache hit", key=key)
            return cached

        track_cache_miss(key)
        logger.debug("Cache miss, querying store", key=key)

        payload = await loader()
        await self._cache_set(key, payload)
        return payload

    async def _cache_get(self, key: str) -> Optional[str]:
        try:
            return await self.cache.get(key)
        except CacheException as e:
            track_cache_error("get")
            logger.warning("Cache read failed, serving from store", key=key, error=str(e))
            return None

    async def _cache_set(self, key: str, payload: str) -> None:
        try:
            await self.cache.set(key, payload, self.ttl_seconds)
        except CacheException as e:
            track_cache_error("set")
            logger.warning("Cache populate failed", key=key, error=str(e))

    async def _invalidate(self, *keys: str) -> None:
        """Delete every key, attempting all of them even if one fails."""
        for key in keys:
            try:
                await self.cache.delete(key)
            except CacheException as e:
                track_cache_error("delete")
                track_cache_invalidation(key, success=False)
                logger.warning(
                    "Cache invalidation failed, entry expires by TTL",
                    key=key,
                    ttl_seconds=self.ttl_seconds,
                    error=str(e),
                )
            else:
                track_cache_invalidation(key, success=True)
                logger.info("Cache invalidated", key=key)

    async def _store_call(
        self, operation: str, func: Callable[..., Awaitable[T]], *args
    ) -> T:
        """Run one store operation and record its outcome."""
        start_time = time.perf_counter()
        try:
            result = await func(*args)
        except StoreException:
            track_store_operation(operation, False, time.perf_counter() - start_time)
            raise
        track_store_operation(operation, True, time.perf_counter() - start_time)
        return result
