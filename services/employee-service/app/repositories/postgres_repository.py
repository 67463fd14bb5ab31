"""
PostgreSQL implementation of the entity repository.

Each operation acquires a pooled connection and runs one statement.
asyncpg and socket errors are wrapped in ``StoreException`` with the
operation name so the HTTP layer never sees driver exceptions.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional

import asyncpg
import structlog

from ..domain.entities import Department, Employee
from ..domain.exceptions import StoreException
from .entity_repository import IEntityRepository

logger = structlog.get_logger(__name__)

# asyncio.TimeoutError is not an OSError before Python 3.11
STORE_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, asyncio.TimeoutError, OSError)

EMPLOYEE_COLUMNS = "id, name, email, phone, salary, department_id, status, created_at"


def _row_to_employee(row: asyncpg.Record) -> Employee:
    return Employee(
        id=row["id"],
        name=row["name"],
        email=row["email"],
        phone=row["phone"],
        salary=float(row["salary"]),
        department_id=row["department_id"],
        status=row["status"],
        created_at=row["created_at"],
    )


class PostgresEntityRepository(IEntityRepository):
    """asyncpg-backed store for departments and employees."""

    def __init__(self, pool: asyncpg.Pool):
        self.pool = pool

    @asynccontextmanager
    async def _connection(self, operation: str) -> AsyncIterator[asyncpg.Connection]:
        """Acquire a connection and translate driver errors."""
        try:
            async with self.pool.acquire() as conn:
                yield conn
        except STORE_ERRORS as e:
            logger.error("Store operation failed", operation=operation, error=str(e))
            raise StoreException(operation, str(e)) from e

    async def create_department(self, name: str) -> int:
        async with self._connection("create_department") as conn:
            department_id = await conn.fetchval(
                "INSERT INTO departments (name) VALUES ($1) RETURNING id",
                name,
            )
        logger.info("Department inserted", department_id=department_id)
        return department_id

    async def list_departments(self) -> List[Department]:
        async with self._connection("list_departments") as conn:
            rows = await conn.fetch("SELECT id, name FROM departments ORDER BY id")
        return [Department(id=row["id"], name=row["name"]) for row in rows]

    async def create_employee(self, employee: Employee) -> Employee:
        async with self._connection("create_employee") as conn:
            row = await conn.fetchrow(
                f"""
                INSERT INTO employees (name, email, phone, salary, department_id, status)
                VALUES ($1, $2, $3, $4, $5, $6)
                RETURNING {EMPLOYEE_COLUMNS}
                """,
                employee.name,
                employee.email,
                employee.phone,
                employee.salary,
                employee.department_id,
                employee.status,
            )

        if row is None:
            raise StoreException("create_employee", "no row returned")

        logger.info("Employee inserted", employee_id=row["id"])
        return _row_to_employee(row)

    async def list_employees(self) -> List[Employee]:
        async with self._connection("list_employees") as conn:
            rows = await conn.fetch(f"SELECT {EMPLOYEE_COLUMNS} FROM employees ORDER BY id")
        return [_row_to_employee(row) for row in rows]

    async def get_employee(self, employee_id: int) -> Optional[Employee]:
        async with self._connection("get_employee") as conn:
            row = await conn.fetchrow(
                f"SELECT {EMPLOYEE_COLUMNS} FROM employees WHERE id = $1",
                employee_id,
            )
        return _row_to_employee(row) if row else None

    async def update_employee(self, employee_id: int, employee: Employee) -> None:
        async with self._connection("update_employee") as conn:
            result = await conn.execute(
                """
                UPDATE employees
                SET name = $2, email = $3, phone = $4, salary = $5,
                    department_id = $6, status = $7
                WHERE id = $1
                """,
                employee_id,
                employee.name,
                employee.email,
                employee.phone,
                employee.salary,
                employee.department_id,
                employee.status,
            )
        logger.info("Employee updated", employee_id=employee_id, result=result)

    async def delete_employee(self, employee_id: int) -> None:
        async with self._connection("delete_employee") as conn:
            result = await conn.execute("DELETE FROM employees WHERE id = $1", employee_id)
        logger.info("Employee deleted", employee_id=employee_id, result=result)

    async def ping(self) -> bool:
        try:
            async with self.pool.acquire() as conn:
                return await conn.fetchval("SELECT 1") == 1
        except STORE_ERRORS as e:
            logger.warning("Store health check failed", error=str(e))
            return False
