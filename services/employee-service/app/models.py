"""Pydantic models for request/response marshaling."""

from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from .domain.entities import Department, Employee


class DepartmentCreate(BaseModel):
    """Request model for creating a department."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(default="", description="Department name, at least 2 characters")

    def to_entity(self) -> Department:
        return Department(name=self.name)


class DepartmentResponse(BaseModel):
    """Department response model."""

    id: int
    name: str


class EmployeeRequest(BaseModel):
    """
    Request model for creating or replacing an employee.

    Only types are checked here. Business rules run in ``app.validators``
    so that every rule reports its own reason.
    """

    model_config = ConfigDict(extra="ignore")

    name: str = ""
    email: str = ""
    phone: str = ""
    salary: float = Field(default=0, allow_inf_nan=False)
    department_id: int = 0
    status: str = ""

    def to_entity(self) -> Employee:
        return Employee(
            name=self.name,
            email=self.email,
            phone=self.phone,
            salary=self.salary,
            department_id=self.department_id,
            status=self.status,
        )


class EmployeeResponse(BaseModel):
    """Employee response model."""

    id: int
    name: str
    email: str
    phone: str
    salary: float
    department_id: int
    status: str
    created_at: Optional[datetime] = None


class MessageResponse(BaseModel):
    """Generic message response."""

    message: str
    success: bool = True


class ErrorResponse(BaseModel):
    """Error response model."""

    detail: str
    error_code: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    service: str
    version: str
    dependencies: Dict[str, str]
