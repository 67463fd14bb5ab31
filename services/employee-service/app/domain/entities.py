"""
Domain entities for departments and employees.

Plain records shared by the store, the cache layer and the HTTP handlers.
Serialization to JSON text lives here so that the cached payload and a
freshly built payload are produced by the same code.
"""

import json
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass
class Department:
    """Organizational unit. ``id`` is assigned by the store."""

    name: str
    id: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name}


@dataclass
class Employee:
    """
    Personnel record.

    ``department_id`` is a weak reference: it is never checked against the
    departments table. ``id`` and ``created_at`` are assigned by the store
    and never change afterwards.
    """

    name: str
    email: str
    phone: str
    salary: float
    department_id: int
    status: str
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "salary": self.salary,
            "department_id": self.department_id,
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


def serialize(payload: Any) -> str:
    """
    Serialize an entity or a sequence of entities to JSON text.

    Output is deterministic for equal input: field order is fixed by
    ``to_dict`` and no whitespace is emitted.
    """
    if isinstance(payload, (Department, Employee)):
        data: Any = payload.to_dict()
    else:
        data = [item.to_dict() for item in payload]
    return json.dumps(data, separators=(",", ":"))
