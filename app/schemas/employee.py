"""Pydantic schemas for employee requests and responses.

Name and email presence is checked by the service so the API can answer
with a single "Name and Email are required" message.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from app.models.employee import Employee


class EmployeeRequest(BaseModel):
    """Payload for creating or replacing an employee."""

    id: int | None = Field(
        default=None,
        description="Must match the URL id on update when given; ignored on create.",
    )
    name: str = Field(default="", description="Full name (required).")
    email: str = Field(default="", description="Email address (required, unique).")
    department: str = Field(default="", description="Department name.")
    salary: float = Field(default=0.0, ge=0, description="Annual salary.")
    hire_date: datetime | None = Field(
        default=None,
        description="Ignored; the hire date is set by the server on create.",
    )

    def to_entity(self) -> Employee:
        return Employee(
            name=self.name.strip(),
            email=self.email.strip(),
            department=self.department.strip(),
            salary=self.salary,
        )


class EmployeeResponse(BaseModel):
    """Employee as returned by the API."""

    id: int
    name: str
    email: str
    department: str
    salary: float
    hire_date: datetime | None

    @classmethod
    def from_entity(cls, employee: Employee) -> "EmployeeResponse":
        return cls(
            id=employee.id,
            name=employee.name,
            email=employee.email,
            department=employee.department,
            salary=employee.salary,
            hire_date=employee.hire_date,
        )
