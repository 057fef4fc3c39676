"""In-memory storage for employees."""

from __future__ import annotations

from app.models.employee import Employee
from app.repositories.in_memory import InMemoryRepository


class EmployeeRepository(InMemoryRepository[Employee]):
    """Employee collection; stamps ``hire_date`` on create."""

    resource_name = "Employee"
    created_field = "hire_date"
    duplicate_email_message = "Employee with email {email} already exists"
