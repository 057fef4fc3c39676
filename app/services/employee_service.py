"""Employee service."""

from __future__ import annotations

import logging

from app.core.errors import NotFoundAppError, ValidationAppError
from app.repositories.employee_repository import EmployeeRepository
from app.schemas.employee import EmployeeRequest, EmployeeResponse

logger = logging.getLogger(__name__)

RESOURCE = "Employee"


def _require_name_and_email(request: EmployeeRequest) -> None:
    if not request.name.strip() or not request.email.strip():
        raise ValidationAppError(
            code="name_and_email_required",
            message="Name and Email are required",
        )


class EmployeeService:
    """CRUD operations over employees (unpaged listing)."""

    def __init__(self, repository: EmployeeRepository) -> None:
        self.repository = repository

    def list_all(self) -> list[EmployeeResponse]:
        employees = self.repository.list_all()
        logger.info("employees.listed", extra={"count": len(employees)})
        return [EmployeeResponse.from_entity(e) for e in employees]

    def get_by_id(self, employee_id: int) -> EmployeeResponse:
        employee = self.repository.get_by_id(employee_id)
        if employee is None:
            raise NotFoundAppError.for_resource(RESOURCE, employee_id)
        return EmployeeResponse.from_entity(employee)

    def create(self, request: EmployeeRequest) -> EmployeeResponse:
        """Store a new employee; the hire date is set to now (UTC).

        Raises:
            ValidationAppError: If name or email is blank, or the email is taken.
        """
        _require_name_and_email(request)
        created = self.repository.create(request.to_entity())
        logger.info("employees.created", extra={"employee_id": created.id})
        return EmployeeResponse.from_entity(created)

    def update(self, employee_id: int, request: EmployeeRequest) -> EmployeeResponse:
        """Replace an employee's data, keeping the original hire date.

        Raises:
            ValidationAppError: If the body id contradicts the URL id, name or
                email is blank, or the email belongs to another employee.
            NotFoundAppError: If no employee has this id.
        """
        if request.id is not None and request.id != employee_id:
            raise ValidationAppError(
                code="id_mismatch",
                message="ID in URL must match ID in body",
                details={"field": "id", "actual_value": request.id},
            )
        _require_name_and_email(request)

        updated = self.repository.update(employee_id, request.to_entity())
        if updated is None:
            raise NotFoundAppError.for_resource(RESOURCE, employee_id)
        logger.info("employees.updated", extra={"employee_id": employee_id})
        return EmployeeResponse.from_entity(updated)

    def delete(self, employee_id: int) -> None:
        if not self.repository.delete(employee_id):
            raise NotFoundAppError.for_resource(RESOURCE, employee_id)
        logger.info("employees.deleted", extra={"employee_id": employee_id})
