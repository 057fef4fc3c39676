from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status

from app.api.dependencies import get_employee_service
from app.schemas.employee import EmployeeRequest, EmployeeResponse
from app.schemas.errors import error_responses
from app.services.employee_service import EmployeeService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/employees", tags=["Employees"])

EmployeeServiceDep = Annotated[EmployeeService, Depends(get_employee_service)]


@router.get("", response_model=list[EmployeeResponse])
def list_employees(service: EmployeeServiceDep) -> list[EmployeeResponse]:
    logger.info("employees.list")
    return service.list_all()


@router.get(
    "/{employee_id}",
    response_model=EmployeeResponse,
    name="get_employee",
    responses=error_responses(400, 404),
)
def get_employee(employee_id: int, service: EmployeeServiceDep) -> EmployeeResponse:
    logger.info("employees.get", extra={"employee_id": employee_id})
    return service.get_by_id(employee_id)


@router.post(
    "",
    response_model=EmployeeResponse,
    status_code=status.HTTP_201_CREATED,
    responses=error_responses(400),
)
def create_employee(
    payload: EmployeeRequest,
    request: Request,
    response: Response,
    service: EmployeeServiceDep,
) -> EmployeeResponse:
    """Create an employee; id and hire date are assigned by the server."""
    employee = service.create(payload)
    response.headers["Location"] = str(request.url_for("get_employee", employee_id=employee.id))
    return employee


@router.put(
    "/{employee_id}",
    response_model=EmployeeResponse,
    responses=error_responses(400, 404),
)
def update_employee(
    employee_id: int,
    payload: EmployeeRequest,
    service: EmployeeServiceDep,
) -> EmployeeResponse:
    logger.info("employees.update", extra={"employee_id": employee_id})
    return service.update(employee_id, payload)


@router.delete(
    "/{employee_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=error_responses(404),
)
def delete_employee(employee_id: int, service: EmployeeServiceDep) -> Response:
    logger.info("employees.delete", extra={"employee_id": employee_id})
    service.delete(employee_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
