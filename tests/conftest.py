"""Pytest configuration and fixtures shared across all test modules.

Environment variables are set before any app module is imported so that
settings resolve to the testing profile.
"""

import os

# Must run before anything imports app.core.config
os.environ["APP_ENV"] = "testing"
os.environ.setdefault("APP_RATE_LIMIT_ENABLED", "true")
os.environ.setdefault("APP_RATE_LIMIT_REQUESTS", "100")
os.environ.setdefault("APP_RATE_LIMIT_WINDOW_SECONDS", "60")

from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.api.dependencies import get_candidate_service, get_employee_service
from app.core import rate_limit as rate_limit_module
from app.core.app_factory import create_app
from app.repositories.candidate_repository import CandidateRepository
from app.repositories.employee_repository import EmployeeRepository
from app.services.candidate_service import CandidateService
from app.services.employee_service import EmployeeService


class TickingClock:
    """Deterministic clock that advances one second per call."""

    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        value = self.current
        self.current += timedelta(seconds=1)
        return value


@pytest.fixture(autouse=True)
def reset_rate_limiter(monkeypatch: pytest.MonkeyPatch) -> None:
    """Give every test a fresh process-wide rate limiter."""
    monkeypatch.setattr(rate_limit_module, "_limiter", None)
    monkeypatch.setattr(rate_limit_module, "_limiter_config", None)


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
def candidate_repository(clock: TickingClock) -> CandidateRepository:
    return CandidateRepository(clock=clock)


@pytest.fixture
def employee_repository() -> EmployeeRepository:
    return EmployeeRepository()


@pytest.fixture
def candidate_service(candidate_repository: CandidateRepository) -> CandidateService:
    return CandidateService(candidate_repository)


@pytest.fixture
def employee_service(employee_repository: EmployeeRepository) -> EmployeeService:
    return EmployeeService(employee_repository)


@pytest.fixture
def api_app(
    candidate_service: CandidateService,
    employee_service: EmployeeService,
) -> Iterator[FastAPI]:
    """Fresh app whose routes use this test's repositories."""
    application = create_app()
    application.dependency_overrides[get_candidate_service] = lambda: candidate_service
    application.dependency_overrides[get_employee_service] = lambda: employee_service
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(api_app: FastAPI) -> TestClient:
    return TestClient(api_app)


@pytest.fixture
def make_candidate_payload() -> Callable[..., dict[str, Any]]:
    """Factory for valid candidate request bodies."""

    def _make(**overrides: Any) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "first_name": "Jane",
            "last_name": "Doe",
            "email": "jane.doe@example.com",
            "phone": "+1 555-123-4567",
            "experience_years": 6,
            "skills": ["Python", "FastAPI"],
        }
        payload.update(overrides)
        return payload

    return _make


@pytest.fixture
def make_employee_payload() -> Callable[..., dict[str, Any]]:
    """Factory for valid employee request bodies."""

    def _make(**overrides: Any) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "name": "John Smith",
            "email": "john.smith@example.com",
            "department": "Engineering",
            "salary": 85000.0,
        }
        payload.update(overrides)
        return payload

    return _make
