"""Tests for the in-memory candidate and employee repositories."""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone

import pytest

from app.core.errors import ValidationAppError
from app.models.candidate import Candidate
from app.models.employee import Employee
from app.repositories.candidate_repository import CandidateRepository
from app.repositories.employee_repository import EmployeeRepository


def _candidate(email: str = "jane@example.com", **overrides) -> Candidate:
    fields = {
        "first_name": "Jane",
        "last_name": "Doe",
        "email": email,
        "experience_years": 3,
        "skills": ["Python"],
    }
    fields.update(overrides)
    return Candidate(**fields)


class TestCandidateRepository:
    def test_create_assigns_sequential_ids_and_applied_date(self, candidate_repository: CandidateRepository):
        first = candidate_repository.create(_candidate("a@example.com"))
        second = candidate_repository.create(_candidate("b@example.com"))

        assert (first.id, second.id) == (1, 2)
        assert first.applied_date == datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)
        assert second.applied_date > first.applied_date

    def test_client_supplied_id_and_date_are_ignored(self, candidate_repository: CandidateRepository):
        created = candidate_repository.create(
            _candidate(id=99, applied_date=datetime(2000, 1, 1, tzinfo=timezone.utc))
        )

        assert created.id == 1
        assert created.applied_date.year == 2024

    def test_returns_copies(self, candidate_repository: CandidateRepository):
        source = _candidate()
        created = candidate_repository.create(source)

        source.skills.append("Mutated")
        created.skills.append("Mutated")
        fetched = candidate_repository.get_by_id(created.id)
        fetched.first_name = "Changed"

        stored = candidate_repository.get_by_id(created.id)
        assert stored.skills == ["Python"]
        assert stored.first_name == "Jane"

    def test_duplicate_email_is_case_insensitive(self, candidate_repository: CandidateRepository):
        candidate_repository.create(_candidate("jane@example.com"))

        with pytest.raises(ValidationAppError) as exc_info:
            candidate_repository.create(_candidate("JANE@Example.com"))

        assert exc_info.value.code == "duplicate_email"
        assert exc_info.value.message == "A candidate with email JANE@Example.com already exists"
        assert len(candidate_repository) == 1

    def test_update_preserves_id_and_applied_date(self, candidate_repository: CandidateRepository):
        created = candidate_repository.create(_candidate())

        updated = candidate_repository.update(
            created.id, _candidate(first_name="Janet", experience_years=8)
        )

        assert updated.id == created.id
        assert updated.applied_date == created.applied_date
        assert updated.first_name == "Janet"
        assert candidate_repository.get_by_id(created.id).experience_years == 8

    def test_update_may_keep_own_email(self, candidate_repository: CandidateRepository):
        created = candidate_repository.create(_candidate("jane@example.com"))

        updated = candidate_repository.update(created.id, _candidate("Jane@Example.com"))

        assert updated.email == "Jane@Example.com"

    def test_update_rejects_email_of_another_candidate(self, candidate_repository: CandidateRepository):
        candidate_repository.create(_candidate("a@example.com"))
        second = candidate_repository.create(_candidate("b@example.com"))

        with pytest.raises(ValidationAppError):
            candidate_repository.update(second.id, _candidate("A@example.com"))

        assert candidate_repository.get_by_id(second.id).email == "b@example.com"

    def test_update_missing_returns_none(self, candidate_repository: CandidateRepository):
        assert candidate_repository.update(5, _candidate()) is None

    def test_delete(self, candidate_repository: CandidateRepository):
        created = candidate_repository.create(_candidate())

        assert candidate_repository.delete(created.id) is True
        assert candidate_repository.delete(created.id) is False
        assert candidate_repository.get_by_id(created.id) is None

    def test_ids_are_not_reused_after_delete(self, candidate_repository: CandidateRepository):
        first = candidate_repository.create(_candidate("a@example.com"))
        candidate_repository.delete(first.id)

        assert candidate_repository.create(_candidate("b@example.com")).id == 2

    def test_clear_resets_ids(self, candidate_repository: CandidateRepository):
        candidate_repository.create(_candidate())
        candidate_repository.clear()

        assert candidate_repository.list_all() == []
        assert candidate_repository.create(_candidate()).id == 1

    def test_search_by_skill(self, candidate_repository: CandidateRepository):
        candidate_repository.create(_candidate("a@example.com", skills=["Python", "SQL"]))
        candidate_repository.create(_candidate("b@example.com", skills=["Go"]))
        candidate_repository.create(_candidate("c@example.com", skills=["python"]))

        matches = candidate_repository.search_by_skill("PYTHON")

        assert [c.id for c in matches] == [1, 3]
        assert candidate_repository.search_by_skill("Pyth") == []

    def test_concurrent_creates_get_unique_ids(self):
        repository = CandidateRepository()

        with ThreadPoolExecutor(max_workers=8) as pool:
            created = list(
                pool.map(lambda i: repository.create(_candidate(f"user{i}@example.com")), range(100))
            )

        assert sorted(c.id for c in created) == list(range(1, 101))
        assert len(repository) == 100

    def test_concurrent_same_email_only_one_wins(self):
        repository = CandidateRepository()
        barrier = threading.Barrier(8)
        outcomes: list[str] = []
        outcomes_lock = threading.Lock()

        def attempt() -> None:
            barrier.wait()
            try:
                repository.create(_candidate("race@example.com"))
                result = "created"
            except ValidationAppError:
                result = "rejected"
            with outcomes_lock:
                outcomes.append(result)

        threads = [threading.Thread(target=attempt) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert outcomes.count("created") == 1
        assert outcomes.count("rejected") == 7


class TestEmployeeRepository:
    def test_create_sets_hire_date(self, employee_repository: EmployeeRepository):
        before = datetime.now(timezone.utc)
        created = employee_repository.create(Employee(name="John", email="john@example.com"))

        assert created.id == 1
        assert created.hire_date >= before

    def test_update_preserves_hire_date(self, employee_repository: EmployeeRepository):
        created = employee_repository.create(Employee(name="John", email="john@example.com"))

        updated = employee_repository.update(
            created.id, Employee(name="Johnny", email="john@example.com", salary=10.0)
        )

        assert updated.hire_date == created.hire_date
        assert updated.name == "Johnny"

    def test_duplicate_email_message(self, employee_repository: EmployeeRepository):
        employee_repository.create(Employee(name="John", email="john@example.com"))

        with pytest.raises(ValidationAppError) as exc_info:
            employee_repository.create(Employee(name="Other", email="John@example.com"))

        assert exc_info.value.message == "Employee with email John@example.com already exists"
