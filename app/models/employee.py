"""Employee domain entity."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Employee:
    """A staff member; ``id`` and ``hire_date`` are set by the repository."""

    name: str
    email: str
    department: str = ""
    salary: float = 0.0
    id: int = 0
    hire_date: datetime | None = None
