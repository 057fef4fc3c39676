from __future__ import annotations

from app.api.routes.candidates import router as candidates_router
from app.api.routes.employees import router as employees_router
from app.api.routes.health import router as health_router

__all__ = ["candidates_router", "employees_router", "health_router"]
