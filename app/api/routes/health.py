from __future__ import annotations

from fastapi import APIRouter

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check() -> dict[str, str]:
    """Liveness probe; answers ``{"status": "ok"}`` while the process serves requests."""

    return {"status": "ok"}
