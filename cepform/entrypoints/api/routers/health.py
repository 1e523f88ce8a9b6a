# cepform/entrypoints/api/routers/health.py
from __future__ import annotations

from fastapi import APIRouter

from ....schemas import HealthOut

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthOut)
def health() -> HealthOut:
    return HealthOut()
