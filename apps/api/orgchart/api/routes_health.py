from __future__ import annotations

"""Liveness endpoint."""

from fastapi import APIRouter

from orgchart.domain.models import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse()
