from __future__ import annotations

from fastapi import APIRouter

from orgchart.api import routes_employees, routes_health

router = APIRouter()
router.include_router(routes_health.router)
router.include_router(routes_employees.router)
