from __future__ import annotations

"""Org chart endpoints used by the editor front end."""

import logging
from typing import Any

from fastapi import APIRouter, File, HTTPException, Request, UploadFile
from fastapi.concurrency import run_in_threadpool

from orgchart.domain.errors import BackendError, InvalidInput, NotFound
from orgchart.domain.models import OrgChartResponse, PhotoUploadResponse, SaveResponse
from orgchart.services import photos
from orgchart.services.state_store import get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


def _with_resolved_photo(employee: Any) -> Any:
    if not isinstance(employee, dict) or not employee.get("photo"):
        return employee
    return {**employee, "photo": photos.resolve_photo_url(employee["photo"])}


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


@router.get("/employees", response_model=OrgChartResponse)
def get_employees() -> OrgChartResponse:
    """Return the full org chart, seeding default data on first use."""
    store = get_store()
    try:
        state = store.get_or_seed_state()
    except BackendError as exc:
        logger.exception("Error fetching data")
        raise HTTPException(status_code=500, detail="Server Error") from exc

    return OrgChartResponse(
        employees=[_with_resolved_photo(emp) for emp in _as_list(state.get("employees"))],
        customTrainingTopics=_as_list(state.get("customTrainingTopics")),
        availableTrainingTopics=_as_list(state.get("availableTrainingTopics")),
    )


@router.post("/employees/update", response_model=SaveResponse)
async def update_employees(request: Request) -> SaveResponse:
    """Replace the stored roster and training topics with the posted state."""
    try:
        payload = await request.json()
    except ValueError as exc:
        raise HTTPException(status_code=400, detail="Invalid data structure.") from exc

    store = get_store()
    try:
        await run_in_threadpool(store.replace_state, payload)
    except InvalidInput as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except BackendError as exc:
        logger.exception("Error saving data")
        raise HTTPException(status_code=500, detail="Server Error") from exc
    return SaveResponse(message="Data saved successfully.")


@router.post("/employees/{employee_id}/upload-photo", response_model=PhotoUploadResponse)
def upload_photo(employee_id: str, photo: UploadFile = File(..., alias=photos.PHOTO_FIELD)) -> PhotoUploadResponse:
    try:
        emp_id = int(employee_id)
    except ValueError as exc:
        raise HTTPException(status_code=404, detail="Employee not found.") from exc

    store = get_store()
    try:
        stored_path = photos.store_uploaded_file(photo.file, photo.filename)
    except OSError as exc:
        logger.exception("Error storing uploaded photo")
        raise HTTPException(status_code=500, detail="Server Error") from exc

    try:
        store.set_employee_photo(emp_id, stored_path)
    except NotFound as exc:
        photos.discard_stored_file(stored_path)
        raise HTTPException(status_code=404, detail="Employee not found.") from exc
    except BackendError as exc:
        photos.discard_stored_file(stored_path)
        logger.exception("Error uploading photo")
        raise HTTPException(status_code=500, detail="Server Error") from exc

    return PhotoUploadResponse(photo=photos.resolve_photo_url(stored_path))
