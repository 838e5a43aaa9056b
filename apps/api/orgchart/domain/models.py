from __future__ import annotations

"""Pydantic models for the org chart API responses."""

from typing import Any, List

from pydantic import BaseModel, Field


class OrgChartResponse(BaseModel):
    """Full org chart state as served to the editor, photos resolved."""

    employees: List[Any] = Field(default_factory=list)
    customTrainingTopics: List[Any] = Field(default_factory=list)
    availableTrainingTopics: List[Any] = Field(default_factory=list)


class SaveResponse(BaseModel):
    message: str


class PhotoUploadResponse(BaseModel):
    """Resolved URL of a freshly uploaded employee photo."""

    photo: str


class HealthResponse(BaseModel):
    status: str = "ok"
