"""Pydantic models for Asana API responses."""

from pydantic import BaseModel, ConfigDict


class AsanaTimeTrackingEntry(BaseModel):
    """Asana time tracking entry model."""

    model_config = ConfigDict(extra="ignore")

    gid: str | None = None
    entered_on: str
    duration_minutes: int
