from datetime import datetime

from pydantic import Field

from .base import RecordModel


class Location(RecordModel):
    id: str
    name: str
    description: str | None = None
    created_at: datetime
    updated_at: datetime


class LocationCreate(RecordModel):
    name: str = Field(..., min_length=1)
    description: str | None = None


class LocationUpdate(RecordModel):
    name: str | None = Field(None, min_length=1)
    description: str | None = None
