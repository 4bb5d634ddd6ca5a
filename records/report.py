"""
Field report submitted by a technician.

Technician and location names are snapshots taken when the report is
created; later edits to the user or location do not rewrite them.
"""
from datetime import datetime
from enum import Enum

from pydantic import Field

from .base import RecordModel


class ReportStatus(str, Enum):
    """Review status of a report."""
    PENDING = "pending"
    COMPLETED = "completed"
    REJECTED = "rejected"


class Report(RecordModel):
    id: str

    # Technician snapshot
    technician_id: str
    technician_name: str
    badge_number: str

    unit_id: str

    # Location snapshot
    location_id: str
    location_name: str

    device_id: str
    card_number: str
    status: ReportStatus

    # When the maintenance took place
    date: datetime

    description: str | None = None
    notes: str | None = None
    images: list[str] | None = None

    created_at: datetime
    updated_at: datetime


class ReportCreate(RecordModel):
    technician_id: str
    technician_name: str
    badge_number: str
    unit_id: str = Field(..., min_length=1)
    location_id: str = Field(..., min_length=1)
    location_name: str
    device_id: str = Field(..., min_length=1)
    card_number: str = Field(..., min_length=1)
    status: ReportStatus = ReportStatus.PENDING
    date: datetime
    description: str | None = None
    notes: str | None = None
    images: list[str] | None = None


class ReportUpdate(RecordModel):
    technician_id: str | None = None
    technician_name: str | None = None
    badge_number: str | None = None
    unit_id: str | None = Field(None, min_length=1)
    location_id: str | None = Field(None, min_length=1)
    location_name: str | None = None
    device_id: str | None = Field(None, min_length=1)
    card_number: str | None = Field(None, min_length=1)
    status: ReportStatus | None = None
    date: datetime | None = None
    description: str | None = None
    notes: str | None = None
    images: list[str] | None = None


PLACEHOLDER_IMAGE = "/placeholder.svg"


class ReportSubmission(RecordModel):
    """What a technician fills in; identity and location names are filled by the store."""
    unit_id: str = Field(..., min_length=1)
    location_id: str = Field(..., min_length=1)
    device_id: str = Field(..., min_length=1)
    card_number: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    notes: str | None = None
    images: list[str] | None = None
