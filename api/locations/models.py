# api/locations/models.py
from records.base import RecordModel
from records.location import Location


class LocationListResponse(RecordModel):
    locations: list[Location]
    total: int
