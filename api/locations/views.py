# api/locations/views.py
"""
Location endpoints. Listing is open to any logged-in user (technicians
pick a location when submitting); changes are admin only.
"""
from fastapi import APIRouter, HTTPException, Query, status

from api.auth.models import MessageResponse
from api.reports.queries import search_locations
from core.deps import AdminUser, CurrentUser, Store
from core.exceptions import NotFoundError
from records.location import Location, LocationCreate, LocationUpdate
from .models import LocationListResponse

router = APIRouter(prefix="/locations", tags=["locations"])


@router.get("", response_model=LocationListResponse, summary="List locations")
async def list_locations(
    current_user: CurrentUser,
    store: Store,
    q: str | None = Query(None, description="Search name or description"),
) -> LocationListResponse:
    locations = search_locations(store.locations, q)
    return LocationListResponse(locations=locations, total=len(locations))


@router.post(
    "",
    response_model=Location,
    status_code=status.HTTP_201_CREATED,
    summary="Create location",
)
async def create_location(payload: LocationCreate, admin: AdminUser, store: Store) -> Location:
    return await store.add_location(payload)


@router.put("/{location_id}", response_model=Location, summary="Update location")
async def update_location(
    location_id: str,
    updates: LocationUpdate,
    admin: AdminUser,
    store: Store,
) -> Location:
    try:
        return await store.update_location(location_id, updates)
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc


@router.delete("/{location_id}", response_model=MessageResponse, summary="Delete location")
async def delete_location(location_id: str, admin: AdminUser, store: Store) -> MessageResponse:
    """
    Delete a location.
    Refused with 409 while any report references it.
    """
    try:
        deleted = await store.delete_location(location_id)
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc

    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="This location is used in existing reports",
        )
    return MessageResponse(message="Location deleted successfully")
