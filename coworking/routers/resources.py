from fastapi import APIRouter, Depends
from datetime import datetime
from typing import List, Optional
from coworking.domain import ResourceKind
from coworking.routers.dependencies import get_booking_service
from coworking.schemas.resource import ResourceResponse
from coworking.services.booking_service import BookingService


router = APIRouter(
    prefix="/resources",
    tags=["resources"],
)


@router.get("/", response_model=List[ResourceResponse])
def get_resources(
    kind: Optional[ResourceKind] = None,
    service: BookingService = Depends(get_booking_service),
):
    """
    Retrieve all bookable resources, optionally of one kind.
    """
    return service.get_resources(kind)


@router.get("/available", response_model=List[ResourceResponse])
def get_available_resources(
    start_time: datetime,
    end_time: datetime,
    kind: Optional[ResourceKind] = None,
    service: BookingService = Depends(get_booking_service),
):
    """
    Retrieve the resources with no booking conflicting with the interval.
    """
    return service.available_resources(start_time, end_time, kind)


@router.get("/{resource_id}", response_model=ResourceResponse)
def get_resource(
    resource_id: int,
    service: BookingService = Depends(get_booking_service),
):
    """
    Retrieve a specific resource by ID.
    """
    return service.get_resource(resource_id)
