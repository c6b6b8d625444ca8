from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from datetime import date
from coworking.config import LOG_LEVEL
from coworking.domain import ResourceKind
from coworking.errors import NotFoundError
from coworking.routers.dependencies import get_booking_service
from coworking.schemas.booking import (
    BookingCreate,
    BookingUpdate,
    BookingResponse,
    BookingOptimizeRequest,
    TimeSlotResponse,
)
from coworking.services.booking_service import BookingService
import logging

# Configure logging
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/bookings",
    tags=["bookings"],
)


@router.post(
    "/",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new booking",
    description="Book a resource for a time interval if no existing booking conflicts with it."
)
def create_booking(
    booking: BookingCreate,
    service: BookingService = Depends(get_booking_service),
):
    """
    Create a new booking.

    - **user_id**: ID of the user making the booking.
    - **resource_id**: ID of the resource to book.
    - **start_time**: Start of the booking.
    - **end_time**: End of the booking (exclusive).

    Returns the created booking with the ID assigned to it.
    """
    logger.debug(f"Creating booking for user: {booking.user_id}, resource_id: {booking.resource_id}")
    return service.create_booking(
        booking.user_id, booking.resource_id, booking.start_time, booking.end_time
    )


@router.get(
    "/",
    response_model=List[BookingResponse],
    summary="List bookings",
    description="Retrieve bookings, optionally filtered by user, resource and date."
)
def get_bookings(
    user_id: Optional[int] = None,
    resource_id: Optional[int] = None,
    day: Optional[date] = Query(None, alias="date"),
    skip: int = 0,
    limit: int = 100,
    service: BookingService = Depends(get_booking_service),
):
    """
    Retrieve a list of bookings ordered by start time.

    - **user_id**: Only bookings made by this user.
    - **resource_id**: Only bookings of this resource.
    - **date**: Only bookings starting on this date (e.g., 2025-05-04).
    - **skip**: Number of bookings to skip.
    - **limit**: Maximum number of bookings to return.
    """
    if resource_id is not None:
        bookings = service.get_bookings_by_resource(resource_id)
    elif user_id is not None:
        bookings = service.get_bookings_by_user(user_id)
    elif day is not None:
        bookings = service.get_bookings_by_date(day)
    else:
        bookings = service.get_all_bookings()

    bookings = [
        booking
        for booking in bookings
        if (user_id is None or booking.user_id == user_id)
        and (day is None or booking.start_time.date() == day)
    ]
    logger.debug(f"Retrieved {len(bookings)} bookings")
    return bookings[skip:skip + limit]


@router.get(
    "/available_slots/",
    response_model=List[TimeSlotResponse],
    summary="List available time slots",
    description="Retrieve free time slots within business hours for one resource or for every resource."
)
def get_available_slots(
    day: date = Query(..., alias="date"),
    resource_id: Optional[int] = None,
    duration: int = 60,
    kind: Optional[ResourceKind] = None,
    service: BookingService = Depends(get_booking_service),
):
    """
    List available time slots.

    - **date**: Date to check availability (e.g., 2025-05-04).
    - **resource_id**: (Optional) Resource to check; every resource when omitted.
    - **duration**: Duration of each slot in minutes, a multiple of 30 (default: 60).
    - **kind**: (Optional) Restrict the resources to one kind.

    Slots start every 30 minutes between 09:00 and 18:00.
    """
    logger.debug(f"Fetching available slots for resource_id: {resource_id}, date: {day}, duration: {duration} minutes")
    if resource_id is not None:
        slots = list(service.available_slots(resource_id, day, duration))
    else:
        slots = service.available_time_slots(day, duration, kind)
    logger.debug(f"Found {len(slots)} available slots")
    return [TimeSlotResponse.from_slot(slot) for slot in slots]


@router.post(
    "/optimize",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Optimize booking",
    description="Find and book the smallest free resource that fits the required capacity."
)
def optimize_booking(
    booking: BookingOptimizeRequest,
    service: BookingService = Depends(get_booking_service),
):
    """
    Find and book the optimal resource for an interval.

    - **user_id**: ID of the user making the booking.
    - **start_time** / **end_time**: Interval to book.
    - **required_capacity**: Minimal resource capacity.
    - **kind**: (Optional) Resource kind to choose from.
    """
    logger.debug(f"Optimizing booking for user: {booking.user_id}, start_time: {booking.start_time}, capacity: {booking.required_capacity}")
    resource = service.find_optimal_resource(
        booking.start_time, booking.end_time, booking.required_capacity, booking.kind
    )
    if resource is None:
        raise NotFoundError("suitable resource", None)
    return service.create_booking(
        booking.user_id, resource, booking.start_time, booking.end_time
    )


@router.get(
    "/{booking_id}",
    response_model=BookingResponse,
    summary="Get a booking by ID",
    description="Retrieve a specific booking by its ID."
)
def get_booking(
    booking_id: int,
    service: BookingService = Depends(get_booking_service),
):
    booking = service.get_booking_by_id(booking_id)
    if booking is None:
        raise NotFoundError("booking", booking_id)
    return booking


@router.put(
    "/{booking_id}",
    response_model=BookingResponse,
    summary="Update a booking",
    description="Move a booking to another interval and/or resource, re-checking conflicts."
)
def update_booking(
    booking_id: int,
    booking_update: BookingUpdate,
    service: BookingService = Depends(get_booking_service),
):
    """
    Update a booking's interval or resource.

    - **booking_id**: ID of the booking to update.
    - **resource_id**: (Optional) New resource ID.
    - **start_time**: (Optional) New start time.
    - **end_time**: (Optional) New end time.

    Returns the updated booking.
    """
    booking = service.get_booking_by_id(booking_id)
    if booking is None:
        raise NotFoundError("booking", booking_id)

    changes = booking_update.model_dump(exclude_unset=True, exclude_none=True)
    updated = booking.with_interval(
        changes.get("start_time", booking.start_time),
        changes.get("end_time", booking.end_time),
        changes.get("resource_id"),
    )
    return service.update_booking(updated)


@router.delete(
    "/{booking_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Cancel a booking",
    description="Cancel a booking. Cancelling a booking that no longer exists succeeds."
)
def delete_booking(
    booking_id: int,
    service: BookingService = Depends(get_booking_service),
):
    booking = service.get_booking_by_id(booking_id)
    if booking is not None:
        service.cancel_booking(booking)
    else:
        logger.debug(f"Booking already gone: {booking_id}")
    return None
