"""
Free slot calculation for a resource on a given day.

Slot starts advance from the opening of the business day in fixed
``SLOT_STEP_MINUTES`` increments, whatever the requested duration. A slot is
offered when it fits before closing time and the conflict checker finds no
booking of that day colliding with it.
"""

from datetime import date, datetime, time, timedelta
from typing import Iterable, Iterator
from coworking.config import BUSINESS_DAY_START, BUSINESS_DAY_END, SLOT_STEP_MINUTES
from coworking.domain import Booking, Resource, TimeSlot
from coworking.utils.conflicts import has_conflict
from coworking.utils.validation_helpers import validate_duration


class AvailableSlots:
    """
    Lazy, re-iterable sequence of the free slots of one resource on one day.

    Every iteration recomputes the slots from the same snapshot of bookings,
    so iterating twice yields the same ordered slots.
    """

    def __init__(
        self,
        resource: Resource,
        day: date,
        duration_minutes: int,
        bookings: Iterable[Booking],
        day_start: time = BUSINESS_DAY_START,
        day_end: time = BUSINESS_DAY_END,
    ):
        self.resource = resource
        self.day = day
        self.duration = timedelta(minutes=validate_duration(duration_minutes))
        self.opens_at = datetime.combine(day, day_start)
        self.closes_at = datetime.combine(day, day_end)
        self._bookings = tuple(
            booking for booking in bookings if booking.start_time.date() == day
        )

    def __iter__(self) -> Iterator[TimeSlot]:
        step = timedelta(minutes=SLOT_STEP_MINUTES)
        slot_start = self.opens_at
        while slot_start + self.duration <= self.closes_at:
            slot_end = slot_start + self.duration
            if not has_conflict(self.resource, slot_start, slot_end, self._bookings):
                yield TimeSlot(resource=self.resource, start=slot_start, end=slot_end)
            slot_start += step

    def __repr__(self) -> str:
        return (
            f"<AvailableSlots(resource={self.resource.id}, day={self.day}, "
            f"duration={self.duration})>"
        )


def available_slots(
    resource: Resource,
    day: date,
    duration_minutes: int,
    bookings: Iterable[Booking],
) -> AvailableSlots:
    """
    Free slots of ``duration_minutes`` for ``resource`` on ``day``.

    Raises ValidationError right away when the duration is not a positive
    multiple of the slot step. A duration longer than the business day gives
    an empty sequence.
    """
    return AvailableSlots(resource, day, duration_minutes, bookings)

