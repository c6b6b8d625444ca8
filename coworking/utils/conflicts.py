"""
Conflict detection between a candidate interval and the existing bookings
of one resource.

Two intervals conflict when they overlap in the half-open sense, or when
they share a start instant, or when they share an end instant. A booking
that ends exactly when another begins is not a conflict.
"""

from datetime import datetime
from typing import Iterable, List
from coworking.domain import Booking, Resource


def intervals_conflict(
    start: datetime, end: datetime, other_start: datetime, other_end: datetime
) -> bool:
    return (
        (start < other_end and other_start < end)
        or start == other_start
        or end == other_end
    )


def find_conflicts(
    resource: Resource,
    start: datetime,
    end: datetime,
    existing_bookings: Iterable[Booking],
) -> List[Booking]:
    """
    Return the bookings of ``resource`` that collide with ``[start, end)``.

    ``existing_bookings`` must already be limited to ``resource``; it is not
    filtered again here.
    """
    return [
        booking
        for booking in existing_bookings
        if intervals_conflict(start, end, booking.start_time, booking.end_time)
    ]


def has_conflict(
    resource: Resource,
    start: datetime,
    end: datetime,
    existing_bookings: Iterable[Booking],
) -> bool:
    return any(
        intervals_conflict(start, end, booking.start_time, booking.end_time)
        for booking in existing_bookings
    )
