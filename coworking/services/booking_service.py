"""
Booking service: the use cases of the booking core.

The service validates intervals, re-reads authoritative users and resources
from the store, and runs the conflict checker before every write. Conflict
checks and the writes they guard run under a per-resource lock so that
concurrent callers cannot both pass the check for the same interval.
"""

import logging
from datetime import date, datetime
from itertools import chain
from typing import List, Optional, Union
from coworking.domain import Booking, NewBooking, Resource, ResourceKind, TimeSlot, User
from coworking.errors import ConflictError, NotFoundError
from coworking.store import BookingStore
from coworking.utils.availability import AvailableSlots, available_slots
from coworking.utils.conflicts import find_conflicts, has_conflict
from coworking.utils.locks import RESOURCE_LOCKS, ResourceLocks
from coworking.utils.validation_helpers import validate_duration, validate_interval

logger = logging.getLogger(__name__)

UserRef = Union[User, int]
ResourceRef = Union[Resource, int]


def _ref_id(ref) -> int:
    return ref if isinstance(ref, int) else ref.id


class BookingService:
    def __init__(self, store: BookingStore, locks: ResourceLocks = RESOURCE_LOCKS):
        self.store = store
        self.locks = locks

    def _require_user(self, user: UserRef) -> User:
        user_id = _ref_id(user)
        current = self.store.find_user_by_id(user_id)
        if current is None:
            raise NotFoundError("user", user_id)
        return current

    def get_resource(self, resource: ResourceRef) -> Resource:
        """Authoritative copy of a resource; NotFoundError if it is gone."""
        resource_id = _ref_id(resource)
        current = self.store.find_resource_by_id(resource_id)
        if current is None:
            raise NotFoundError("resource", resource_id)
        return current

    def create_booking(
        self, user: UserRef, resource: ResourceRef, start: datetime, end: datetime
    ) -> Booking:
        """
        Book ``resource`` for ``user`` over ``[start, end)``.

        Raises ValidationError for an empty or reversed interval, NotFoundError
        when the user or resource does not exist, and ConflictError when the
        interval collides with a booking of the resource. Nothing is written
        in any of these cases.
        """
        validate_interval(start, end)
        current_user = self._require_user(user)
        current_resource = self.get_resource(resource)

        with self.locks.hold(current_resource.id):
            existing = self.store.all_bookings_for_resource(current_resource.id)
            conflicting = find_conflicts(current_resource, start, end, existing)
            if conflicting:
                raise ConflictError(current_resource.id, conflicting)

            new_booking = NewBooking(
                user_id=current_user.id,
                resource_id=current_resource.id,
                start_time=start,
                end_time=end,
            )
            booking = new_booking.persisted(self.store.insert(new_booking))

        logger.debug(
            f"Created booking {booking.id} for user {booking.user_id} on resource "
            f"{booking.resource_id}: {start} - {end}"
        )
        return booking

    def update_booking(self, booking: Booking) -> Booking:
        """
        Persist a booking's new interval and/or resource.

        The booking's own stored interval does not count as a conflict. The
        owner is never changed: the stored ``user_id`` is kept.
        """
        validate_interval(booking.start_time, booking.end_time)
        resource = self.get_resource(booking.resource_id)

        with self.locks.hold(resource.id):
            stored = self.store.find_booking_by_id(booking.id)
            if stored is None:
                raise NotFoundError("booking", booking.id)
            booking = booking.model_copy(update={"user_id": stored.user_id})

            others = [
                existing
                for existing in self.store.all_bookings_for_resource(resource.id)
                if existing.id != booking.id
            ]
            conflicting = find_conflicts(
                resource, booking.start_time, booking.end_time, others
            )
            if conflicting:
                raise ConflictError(resource.id, conflicting)
            if not self.store.update(booking):
                raise NotFoundError("booking", booking.id)

        logger.debug(
            f"Updated booking {booking.id}: resource {booking.resource_id}, "
            f"{booking.start_time} - {booking.end_time}"
        )
        return booking

    def cancel_booking(self, booking: Booking) -> None:
        self.store.delete(booking)
        logger.debug(f"Cancelled booking {booking.id}")

    def has_booking_conflict(
        self,
        resource: ResourceRef,
        start: datetime,
        end: datetime,
        exclude_booking_id: Optional[int] = None,
    ) -> bool:
        validate_interval(start, end)
        current = self.get_resource(resource)
        existing = [
            booking
            for booking in self.store.all_bookings_for_resource(current.id)
            if booking.id != exclude_booking_id
        ]
        return has_conflict(current, start, end, existing)

    # Queries

    def get_booking_by_id(self, booking_id: int) -> Optional[Booking]:
        return self.store.find_booking_by_id(booking_id)

    def get_bookings_by_user(self, user: UserRef) -> List[Booking]:
        return self.store.bookings_by_user(_ref_id(user))

    def get_bookings_by_resource(self, resource: ResourceRef) -> List[Booking]:
        return self.store.all_bookings_for_resource(_ref_id(resource))

    def get_bookings_by_date(self, day: date) -> List[Booking]:
        if isinstance(day, datetime):
            day = day.date()
        return self.store.bookings_by_date(day)

    def get_all_bookings(self) -> List[Booking]:
        return self.store.all_bookings()

    def get_resources(self, kind: Optional[ResourceKind] = None) -> List[Resource]:
        return self.store.all_resources(kind)

    # Availability

    def available_slots(
        self, resource: ResourceRef, day: date, duration_minutes: int
    ) -> AvailableSlots:
        validate_duration(duration_minutes)
        current = self.get_resource(resource)
        bookings = self.store.all_bookings_for_resource_on_date(current.id, day)
        return available_slots(current, day, duration_minutes, bookings)

    def available_time_slots(
        self, day: date, duration_minutes: int, kind: Optional[ResourceKind] = None
    ) -> List[TimeSlot]:
        """Free slots of every resource, one resource after the other."""
        validate_duration(duration_minutes)
        passes = [
            available_slots(
                resource,
                day,
                duration_minutes,
                self.store.all_bookings_for_resource_on_date(resource.id, day),
            )
            for resource in self.store.all_resources(kind)
        ]
        return list(chain.from_iterable(passes))

    def available_resources(
        self, start: datetime, end: datetime, kind: Optional[ResourceKind] = None
    ) -> List[Resource]:
        validate_interval(start, end)
        return [
            resource
            for resource in self.store.all_resources(kind)
            if not has_conflict(
                resource, start, end, self.store.all_bookings_for_resource(resource.id)
            )
        ]

    def find_optimal_resource(
        self,
        start: datetime,
        end: datetime,
        required_capacity: int,
        kind: Optional[ResourceKind] = None,
    ) -> Optional[Resource]:
        """
        Find the smallest free resource that still fits ``required_capacity``.
        Ties go to the resource with the lowest id.
        """
        candidates = [
            resource
            for resource in self.available_resources(start, end, kind)
            if resource.capacity >= required_capacity
        ]
        if not candidates:
            return None
        return min(candidates, key=lambda resource: (resource.capacity, resource.id))
