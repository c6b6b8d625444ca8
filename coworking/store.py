"""
Booking store: persistence of users, resources and bookings.

``BookingStore`` is the boundary the booking service depends on; it carries
no business rules. ``SqlAlchemyBookingStore`` implements it on top of a
SQLAlchemy session and reports database failures as ``StorageError``.
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import date, datetime, time, timedelta
from typing import List, Optional, Tuple
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from coworking import domain
from coworking.errors import StorageError
from coworking.models.booking import Booking
from coworking.models.resource import Resource
from coworking.models.user import User


class BookingStore(ABC):
    @abstractmethod
    def all_bookings_for_resource(self, resource_id: int) -> List[domain.Booking]:
        raise NotImplementedError

    @abstractmethod
    def all_bookings_for_resource_on_date(
        self, resource_id: int, day: date
    ) -> List[domain.Booking]:
        raise NotImplementedError

    @abstractmethod
    def find_user_by_id(self, user_id: int) -> Optional[domain.User]:
        raise NotImplementedError

    @abstractmethod
    def find_resource_by_id(self, resource_id: int) -> Optional[domain.Resource]:
        raise NotImplementedError

    @abstractmethod
    def find_booking_by_id(self, booking_id: int) -> Optional[domain.Booking]:
        raise NotImplementedError

    @abstractmethod
    def insert(self, booking: domain.NewBooking) -> int:
        """Persist a new booking and return the id assigned to it."""
        raise NotImplementedError

    @abstractmethod
    def update(self, booking: domain.Booking) -> bool:
        """Overwrite a stored booking; False when it no longer exists."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, booking: domain.Booking) -> None:
        """Remove the booking; removing an absent booking is a no-op."""
        raise NotImplementedError

    @abstractmethod
    def bookings_by_user(self, user_id: int) -> List[domain.Booking]:
        raise NotImplementedError

    @abstractmethod
    def bookings_by_date(self, day: date) -> List[domain.Booking]:
        raise NotImplementedError

    @abstractmethod
    def all_bookings(self) -> List[domain.Booking]:
        raise NotImplementedError

    @abstractmethod
    def all_resources(
        self, kind: Optional[domain.ResourceKind] = None
    ) -> List[domain.Resource]:
        raise NotImplementedError


def day_bounds(day: date) -> Tuple[datetime, datetime]:
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)


class SqlAlchemyBookingStore(BookingStore):
    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _storage_errors(self, action: str):
        try:
            yield
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StorageError(f"Failed to {action}: {exc}") from exc

    def _bookings(self, *criteria) -> List[domain.Booking]:
        with self._storage_errors("load bookings"):
            rows = (
                self.db.query(Booking)
                .filter(*criteria)
                .order_by(Booking.start_time, Booking.id)
                .all()
            )
        return [domain.Booking.model_validate(row) for row in rows]

    def all_bookings_for_resource(self, resource_id):
        return self._bookings(Booking.resource_id == resource_id)

    def all_bookings_for_resource_on_date(self, resource_id, day):
        day_start, day_end = day_bounds(day)
        return self._bookings(
            Booking.resource_id == resource_id,
            Booking.start_time >= day_start,
            Booking.start_time < day_end,
        )

    def bookings_by_user(self, user_id):
        return self._bookings(Booking.user_id == user_id)

    def bookings_by_date(self, day):
        day_start, day_end = day_bounds(day)
        return self._bookings(
            Booking.start_time >= day_start, Booking.start_time < day_end
        )

    def all_bookings(self):
        return self._bookings()

    def find_user_by_id(self, user_id):
        with self._storage_errors(f"load user {user_id}"):
            row = self.db.get(User, user_id)
        return domain.User.model_validate(row) if row else None

    def find_resource_by_id(self, resource_id):
        with self._storage_errors(f"load resource {resource_id}"):
            row = self.db.get(Resource, resource_id)
        return domain.Resource.model_validate(row) if row else None

    def find_booking_by_id(self, booking_id):
        with self._storage_errors(f"load booking {booking_id}"):
            row = self.db.get(Booking, booking_id)
        return domain.Booking.model_validate(row) if row else None

    def all_resources(self, kind=None):
        with self._storage_errors("load resources"):
            query = self.db.query(Resource)
            if kind is not None:
                query = query.filter(Resource.kind == domain.ResourceKind(kind).value)
            rows = query.order_by(Resource.id).all()
        return [domain.Resource.model_validate(row) for row in rows]

    def insert(self, booking):
        with self._storage_errors("insert booking"):
            db_booking = Booking(**booking.model_dump())
            self.db.add(db_booking)
            self.db.commit()
            self.db.refresh(db_booking)
        return db_booking.id

    def update(self, booking):
        with self._storage_errors(f"update booking {booking.id}"):
            updated = (
                self.db.query(Booking)
                .filter(Booking.id == booking.id)
                .update(
                    {
                        Booking.user_id: booking.user_id,
                        Booking.resource_id: booking.resource_id,
                        Booking.start_time: booking.start_time,
                        Booking.end_time: booking.end_time,
                    }
                )
            )
            self.db.commit()
        return updated > 0

    def delete(self, booking):
        with self._storage_errors(f"delete booking {booking.id}"):
            self.db.query(Booking).filter(Booking.id == booking.id).delete()
            self.db.commit()
