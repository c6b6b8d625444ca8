from fastapi import Depends
from sqlalchemy.orm import Session
from coworking.db import get_db
from coworking.services.booking_service import BookingService
from coworking.store import SqlAlchemyBookingStore


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    """Booking service bound to the request's database session."""
    return BookingService(SqlAlchemyBookingStore(db))
