from sqlalchemy import Column, Integer, DateTime, ForeignKey, CheckConstraint, Index
from sqlalchemy.orm import relationship
from coworking.db import Base


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    resource_id = Column(Integer, ForeignKey("resources.id"), nullable=False)
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=False)

    resource = relationship("Resource", back_populates="bookings")
    user = relationship("User", back_populates="bookings")

    __table_args__ = (
        CheckConstraint("start_time < end_time", name="check_booking_interval"),
        Index("ix_bookings_resource_start", "resource_id", "start_time"),
    )

    def __repr__(self) -> str:
        return (
            f"<Booking(id={self.id}, resource={self.resource_id}, "
            f"{self.start_time:%Y-%m-%d %H:%M}-{self.end_time:%H:%M})>"
        )
