from sqlalchemy import Column, Integer, String, CheckConstraint
from sqlalchemy.orm import relationship
from coworking.db import Base


class Resource(Base):
    __tablename__ = "resources"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, index=True, nullable=False)
    capacity = Column(Integer, nullable=False, default=0)
    kind = Column(String(32), index=True, nullable=False)

    bookings = relationship(
        "Booking", back_populates="resource", cascade="all, delete-orphan"
    )

    __table_args__ = (
        CheckConstraint("capacity >= 0", name="check_resource_capacity_non_negative"),
    )
