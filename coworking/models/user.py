from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from coworking.db import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, nullable=True)

    bookings = relationship(
        "Booking", back_populates="user", cascade="all, delete-orphan"
    )
