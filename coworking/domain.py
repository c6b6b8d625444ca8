"""
Domain values handed between the store, the conflict checker, the
availability calculator and the booking service.

All of them are immutable snapshots. A booking exists in two phases:
``NewBooking`` before the store has assigned it an identity, and ``Booking``
afterwards.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class ResourceKind(str, Enum):
    WORKSPACE = "workspace"
    CONFERENCE_ROOM = "conference_room"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").capitalize()


class Resource(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: int
    name: str
    capacity: int = Field(ge=0)
    kind: ResourceKind


class User(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: int
    username: str
    email: Optional[str] = None


class NewBooking(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)

    user_id: int
    resource_id: int
    start_time: datetime
    end_time: datetime

    def persisted(self, booking_id: int) -> "Booking":
        """Return the booking under the identity the store assigned."""
        return Booking(id=booking_id, **self.model_dump())


class Booking(NewBooking):
    id: int = Field(gt=0)

    def with_interval(
        self,
        start_time: datetime,
        end_time: datetime,
        resource_id: Optional[int] = None,
    ) -> "Booking":
        changes = {"start_time": start_time, "end_time": end_time}
        if resource_id is not None:
            changes["resource_id"] = resource_id
        return self.model_copy(update=changes)


class TimeSlot(BaseModel):
    model_config = ConfigDict(frozen=True)

    resource: Resource
    start: datetime
    end: datetime

    def __str__(self) -> str:
        return (
            f"{self.resource.kind.label}: {self.resource.name} "
            f"(ID: {self.resource.id}), "
            f"Start: {self.start:%H:%M}, End: {self.end:%H:%M}"
        )
