from pydantic import BaseModel, ConfigDict, Field, NaiveDatetime
from datetime import datetime
from typing import Optional
from coworking.domain import ResourceKind


class BookingBase(BaseModel):
    resource_id: int
    start_time: NaiveDatetime
    end_time: NaiveDatetime


class BookingCreate(BookingBase):
    user_id: int


class BookingUpdate(BaseModel):
    resource_id: Optional[int] = None
    start_time: Optional[NaiveDatetime] = None
    end_time: Optional[NaiveDatetime] = None


class BookingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    resource_id: int
    start_time: datetime
    end_time: datetime


class BookingOptimizeRequest(BaseModel):
    user_id: int
    start_time: NaiveDatetime
    end_time: NaiveDatetime
    required_capacity: int = Field(default=0, ge=0)
    kind: Optional[ResourceKind] = None


class TimeSlotResponse(BaseModel):
    resource_id: int
    resource_name: str
    resource_kind: ResourceKind
    start_time: datetime
    end_time: datetime

    @classmethod
    def from_slot(cls, slot):
        return cls(
            resource_id=slot.resource.id,
            resource_name=slot.resource.name,
            resource_kind=slot.resource.kind,
            start_time=slot.start,
            end_time=slot.end,
        )
