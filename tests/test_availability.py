import pytest
from datetime import date, datetime, time, timedelta

from coworking.domain import Booking, Resource, ResourceKind
from coworking.errors import ValidationError
from coworking.utils.availability import available_slots


DESK = Resource(id=7, name="Desk 12", capacity=1, kind=ResourceKind.WORKSPACE)
DAY = date(2030, 1, 15)


def at(hour, minute=0, day=DAY):
    return datetime.combine(day, time(hour, minute))


def make_booking(booking_id, start, end):
    return Booking(id=booking_id, user_id=1, resource_id=DESK.id, start_time=start, end_time=end)


def starts(slots):
    return [slot.start.strftime("%H:%M") for slot in slots]


def test_empty_day_hourly_slots():
    slots = list(available_slots(DESK, DAY, 60, []))
    assert len(slots) == 17
    assert slots[0].start == at(9)
    assert slots[-1].start == at(17)
    assert slots[-1].end == at(18)
    assert all(slot.end - slot.start == timedelta(hours=1) for slot in slots)
    assert all(slot.resource == DESK for slot in slots)


def test_empty_day_half_hour_slots():
    slots = list(available_slots(DESK, DAY, 30, []))
    assert len(slots) == 18
    assert slots[-1].start == at(17, 30)


def test_slots_step_every_half_hour_whatever_the_duration():
    slots = list(available_slots(DESK, DAY, 120, []))
    assert starts(slots)[:3] == ["09:00", "09:30", "10:00"]
    assert slots[-1].start == at(16)


def test_full_business_day_duration():
    slots = list(available_slots(DESK, DAY, 540, []))
    assert [(slot.start, slot.end) for slot in slots] == [(at(9), at(18))]


def test_duration_longer_than_business_day_is_empty():
    assert list(available_slots(DESK, DAY, 600, [])) == []


def test_booking_removes_colliding_slots():
    bookings = [make_booking(1, at(11), at(12))]
    slots = starts(available_slots(DESK, DAY, 60, bookings))
    # 10:30 overlaps, 11:00 shares the start, 11:30 overlaps
    assert "10:30" not in slots
    assert "11:00" not in slots
    assert "11:30" not in slots
    # back-to-back slots stay available
    assert "10:00" in slots
    assert "12:00" in slots
    assert len(slots) == 14


def test_bookings_of_other_days_are_ignored():
    other_day = DAY + timedelta(days=1)
    bookings = [make_booking(1, at(11, day=other_day), at(12, day=other_day))]
    assert len(list(available_slots(DESK, DAY, 60, bookings))) == 17


def test_slots_are_ordered_and_restartable():
    bookings = [make_booking(1, at(13), at(14, 30))]
    slots = available_slots(DESK, DAY, 60, bookings)
    first = list(slots)
    second = list(slots)
    assert first == second
    assert [slot.start for slot in first] == sorted(slot.start for slot in first)


def test_same_inputs_same_slots():
    bookings = [make_booking(1, at(9), at(10))]
    assert list(available_slots(DESK, DAY, 90, bookings)) == list(
        available_slots(DESK, DAY, 90, bookings)
    )


@pytest.mark.parametrize("duration", [0, -30, 45, 61])
def test_invalid_duration_is_rejected_immediately(duration):
    with pytest.raises(ValidationError):
        available_slots(DESK, DAY, duration, [])


def test_slot_str_names_resource_kind():
    slot = next(iter(available_slots(DESK, DAY, 60, [])))
    assert str(slot) == "Workspace: Desk 12 (ID: 7), Start: 09:00, End: 10:00"
