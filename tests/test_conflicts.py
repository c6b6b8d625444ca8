from datetime import datetime

from coworking.domain import Booking, Resource, ResourceKind
from coworking.utils.conflicts import find_conflicts, has_conflict, intervals_conflict


ROOM = Resource(id=1, name="Conference Room A", capacity=10, kind=ResourceKind.CONFERENCE_ROOM)


def at(hour, minute=0):
    return datetime(2030, 1, 15, hour, minute)


def make_booking(booking_id, start, end):
    return Booking(id=booking_id, user_id=1, resource_id=ROOM.id, start_time=start, end_time=end)


EXISTING = [make_booking(1, at(11), at(12))]


def test_plain_overlap_is_conflict():
    assert has_conflict(ROOM, at(10, 30), at(11, 30), EXISTING)


def test_back_to_back_before_is_not_conflict():
    # Ends exactly when the existing booking starts
    assert not has_conflict(ROOM, at(10), at(11), EXISTING)


def test_back_to_back_after_is_not_conflict():
    assert not has_conflict(ROOM, at(12), at(13), EXISTING)


def test_shared_start_is_conflict():
    assert has_conflict(ROOM, at(11), at(11, 30), EXISTING)


def test_shared_end_is_conflict():
    assert has_conflict(ROOM, at(11, 30), at(12), EXISTING)


def test_containing_interval_is_conflict():
    assert has_conflict(ROOM, at(10), at(13), EXISTING)


def test_contained_interval_is_conflict():
    assert has_conflict(ROOM, at(11, 15), at(11, 45), EXISTING)


def test_no_bookings_no_conflict():
    assert not has_conflict(ROOM, at(9), at(18), [])


def test_predicate_is_symmetric_for_endpoints():
    assert intervals_conflict(at(9), at(10), at(9), at(12))
    assert intervals_conflict(at(9), at(12), at(9), at(10))
    assert intervals_conflict(at(8), at(12), at(11), at(12))
    assert not intervals_conflict(at(9), at(10), at(10), at(11))


def test_find_conflicts_returns_colliding_bookings_only():
    bookings = [
        make_booking(1, at(9), at(10)),
        make_booking(2, at(10), at(11)),
        make_booking(3, at(12), at(13)),
    ]
    conflicting = find_conflicts(ROOM, at(10), at(12), bookings)
    assert [booking.id for booking in conflicting] == [2]
