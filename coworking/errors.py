"""
Error kinds raised by the booking core.

Callers tell outcomes apart by class (or by ``kind``) instead of parsing
messages. ``retryable`` marks the outcomes that may succeed if the caller
tries again with different input or at a later moment.
"""

from typing import List, Optional


class BookingError(Exception):
    kind = "booking"
    retryable = False

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(BookingError):
    """Malformed interval or slot duration."""

    kind = "validation"


class NotFoundError(BookingError):
    """A referenced user, resource or booking does not exist."""

    kind = "not_found"

    def __init__(self, entity: str, entity_id: Optional[int]):
        message = f"{entity.capitalize()} not found"
        if entity_id is not None:
            message = f"{message}: {entity_id}"
        super().__init__(message)
        self.entity = entity
        self.entity_id = entity_id


class ConflictError(BookingError):
    """The candidate interval collides with existing bookings of the resource."""

    kind = "conflict"
    retryable = True

    def __init__(self, resource_id: int, conflicting: Optional[List] = None):
        super().__init__(
            "Booking conflict: the resource is not available for the selected time period"
        )
        self.resource_id = resource_id
        self.conflicting = list(conflicting or [])


class StorageError(BookingError):
    """The store failed to read or write. Never interpreted by the service."""

    kind = "storage"
