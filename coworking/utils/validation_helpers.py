from datetime import datetime
from coworking.config import SLOT_STEP_MINUTES
from coworking.errors import ValidationError


def validate_naive(value: datetime):
    # Stored instants are naive local wall-clock times
    if value.tzinfo is not None and value.utcoffset() is not None:
        raise ValidationError(
            f"Booking times must be local times without a UTC offset (got {value.isoformat()})"
        )
    return value


def validate_interval(start: datetime, end: datetime):
    validate_naive(start)
    validate_naive(end)
    if start >= end:
        raise ValidationError(
            f"Start time must be before end time (got {start} - {end})"
        )
    return start, end


def validate_duration(duration_minutes: int):
    if duration_minutes <= 0 or duration_minutes % SLOT_STEP_MINUTES != 0:
        raise ValidationError(
            f"Duration must be a positive multiple of {SLOT_STEP_MINUTES} minutes "
            f"(got {duration_minutes})"
        )
    return duration_minutes
