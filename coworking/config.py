import os
from datetime import time


SQLALCHEMY_DATABASE_URL = os.environ.get(
    "COWORKING_DATABASE_URL", "sqlite:///./data/coworking.db"
)
LOG_LEVEL = os.environ.get("COWORKING_LOG_LEVEL", "DEBUG")

# Business hours, local to the booking day
BUSINESS_DAY_START = time(9, 0)
BUSINESS_DAY_END = time(18, 0)

# Slot starts advance by this step regardless of the requested duration,
# and durations must be a multiple of it.
SLOT_STEP_MINUTES = 30
