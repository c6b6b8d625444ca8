import threading
from contextlib import contextmanager
from typing import Dict


class ResourceLocks:
    """One lock per resource id, created on first use."""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[int, threading.Lock] = {}

    def for_resource(self, resource_id: int) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(resource_id)
            if lock is None:
                lock = self._locks[resource_id] = threading.Lock()
            return lock

    @contextmanager
    def hold(self, resource_id: int):
        """Serialize check-then-write sequences on one resource."""
        with self.for_resource(resource_id):
            yield


# Shared by every BookingService built in this process
RESOURCE_LOCKS = ResourceLocks()
