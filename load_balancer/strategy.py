import logging
import threading

from .service import Backend

logger = logging.getLogger(__name__)


class RoundRobinStrategy:
    """Thread-safe round-robin rotation over a list of backends.

    The list is expected to hold only healthy backends; the health-check
    thread keeps it current through :meth:`synchronize`.
    """

    def __init__(self):
        self._backends = []
        self._index = 0
        self._lock = threading.RLock()

    def add(self, backend):
        with self._lock:
            if Backend.is_invalid(backend):
                logger.error("Invalid backend: %s", backend)
                return
            if backend in self._backends:
                logger.info("Backend already exists: %s", backend)
                return
            self._backends.append(backend)
            logger.info("Added backend %s at index %d", backend, len(self._backends) - 1)

    def remove(self, backend):
        with self._lock:
            if Backend.is_invalid(backend):
                logger.error("Invalid backend: %s", backend)
                return
            try:
                position = self._backends.index(backend)
            except ValueError:
                logger.info("Backend not found: %s", backend)
                return
            del self._backends[position]
            if position < self._index:
                self._index -= 1
            if self._backends:
                self._index %= len(self._backends)
            else:
                self._index = 0

    def clear(self):
        with self._lock:
            self._backends.clear()
            self._index = 0

    def count(self):
        with self._lock:
            return len(self._backends)

    def contains(self, backend):
        if Backend.is_invalid(backend):
            return False
        with self._lock:
            return backend in self._backends

    def backends(self):
        with self._lock:
            return tuple(self._backends)

    def next(self):
        with self._lock:
            if not self._backends:
                logger.info("No backends available.")
                return None
            index = self._index % len(self._backends)
            self._index = (index + 1) % len(self._backends)
            backend = self._backends[index]
        logger.debug("Next backend: %s at index %d", backend, index)
        return backend

    def synchronize(self, healthy):
        """Make the rotation match ``healthy`` while keeping its order."""
        with self._lock:
            if not healthy:
                self.clear()
                return

            for backend in healthy:
                if not self.contains(backend):
                    self.add(backend)

            healthy_set = set(healthy)
            removed_before_cursor = sum(
                1 for i, b in enumerate(self._backends)
                if b not in healthy_set and i < self._index
            )
            before = len(self._backends)
            self._backends = [b for b in self._backends if b in healthy_set]
            self._index = max(self._index - removed_before_cursor, 0)
            if self._backends:
                self._index %= len(self._backends)

            removed = before - len(self._backends)
            logger.info("Removed %d backends that are not healthy.", removed)
