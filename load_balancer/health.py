import logging
import threading

from .service import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 60.0


class HealthChecker:
    def __init__(self, candidates, timeout=DEFAULT_TIMEOUT):
        self.candidates = list(candidates)
        self.timeout = timeout

    def healthy_backends(self):
        return [b for b in self.candidates if b.is_healthy(timeout=self.timeout)]


class HealthCheckThread(threading.Thread):
    """Periodically pushes the healthy backends into a strategy."""

    def __init__(self, checker, strategy, interval=DEFAULT_INTERVAL):
        super().__init__(name="health-check", daemon=True)
        self.checker = checker
        self.strategy = strategy
        self.interval = interval
        self._stopped = threading.Event()

    def run_once(self):
        healthy = self.checker.healthy_backends()
        logger.info("Healthy backends: %d", len(healthy))
        self.strategy.synchronize(healthy)

    def run(self):
        while not self._stopped.is_set():
            try:
                self.run_once()
            except Exception:
                logger.exception("Health check cycle failed")
            self._stopped.wait(self.interval)

    def stop(self):
        self._stopped.set()
