from .service import Backend
from .strategy import RoundRobinStrategy
from .health import HealthChecker, HealthCheckThread

__all__ = ["Backend", "RoundRobinStrategy", "HealthChecker", "HealthCheckThread"]
