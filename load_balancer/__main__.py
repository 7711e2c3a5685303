import logging

from .app import app, strategy
from .config import load_config
from .health import HealthChecker, HealthCheckThread

logger = logging.getLogger(__name__)


def main():
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
    )
    cfg = load_config()
    checker = HealthChecker(cfg.backends, timeout=cfg.timeout)

    strategy.clear()
    for backend in checker.healthy_backends():
        strategy.add(backend)

    HealthCheckThread(checker, strategy, interval=cfg.interval).start()

    app.config["BACKEND_TIMEOUT"] = cfg.timeout
    logger.info("Load balancer started on port %d", cfg.port)
    app.run(host="0.0.0.0", port=cfg.port, threaded=True)


if __name__ == "__main__":
    main()
