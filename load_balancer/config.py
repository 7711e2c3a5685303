from dataclasses import dataclass, field
import os
from typing import List

from .service import Backend

DEFAULT_BACKEND_PORT = 3000


@dataclass
class BalancerConfig:
    backends: List[Backend] = field(default_factory=list)
    port: int = 8080
    interval: float = 60.0
    timeout: float = 2.0


def parse_backends(raw):
    backends = []
    for item in raw.split(","):
        item = item.strip()
        if not item:
            continue
        host, sep, port = item.rpartition(":")
        if not sep:
            host, port = item, DEFAULT_BACKEND_PORT
        backend = Backend(host, int(port))
        if Backend.is_invalid(backend):
            raise ValueError(f"Invalid backend: {item!r}")
        backends.append(backend)
    return backends


def load_config(environ=None):
    env = os.environ if environ is None else environ
    cfg = BalancerConfig(
        backends=parse_backends(env.get("BALANCER_BACKENDS", "localhost:3000")),
        port=int(env.get("BALANCER_PORT", "8080")),
        interval=float(env.get("HEALTH_CHECK_INTERVAL", "60")),
        timeout=float(env.get("HEALTH_CHECK_TIMEOUT", "2")),
    )
    if cfg.interval <= 0 or cfg.timeout <= 0:
        raise ValueError("HEALTH_CHECK_INTERVAL and HEALTH_CHECK_TIMEOUT must be positive")
    return cfg
