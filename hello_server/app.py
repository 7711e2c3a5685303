from flask import Flask
import logging
import random
import socket
import time

app = Flask(__name__)
logger = logging.getLogger(__name__)

PORT = 3000
FAILURE_RATE = 0.05
MAX_DELAY_MS = 300


def simulated_failure(draw=None):
    """True when a health check should report failure.

    ``draw`` is a value in [0, 1); a fresh one is taken when omitted.
    """
    if draw is None:
        draw = random.random()
    return draw < FAILURE_RATE


@app.route('/')
def hello():
    delay_ms = random.randrange(MAX_DELAY_MS)
    logger.info("Delaying response by %d ms", delay_ms)
    time.sleep(delay_ms / 1000)
    return f"Hello World! from {socket.gethostname()}"


@app.get("/health")
def health():
    if simulated_failure():
        logger.error("Simulated failure for health check")
        return "Service Unavailable", 500
    logger.info("Health check received")
    return "OK", 200
