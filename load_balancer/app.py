from flask import Flask, request
import logging
from urllib.parse import quote
import requests

from .service import DEFAULT_TIMEOUT
from .strategy import RoundRobinStrategy

app = Flask(__name__)
logger = logging.getLogger(__name__)

strategy = RoundRobinStrategy()
METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def request_uri():
    """The path and query as the client sent them, still percent-encoded."""
    raw = request.environ.get("RAW_URI") or request.environ.get("REQUEST_URI")
    if raw:
        return raw
    # request.path is already decoded; re-encode so %3F stays out of the query
    target = quote(request.path)
    if request.query_string:
        target += "?" + request.query_string.decode("latin-1")
    return target


@app.route("/", defaults={"path": ""}, methods=METHODS)
@app.route("/<path:path>", methods=METHODS)
def proxy(path):
    backend = strategy.next()
    if backend is None:
        return "No healthy backend servers available", 503

    target = request_uri()
    try:
        status, headers, body = backend.forward(
            request.method,
            target,
            headers=dict(request.headers),
            body=request.get_data(),
            timeout=app.config.get("BACKEND_TIMEOUT", DEFAULT_TIMEOUT),
        )
    except requests.RequestException as e:
        logger.error("Forwarding to %s failed: %s", backend, e)
        return f"Error processing request: {e}", 500

    logger.info("%s %s -> %s (%d)", request.method, target, backend, status)
    # a Response built from the list keeps repeated headers; a return tuple would merge them
    return app.response_class(body, status=status, headers=headers)
