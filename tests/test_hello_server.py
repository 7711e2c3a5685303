import random
import socket
import threading
import time

import pytest
import requests
from werkzeug.serving import make_server

from hello_server import app as hello
from hello_server.app import app


@pytest.fixture
def client():
    app.config["TESTING"] = True
    return app.test_client()


@pytest.fixture
def no_sleep(monkeypatch):
    delays = []
    monkeypatch.setattr(hello.time, "sleep", delays.append)
    return delays


def test_greeting_names_host(client, no_sleep):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.get_data(as_text=True) == f"Hello World! from {socket.gethostname()}"


def test_greeting_body_prefix(client, no_sleep):
    resp = client.get("/")
    assert resp.get_data(as_text=True).startswith("Hello World! from ")


def test_greeting_delay_in_range(client, no_sleep):
    for _ in range(50):
        assert client.get("/").status_code == 200
    assert len(no_sleep) == 50
    assert all(0 <= d < 0.3 for d in no_sleep)


def test_greeting_uses_drawn_delay(client, no_sleep, monkeypatch):
    monkeypatch.setattr(hello.random, "randrange", lambda stop: 299)
    client.get("/")
    assert no_sleep == [0.299]


def test_health_ok_with_high_draw(client, monkeypatch):
    monkeypatch.setattr(hello.random, "random", lambda: 0.2)
    for _ in range(20):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.get_data(as_text=True) == "OK"


def test_health_fails_with_low_draw(client, monkeypatch):
    monkeypatch.setattr(hello.random, "random", lambda: 0.01)
    resp = client.get("/health")
    assert resp.status_code == 500
    assert resp.get_data(as_text=True) == "Service Unavailable"


def test_health_logs_by_outcome(client, monkeypatch, caplog):
    caplog.set_level("INFO", logger="hello_server.app")
    monkeypatch.setattr(hello.random, "random", lambda: 0.01)
    client.get("/health")
    monkeypatch.setattr(hello.random, "random", lambda: 0.5)
    client.get("/health")
    levels = [r.levelname for r in caplog.records if r.name == "hello_server.app"]
    assert levels == ["ERROR", "INFO"]


def test_failure_threshold_boundary():
    assert hello.simulated_failure(0.0)
    assert hello.simulated_failure(0.0499)
    assert not hello.simulated_failure(0.05)
    assert not hello.simulated_failure(0.9999)


def test_failure_rate_converges():
    random.seed(20261019)
    trials = 100_000
    failures = sum(hello.simulated_failure() for _ in range(trials))
    assert abs(failures / trials - 0.05) < 0.01


def test_unknown_path_is_404(client):
    assert client.get("/nonexistent").status_code == 404


def test_delayed_requests_do_not_block_each_other(monkeypatch):
    monkeypatch.setattr(hello.random, "randrange", lambda stop: 299)
    server = make_server("127.0.0.1", 0, app, threaded=True)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    url = f"http://127.0.0.1:{server.server_port}/"
    try:
        results = []

        def fetch():
            results.append(requests.get(url, timeout=5).status_code)

        workers = [threading.Thread(target=fetch) for _ in range(5)]
        started = time.monotonic()
        for w in workers:
            w.start()
        for w in workers:
            w.join()
        elapsed = time.monotonic() - started
    finally:
        server.shutdown()
        thread.join()

    assert results == [200] * 5
    # five serialized delays would take ~1.5s
    assert elapsed < 1.2


def test_greeting_logs_delay(client, no_sleep, monkeypatch, caplog):
    caplog.set_level("INFO", logger="hello_server.app")
    monkeypatch.setattr(hello.random, "randrange", lambda stop: 42)
    client.get("/")
    messages = [r.getMessage() for r in caplog.records if r.name == "hello_server.app"]
    assert messages == ["Delaying response by 42 ms"]
