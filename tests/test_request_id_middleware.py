from __future__ import annotations

import json
import logging
from io import StringIO

from fastapi.testclient import TestClient

from app.api.dependencies import get_employee_service
from app.core.logging import JsonFormatter


def test_preserves_incoming_request_id_header(client: TestClient):
    incoming_id = "test-request-id-123"
    resp = client.get("/health", headers={"X-Request-ID": incoming_id})

    assert resp.status_code == 200
    assert resp.headers.get("X-Request-ID") == incoming_id


def test_generates_request_id_when_missing(client: TestClient):
    resp = client.get("/health")

    assert resp.status_code == 200
    generated = resp.headers.get("X-Request-ID")
    assert generated
    assert isinstance(generated, str)

    duration = resp.headers.get("X-Request-Duration-ms")
    assert duration is not None
    assert float(duration) >= 0


def test_error_body_carries_request_id(client: TestClient):
    resp = client.get("/api/candidates/999", headers={"X-Request-ID": "corr-42"})

    assert resp.status_code == 404
    assert resp.json()["error"]["request_id"] == "corr-42"
    assert resp.headers.get("X-Request-ID") == "corr-42"


def test_writes_access_log_line(client: TestClient):
    middleware_logger = logging.getLogger("app.core.middleware")
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(JsonFormatter())
    middleware_logger.addHandler(handler)
    previous_level = middleware_logger.level
    middleware_logger.setLevel(logging.INFO)
    try:
        client.get("/health", headers={"X-Request-ID": "access-1"})
    finally:
        middleware_logger.removeHandler(handler)
        middleware_logger.setLevel(previous_level)

    lines = [json.loads(line) for line in stream.getvalue().splitlines()]
    completed = [line for line in lines if line["message"] == "request.completed"]

    assert len(completed) == 1
    entry = completed[0]
    assert entry["method"] == "GET"
    assert entry["path"] == "/health"
    assert entry["status_code"] == 200
    assert entry["request_id"] == "access-1"
    assert "duration_ms" in entry


def _broken_service():
    raise RuntimeError("storage exploded")


def test_unhandled_error_keeps_request_id(api_app, client: TestClient):
    api_app.dependency_overrides[get_employee_service] = _broken_service

    resp = client.get("/api/employees", headers={"X-Request-ID": "req-500"})

    assert resp.status_code == 500
    error = resp.json()["error"]
    assert error["code"] == "internal_server_error"
    assert error["request_id"] == "req-500"
    assert "storage exploded" not in resp.text
    assert resp.headers.get("X-Request-ID") == "req-500"
    assert resp.headers.get("X-Request-Duration-ms") is not None


def test_unhandled_error_is_logged_with_request_id(api_app, client: TestClient):
    api_app.dependency_overrides[get_employee_service] = _broken_service
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(JsonFormatter())
    loggers = [logging.getLogger("app.core.middleware"), logging.getLogger("app.core.exception_handlers")]
    previous_levels = [lg.level for lg in loggers]
    for lg in loggers:
        lg.addHandler(handler)
        lg.setLevel(logging.INFO)
    try:
        client.get("/api/employees", headers={"X-Request-ID": "req-500-log"})
    finally:
        for lg, level in zip(loggers, previous_levels):
            lg.removeHandler(handler)
            lg.setLevel(level)

    lines = [json.loads(line) for line in stream.getvalue().splitlines()]
    by_message = {line["message"]: line for line in lines}

    assert by_message["unhandled_exception"]["request_id"] == "req-500-log"
    assert "RuntimeError: storage exploded" in by_message["unhandled_exception"]["exc_info"]
    assert by_message["request.completed"]["status_code"] == 500
    assert by_message["request.completed"]["request_id"] == "req-500-log"
