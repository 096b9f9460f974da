"""Tests for the greeting endpoints."""

import pytest
from fastapi.testclient import TestClient


def test_root_greeting(client: TestClient) -> None:
    resp = client.get("/")

    assert resp.status_code == 200
    assert resp.text == "Hello World!"
    assert resp.headers["content-type"].startswith("text/plain")
    assert resp.headers["Access-Control-Allow-Origin"] == "*"


@pytest.mark.parametrize("method", ["GET", "POST", "PUT", "DELETE"])
def test_api_test_greeting_any_method(client: TestClient, method: str) -> None:
    resp = client.request(method, "/api/test")

    assert resp.status_code == 200
    assert resp.text == "Hello World!"
    assert resp.headers["Access-Control-Allow-Origin"] == "*"


def test_request_id_generated(client: TestClient) -> None:
    resp = client.get("/")
    assert resp.headers["X-Request-ID"].startswith("req_")
