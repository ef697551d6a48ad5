# ruff: noqa: INP001
"""JSON error envelopes and request-id propagation."""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from starlette.requests import Request

from taskflow.core import error_handling
from taskflow.core.error_handling import (
    REQUEST_ID_HEADER,
    _error_payload,
    _get_request_id,
    _taskflow_error_handler,
    install_error_handling,
)
from taskflow.services.exceptions import (
    EmptyStackError,
    NotFoundError,
    ProtectedResourceError,
    StoreUnavailableError,
)


def _app_raising(exc: Exception) -> FastAPI:
    app = FastAPI()
    install_error_handling(app)

    @app.get("/fail")
    def fail() -> None:
        raise exc

    return app


@pytest.mark.parametrize(
    ("exc", "status_code"),
    [
        (NotFoundError("Task not found"), 404),
        (EmptyStackError("Nothing to undo"), 400),
        (ProtectedResourceError("Cannot delete default project"), 400),
        (StoreUnavailableError("Failed to read tasks.json"), 500),
    ],
)
def test_domain_errors_map_to_status_and_detail(exc: Exception, status_code: int) -> None:
    client = TestClient(_app_raising(exc), raise_server_exceptions=False)

    resp = client.get("/fail")

    assert resp.status_code == status_code
    body = resp.json()
    assert body["detail"] == str(exc)
    assert body["request_id"] == resp.headers[REQUEST_ID_HEADER]


def test_validation_error_lists_details() -> None:
    app = FastAPI()
    install_error_handling(app)

    @app.get("/activity")
    def activity(limit: int) -> dict[str, int]:
        return {"limit": limit}

    resp = TestClient(app).get("/activity?limit=many")

    assert resp.status_code == 422
    assert isinstance(resp.json()["detail"], list)


def test_unhandled_exception_hides_message() -> None:
    client = TestClient(_app_raising(RuntimeError("secret")), raise_server_exceptions=False)

    resp = client.get("/fail")

    assert resp.status_code == 500
    assert resp.json()["detail"] == "Internal Server Error"


def test_client_request_id_is_trimmed_and_echoed() -> None:
    client = TestClient(_app_raising(NotFoundError("gone")))

    resp = client.get("/fail", headers={REQUEST_ID_HEADER: "  abc-1  "})

    assert resp.json()["request_id"] == "abc-1"
    assert resp.headers[REQUEST_ID_HEADER] == "abc-1"


def test_slow_request_is_logged_as_warning(monkeypatch: pytest.MonkeyPatch) -> None:
    messages: list[str] = []
    ticks = iter((10.0, 10.5))

    monkeypatch.setattr(error_handling.settings, "request_log_slow_ms", 100)
    monkeypatch.setattr(error_handling, "perf_counter", lambda: next(ticks))
    monkeypatch.setattr(
        error_handling.logger,
        "warning",
        lambda message, *_args, **_kwargs: messages.append(message),
    )
    app = FastAPI()
    install_error_handling(app)

    @app.get("/tasks")
    def tasks() -> list[str]:
        return []

    assert TestClient(app).get("/tasks").status_code == 200
    assert messages == ["http.request.slow"]


def test_request_id_helpers() -> None:
    assert _get_request_id(Request({"type": "http", "headers": [], "state": {}})) is None
    request = Request({"type": "http", "headers": [], "state": {"request_id": 7}})
    assert _get_request_id(request) is None
    assert _error_payload(detail="x", request_id=None) == {"detail": "x"}


@pytest.mark.asyncio
async def test_taskflow_handler_rejects_foreign_exceptions() -> None:
    request = Request({"type": "http", "headers": [], "state": {}})
    with pytest.raises(TypeError, match="Expected TaskflowError"):
        await _taskflow_error_handler(request, ValueError("x"))


def test_json_safe_decodes_bytes() -> None:
    assert error_handling._json_safe({"body": b"\xff", "n": (1, None)}) == {
        "body": "�",
        "n": [1, None],
    }
