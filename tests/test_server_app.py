"""Tests for the HTTP sync trigger."""

from typing import Any
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from forumsync import __version__
from forumsync.core.config.models import ForumSyncConfig
from forumsync.core.factory import AppFactory
from forumsync.core.sync.models import ProjectError, ProjectErrorType, SyncResult
from forumsync.server.app import app, create_factory


class StubOrchestrator:
    def __init__(self, result: SyncResult | None, error: Exception | None) -> None:
        self.result = result
        self.error = error

    async def run(self) -> SyncResult:
        if self.error:
            raise self.error
        assert self.result is not None
        return self.result


class StubFactory:
    """AppFactory stand-in returning a canned orchestrator."""

    def __init__(self, result: SyncResult | None = None, error: Exception | None = None) -> None:
        self.result = result
        self.error = error
        self.closed = False

    def __call__(self, config: ForumSyncConfig) -> "StubFactory":
        self.config = config
        return self

    def create_orchestrator(self) -> StubOrchestrator:
        return StubOrchestrator(self.result, self.error)

    async def __aenter__(self) -> "StubFactory":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        self.closed = True


@pytest.fixture
def make_client():
    """Build a TestClient with the config and factory patched."""
    patchers: list[Any] = []

    def _make(
        factory: StubFactory,
        api_key: str | None = "secret",
        production: bool = False,
    ) -> TestClient:
        config = ForumSyncConfig(server={"api_key": api_key, "production": production})
        for patcher in (
            patch("forumsync.server.app.get_config", return_value=config),
            patch("forumsync.server.app.create_factory", new=factory),
        ):
            patcher.start()
            patchers.append(patcher)
        return TestClient(app)

    yield _make
    for patcher in patchers:
        patcher.stop()


class TestStatusEndpoints:
    def test_root(self) -> None:
        response = TestClient(app).get("/")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "service": "forumsync", "version": __version__}

    def test_health(self) -> None:
        response = TestClient(app).get("/health")
        assert response.json() == {"status": "healthy"}


class TestSyncEndpoint:
    """Test suite for POST /api/sync."""

    def test_success(self, make_client) -> None:
        result = SyncResult(success=2)
        result.record_failure(
            ProjectError(
                project_id="P3",
                message="write-back failed",
                error_type=ProjectErrorType.WRITE_BACK_FAILED,
                thread_id="777",
            )
        )
        factory = StubFactory(result=result)
        client = make_client(factory)

        response = client.post("/api/sync", headers={"x-api-key": "secret"})

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "success"
        assert "timestamp" in body
        assert body["result"] == {
            "success": 2,
            "failed": 1,
            "errors": [
                {
                    "projectId": "P3",
                    "message": "write-back failed",
                    "errorType": "write_back_failed",
                    "threadId": "777",
                }
            ],
        }
        assert factory.closed

    @pytest.mark.parametrize("headers", [{}, {"x-api-key": "wrong"}])
    def test_unauthorized(self, make_client, headers: dict[str, str]) -> None:
        factory = StubFactory(result=SyncResult())
        response = make_client(factory).post("/api/sync", headers=headers)

        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}
        assert not hasattr(factory, "config")

    def test_unconfigured_key_rejects_everything(self, make_client) -> None:
        response = make_client(StubFactory(result=SyncResult()), api_key=None).post(
            "/api/sync", headers={"x-api-key": ""}
        )
        assert response.status_code == 401

    def test_failure_includes_stack_outside_production(self, make_client) -> None:
        client = make_client(StubFactory(error=RuntimeError("sheet unavailable")))

        response = client.post("/api/sync", headers={"x-api-key": "secret"})

        assert response.status_code == 500
        body = response.json()
        assert body["status"] == "error"
        assert body["message"] == "sheet unavailable"
        assert "RuntimeError" in body["stack"]

    def test_failure_hides_stack_in_production(self, make_client) -> None:
        client = make_client(StubFactory(error=RuntimeError("boom")), production=True)

        response = client.post("/api/sync", headers={"x-api-key": "secret"})

        assert response.status_code == 500
        assert response.json() == {"status": "error", "message": "boom"}


class TestConfigLoadFailure:
    """A config that fails validation still yields a JSON error."""

    @pytest.fixture(autouse=True)
    def broken_config(self, tmp_path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("API_KEY", "k")
        monkeypatch.setenv("FORUMSYNC_MAX_CONCURRENCY", "0")

    def test_returns_structured_error(self) -> None:
        response = TestClient(app).post("/api/sync", headers={"x-api-key": "k"})

        assert response.status_code == 500
        body = response.json()
        assert body["status"] == "error"
        assert "max_concurrency" in body["message"]
        assert "stack" not in body

    @pytest.mark.parametrize("headers", [{}, {"x-api-key": "wrong"}])
    def test_still_requires_key(self, headers: dict[str, str]) -> None:
        response = TestClient(app).post("/api/sync", headers=headers)

        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}

    def test_rejects_when_key_unset(self, monkeypatch) -> None:
        monkeypatch.delenv("API_KEY")

        with patch("forumsync.server.app.get_config", side_effect=ValueError("bad config")):
            response = TestClient(app).post("/api/sync", headers={"x-api-key": ""})

        assert response.status_code == 401


class TestFactoryProvider:
    def test_create_factory(self) -> None:
        config = ForumSyncConfig()
        factory = create_factory(config)
        assert isinstance(factory, AppFactory)
        assert factory.config is config
