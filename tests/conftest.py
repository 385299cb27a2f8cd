"""Shared fixtures: an isolated config file and a fake chat-completion endpoint."""

import io
import urllib.error
import urllib.request

import pytest


class FakeResponse:
    """Stands in for the object urlopen returns on 2xx."""

    def __init__(self, body: str, status: int = 200, reason: str = "OK"):
        self._body = body.encode('utf-8')
        self.status = status
        self.reason = reason

    def read(self) -> bytes:
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, *args):
        return False


@pytest.fixture
def config_path(tmp_path, monkeypatch):
    """Point the config file at a temp location for the whole test."""
    path = tmp_path / "ai-commit" / "config.toml"
    monkeypatch.setenv("AI_COMMIT_CONFIG", str(path))
    return path


@pytest.fixture
def endpoint(monkeypatch):
    """Replace urlopen. Call with status/body (or exc) and get back the list of sent requests."""
    def _install(status: int = 200, body: str = "", exc: Exception | None = None, reason: str = "Unauthorized"):
        calls = []

        def fake_urlopen(req, *args, **kwargs):
            calls.append(req)
            if exc is not None:
                raise exc
            if 200 <= status < 300:
                return FakeResponse(body, status)
            raise urllib.error.HTTPError(req.full_url, status, reason, {}, io.BytesIO(body.encode('utf-8')))

        monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)
        return calls
    return _install


@pytest.fixture
def no_network(monkeypatch):
    """Fail the test if anything tries to reach the endpoint."""
    def _refuse(*args, **kwargs):
        pytest.fail("network call attempted")
    monkeypatch.setattr(urllib.request, "urlopen", _refuse)
