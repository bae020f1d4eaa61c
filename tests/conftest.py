"""Shared pytest fixtures and test helpers for gendocs tests."""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable, Iterator
from pathlib import Path
from typing import Any

import httpx
import pytest
from click.testing import CliRunner

import gendocs.infrastructure.api as api_module
from gendocs.infrastructure.api import GendocsClient
from gendocs.services.telemetry import disable_telemetry

TEST_BASE_URL = "https://gendocs.test/api"

Responder = (
    httpx.Response
    | Exception
    | Callable[[httpx.Request], httpx.Response | Awaitable[httpx.Response]]
)


class FakeApi:
    """Scripted stand-in for the gendocs REST API.

    Register responses per ``(method, path)``; paths are relative to the
    ``/api`` prefix.  Each request consumes the next queued response and
    the last one repeats.  An Exception entry is raised from the transport;
    a coroutine function is only usable from the async ``domain_status``.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], list[Responder]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, *responses: Responder) -> None:
        self.routes[(method.upper(), path)] = list(responses)

    def json(self, method: str, path: str, status_code: int = 200, **body: Any) -> None:
        self.add(method, path, httpx.Response(status_code, json=body))

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [
            r for r in self.requests if r.method == method.upper() and self._path(r) == path
        ]

    def body(self, request: httpx.Request) -> Any:
        return json.loads(request.content)

    def handler(self, request: httpx.Request) -> Any:
        self.requests.append(request)
        queue = self.routes.get((request.method, self._path(request)))
        if not queue:
            return httpx.Response(404, json={"errors": {"route": "not found"}})
        responder = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(responder, Exception):
            raise responder
        if callable(responder):
            return responder(request)
        return responder

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def client(self) -> GendocsClient:
        return GendocsClient(TEST_BASE_URL, transport=self.transport())

    @staticmethod
    def _path(request: httpx.Request) -> str:
        return request.url.path.removeprefix("/api")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's GENDOCS_* environment out of tests."""
    for name in (
        "GENDOCS_CONFIG",
        "GENDOCS_PASSWORD",
        "GENDOCS_QUIET",
        "GENDOCS_JSON_OUTPUT",
        "GENDOCS_NO_INTERACT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    """Undo the logging and telemetry setup done by each CLI invocation."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    gendocs_level = logging.getLogger("gendocs").level
    yield
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("gendocs").setLevel(gendocs_level)
    disable_telemetry()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def fake_api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def client(fake_api: FakeApi) -> Iterator[GendocsClient]:
    """GendocsClient wired to the fake API."""
    c = fake_api.client()
    try:
        yield c
    finally:
        c.close()


@pytest.fixture
def cli_api(fake_api: FakeApi, monkeypatch: pytest.MonkeyPatch) -> FakeApi:
    """Route every client the CLI creates to the fake API."""
    real_client = GendocsClient

    def factory(base_url: str = TEST_BASE_URL, **kwargs: Any) -> GendocsClient:
        kwargs["transport"] = fake_api.transport()
        return real_client(base_url, **kwargs)

    monkeypatch.setattr(api_module, "GendocsClient", factory)
    return fake_api


@pytest.fixture
def _isolated_project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run the CLI from an empty temporary project directory.

    Use via ``@pytest.mark.usefixtures("_isolated_project")``.  Monitor
    timings are shortened through the environment.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("GENDOCS_DOMAINS__POLL_INTERVAL", "0.01")
    monkeypatch.setenv("GENDOCS_DOMAINS__PROVISION_TIMEOUT", "0.5")


def write_project_file(root: Path, **data: Any) -> Path:
    """Write a gendocs.json into *root*."""
    path = root / "gendocs.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path
