"""Shared test fixtures for gw2api.

Provides a fake remote API served through :class:`httpx.MockTransport`,
isolated XDG directories, and a reset of the global output manager between
tests.  No test touches the network.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Optional

import httpx
import pytest

from gw2api.output import reset_output


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The manager keeps references to sys.stdout/sys.stderr; CliRunner swaps
    those streams, so a stale manager would write to closed files.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Fake remote API
# ---------------------------------------------------------------------------


def _parse_id(raw: str) -> Any:
    return int(raw) if raw.isdigit() else raw


class FakeApi:
    """In-memory stand-in for the v2 API.

    * ``collections`` answer ``/x``, ``/x/{id}`` and ``/x?ids=a,b``.
    * ``fixed`` endpoints always answer with the same payload.
    * ``override`` lets a test take over a request completely.

    Every request is recorded in :attr:`requests`.
    """

    def __init__(self) -> None:
        self.collections: dict[str, dict[Any, dict[str, Any]]] = {}
        self.fixed: dict[str, Any] = {}
        self.requests: list[httpx.Request] = []
        self.override: Optional[Callable[[httpx.Request], Optional[httpx.Response]]] = None

    def add_collection(self, endpoint: str, objects: list[dict[str, Any]]) -> None:
        self.collections[endpoint] = {obj["id"]: obj for obj in objects}

    def add_fixed(self, endpoint: str, payload: Any) -> None:
        self.fixed[endpoint] = payload

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def paths(self) -> list[str]:
        return [_api_path(r) for r in self.requests]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.override is not None:
            response = self.override(request)
            if response is not None:
                return response

        path = _api_path(request)
        if path in self.fixed:
            return httpx.Response(200, json=self.fixed[path])

        if path in self.collections:
            objects = self.collections[path]
            ids = request.url.params.get("ids")
            if ids is None:
                return httpx.Response(200, json=list(objects))
            wanted = [_parse_id(i) for i in ids.split(",") if i]
            found = [objects[i] for i in wanted if i in objects]
            status = 200 if len(found) == len(wanted) else 206
            return httpx.Response(status, json=found)

        parent, _, last = path.rpartition("/")
        objects = self.collections.get(parent)
        if objects is not None and _parse_id(last) in objects:
            return httpx.Response(200, json=objects[_parse_id(last)])
        return httpx.Response(404, json={"text": "no such id"})


def _api_path(request: httpx.Request) -> str:
    path = request.url.path
    return path[len("/v2"):] if path.startswith("/v2") else path


ITEMS = [
    {"id": 15, "name": "Abomination Hammer", "type": "Weapon"},
    {"id": 411, "name": "Berserker's Pauldrons", "type": "Armor"},
    {"id": 5, "name": "Copper Ore", "type": "CraftingMaterial"},
    {"id": 7, "name": "Iron Ore", "type": "CraftingMaterial"},
]


@pytest.fixture
def fake_api() -> FakeApi:
    """A FakeApi preloaded with a few items."""
    api = FakeApi()
    api.add_collection("/items", [dict(item) for item in ITEMS])
    return api


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG directories at tmp_path and clear GW2API_* variables.

    Returns:
        The tmp_path root directory.
    """
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setattr("gw2api.config._is_xdg_platform", lambda: True)

    for var in ["GW2API_LANG", "GW2API_BASE_URL", "GW2API_NO_CACHE"]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
