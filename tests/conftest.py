from __future__ import annotations

import socket
from pathlib import Path
from typing import Callable

import pytest
from hypothesis import settings

from stubgen.core.context import RunContext

_ALLOWED_MARKERS = {"unit", "integration", "slow"}

settings.register_profile("stubgen", deadline=None, max_examples=60)
settings.load_profile("stubgen")


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        names = {mark.name for mark in item.iter_markers()}
        if not names.intersection(_ALLOWED_MARKERS):
            item.add_marker("unit")


@pytest.fixture(autouse=True)
def no_network_for_unit(request: pytest.FixtureRequest, monkeypatch: pytest.MonkeyPatch) -> None:
    if request.node.get_closest_marker("integration") or request.node.get_closest_marker("slow"):
        return

    def _blocked(*_args: object, **_kwargs: object) -> socket.socket:
        raise RuntimeError("network disabled in unit tests")

    monkeypatch.setattr(socket, "create_connection", _blocked)


@pytest.fixture(autouse=True)
def clean_stubgen_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("STUBGEN_RUN_ID", "STUBGEN_PROJECT_ROOT", "STUBGEN_LOG_JSON"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def make_ctx(project_root: Path) -> Callable[..., RunContext]:
    def _make(scope: str = "main", verbose: bool = False, quiet: bool = False, log_json: bool = False) -> RunContext:
        return RunContext.from_args(
            "pytest-run",
            str(project_root),
            scope,
            verbose=verbose,
            quiet=quiet,
            log_json=log_json,
        )

    return _make


@pytest.fixture
def ctx(make_ctx: Callable[..., RunContext]) -> RunContext:
    return make_ctx()
