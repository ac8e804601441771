# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from tasklist.core.state import AppState
from tasklist.tasks.task_store import TaskStore
from tasklist.web.app import create_app


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the web layer.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="Tasks",
        data_dir=tmp_path,
        tasks_file=tmp_path / "tasks.csv",
        page_size=10,
    )


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    """
    AppState wired with a real CSV store in tmp_path.

    NOTE: the store is not faked because its persistence is part of what we test.
    """
    return AppState(settings=settings, task_store=TaskStore(settings.tasks_file))


@pytest.fixture()
def client(state: AppState) -> TestClient:
    return TestClient(create_app(state), follow_redirects=False)
