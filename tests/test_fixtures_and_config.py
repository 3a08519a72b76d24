# tests/test_fixtures_and_config.py

from __future__ import annotations

import json
from datetime import UTC, date, datetime
from pathlib import Path

import pytest

from taskflow_console.cli.bootstrap import create_initial_state, shutdown_state
from taskflow_console.config import Settings
from taskflow_console.core.models import TaskPriority, TaskStatus
from taskflow_console.data.fixtures import load_fixtures, snake_case
from taskflow_console.services.store import Store


def test_snake_case() -> None:
    assert snake_case("categoryId") == "category_id"
    assert snake_case("dueDate") == "due_date"
    assert snake_case("title") == "title"


def test_bundled_fixtures_seed_the_store() -> None:
    fixtures = load_fixtures()
    assert len(fixtures.tasks) == 7
    assert "category_id" in fixtures.tasks[0]

    store = Store.from_fixtures(fixtures)
    first = store.tasks[0]
    assert first.id == "1"
    assert first.status == TaskStatus.IN_PROGRESS
    assert first.priority == TaskPriority.HIGH
    assert first.due_date == date(2024, 2, 15)
    assert first.created_at == datetime(2024, 1, 10, 9, 0, tzinfo=UTC)
    assert first.tags == ("report", "finance")

    assert [c.name for c in store.categories] == ["Work", "Personal", "Shopping", "Health"]
    assert store.users[1].preferences.default_view == "board"


def test_custom_fixture_dir(tmp_path: Path) -> None:
    (tmp_path / "tasks.json").write_text(
        json.dumps([{"id": "x1", "title": "Only one", "createdAt": "2024-05-01T00:00:00Z"}]),
        "utf-8",
    )
    fixtures = load_fixtures(tmp_path)
    assert fixtures.categories == []
    assert fixtures.users == []

    store = Store.from_fixtures(fixtures)
    task = store.tasks[0]
    assert task.status == TaskStatus.PENDING
    assert task.updated_at == task.created_at


def test_fixture_must_be_array(tmp_path: Path) -> None:
    (tmp_path / "tasks.json").write_text("{}", "utf-8")
    with pytest.raises(ValueError):
        load_fixtures(tmp_path)


@pytest.mark.asyncio
async def test_each_state_gets_its_own_store(settings) -> None:
    a = create_initial_state(settings=settings)
    b = create_initial_state(settings=settings)

    await a.tasks.delete("1")

    assert len(await a.tasks.get_all()) == 6
    assert len(await b.tasks.get_all()) == 7


@pytest.mark.asyncio
async def test_shutdown_clears_store(settings) -> None:
    state = create_initial_state(settings=settings)
    shutdown_state(state)
    assert await state.tasks.get_all() == []
    assert settings.data_dir.is_dir()


def test_settings_from_env(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TASKFLOW_APP_NAME", "Flow")
    monkeypatch.setenv("TASKFLOW_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("TASKFLOW_LATENCY_SCALE", "0")
    monkeypatch.delenv("TASKFLOW_PREFS_PATH", raising=False)
    monkeypatch.delenv("TASKFLOW_FIXTURES_DIR", raising=False)

    s = Settings.from_env()
    assert s.app_name == "Flow"
    assert s.data_dir == tmp_path
    assert s.prefs_path == tmp_path / "preferences.json"
    assert s.fixtures_dir is None
    assert s.latency_scale == 0.0


def test_settings_ignore_bad_latency(monkeypatch) -> None:
    monkeypatch.setenv("TASKFLOW_LATENCY_SCALE", "fast")
    assert Settings.from_env().latency_scale == 1.0
    monkeypatch.setenv("TASKFLOW_LATENCY_SCALE", "-3")
    assert Settings.from_env().latency_scale == 0.0
