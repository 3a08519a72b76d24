# src/taskflow_console/data/fixtures.py

"""
Static seed data.

The JSON files use the camelCase shape of the original mock backend
(categoryId, dueDate, createdAt, ...). Keys are converted to snake_case here,
values are left as-is; parsing happens when records are built.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

BUNDLED_DIR = Path(__file__).resolve().parent

_CAMEL_RE = re.compile(r"(?<=[a-z0-9])([A-Z])")

Row = dict[str, Any]


@dataclass(frozen=True, slots=True)
class Fixtures:
    tasks: list[Row] = field(default_factory=list)
    categories: list[Row] = field(default_factory=list)
    users: list[Row] = field(default_factory=list)


def snake_case(name: str) -> str:
    return _CAMEL_RE.sub(r"_\1", name).lower()


def _snake_keys(value: Any) -> Any:
    if isinstance(value, dict):
        return {snake_case(str(k)): _snake_keys(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_snake_keys(v) for v in value]
    return value


def _read_rows(path: Path) -> list[Row]:
    if not path.exists():
        logger.warning("Fixture file missing: %s", path)
        return []
    data = json.loads(path.read_text("utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"Fixture file {path} must contain a JSON array")
    rows = [_snake_keys(r) for r in data if isinstance(r, dict)]
    skipped = len(data) - len(rows)
    if skipped:
        logger.warning("Skipped %d non-object rows in %s", skipped, path)
    return rows


def load_fixtures(fixtures_dir: str | Path | None = None) -> Fixtures:
    """Read tasks/categories/users seed files (bundled ones by default)."""
    base = Path(fixtures_dir) if fixtures_dir else BUNDLED_DIR
    fixtures = Fixtures(
        tasks=_read_rows(base / "tasks.json"),
        categories=_read_rows(base / "categories.json"),
        users=_read_rows(base / "users.json"),
    )
    logger.info(
        "Fixtures loaded dir=%s tasks=%d categories=%d users=%d",
        base,
        len(fixtures.tasks),
        len(fixtures.categories),
        len(fixtures.users),
    )
    return fixtures
