# tests/test_preferences.py

from __future__ import annotations

from pathlib import Path

from taskflow_console.preferences import DARK_MODE_KEY, PreferenceStore


def test_missing_file_gives_defaults(tmp_path: Path) -> None:
    prefs = PreferenceStore(tmp_path / "prefs.json")
    assert prefs.get_bool(DARK_MODE_KEY) is False
    assert prefs.get_bool(DARK_MODE_KEY, True) is True
    assert prefs.get("other") is None


def test_bool_is_stored_as_string_and_read_back(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "prefs.json"
    prefs = PreferenceStore(path)

    prefs.set_bool(DARK_MODE_KEY, True)
    assert prefs.get(DARK_MODE_KEY) == "true"
    assert PreferenceStore(path).get_bool(DARK_MODE_KEY) is True

    prefs.set_bool(DARK_MODE_KEY, False)
    assert PreferenceStore(path).get_bool(DARK_MODE_KEY) is False
    assert not path.with_suffix(".tmp").exists()


def test_other_keys_are_preserved(tmp_path: Path) -> None:
    prefs = PreferenceStore(tmp_path / "prefs.json")
    prefs.set("lang", "en")
    prefs.set_bool(DARK_MODE_KEY, True)
    assert prefs.get("lang") == "en"


def test_corrupt_file_falls_back_to_defaults(tmp_path: Path) -> None:
    path = tmp_path / "prefs.json"
    path.write_text("{not json", "utf-8")
    prefs = PreferenceStore(path)
    assert prefs.get_bool(DARK_MODE_KEY) is False

    prefs.set_bool(DARK_MODE_KEY, True)
    assert prefs.get_bool(DARK_MODE_KEY) is True


def test_non_object_file_is_ignored(tmp_path: Path) -> None:
    path = tmp_path / "prefs.json"
    path.write_text("[1, 2]", "utf-8")
    assert PreferenceStore(path).get(DARK_MODE_KEY) is None
