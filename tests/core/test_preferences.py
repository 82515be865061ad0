"""
Preference Store Tests

To run:
    pytest tests/core/test_preferences.py -v
"""

import json

import pytest

from core.preferences import PreferenceStore


@pytest.mark.unit
def test_missing_file_gives_defaults(preferences):
    assert preferences.get_int("selectedColorIndex", 0) == 0
    assert preferences.get_int("other", 7) == 7


@pytest.mark.unit
def test_set_int_persists(preferences, preferences_path):
    assert preferences.set_int("selectedColorIndex", 4) is True

    assert json.loads(preferences_path.read_text()) == {"selectedColorIndex": 4}
    assert PreferenceStore(preferences_path).get_int("selectedColorIndex", 0) == 4


@pytest.mark.unit
def test_no_temp_file_left_behind(preferences, preferences_path):
    preferences.set_int("selectedColorIndex", 1)

    assert [p.name for p in preferences_path.parent.iterdir()] == ["preferences.json"]


@pytest.mark.unit
def test_corrupt_file_gives_defaults(preferences_path):
    preferences_path.parent.mkdir(parents=True)
    preferences_path.write_text("{not json")

    assert PreferenceStore(preferences_path).get_int("selectedColorIndex", 0) == 0


@pytest.mark.unit
def test_non_object_file_gives_defaults(preferences_path):
    preferences_path.parent.mkdir(parents=True)
    preferences_path.write_text("[1, 2, 3]")

    assert PreferenceStore(preferences_path).get_int("selectedColorIndex", 5) == 5


@pytest.mark.unit
@pytest.mark.parametrize("stored", ["3", 2.5, True, None])
def test_non_integer_value_gives_default(preferences_path, stored):
    preferences_path.parent.mkdir(parents=True)
    preferences_path.write_text(json.dumps({"selectedColorIndex": stored}))

    assert PreferenceStore(preferences_path).get_int("selectedColorIndex", 0) == 0


@pytest.mark.unit
def test_write_failure_is_reported(tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("")
    store = PreferenceStore(blocker / "preferences.json")

    assert store.set_int("selectedColorIndex", 2) is False
    # Still available for the rest of the run
    assert store.get_int("selectedColorIndex", 0) == 2
