import json

import pytest

from memory.preference_store import InMemoryPreferenceStore, JSONPreferenceStore
from models.garments import GenderPreference


def test_in_memory_store_round_trip() -> None:
    store = InMemoryPreferenceStore()
    assert store.get("ana") is None
    store.set("ana", "female")
    assert store.get("ana") is GenderPreference.FEMALE


def test_json_store_writes_one_file_per_user(tmp_path) -> None:
    store = JSONPreferenceStore(str(tmp_path / "prefs"))
    store.set("user/../42", GenderPreference.MALE)
    store.set("ana", GenderPreference.ANY)

    files = sorted(path.name for path in (tmp_path / "prefs").iterdir())
    assert files == ["ana.json", "user%2F..%2F42.json"]
    assert json.loads((tmp_path / "prefs" / "user%2F..%2F42.json").read_text()) == {"user_id": "user/../42", "gender": "male"}
    assert JSONPreferenceStore(str(tmp_path / "prefs")).get("user/../42") is GenderPreference.MALE


def test_json_store_keeps_lookalike_ids_apart(tmp_path) -> None:
    store = JSONPreferenceStore(str(tmp_path))
    store.set("a/b", GenderPreference.MALE)

    assert store.get("a_b") is None
    assert store.get("a%2Fb") is None

    store.set("a_b", GenderPreference.FEMALE)
    assert store.get("a/b") is GenderPreference.MALE
    assert store.get("a_b") is GenderPreference.FEMALE


def test_json_store_ignores_unknown_values(tmp_path) -> None:
    store = JSONPreferenceStore(str(tmp_path))
    (tmp_path / "legacy.json").write_text(json.dumps({"user_id": "legacy", "gender": "robot"}))
    assert store.get("legacy") is None


@pytest.mark.parametrize("raw, expected", [("MEN", GenderPreference.MALE), ("woman", GenderPreference.FEMALE), (None, GenderPreference.ANY)])
def test_gender_preference_parse(raw, expected) -> None:
    assert GenderPreference.parse(raw) is expected


def test_gender_preference_rejects_unknown() -> None:
    with pytest.raises(ValueError):
        GenderPreference.parse("robot")
