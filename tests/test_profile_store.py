from pathlib import Path

import pytest

from spire.data.errors import DataLoadError
from spire.data.profile_store import InMemoryProfileStore, JsonFileProfileStore


def test_json_store_missing_file_reads_none(tmp_path: Path) -> None:
    store = JsonFileProfileStore(tmp_path / "profiles.json")
    assert store.read() is None


def test_json_store_write_then_read(tmp_path: Path) -> None:
    store = JsonFileProfileStore(tmp_path / "nested" / "profiles.json")
    payload = {"save_version": 1, "profiles": [None, None]}

    store.write(payload)

    assert store.path.exists()
    assert store.read() == payload


def test_json_store_clear_removes_file(tmp_path: Path) -> None:
    store = JsonFileProfileStore(tmp_path / "profiles.json")
    store.write({"save_version": 1, "profiles": [None, None]})

    store.clear()
    store.clear()

    assert store.read() is None


def test_json_store_rejects_malformed_file(tmp_path: Path) -> None:
    path = tmp_path / "profiles.json"
    path.write_text("[1, 2", encoding="utf-8")
    with pytest.raises(DataLoadError):
        JsonFileProfileStore(path).read()


def test_json_store_rejects_non_object(tmp_path: Path) -> None:
    path = tmp_path / "profiles.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(DataLoadError):
        JsonFileProfileStore(path).read()


def test_json_store_defaults_to_user_data_dir(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setattr("spire.config.get_user_data_dir", lambda: tmp_path)
    assert JsonFileProfileStore().path == tmp_path / "profiles.json"


def test_memory_store_copies_payloads() -> None:
    payload = {"profiles": [None, {"name": "A"}]}
    store = InMemoryProfileStore(payload)

    payload["profiles"][1]["name"] = "B"
    first = store.read()
    first["profiles"][1]["name"] = "C"

    assert store.read() == {"profiles": [None, {"name": "A"}]}
    store.write(first)
    assert store.write_count == 1
    assert store.read()["profiles"][1]["name"] == "C"


def test_json_store_rejects_non_utf8_file(tmp_path: Path) -> None:
    path = tmp_path / "profiles.json"
    path.write_bytes(b'{"save_version": 1, "profiles": ["\xff\xfe"]}')
    with pytest.raises(DataLoadError):
        JsonFileProfileStore(path).read()
