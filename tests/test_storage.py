from __future__ import annotations

import json
import os
import stat
from pathlib import Path

import pytest

from jsonvault import (
    CollectionNotFoundError,
    CollectionStore,
    ConfigHolder,
    DatabaseError,
    FieldKind,
    FieldSpec,
    FileSizeError,
    MemoryStore,
    ValidationError,
)
from jsonvault.exceptions import ErrorKind

AGE_SCHEMA = {"age": FieldSpec(kind=FieldKind.NUMBER, required=True)}


def test_save_then_read_roundtrip(config: ConfigHolder) -> None:
    store = CollectionStore(config)
    records = [{"name": "ada", "tags": ["x", "y"], "meta": {"n": 1.5}}, {"name": "bob", "ok": None}]

    result = store.save("users", records)

    assert store.read("users") == records
    assert result.path == Path(config.get().data_directory).resolve() / "users.json"
    assert result.size == result.path.stat().st_size
    assert result.backup_path is None


def test_read_missing_collection_creates_empty_file(config: ConfigHolder) -> None:
    store = CollectionStore(config)

    assert store.read("fresh") == []

    assert "fresh.json" in store.list_collections()
    path = Path(config.get().data_directory) / "fresh.json"
    assert json.loads(path.read_text()) == []


def test_saved_file_is_a_pretty_printed_array(config: ConfigHolder) -> None:
    store = CollectionStore(config)
    store.save("users", [{"name": "a"}])

    content = (Path(config.get().data_directory) / "users.json").read_text()
    assert content == '[\n  {\n    "name": "a"\n  }\n]'


def test_oversized_payload_leaves_file_unchanged(config: ConfigHolder) -> None:
    store = CollectionStore(config)
    store.save("users", [{"name": "a"}])
    config.update(max_file_size=50)

    with pytest.raises(FileSizeError) as info:
        store.save("users", [{"name": "a" * 100}])

    assert info.value.limit == 50
    assert info.value.size > 50
    assert info.value.path.name == "users.json"
    assert store.read("users") == [{"name": "a"}]


def test_schema_violation_rejected_before_write(config: ConfigHolder) -> None:
    store = CollectionStore(config)
    store.save("people", [{"age": 1}])

    with pytest.raises(ValidationError) as info:
        store.save("people", [{"age": "x"}], AGE_SCHEMA)

    assert info.value.errors == ("Item 0: Field 'age' must be of type 'number'",)
    assert store.read("people") == [{"age": 1}]


def test_schema_violation_on_first_save_writes_nothing(config: ConfigHolder) -> None:
    store = CollectionStore(config)
    with pytest.raises(ValidationError):
        store.save("people", [{}], AGE_SCHEMA)
    assert "people.json" not in store.list_collections()


def test_read_with_schema_is_strict(config: ConfigHolder) -> None:
    store = CollectionStore(config)
    store.save("people", [{"age": 3}, {"age": "old"}])

    with pytest.raises(ValidationError, match="Item 1"):
        store.read("people", AGE_SCHEMA)


def test_inspect_reports_without_raising(config: ConfigHolder) -> None:
    store = CollectionStore(config)
    store.save("people", [{"age": 3}, {}])

    report = store.inspect("people", AGE_SCHEMA)

    assert report.name == "people.json"
    assert report.records == [{"age": 3}, {}]
    assert not report.validation.valid
    assert report.validation.errors == ("Item 1: Field 'age' is required",)


def test_save_rejects_non_list_data(config: ConfigHolder) -> None:
    store = CollectionStore(config)
    with pytest.raises(ValidationError, match="array"):
        store.save("users", {"name": "a"})  # type: ignore[arg-type]


def test_save_rejects_unserializable_data(config: ConfigHolder) -> None:
    store = CollectionStore(config)
    with pytest.raises(ValidationError):
        store.save("users", [{"value": float("nan")}])
    with pytest.raises(ValidationError):
        store.save("users", [{"value": object()}])


def test_traversal_name_writes_inside_data_directory(config: ConfigHolder, tmp_path: Path) -> None:
    store = CollectionStore(config)

    result = store.save("../../etc/passwd", [{"x": 1}])

    assert result.path.parent == Path(config.get().data_directory).resolve()
    assert store.list_collections() == ["etcpasswd.json"]
    assert not (tmp_path / "etc").exists()


def test_invalid_name_fails_without_io(config: ConfigHolder) -> None:
    store = CollectionStore(config)
    with pytest.raises(ValidationError, match="Invalid filename"):
        store.save("../..", [])
    assert not Path(config.get().data_directory).exists()


def test_delete_semantics(config: ConfigHolder) -> None:
    store = CollectionStore(config)

    with pytest.raises(CollectionNotFoundError) as info:
        store.delete("ghost")
    assert info.value.path.name == "ghost.json"
    assert isinstance(info.value, FileNotFoundError)

    store.save("users", [{"name": "a"}])
    store.delete("users")
    assert "users.json" not in store.list_collections()
    assert store.read("users") == []


def test_list_collections_only_reports_json_files(config: ConfigHolder) -> None:
    store = CollectionStore(config)
    store.save("b", [])
    store.save("a", [])
    data = Path(config.get().data_directory)
    (data / "notes.txt").write_text("hi")
    (data / "nested.json").mkdir()

    assert store.list_collections() == ["a.json", "b.json"]


def test_malformed_file_is_a_database_error(config: ConfigHolder) -> None:
    store = CollectionStore(config)
    data = Path(config.get().data_directory)
    data.mkdir(parents=True)
    (data / "broken.json").write_text("{not json")
    (data / "object.json").write_text('{"a": 1}')

    with pytest.raises(DatabaseError, match="Failed to parse"):
        store.read("broken")
    with pytest.raises(DatabaseError, match="not an array"):
        store.read("object")


def test_store_reads_current_config_on_every_call(config: ConfigHolder, tmp_path: Path) -> None:
    store = CollectionStore(config)
    store.save("users", [{"n": 1}])

    config.update(data_directory=str(tmp_path / "elsewhere"))

    assert store.read("users") == []
    assert (tmp_path / "elsewhere" / "users.json").exists()


def test_size_limit_end_to_end(config: ConfigHolder) -> None:
    config.update(max_file_size=50)
    store = CollectionStore(config)

    store.save("users", [{"name": "a"}])
    with pytest.raises(FileSizeError):
        store.save("users", [{"name": "a" * 100}])

    assert "users.json" in store.list_collections()
    assert store.read("users") == [{"name": "a"}]


def test_memory_store_matches_file_store_contract(config: ConfigHolder) -> None:
    store = MemoryStore(config)

    assert store.read("users") == []
    assert store.list_collections() == ["users.json"]

    records = [{"age": 1}]
    store.save("users.json", records, AGE_SCHEMA)
    records.append({"age": 2})
    assert store.read("users") == [{"age": 1}]

    with pytest.raises(ValidationError):
        store.save("users", [{"age": "x"}], AGE_SCHEMA)

    config.update(max_file_size=10)
    with pytest.raises(FileSizeError):
        store.save("users", [{"age": 123456789}])

    store.delete("users")
    with pytest.raises(CollectionNotFoundError):
        store.delete("users")


def test_non_utf8_file_is_a_database_error(config: ConfigHolder) -> None:
    store = CollectionStore(config)
    data = Path(config.get().data_directory)
    data.mkdir(parents=True)
    (data / "bad.json").write_bytes(b'["\xff\xfe"]')

    with pytest.raises(DatabaseError, match="Failed to decode") as info:
        store.read("bad")
    assert info.value.kind == ErrorKind.DATABASE


def test_save_rejects_strings_not_encodable_as_utf8(config: ConfigHolder) -> None:
    store = CollectionStore(config)
    store.save("users", [{"name": "a"}])

    with pytest.raises(ValidationError, match="UTF-8"):
        store.save("users", [{"name": "\ud800"}])
    with pytest.raises(ValidationError, match="UTF-8"):
        MemoryStore(config).save("users", [{"name": "\ud800"}])

    assert store.read("users") == [{"name": "a"}]


@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
def test_collection_files_are_owner_only(config: ConfigHolder) -> None:
    previous = os.umask(0o022)
    try:
        store = CollectionStore(config)
        store.read("lazy")
        store.save("saved", [])
    finally:
        os.umask(previous)

    data = Path(config.get().data_directory)
    assert stat.S_IMODE(data.stat().st_mode) == 0o700
    assert stat.S_IMODE((data / "lazy.json").stat().st_mode) == 0o600
    assert stat.S_IMODE((data / "saved.json").stat().st_mode) == 0o600
