# tests/test_address_store.py
import json
from datetime import datetime, timezone

import pytest

from cepform.adapters.repos.addresses import JsonAddressStore, format_saved_at
from cepform.domain.errors import PersistenceError
from cepform.domain.validation import validate_address


def _read(path):
    return json.loads(path.read_text(encoding="utf-8"))


def test_first_append_creates_the_file(store, store_path, valid_payload):
    assert not store_path.exists()

    stored = store.append(validate_address(valid_payload))

    rows = _read(store_path)
    assert len(rows) == 1
    assert rows[0]["savedAt"] == stored.saved_at == "2025-01-31T12:00:00.000000Z"


def test_read_all_on_missing_file_initializes_empty_array(store, store_path):
    assert store.read_all() == []
    assert store_path.read_text(encoding="utf-8") == "[]"


def test_round_trip_equals_input_plus_saved_at(store, store_path, valid_payload):
    record = validate_address(valid_payload)
    store.append(record)

    (row,) = store.read_all()
    saved_at = row.pop("savedAt")

    assert row == record.to_wire()
    assert row["stateCode"] == "SP"
    assert saved_at.endswith("Z")


def test_sequential_appends_keep_order_and_timestamps(store, valid_payload):
    numbers = [str(n) for n in range(1, 6)]
    for n in numbers:
        store.append(validate_address({**valid_payload, "number": n}))

    rows = store.read_all()
    assert [r["number"] for r in rows] == numbers

    stamps = [r["savedAt"] for r in rows]
    assert len(set(stamps)) == len(stamps)
    assert stamps == sorted(stamps)


def test_file_is_pretty_printed_utf8(store, store_path, valid_payload):
    store.append(validate_address(valid_payload))

    text = store_path.read_text(encoding="utf-8")
    assert text.startswith("[\n  {\n    \"postalCode\": \"01001000\"")
    assert "Praça da Sé" in text


def test_existing_entries_are_preserved(store_path, clock, valid_payload):
    store_path.parent.mkdir(parents=True)
    store_path.write_text(json.dumps([{"legacy": True}]), encoding="utf-8")

    JsonAddressStore(path=store_path, clock=clock).append(validate_address(valid_payload))

    rows = _read(store_path)
    assert rows[0] == {"legacy": True}
    assert rows[1]["postalCode"] == "01001000"


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        "",
        '{"a": 1}',
        "42",
        pytest.param("[" * 100000 + "]" * 100000, id="deeply-nested"),
    ],
)
def test_malformed_file_is_a_persistence_error(store, store_path, valid_payload, content):
    store_path.parent.mkdir(parents=True)
    store_path.write_text(content, encoding="utf-8")

    with pytest.raises(PersistenceError):
        store.append(validate_address(valid_payload))

    # nothing written over the broken file
    assert store_path.read_text(encoding="utf-8") == content


def test_write_failure_is_a_persistence_error(tmp_path, clock, valid_payload):
    # parent "directory" is a regular file: mkdir fails
    blocker = tmp_path / "blocker"
    blocker.write_text("x", encoding="utf-8")
    store = JsonAddressStore(path=blocker / "saved.json", clock=clock)

    with pytest.raises(PersistenceError) as ei:
        store.append(validate_address(valid_payload))
    assert isinstance(ei.value.__cause__, OSError)


def test_format_saved_at_normalizes_to_utc():
    naive = datetime(2025, 5, 1, 8, 30, 0, 123000)
    aware = datetime(2025, 5, 1, 8, 30, 0, 123000, tzinfo=timezone.utc)

    assert format_saved_at(naive) == "2025-05-01T08:30:00.123000Z"
    assert format_saved_at(aware) == "2025-05-01T08:30:00.123000Z"
