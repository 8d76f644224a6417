"""Tests for the record stores."""

import json
from datetime import datetime, timezone

import pytest

from ledger_intake.errors import InvalidRecordIdError, RecordNotFoundError
from ledger_intake.store import (
    InMemoryRecordStore,
    JsonFileRecordStore,
    RecordStore,
    StoredRecord,
    new_record_id,
    validate_record_id,
)


def dated(name, day):
    return {"sheetName": "Default", "name": name, "amount": 1, "date": f"2024-01-{day:02d}T00:00:00Z", "verified": "Yes"}


@pytest.fixture(params=["memory", "json"])
def store(request, tmp_path):
    if request.param == "memory":
        return InMemoryRecordStore()
    return JsonFileRecordStore(tmp_path / "records.json")


class TestStoredRecord:
    def test_parses_iso_dates(self):
        record = StoredRecord.model_validate(dated("Acme", 5))
        assert record.date == datetime(2024, 1, 5, tzinfo=timezone.utc)

    def test_naive_dates_are_utc(self):
        record = StoredRecord(date="2024-01-05")
        assert record.date.tzinfo == timezone.utc

    def test_extra_fields_kept(self):
        record = StoredRecord.model_validate({"name": "Acme", "region": "EU"})
        assert record.to_dict()["region"] == "EU"

    def test_generated_ids(self):
        assert validate_record_id(new_record_id())
        assert StoredRecord().id != StoredRecord().id


class TestRecordIds:
    @pytest.mark.parametrize("value", ["", "abc", "Z" * 32, "A" * 32, "0" * 31, "0" * 33])
    def test_invalid_ids(self, value):
        with pytest.raises(InvalidRecordIdError):
            validate_record_id(value)


class TestStores:
    def test_protocol(self, store):
        assert isinstance(store, RecordStore)

    def test_insert_many(self, store):
        inserted = store.insert_many([dated("A", 1), dated("B", 2)])
        assert [r.name for r in inserted] == ["A", "B"]
        assert store.count() == 2
        assert [r.id for r in store.all()] == [r.id for r in inserted]

    def test_pages_sorted_newest_first(self, store):
        store.insert_many([dated("old", 1), {"name": "undated"}, dated("new", 9), dated("mid", 5)])
        assert [r.name for r in store.find_page(1, 2)] == ["new", "mid"]
        assert [r.name for r in store.find_page(2, 2)] == ["old", "undated"]
        assert store.find_page(3, 2) == []

    def test_bad_page_arguments(self, store):
        with pytest.raises(ValueError):
            store.find_page(0, 10)
        with pytest.raises(ValueError):
            store.find_page(1, 0)

    def test_delete(self, store):
        first, second = store.insert_many([dated("A", 1), dated("B", 2)])
        store.delete(first.id)
        assert [r.id for r in store.all()] == [second.id]
        with pytest.raises(RecordNotFoundError):
            store.delete(first.id)


class TestJsonFileRecordStore:
    def test_survives_reload(self, tmp_path):
        path = tmp_path / "nested" / "records.json"
        store = JsonFileRecordStore(path)
        [record] = store.insert_many([dated("Acme", 3)])

        reloaded = JsonFileRecordStore(path)
        assert [r.to_dict() for r in reloaded.all()] == [record.to_dict()]
        assert json.loads(path.read_text())[0]["name"] == "Acme"

    def test_delete_persisted(self, tmp_path):
        path = tmp_path / "records.json"
        store = JsonFileRecordStore(path)
        [record] = store.insert_many([dated("Acme", 3)])
        store.delete(record.id)
        assert JsonFileRecordStore(path).count() == 0

    def test_empty_file(self, tmp_path):
        path = tmp_path / "records.json"
        path.write_text("")
        assert JsonFileRecordStore(path).count() == 0
