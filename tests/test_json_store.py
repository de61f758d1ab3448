"""Tests for the JSON record store adapter."""

import json

import pytest

from worklens.adapters.json_store import JsonRecordStore, RecordStoreError


@pytest.fixture
def store(tmp_path):
    return JsonRecordStore(tmp_path)


class TestJsonRecordStore:
    def test_missing_file_is_empty(self, store):
        assert store.fetch_tasks() == []

    def test_bare_list(self, store, tmp_path):
        (tmp_path / "tasks.json").write_text(json.dumps([{"id": "1"}]))
        assert store.fetch_tasks() == [{"id": "1"}]

    def test_wrapped_list(self, store, tmp_path):
        (tmp_path / "issues.json").write_text(json.dumps({"issues": [{"id": "i1"}], "count": 1}))
        assert store.fetch_issues() == [{"id": "i1"}]

    def test_wrapper_without_key(self, store, tmp_path):
        (tmp_path / "projects.json").write_text(json.dumps({"count": 0}))
        assert store.fetch_projects() == []

    def test_skips_non_objects(self, store, tmp_path, caplog):
        (tmp_path / "connections.json").write_text(json.dumps([{"name": "Asha"}, "junk", None]))
        assert store.fetch_connections() == [{"name": "Asha"}]
        assert "Skipped 2" in caplog.text

    def test_malformed_json(self, store, tmp_path):
        (tmp_path / "tasks.json").write_text("{not json")
        with pytest.raises(RecordStoreError):
            store.fetch_tasks()

    def test_wrong_shape(self, store, tmp_path):
        (tmp_path / "tasks.json").write_text(json.dumps({"tasks": "nope"}))
        with pytest.raises(RecordStoreError):
            store.fetch_tasks()
