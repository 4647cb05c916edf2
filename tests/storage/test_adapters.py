"""
Tests for storage adapters and print history.
"""

import asyncio
import json

import pytest

from cashu_notes.storage import (
    HISTORY_KEY,
    JsonFileStorage,
    MemoryStorage,
    PrintHistory,
    PrintRecord,
    StorageError,
)


def _record(name="a.pdf", **overrides):
    values = dict(
        filename=name,
        notes=3,
        pages=1,
        double_sided=False,
        arrangement="stacked",
        created_at="2024-05-01T12:00:00",
        labels=("21 sats",),
    )
    values.update(overrides)
    return PrintRecord(**values)


class TestMemoryStorage:
    def test_values_are_copied(self):
        async def scenario():
            storage = MemoryStorage()
            value = {"items": [1, 2]}
            await storage.set("k", value)
            value["items"].append(3)
            loaded = await storage.get("k")
            loaded["items"].append(4)
            return await storage.get("k")

        assert asyncio.run(scenario()) == {"items": [1, 2]}

    def test_remove_and_clear(self):
        async def scenario():
            storage = MemoryStorage()
            await storage.set("a", 1)
            await storage.set("b", 2)
            await storage.remove("a")
            await storage.remove("missing")
            keys_after_remove = await storage.keys()
            await storage.clear()
            return keys_after_remove, await storage.keys()

        assert asyncio.run(scenario()) == (["b"], [])


class TestJsonFileStorage:
    def test_when_file_missing_then_empty(self, tmp_path):
        storage = JsonFileStorage(tmp_path / "store.json")

        assert asyncio.run(storage.get("anything")) is None

    def test_values_persist_with_prefix(self, tmp_path):
        path = tmp_path / "nested" / "store.json"

        asyncio.run(JsonFileStorage(path).set("prints", [1, 2]))

        assert json.loads(path.read_text()) == {"cashu-notes:prints": [1, 2]}
        assert asyncio.run(JsonFileStorage(path).get("prints")) == [1, 2]

    def test_clear_keeps_other_namespaces(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text(json.dumps({"other:x": 1, "cashu-notes:y": 2}))
        storage = JsonFileStorage(path)

        asyncio.run(storage.clear())

        assert json.loads(path.read_text()) == {"other:x": 1}

    def test_keys_strip_prefix(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text(json.dumps({"other:x": 1, "cashu-notes:y": 2}))

        assert asyncio.run(JsonFileStorage(path).keys()) == ["y"]

    @pytest.mark.parametrize("content", ["{not json", "[1, 2, 3]"])
    def test_when_file_corrupt_then_empty_with_warning(self, tmp_path, caplog, content):
        path = tmp_path / "store.json"
        path.write_text(content)

        assert asyncio.run(JsonFileStorage(path).get("prints")) is None
        assert "starting empty" in caplog.text

    def test_when_value_not_serializable_then_storage_error(self, tmp_path):
        storage = JsonFileStorage(tmp_path / "store.json")

        with pytest.raises(StorageError):
            asyncio.run(storage.set("k", object()))


class TestPrintHistory:
    def test_records_append_in_order(self):
        history = PrintHistory(MemoryStorage())

        async def scenario():
            await history.record(_record("a.pdf"))
            await history.record(_record("b.pdf", double_sided=True))
            return await history.entries()

        entries = asyncio.run(scenario())

        assert [e.filename for e in entries] == ["a.pdf", "b.pdf"]
        assert entries[1].double_sided is True
        assert entries[0].labels == ("21 sats",)

    def test_malformed_entries_skipped(self):
        storage = MemoryStorage()
        asyncio.run(storage.set(HISTORY_KEY, [{"filename": "broken"}, _record().to_dict()]))

        entries = asyncio.run(PrintHistory(storage).entries())

        assert entries == [_record()]

    def test_clear(self, tmp_path):
        history = PrintHistory(JsonFileStorage(tmp_path / "store.json"))

        async def scenario():
            await history.record(_record())
            await history.clear()
            return await history.entries()

        assert asyncio.run(scenario()) == []

    def test_record_round_trip_through_json(self):
        record = _record()

        assert PrintRecord.from_dict(json.loads(json.dumps(record.to_dict()))) == record
