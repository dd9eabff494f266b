"""Tests for the SQLite blob store and session snapshots."""

import pytest
import pytest_asyncio

from forks.personality.traits import TraitEngine
from forks.storage.database import Database
from forks.storage.session_store import SessionStore, deserialize_snapshot, serialize_snapshot


@pytest_asyncio.fixture
async def db(tmp_path):
    database = Database(tmp_path / "store.db")
    await database.connect()
    yield database
    await database.close()


class TestDatabase:

    @pytest.mark.asyncio
    async def test_blob_round_trip(self, db):
        await db.put_blob("k", "v1")
        await db.put_blob("k", "v2")

        assert await db.get_blob("k") == "v2"
        assert await db.get_blob("missing") is None

    @pytest.mark.asyncio
    async def test_delete(self, db):
        await db.put_blob("k", "v")

        assert await db.delete_blob("k") is True
        assert await db.delete_blob("k") is False

    def test_unconnected_access_raises(self, tmp_path):
        with pytest.raises(RuntimeError):
            Database(tmp_path / "x.db").conn


class TestSessionStore:

    @pytest.mark.asyncio
    async def test_save_and_load(self, db, sim):
        traits = TraitEngine()
        traits.apply_weights({"O": 10})
        scenario = sim.scenarios[0]
        sim.process_choice(scenario, scenario.choices[0])
        store = SessionStore(db)

        await store.save("slot", traits.get_state(), sim.get_state())
        state = await store.load("slot")

        assert state == {"personality": traits.get_state(), "events": sim.get_state()}

    @pytest.mark.asyncio
    async def test_blob_is_byte_stable(self, db, sim):
        store = SessionStore(db)
        traits = TraitEngine()
        traits.add_trajectory_tags(["b", "a"])

        blob = await store.save("slot", traits.get_state(), sim.get_state())
        state = await store.load("slot")

        assert serialize_snapshot(state["personality"], state["events"]) == blob
        assert deserialize_snapshot(blob) == state
        assert list(state["personality"]["trajectory_tags"]) == ["b", "a"]

    @pytest.mark.asyncio
    async def test_empty_slot(self, db):
        assert await SessionStore(db).load("nothing-here") is None

    @pytest.mark.asyncio
    async def test_clear(self, db):
        store = SessionStore(db)
        await store.save("slot", {}, {})

        assert await store.clear("slot") is True
        assert await store.load("slot") is None
