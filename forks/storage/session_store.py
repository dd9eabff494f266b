"""Session snapshots — the two engines' state as one JSON blob per save slot."""

from __future__ import annotations

import json
from typing import Any

from loguru import logger

from forks.storage.database import Database


def serialize_snapshot(personality: dict[str, Any], events: dict[str, Any]) -> str:
    """Key order is kept as-is; trajectory tag order decides dominant-tag ties."""
    return json.dumps({"personality": personality, "events": events})


def deserialize_snapshot(blob: str) -> dict[str, Any]:
    return json.loads(blob)


class SessionStore:
    """
    Persists session snapshots of the form:

        {"personality": TraitEngine.get_state(),
         "events":      LifeSimEngine.get_state()}
    """

    def __init__(self, db: Database) -> None:
        self._db = db

    async def save(self, slot: str, personality: dict[str, Any], events: dict[str, Any]) -> str:
        blob = serialize_snapshot(personality, events)
        await self._db.put_blob(slot, blob)
        logger.info(f"Session saved to slot '{slot}' ({len(blob)} bytes)")
        return blob

    async def load(self, slot: str) -> dict[str, Any] | None:
        blob = await self._db.get_blob(slot)
        if blob is None:
            logger.debug(f"No saved session in slot '{slot}'")
            return None
        return deserialize_snapshot(blob)

    async def clear(self, slot: str) -> bool:
        return await self._db.delete_blob(slot)
