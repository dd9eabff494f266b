from .database import Database
from .session_store import SessionStore, deserialize_snapshot, serialize_snapshot

__all__ = ["Database", "SessionStore", "deserialize_snapshot", "serialize_snapshot"]
