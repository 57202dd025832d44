"""Key-value stores and the instrument snapshot adapter."""

from volumecalc.storage.json_store import JsonFileStore
from volumecalc.storage.memory_store import MemoryStore
from volumecalc.storage.snapshot import (
    SNAPSHOT_KEY,
    InstrumentRecord,
    InstrumentSnapshotStore,
    decode_snapshot,
    encode_snapshot,
)

__all__ = [
    "JsonFileStore",
    "MemoryStore",
    "SNAPSHOT_KEY",
    "InstrumentRecord",
    "InstrumentSnapshotStore",
    "decode_snapshot",
    "encode_snapshot",
]
