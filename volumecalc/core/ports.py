"""Pure port definitions for calculator adapters."""

from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .types import InstrumentDefinition


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]:
        """Return the blob stored under key, or None when absent."""

    def set(self, key: str, value: str) -> None:
        """Store a blob under key."""


class InstrumentStore(Protocol):
    def load(self) -> Sequence[InstrumentDefinition]:
        """Return the persisted override set."""

    def save(self, instruments: Sequence[InstrumentDefinition]) -> None:
        """Persist the full override set."""
