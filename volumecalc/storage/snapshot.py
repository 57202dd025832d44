"""
Instrument Snapshot Store
Serializes the catalog override set into a key-value store.

Wire format: a JSON array of
``{"name", "dollarCostPerUnit", "unitToVolumeConversion", "standardLotSize"}``
records with numeric values.
"""

from __future__ import annotations

import logging
from typing import Sequence

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from volumecalc.core.ports import InstrumentStore, KeyValueStore
from volumecalc.core.types import InstrumentDefinition, to_decimal

logger = logging.getLogger(__name__)

SNAPSHOT_KEY = "customInstruments"


class InstrumentRecord(BaseModel):
    """One persisted instrument, keyed by camelCase field names."""
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    name: str = Field(min_length=1)
    dollar_cost_per_unit: float = Field(alias="dollarCostPerUnit", gt=0, allow_inf_nan=False)
    unit_to_volume_conversion: float = Field(
        alias="unitToVolumeConversion", gt=0, allow_inf_nan=False
    )
    standard_lot_size: float = Field(alias="standardLotSize", gt=0, allow_inf_nan=False)

    @classmethod
    def from_definition(cls, definition: InstrumentDefinition) -> "InstrumentRecord":
        return cls(
            name=definition.name,
            dollar_cost_per_unit=float(definition.dollar_cost_per_unit),
            unit_to_volume_conversion=float(definition.unit_to_volume_conversion),
            standard_lot_size=float(definition.standard_lot_size),
        )

    def to_definition(self) -> InstrumentDefinition:
        return InstrumentDefinition(
            name=self.name,
            dollar_cost_per_unit=to_decimal(self.dollar_cost_per_unit),
            unit_to_volume_conversion=to_decimal(self.unit_to_volume_conversion),
            standard_lot_size=to_decimal(self.standard_lot_size),
        )


_RECORDS = TypeAdapter(list[InstrumentRecord])


def encode_snapshot(instruments: Sequence[InstrumentDefinition]) -> str:
    records = [InstrumentRecord.from_definition(item) for item in instruments]
    return _RECORDS.dump_json(records, by_alias=True).decode("utf-8")


def decode_snapshot(blob: str) -> list[InstrumentDefinition]:
    """Parse a snapshot blob; raises pydantic's ValidationError when malformed."""
    return [record.to_definition() for record in _RECORDS.validate_json(blob)]


class InstrumentSnapshotStore(InstrumentStore):
    """Catalog persistence port over any KeyValueStore."""

    def __init__(self, kv: KeyValueStore, key: str = SNAPSHOT_KEY) -> None:
        self.kv = kv
        self.key = key

    def load(self) -> list[InstrumentDefinition]:
        blob = self.kv.get(self.key)
        if blob is None:
            return []
        try:
            return decode_snapshot(blob)
        except PydanticValidationError as e:
            logger.warning(
                f"Ignoring malformed instrument snapshot under {self.key!r}: "
                f"{e.error_count()} error(s)"
            )
            return []

    def save(self, instruments: Sequence[InstrumentDefinition]) -> None:
        self.kv.set(self.key, encode_snapshot(instruments))
        logger.debug(f"Saved {len(instruments)} instruments under {self.key!r}")
