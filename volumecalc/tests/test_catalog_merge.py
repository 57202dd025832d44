from __future__ import annotations

from decimal import Decimal

from volumecalc.catalog.defaults import DEFAULT_INSTRUMENTS
from volumecalc.catalog.merge import merge_instruments, merge_numeric_override
from volumecalc.core.types import InstrumentDefinition, InstrumentOrigin


def test_merge_without_overrides_keeps_defaults() -> None:
    merged = merge_instruments(DEFAULT_INSTRUMENTS, {})

    assert list(merged) == [d.name for d in DEFAULT_INSTRUMENTS]
    assert all(entry.origin is InstrumentOrigin.DEFAULT for entry in merged.values())


def test_merge_applies_shadow_in_place_and_appends_additions() -> None:
    gold = InstrumentDefinition.create("GOLD", "0.5", "0.1", "0.1")
    eur = InstrumentDefinition.create("EURUSD", "1.2", "0.01", "0.01")

    merged = merge_instruments(DEFAULT_INSTRUMENTS, {"GOLD": gold, "EURUSD": eur})

    assert list(merged) == ["SPX500", "NAS100", "EURUSD", "GBPUSD", "GOLD"]
    assert merged["EURUSD"].definition == eur
    assert merged["EURUSD"].origin is InstrumentOrigin.OVERRIDE
    assert merged["EURUSD"].base == "EURUSD"
    assert merged["GOLD"].origin is InstrumentOrigin.ADDITION
    assert merged["GOLD"].base is None


def test_merge_numeric_override_updates_only_given_fields() -> None:
    spx = DEFAULT_INSTRUMENTS[0]

    merged = merge_numeric_override(spx, dollar_cost_per_unit=Decimal("2"))

    assert merged.dollar_cost_per_unit == Decimal("2")
    assert merged.unit_to_volume_conversion == spx.unit_to_volume_conversion
    assert merged.standard_lot_size == spx.standard_lot_size
    assert merged.name == spx.name
