"""Built-in instrument definitions shipped with the calculator."""

from __future__ import annotations

from decimal import Decimal

from volumecalc.core.types import InstrumentDefinition

DEFAULT_INSTRUMENTS: tuple[InstrumentDefinition, ...] = (
    InstrumentDefinition("SPX500", Decimal("1.008"), Decimal("0.1"), Decimal("0.5")),
    InstrumentDefinition("NAS100", Decimal("0.25"), Decimal("0.1"), Decimal("0.5")),
    InstrumentDefinition("EURUSD", Decimal("1.0"), Decimal("0.01"), Decimal("0.01")),
    InstrumentDefinition("GBPUSD", Decimal("1.0"), Decimal("0.01"), Decimal("0.01")),
)


def default_instruments() -> tuple[InstrumentDefinition, ...]:
    return DEFAULT_INSTRUMENTS
