"""Compose built-in defaults and apply user overrides by name."""

from __future__ import annotations

from dataclasses import replace
from decimal import Decimal
from typing import Mapping, Optional, Sequence

from volumecalc.core.types import CatalogEntry, InstrumentDefinition, InstrumentOrigin


def merge_instruments(
    defaults: Sequence[InstrumentDefinition],
    overrides: Mapping[str, InstrumentDefinition],
) -> dict[str, CatalogEntry]:
    """Return one ordered map: defaults first, overrides applied in place.

    An override sharing a default's name keeps that default's position;
    the remaining overrides follow in insertion order.
    """
    merged: dict[str, CatalogEntry] = {}
    for default in defaults:
        override = overrides.get(default.name)
        if override is None:
            merged[default.name] = CatalogEntry(default, InstrumentOrigin.DEFAULT)
        else:
            merged[default.name] = CatalogEntry(
                override, InstrumentOrigin.OVERRIDE, base=default.name
            )
    for name, override in overrides.items():
        if name not in merged:
            merged[name] = CatalogEntry(override, InstrumentOrigin.ADDITION)
    return merged


def merge_numeric_override(
    base: InstrumentDefinition,
    dollar_cost_per_unit: Optional[Decimal] = None,
    unit_to_volume_conversion: Optional[Decimal] = None,
) -> InstrumentDefinition:
    return replace(
        base,
        dollar_cost_per_unit=(
            base.dollar_cost_per_unit
            if dollar_cost_per_unit is None
            else dollar_cost_per_unit
        ),
        unit_to_volume_conversion=(
            base.unit_to_volume_conversion
            if unit_to_volume_conversion is None
            else unit_to_volume_conversion
        ),
    )
