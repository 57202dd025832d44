"""Rounding policies applied to the converted trade volume."""

from __future__ import annotations

from decimal import ROUND_FLOOR, Decimal
from enum import Enum
from typing import Optional

from volumecalc.core.errors import ValidationError


class RoundingPolicy(str, Enum):
    """How the converted volume becomes the recommended volume."""
    UNROUNDED = "unrounded"
    LOT_FLOORED = "lot_floored"


def floor_to_lot(volume: Decimal, lot_size: Optional[Decimal]) -> Decimal:
    """Round volume down to a whole number of lots."""
    if lot_size is None or not lot_size.is_finite() or lot_size <= 0:
        raise ValidationError(f"standard_lot_size must be positive, got {lot_size}")
    lots = (volume / lot_size).to_integral_value(rounding=ROUND_FLOOR)
    return lots * lot_size


def apply_rounding(
    volume: Decimal,
    policy: RoundingPolicy,
    lot_size: Optional[Decimal] = None,
) -> Decimal:
    if policy is RoundingPolicy.UNROUNDED:
        return volume
    if policy is RoundingPolicy.LOT_FLOORED:
        return floor_to_lot(volume, lot_size)
    raise ValidationError(f"Unknown rounding policy: {policy!r}")
