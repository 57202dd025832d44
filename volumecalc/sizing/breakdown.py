"""Text rendering of a calculation breakdown for audit display."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from volumecalc.sizing.engine import CalculationResult
from volumecalc.sizing.rounding import RoundingPolicy


def fixed(value: Decimal, places: int) -> str:
    """Format with a fixed number of decimals, rounding halves up."""
    exponent = Decimal(1).scaleb(-places)
    return f"{value.quantize(exponent, rounding=ROUND_HALF_UP):f}"


def plain(value: Decimal) -> str:
    """Format as typed, without exponent or trailing zeros."""
    return f"{value.normalize():f}"


def format_final_volume(result: CalculationResult) -> str:
    places = 2 if result.policy is RoundingPolicy.LOT_FLOORED else 3
    return f"{fixed(result.final_volume, places)} lots"


def format_breakdown(
    result: CalculationResult,
    stop_loss_points: Decimal,
    dollar_cost_per_unit: Decimal,
    unit_to_volume_conversion: Decimal,
) -> list[str]:
    risk = fixed(result.max_dollar_risk, 2)
    per_unit = fixed(result.risk_per_unit, 2)
    units = fixed(result.raw_trade_volume, 2)

    if result.policy is RoundingPolicy.LOT_FLOORED:
        final_label = f"Final: Rounded to Lot Size ({plain(result.standard_lot_size)})"
    else:
        final_label = "Final: Unrounded"

    return [
        f"Step 1: Maximum Dollar Risk: ${risk}",
        (
            f"Step 2: Dollar Cost of Stop Loss: {plain(stop_loss_points)} pts × "
            f"${plain(dollar_cost_per_unit)} = ${per_unit}"
        ),
        f"Step 3: Required Trade Units: ${risk} ÷ ${per_unit} = {units} units",
        (
            f"Step 4: Convert to Volume: {units} × {plain(unit_to_volume_conversion)} = "
            f"{fixed(result.volume, 3)} volume"
        ),
        f"{final_label}: {format_final_volume(result)}",
    ]
