"""Position sizing engine, rounding policies and breakdown rendering."""

from volumecalc.sizing.engine import (
    BreakdownStep,
    CalculationResult,
    TradingParameters,
    calculate_volume,
    calculate_volume_for_dollar_risk,
)
from volumecalc.sizing.rounding import RoundingPolicy, apply_rounding, floor_to_lot

__all__ = [
    "BreakdownStep",
    "CalculationResult",
    "TradingParameters",
    "calculate_volume",
    "calculate_volume_for_dollar_risk",
    "RoundingPolicy",
    "apply_rounding",
    "floor_to_lot",
]
