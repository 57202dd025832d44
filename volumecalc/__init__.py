"""Position-sizing calculator with a persisted instrument catalog."""

from volumecalc.catalog import InstrumentCatalog
from volumecalc.core import (
    InstrumentDefinition,
    NotFoundError,
    ValidationError,
    VolumeCalcError,
)
from volumecalc.sizing import (
    CalculationResult,
    RoundingPolicy,
    TradingParameters,
    calculate_volume,
    calculate_volume_for_dollar_risk,
)

__all__ = [
    "InstrumentCatalog",
    "InstrumentDefinition",
    "NotFoundError",
    "ValidationError",
    "VolumeCalcError",
    "CalculationResult",
    "RoundingPolicy",
    "TradingParameters",
    "calculate_volume",
    "calculate_volume_for_dollar_risk",
]
