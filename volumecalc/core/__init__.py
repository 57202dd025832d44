"""Pure core contracts for the calculator."""

from volumecalc.core.errors import (
    NotFoundError,
    PersistenceError,
    ValidationError,
    VolumeCalcError,
)
from volumecalc.core.types import (
    CatalogEntry,
    InstrumentDefinition,
    InstrumentOrigin,
    to_decimal,
)

__all__ = [
    "VolumeCalcError",
    "ValidationError",
    "NotFoundError",
    "PersistenceError",
    "CatalogEntry",
    "InstrumentDefinition",
    "InstrumentOrigin",
    "to_decimal",
]
