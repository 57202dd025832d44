"""Core domain types for the instrument catalog and sizing engine."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Optional, Union

from volumecalc.core.errors import ValidationError

Number = Union[Decimal, int, float, str]


def to_decimal(value: Number, field: str = "value") -> Decimal:
    """Coerce a user-supplied number to a finite Decimal.

    Floats go through ``str`` so ``0.1`` becomes ``Decimal("0.1")`` rather
    than its binary expansion.
    """
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number, got {value!r}")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"{field} must be a number, got {value!r}") from exc
    if not result.is_finite():
        raise ValidationError(f"{field} must be finite, got {value!r}")
    return result


class InstrumentOrigin(str, Enum):
    """Where the effective definition of a catalog name comes from."""
    DEFAULT = "default"
    OVERRIDE = "override"
    ADDITION = "addition"


@dataclass(frozen=True)
class InstrumentDefinition:
    name: str
    dollar_cost_per_unit: Decimal
    unit_to_volume_conversion: Decimal
    standard_lot_size: Decimal

    @classmethod
    def create(
        cls,
        name: str,
        dollar_cost_per_unit: Number,
        unit_to_volume_conversion: Number,
        standard_lot_size: Number,
    ) -> "InstrumentDefinition":
        """Build a definition from loose numbers and validate it."""
        definition = cls(
            name=name,
            dollar_cost_per_unit=to_decimal(dollar_cost_per_unit, "dollar_cost_per_unit"),
            unit_to_volume_conversion=to_decimal(
                unit_to_volume_conversion, "unit_to_volume_conversion"
            ),
            standard_lot_size=to_decimal(standard_lot_size, "standard_lot_size"),
        )
        validate_instrument(definition)
        return definition


def validate_instrument(definition: InstrumentDefinition) -> None:
    if not isinstance(definition.name, str) or not definition.name.strip():
        raise ValidationError("Instrument name must be non-empty")
    for field in ("dollar_cost_per_unit", "unit_to_volume_conversion", "standard_lot_size"):
        value = getattr(definition, field)
        if not isinstance(value, Decimal):
            raise ValidationError(f"{definition.name}: {field} must be a Decimal")
        if not value.is_finite() or value <= 0:
            raise ValidationError(f"{definition.name}: {field} must be positive, got {value}")


@dataclass(frozen=True)
class CatalogEntry:
    definition: InstrumentDefinition
    origin: InstrumentOrigin
    base: Optional[str] = None

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def is_modified(self) -> bool:
        return self.origin is InstrumentOrigin.OVERRIDE
