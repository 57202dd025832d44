"""
Calculator Session
Presentation-neutral form state driving the catalog and sizing engine.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from decimal import Decimal
from typing import Optional

from volumecalc.catalog.catalog import InstrumentCatalog
from volumecalc.config import CalculatorSettings
from volumecalc.core.errors import NotFoundError, ValidationError
from volumecalc.core.types import InstrumentDefinition, Number, to_decimal
from volumecalc.sizing.engine import CalculationResult, TradingParameters, calculate_volume
from volumecalc.sizing.rounding import RoundingPolicy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FormFields:
    """Raw text as typed by the user."""
    capital: str = ""
    risk_percentage: str = ""
    stop_loss_points: str = ""
    dollar_cost_per_unit: str = ""
    unit_to_volume_conversion: str = ""
    standard_lot_size: str = ""


_FIELD_NAMES = frozenset(f.name for f in fields(FormFields))


def parse_field(text: str) -> Optional[Decimal]:
    """Blank or non-numeric text counts as not filled in."""
    if not text or not text.strip():
        return None
    try:
        return to_decimal(text)
    except ValidationError:
        return None


class CalculatorSession:
    """
    Holds the selected instrument and the form fields of one user session.

    Selecting an instrument copies its parameters into the form; the engine
    always runs on the form values, so a user may try numbers without saving
    them to the catalog.
    """

    def __init__(
        self,
        catalog: InstrumentCatalog,
        policy: RoundingPolicy = RoundingPolicy.LOT_FLOORED,
        *,
        instrument: Optional[str] = None,
        capital: Number = "",
        risk_percentage: Number = "",
        stop_loss_points: Number = "",
    ) -> None:
        self.catalog = catalog
        self.policy = RoundingPolicy(policy)
        self.fields = FormFields(
            capital=str(capital),
            risk_percentage=str(risk_percentage),
            stop_loss_points=str(stop_loss_points),
        )
        self.selected = ""
        self.select(instrument or catalog.default_name)

    @classmethod
    def from_settings(
        cls, catalog: InstrumentCatalog, settings: CalculatorSettings
    ) -> "CalculatorSession":
        return cls(
            catalog,
            settings.rounding_policy,
            instrument=settings.default_instrument,
            capital=settings.capital,
            risk_percentage=settings.risk_percentage,
            stop_loss_points=settings.stop_loss_points,
        )

    def select(self, name: str) -> InstrumentDefinition:
        """Select an instrument, falling back to the catalog default if unknown."""
        try:
            instrument = self.catalog.resolve(name)
        except NotFoundError:
            logger.warning(f"Unknown instrument {name!r}, using {self.catalog.default_name}")
            instrument = self.catalog.resolve(self.catalog.default_name)

        self.selected = instrument.name
        self.fields = replace(
            self.fields,
            dollar_cost_per_unit=str(instrument.dollar_cost_per_unit),
            unit_to_volume_conversion=str(instrument.unit_to_volume_conversion),
            standard_lot_size=str(instrument.standard_lot_size),
        )
        return instrument

    def update(self, **values: Number) -> None:
        unknown = set(values) - _FIELD_NAMES
        if unknown:
            raise ValidationError(f"Unknown form fields: {sorted(unknown)}")
        self.fields = replace(self.fields, **{k: str(v) for k, v in values.items()})

    def parameters(self) -> TradingParameters:
        return TradingParameters(
            capital=parse_field(self.fields.capital),
            risk_percentage=parse_field(self.fields.risk_percentage),
            stop_loss_points=parse_field(self.fields.stop_loss_points),
            dollar_cost_per_unit=parse_field(self.fields.dollar_cost_per_unit),
            unit_to_volume_conversion=parse_field(self.fields.unit_to_volume_conversion),
            standard_lot_size=parse_field(self.fields.standard_lot_size),
        )

    def calculate(self) -> Optional[CalculationResult]:
        return calculate_volume(self.parameters(), self.policy)

    def add_instrument(
        self,
        name: str,
        dollar_cost_per_unit: Number,
        unit_to_volume_conversion: Number,
        standard_lot_size: Number,
    ) -> InstrumentDefinition:
        definition = InstrumentDefinition.create(
            name.strip(), dollar_cost_per_unit, unit_to_volume_conversion, standard_lot_size
        )
        self.catalog.add(definition)
        if definition.name == self.selected:
            self.select(definition.name)
        return definition

    def edit_selected(
        self, dollar_cost_per_unit: Number, unit_to_volume_conversion: Number
    ) -> InstrumentDefinition:
        self.catalog.edit_numeric_fields(
            self.selected, dollar_cost_per_unit, unit_to_volume_conversion
        )
        return self.select(self.selected)

    def delete_instrument(self, name: str) -> None:
        """Remove an override; re-select if it was the selected instrument."""
        self.catalog.remove(name)
        if name == self.selected:
            self.select(name if name in self.catalog else self.catalog.default_name)
