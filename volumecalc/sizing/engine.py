"""
Position Sizing Engine
Pure four-step computation from trading parameters to a recommended volume.

Steps (order is part of the audit trail):
1. max dollar risk   = capital * risk% / 100
2. risk per unit     = dollar cost per unit * stop loss points
3. raw trade volume  = max dollar risk / risk per unit
4. volume            = raw trade volume * unit-to-volume conversion
The final volume applies the deployment's rounding policy to step 4.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from volumecalc.core.errors import ValidationError
from volumecalc.core.types import InstrumentDefinition, Number, to_decimal
from volumecalc.sizing.rounding import RoundingPolicy, apply_rounding

HUNDRED = Decimal("100")


@dataclass(frozen=True)
class TradingParameters:
    """Inputs for one calculation; None marks a field the user has not filled."""
    capital: Optional[Decimal]
    risk_percentage: Optional[Decimal]
    stop_loss_points: Optional[Decimal]
    dollar_cost_per_unit: Optional[Decimal]
    unit_to_volume_conversion: Optional[Decimal]
    standard_lot_size: Optional[Decimal] = None

    @classmethod
    def for_instrument(
        cls,
        capital: Number,
        risk_percentage: Number,
        stop_loss_points: Number,
        instrument: InstrumentDefinition,
    ) -> "TradingParameters":
        return cls(
            capital=to_decimal(capital, "capital"),
            risk_percentage=to_decimal(risk_percentage, "risk_percentage"),
            stop_loss_points=to_decimal(stop_loss_points, "stop_loss_points"),
            dollar_cost_per_unit=instrument.dollar_cost_per_unit,
            unit_to_volume_conversion=instrument.unit_to_volume_conversion,
            standard_lot_size=instrument.standard_lot_size,
        )


@dataclass(frozen=True)
class BreakdownStep:
    label: str
    value: Decimal


@dataclass(frozen=True)
class CalculationResult:
    max_dollar_risk: Decimal
    risk_per_unit: Decimal
    raw_trade_volume: Decimal
    volume: Decimal
    final_volume: Decimal
    policy: RoundingPolicy
    standard_lot_size: Optional[Decimal] = None

    def steps(self) -> tuple[BreakdownStep, ...]:
        """Intermediates in computation order, ending with the final volume."""
        return (
            BreakdownStep("Maximum Dollar Risk", self.max_dollar_risk),
            BreakdownStep("Dollar Cost of Stop Loss", self.risk_per_unit),
            BreakdownStep("Required Trade Units", self.raw_trade_volume),
            BreakdownStep("Convert to Volume", self.volume),
            BreakdownStep("Final Volume", self.final_volume),
        )


def _positive(value: Optional[Decimal]) -> bool:
    return value is not None and value.is_finite() and value > 0


def calculate_volume(
    params: TradingParameters,
    policy: RoundingPolicy = RoundingPolicy.LOT_FLOORED,
) -> Optional[CalculationResult]:
    """
    Size a position from capital and risk percentage.

    Args:
        params: Trading parameters with the resolved instrument fields
        policy: Rounding policy for the final volume

    Returns:
        CalculationResult, or None while any required input is missing or
        non-positive

    Raises:
        ValidationError: risk percentage above 100, or a non-positive lot
            size under the lot-floored policy
    """
    if not all(
        _positive(value)
        for value in (
            params.capital,
            params.risk_percentage,
            params.stop_loss_points,
            params.dollar_cost_per_unit,
            params.unit_to_volume_conversion,
        )
    ):
        return None
    if params.risk_percentage > HUNDRED:
        raise ValidationError(
            f"risk_percentage must be at most 100, got {params.risk_percentage}"
        )

    max_dollar_risk = params.capital * (params.risk_percentage / HUNDRED)
    return _size_position(
        max_dollar_risk,
        params.stop_loss_points,
        params.dollar_cost_per_unit,
        params.unit_to_volume_conversion,
        params.standard_lot_size,
        policy,
    )


def calculate_volume_for_dollar_risk(
    max_dollar_risk: Optional[Decimal],
    stop_loss_points: Optional[Decimal],
    dollar_cost_per_unit: Optional[Decimal],
    unit_to_volume_conversion: Optional[Decimal],
    standard_lot_size: Optional[Decimal] = None,
    policy: RoundingPolicy = RoundingPolicy.LOT_FLOORED,
) -> Optional[CalculationResult]:
    """Size a position from a dollar risk budget supplied directly (step 1 given)."""
    if not all(
        _positive(value)
        for value in (
            max_dollar_risk,
            stop_loss_points,
            dollar_cost_per_unit,
            unit_to_volume_conversion,
        )
    ):
        return None
    return _size_position(
        max_dollar_risk,
        stop_loss_points,
        dollar_cost_per_unit,
        unit_to_volume_conversion,
        standard_lot_size,
        policy,
    )


def _size_position(
    max_dollar_risk: Decimal,
    stop_loss_points: Decimal,
    dollar_cost_per_unit: Decimal,
    unit_to_volume_conversion: Decimal,
    standard_lot_size: Optional[Decimal],
    policy: RoundingPolicy,
) -> CalculationResult:
    policy = RoundingPolicy(policy)
    risk_per_unit = dollar_cost_per_unit * stop_loss_points
    raw_trade_volume = max_dollar_risk / risk_per_unit
    volume = raw_trade_volume * unit_to_volume_conversion
    final_volume = apply_rounding(volume, policy, standard_lot_size)

    return CalculationResult(
        max_dollar_risk=max_dollar_risk,
        risk_per_unit=risk_per_unit,
        raw_trade_volume=raw_trade_volume,
        volume=volume,
        final_volume=final_volume,
        policy=policy,
        standard_lot_size=standard_lot_size,
    )
