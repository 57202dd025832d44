from __future__ import annotations

from decimal import Decimal

import pytest

from volumecalc.core.errors import ValidationError
from volumecalc.sizing.rounding import RoundingPolicy, apply_rounding, floor_to_lot


@pytest.mark.parametrize(
    ("volume", "lot", "expected"),
    [
        ("0.41254", "0.5", "0"),
        ("0.5", "0.5", "0.5"),
        ("1.49", "0.5", "1.0"),
        ("0.3", "0.1", "0.3"),
        ("0.0299", "0.01", "0.02"),
        ("7", "2", "6"),
    ],
)
def test_floor_to_lot(volume, lot, expected) -> None:
    assert floor_to_lot(Decimal(volume), Decimal(lot)) == Decimal(expected)


def test_floor_to_lot_rejects_non_positive_lot() -> None:
    with pytest.raises(ValidationError):
        floor_to_lot(Decimal("1"), Decimal("0"))


def test_apply_rounding_unrounded_passes_volume_through() -> None:
    volume = Decimal("0.41254")
    assert apply_rounding(volume, RoundingPolicy.UNROUNDED) is volume
