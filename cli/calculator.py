"""
Volume Calculator CLI
Composition root wiring the JSON store, instrument catalog and sizing engine.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys
from typing import Optional, Sequence

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from volumecalc.catalog import InstrumentCatalog
from volumecalc.config import CalculatorSettings, get_settings
from volumecalc.core.errors import NotFoundError, ValidationError
from volumecalc.core.types import CatalogEntry, InstrumentOrigin
from volumecalc.logs import configure_logging
from volumecalc.session import CalculatorSession, parse_field
from volumecalc.sizing import RoundingPolicy, calculate_volume_for_dollar_risk
from volumecalc.sizing.breakdown import format_breakdown, format_final_volume, plain
from volumecalc.storage import InstrumentSnapshotStore, JsonFileStore

logger = logging.getLogger(__name__)

_ORIGIN_LABELS = {
    InstrumentOrigin.DEFAULT: "Default",
    InstrumentOrigin.OVERRIDE: "Modified",
    InstrumentOrigin.ADDITION: "Custom",
}


def build_catalog(store_path: Path) -> InstrumentCatalog:
    return InstrumentCatalog(InstrumentSnapshotStore(JsonFileStore(store_path)))


def describe(entry: CatalogEntry) -> str:
    d = entry.definition
    return (
        f"{d.name:<10} [{_ORIGIN_LABELS[entry.origin]}] "
        f"${plain(d.dollar_cost_per_unit)} per point • "
        f"{plain(d.unit_to_volume_conversion)} unit-to-volume • "
        f"{plain(d.standard_lot_size)} lot size"
    )


def _warn_if_unsaved(catalog: InstrumentCatalog) -> None:
    if catalog.last_save_error is not None:
        print(
            f"warning: change kept for this run but not saved: {catalog.last_save_error}",
            file=sys.stderr,
        )


def run_calc(args, catalog: InstrumentCatalog, settings: CalculatorSettings) -> int:
    """Compute and print a recommended volume with its breakdown."""
    policy = RoundingPolicy(args.policy) if args.policy else settings.rounding_policy
    session = CalculatorSession.from_settings(catalog, settings)
    session.policy = policy
    if args.instrument:
        session.select(args.instrument)

    form = {
        "capital": args.capital,
        "risk_percentage": args.risk,
        "stop_loss_points": args.stop,
        "dollar_cost_per_unit": args.cost,
        "unit_to_volume_conversion": args.conversion,
        "standard_lot_size": args.lot,
    }
    session.update(**{k: v for k, v in form.items() if v is not None})
    params = session.parameters()

    if args.dollar_risk is not None:
        result = calculate_volume_for_dollar_risk(
            parse_field(args.dollar_risk),
            params.stop_loss_points,
            params.dollar_cost_per_unit,
            params.unit_to_volume_conversion,
            params.standard_lot_size,
            policy,
        )
    else:
        result = session.calculate()

    print(f"Instrument: {session.selected} [{_ORIGIN_LABELS[catalog.origin(session.selected)]}]")
    if result is None:
        print("Incomplete input: all values must be positive numbers. No recommendation.")
        return 0

    for line in format_breakdown(
        result,
        params.stop_loss_points,
        params.dollar_cost_per_unit,
        params.unit_to_volume_conversion,
    ):
        print(f"  {line}")
    print(f"Final Trade Volume: {format_final_volume(result)}")
    return 0


def run_list(args, catalog: InstrumentCatalog, settings: CalculatorSettings) -> int:
    for entry in catalog.entries():
        print(describe(entry))
    return 0


def run_show(args, catalog: InstrumentCatalog, settings: CalculatorSettings) -> int:
    print(describe(catalog.entry(args.name)))
    return 0


def run_add(args, catalog: InstrumentCatalog, settings: CalculatorSettings) -> int:
    session = CalculatorSession(catalog, settings.rounding_policy)
    definition = session.add_instrument(args.name, args.cost, args.conversion, args.lot)
    _warn_if_unsaved(catalog)
    print(describe(catalog.entry(definition.name)))
    return 0


def run_edit(args, catalog: InstrumentCatalog, settings: CalculatorSettings) -> int:
    catalog.edit_numeric_fields(args.name, args.cost, args.conversion)
    _warn_if_unsaved(catalog)
    print(describe(catalog.entry(args.name)))
    return 0


def run_remove(args, catalog: InstrumentCatalog, settings: CalculatorSettings) -> int:
    if args.name not in catalog.overrides:
        print(f"{args.name}: nothing to remove")
        return 0
    catalog.remove(args.name)
    _warn_if_unsaved(catalog)
    if args.name in catalog:
        print(f"{args.name}: reset to default")
        print(describe(catalog.entry(args.name)))
    else:
        print(f"{args.name}: removed")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Trading Volume Calculator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--store", help="Path of the JSON store (overrides settings)")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    calc_parser = subparsers.add_parser("calc", help="Calculate recommended volume")
    calc_parser.add_argument("--instrument", help="Instrument name")
    calc_parser.add_argument("--capital", help="Account capital")
    calc_parser.add_argument("--risk", help="Risk percentage of capital (0-100]")
    calc_parser.add_argument("--dollar-risk", help="Maximum dollar risk (replaces capital x risk%%)")
    calc_parser.add_argument("--stop", help="Stop loss distance in points")
    calc_parser.add_argument("--cost", help="Dollar cost per unit (instrument value if omitted)")
    calc_parser.add_argument("--conversion", help="Unit-to-volume conversion factor")
    calc_parser.add_argument("--lot", help="Standard lot size")
    calc_parser.add_argument("--policy", choices=[p.value for p in RoundingPolicy])
    calc_parser.set_defaults(func=run_calc)

    list_parser = subparsers.add_parser("list", help="List instruments")
    list_parser.set_defaults(func=run_list)

    show_parser = subparsers.add_parser("show", help="Show one instrument")
    show_parser.add_argument("name")
    show_parser.set_defaults(func=run_show)

    add_parser = subparsers.add_parser("add", help="Add or replace a custom instrument")
    add_parser.add_argument("name")
    add_parser.add_argument("cost", help="Dollar cost per unit")
    add_parser.add_argument("conversion", help="Unit-to-volume conversion factor")
    add_parser.add_argument("lot", help="Standard lot size")
    add_parser.set_defaults(func=run_add)

    edit_parser = subparsers.add_parser("edit", help="Edit cost and conversion of an instrument")
    edit_parser.add_argument("name")
    edit_parser.add_argument("cost", help="Dollar cost per unit")
    edit_parser.add_argument("conversion", help="Unit-to-volume conversion factor")
    edit_parser.set_defaults(func=run_edit)

    remove_parser = subparsers.add_parser(
        "remove", help="Delete a custom instrument or reset a default"
    )
    remove_parser.add_argument("name")
    remove_parser.set_defaults(func=run_remove)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    settings = get_settings()
    configure_logging(settings.logging)

    store_path = Path(args.store).expanduser() if args.store else settings.resolved_store_path
    catalog = build_catalog(store_path)

    try:
        return args.func(args, catalog, settings)
    except (NotFoundError, ValidationError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
