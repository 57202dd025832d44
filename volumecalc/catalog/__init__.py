"""Instrument catalog: built-in defaults merged with user overrides."""

from volumecalc.catalog.catalog import InstrumentCatalog
from volumecalc.catalog.defaults import DEFAULT_INSTRUMENTS, default_instruments
from volumecalc.catalog.merge import merge_instruments

__all__ = [
    "InstrumentCatalog",
    "DEFAULT_INSTRUMENTS",
    "default_instruments",
    "merge_instruments",
]
