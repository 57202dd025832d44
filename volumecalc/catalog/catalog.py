"""
Instrument Catalog
Built-in defaults plus a persisted layer of user overrides and additions.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from volumecalc.catalog.defaults import default_instruments
from volumecalc.catalog.merge import merge_instruments, merge_numeric_override
from volumecalc.core.errors import NotFoundError, ValidationError
from volumecalc.core.ports import InstrumentStore
from volumecalc.core.types import (
    CatalogEntry,
    InstrumentDefinition,
    InstrumentOrigin,
    Number,
    to_decimal,
    validate_instrument,
)

logger = logging.getLogger(__name__)


class InstrumentCatalog:
    """
    Authoritative mapping from instrument name to its effective definition.

    Defaults are fixed for the lifetime of the catalog. Every mutation goes
    to the override layer and is saved through the injected store; save
    failures are logged and leave the in-memory state authoritative.
    """

    def __init__(
        self,
        store: InstrumentStore,
        defaults: Optional[Sequence[InstrumentDefinition]] = None,
    ) -> None:
        """
        Initialize catalog and load persisted overrides.

        Args:
            store: Persistence port for the override set
            defaults: Built-in definitions (declared order is kept)
        """
        self._store = store
        self._defaults: tuple[InstrumentDefinition, ...] = tuple(
            default_instruments() if defaults is None else defaults
        )
        if not self._defaults:
            raise ValidationError("Catalog needs at least one default instrument")
        self._default_names = frozenset(d.name for d in self._defaults)
        self._overrides: dict[str, InstrumentDefinition] = {}
        self._last_save_error: Exception | None = None
        self._load()
        self._entries = merge_instruments(self._defaults, self._overrides)

    @property
    def defaults(self) -> tuple[InstrumentDefinition, ...]:
        return self._defaults

    @property
    def overrides(self) -> dict[str, InstrumentDefinition]:
        """Get current override layer (copy)."""
        return self._overrides.copy()

    @property
    def default_name(self) -> str:
        """Name callers fall back to when a lookup fails."""
        return self._defaults[0].name

    @property
    def last_save_error(self) -> Exception | None:
        return self._last_save_error

    # ── Queries ──────────────────────────────────────────────────────────────

    def resolve(self, name: str) -> InstrumentDefinition:
        return self.entry(name).definition

    def entry(self, name: str) -> CatalogEntry:
        try:
            return self._entries[name]
        except KeyError:
            raise NotFoundError(f"Instrument not found: {name}") from None

    def origin(self, name: str) -> InstrumentOrigin:
        return self.entry(name).origin

    def list_names(self) -> list[str]:
        return list(self._entries)

    def entries(self) -> list[CatalogEntry]:
        return list(self._entries.values())

    def is_default(self, name: str) -> bool:
        return name in self._default_names

    def is_shadow_of_default(self, name: str) -> bool:
        return name in self._default_names and name in self._overrides

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    # ── Mutations ────────────────────────────────────────────────────────────

    def add(self, definition: InstrumentDefinition) -> None:
        """Insert or replace the override for definition.name."""
        validate_instrument(definition)
        replaced = definition.name in self._overrides
        self._overrides[definition.name] = definition
        logger.info(
            f"{'Replaced' if replaced else 'Added'} instrument override: {definition.name}"
        )
        self._commit()

    def edit_numeric_fields(
        self,
        name: str,
        dollar_cost_per_unit: Number,
        unit_to_volume_conversion: Number,
    ) -> InstrumentDefinition:
        """
        Update cost per unit and conversion factor for name.

        Editing a pure default creates a shadow override that keeps the
        default's lot size; the default itself is never touched.

        Returns:
            The new effective definition
        """
        cost = to_decimal(dollar_cost_per_unit, "dollar_cost_per_unit")
        conversion = to_decimal(unit_to_volume_conversion, "unit_to_volume_conversion")
        base = self.resolve(name)
        updated = merge_numeric_override(base, cost, conversion)
        validate_instrument(updated)

        if name not in self._overrides:
            logger.info(f"Creating override for default instrument: {name}")
        self._overrides[name] = updated
        self._commit()
        return updated

    def remove(self, name: str) -> None:
        """Delete the override for name; resets shadowed defaults."""
        if name not in self._overrides:
            logger.debug(f"No override to remove for {name}")
            return
        del self._overrides[name]
        if name in self._default_names:
            logger.info(f"Reset instrument to default: {name}")
        else:
            logger.info(f"Removed custom instrument: {name}")
        self._commit()

    # ── Persistence ──────────────────────────────────────────────────────────

    def _load(self) -> None:
        try:
            loaded = list(self._store.load())
        except Exception as e:
            logger.warning(f"Failed to load instrument overrides, starting empty: {e}")
            return

        for definition in loaded:
            try:
                validate_instrument(definition)
            except ValidationError as e:
                logger.warning(f"Skipping invalid stored instrument: {e}")
                continue
            self._overrides[definition.name] = definition

        logger.info(f"Loaded {len(self._overrides)} instrument overrides")

    def _commit(self) -> None:
        self._entries = merge_instruments(self._defaults, self._overrides)
        try:
            self._store.save(list(self._overrides.values()))
        except Exception as e:
            self._last_save_error = e
            logger.error(f"Failed to save instrument overrides: {e}")
            return
        self._last_save_error = None
