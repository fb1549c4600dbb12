"""Drop consolidated ingredients that the pantry already covers."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date
from fractions import Fraction
from typing import Any

from pantryplan.logging_config import get_logger
from pantryplan.normalize.names import ingredient_key
from pantryplan.normalize.quantities import coerce_quantity
from pantryplan.normalize.units import units_compatible
from pantryplan.plan.consolidator import ConsolidatedItem

logger = get_logger(__name__)


@dataclass
class PantryEntry:
    """Stock on hand, as supplied by the pantry subsystem."""

    name: str
    quantity: Any = 0
    unit: str | None = None
    category: str | None = None
    expiration_date: date | None = None

    @property
    def key(self) -> str:
        return ingredient_key(self.name)

    @property
    def stock(self) -> Fraction:
        return coerce_quantity(self.quantity) or Fraction(0)


@dataclass
class PantryFilterResult:
    """Items still to buy, and those the pantry already covers."""

    included: list[ConsolidatedItem] = field(default_factory=list)
    excluded: list[ConsolidatedItem] = field(default_factory=list)


def _is_covered(
    quantity: Fraction | None,
    unit: str | None,
    entries: list[PantryEntry],
) -> bool:
    for entry in entries:
        if not units_compatible(entry.unit, unit):
            continue
        if quantity is None:
            if entry.stock > 0:
                return True
        elif entry.stock >= quantity:
            return True
    return False


def filter_against_pantry(
    items: Iterable[ConsolidatedItem],
    pantry: Iterable[PantryEntry],
) -> PantryFilterResult:
    """
    Split required items into those to buy and those already stocked.

    An item is excluded only when every amount it carries is covered by a
    pantry entry with the same key and the same (or no) unit. Partially
    stocked items stay on the list with their full required amount.
    """
    stock_by_key: dict[str, list[PantryEntry]] = {}
    for entry in pantry:
        if entry.key:
            stock_by_key.setdefault(entry.key, []).append(entry)

    result = PantryFilterResult()
    for item in items:
        entries = stock_by_key.get(item.key, [])
        covered = bool(entries) and all(
            _is_covered(quantity, unit, entries) for quantity, unit in item.amounts
        )
        if covered:
            result.excluded.append(item)
        else:
            result.included.append(item)

    if result.excluded:
        logger.info(
            f"Pantry covers {len(result.excluded)} of "
            f"{len(result.included) + len(result.excluded)} ingredients"
        )

    return result
