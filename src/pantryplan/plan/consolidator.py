"""Ingredient consolidation: deduplicate entries and sum compatible quantities."""

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Any

from pantryplan.logging_config import get_logger
from pantryplan.normalize.names import normalize_name
from pantryplan.normalize.units import normalize_unit, unit_type, units_compatible
from pantryplan.parse.ingredients import ParsedIngredient, compose_text

logger = get_logger(__name__)

# Joins the primary amount to the amounts and mentions kept beside it
TEXT_SEPARATOR = " + "

_DUPLICATE_MARKER_RE = re.compile(r"^(?P<text>.*?)\s*\(x(?P<count>\d+)\)$")


@dataclass
class Amount:
    """An amount kept beside the primary one because its unit could not be summed."""

    quantity: Fraction
    unit: str | None
    name: str
    text: str

    def add(self, quantity: Fraction) -> None:
        self.quantity += quantity
        self.text = compose_text(self.quantity, self.unit, self.name)


@dataclass
class ConsolidatedItem:
    """Accumulated state for every entry sharing one normalized key."""

    key: str
    name: str
    base_text: str
    quantity: Fraction | None = None
    unit: str | None = None
    notes: str | None = None
    extra_amounts: list[Amount] = field(default_factory=list)
    mentions: list[str] = field(default_factory=list)
    duplicate_count: int = 1
    source_indexes: list[int] = field(default_factory=list)

    @property
    def text(self) -> str:
        """Display text, with every amount that could not be summed kept visible."""
        primary = self.base_text
        if self.duplicate_count > 1:
            primary = f"{primary} (x{self.duplicate_count})"
        parts = [primary] + [amount.text for amount in self.extra_amounts] + self.mentions
        return TEXT_SEPARATOR.join(parts)

    @property
    def needs_review(self) -> bool:
        """True when incompatible amounts were concatenated rather than summed."""
        return bool(self.extra_amounts or self.mentions)

    @property
    def amounts(self) -> list[tuple[Fraction | None, str | None]]:
        """Every (quantity, unit) pair this item carries."""
        pairs = [(self.quantity, self.unit)]
        pairs.extend((amount.quantity, amount.unit) for amount in self.extra_amounts)
        return pairs

    def to_parsed(self) -> ParsedIngredient:
        """Reduce back to parsed form, e.g. to consolidate again."""
        return ParsedIngredient(
            name=self.name,
            quantity=self.quantity,
            unit=self.unit,
            notes=self.notes,
            confidence=1.0 if self.quantity is not None else 0.3,
            text=self.base_text,
            duplicate_count=self.duplicate_count,
            extras=[
                ParsedIngredient(
                    name=amount.name,
                    quantity=amount.quantity,
                    unit=amount.unit,
                    confidence=1.0,
                    text=amount.text,
                )
                for amount in self.extra_amounts
            ]
            + [
                ParsedIngredient(name=mention, confidence=0.3, text=mention)
                for mention in self.mentions
            ],
        )


@dataclass
class ConsolidationStats:
    """Summary of a consolidation run."""

    original_count: int = 0
    final_count: int = 0
    combined_count: int = 0
    combined_items: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "original_count": self.original_count,
            "final_count": self.final_count,
            "combined_count": self.combined_count,
            "combined_items": list(self.combined_items),
        }


@dataclass
class ConsolidationResult:
    """Consolidated items in first-seen order plus merge statistics."""

    items: list[ConsolidatedItem]
    stats: ConsolidationStats


def split_display_text(text: str) -> tuple[str, int, list[str]]:
    """
    Split consolidated display text back into its parts.

    "salt (x2)" -> ("salt", 2, [])
    "2 cups flour + 1 lb flour" -> ("2 cups flour", 1, ["1 lb flour"])
    """
    primary, *rest = text.split(TEXT_SEPARATOR)
    marker = _DUPLICATE_MARKER_RE.match(primary)
    if marker and int(marker.group("count")) > 1:
        return marker.group("text"), int(marker.group("count")), rest
    return primary, 1, rest


def _seed(key: str, parsed: ParsedIngredient, index: int) -> ConsolidatedItem:
    acc = ConsolidatedItem(
        key=key,
        name=parsed.name or parsed.display_text,
        base_text=parsed.display_text,
        quantity=parsed.quantity,
        unit=normalize_unit(parsed.unit),
        notes=parsed.notes,
        duplicate_count=parsed.duplicate_count,
        source_indexes=[index],
    )
    for extra in parsed.extras:
        if extra.quantity is not None:
            acc.extra_amounts.append(
                Amount(
                    quantity=extra.quantity,
                    unit=normalize_unit(extra.unit),
                    name=extra.name or acc.name,
                    text=extra.display_text,
                )
            )
        else:
            acc.mentions.append(extra.display_text)
    return acc


def _merge(acc: ConsolidatedItem, parsed: ParsedIngredient) -> None:
    """Fold one more entry, and anything it carries, into an accumulator in place."""
    _merge_amount(acc, parsed)
    for extra in parsed.extras:
        _merge_amount(acc, extra)


def _merge_amount(acc: ConsolidatedItem, parsed: ParsedIngredient) -> None:
    unit = normalize_unit(parsed.unit)

    if parsed.quantity is not None and acc.quantity is not None:
        if units_compatible(acc.unit, unit):
            acc.quantity += parsed.quantity
            acc.unit = acc.unit or unit
            acc.base_text = compose_text(acc.quantity, acc.unit, acc.name)
            return

        for amount in acc.extra_amounts:
            if amount.unit == unit:
                amount.add(parsed.quantity)
                return

        logger.info(
            f"Cannot sum {unit_type(acc.unit)} ({acc.unit}) and {unit_type(unit)} ({unit}) "
            f"for '{acc.name}', keeping both amounts"
        )
        acc.extra_amounts.append(
            Amount(
                quantity=parsed.quantity,
                unit=unit,
                name=parsed.name or acc.name,
                text=parsed.display_text,
            )
        )
        return

    if parsed.quantity is not None:
        # A quantified entry supersedes earlier bare mentions
        acc.quantity = parsed.quantity
        acc.unit = unit
        acc.name = parsed.name or acc.name
        acc.base_text = parsed.display_text
        acc.duplicate_count = 1
        acc.mentions.clear()
        return

    if acc.quantity is not None:
        return

    text = parsed.display_text
    if normalize_name(text) == normalize_name(acc.base_text):
        acc.duplicate_count += parsed.duplicate_count
        return

    if parsed.duplicate_count > 1:
        text = f"{text} (x{parsed.duplicate_count})"
    if all(normalize_name(text) != normalize_name(mention) for mention in acc.mentions):
        acc.mentions.append(text)


def consolidate(items: Iterable[ParsedIngredient]) -> ConsolidationResult:
    """
    Merge entries that refer to the same ingredient.

    Entries are grouped by their normalized key in first-seen order.
    Compatible quantities are summed; incompatible ones are concatenated into
    the display text so no amount is ever dropped.

    Args:
        items: Parsed ingredients, in list order.

    Returns:
        ConsolidationResult with the merged items and statistics.
    """
    accumulators: dict[str, ConsolidatedItem] = {}
    stats = ConsolidationStats()

    for index, parsed in enumerate(items):
        stats.original_count += 1

        key = parsed.key
        if not key:
            logger.debug(f"Skipping ingredient without a name at position {index}")
            continue

        acc = accumulators.get(key)
        if acc is None:
            accumulators[key] = _seed(key, parsed, index)
            continue

        if len(acc.source_indexes) == 1:
            stats.combined_items.append(acc.name)
        acc.source_indexes.append(index)
        _merge(acc, parsed)

    consolidated = list(accumulators.values())
    stats.final_count = len(consolidated)
    stats.combined_count = len(stats.combined_items)

    if stats.combined_count:
        logger.info(
            f"Consolidated {stats.original_count} entries into {stats.final_count} "
            f"({stats.combined_count} combined)"
        )

    return ConsolidationResult(items=consolidated, stats=stats)
