"""Shopping list synthesis from recipes and existing lists."""

import uuid
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any

from pantryplan.logging_config import get_logger
from pantryplan.normalize.quantities import parse_quantity, serialize_quantity
from pantryplan.parse.ingredients import ParsedIngredient, parse_ingredients, parse_line
from pantryplan.plan.aisles import AisleCategory, classify, group_by_aisle
from pantryplan.plan.consolidator import (
    ConsolidatedItem,
    ConsolidationStats,
    consolidate,
    split_display_text,
)
from pantryplan.plan.pantry_filter import PantryEntry, filter_against_pantry

logger = get_logger(__name__)


def new_item_id() -> str:
    """Generate an opaque shopping list item id."""
    return str(uuid.uuid4())


@dataclass
class ShoppingListItem:
    """A single line on a shopping list."""

    text: str
    id: str = field(default_factory=new_item_id)
    quantity: str | None = None
    unit: str | None = None
    name: str | None = None
    is_checked: bool = False
    position: int = 0
    aisle: AisleCategory | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class ShoppingListBuild:
    """Result of turning ingredients into shopping list items."""

    items: list[ShoppingListItem]
    stats: ConsolidationStats
    excluded: list[ConsolidatedItem] = field(default_factory=list)

    @property
    def items_by_aisle(self) -> dict[AisleCategory, list[ShoppingListItem]]:
        return group_by_aisle(self.items, lambda item: item.aisle)


def parsed_from_list_item(item: ShoppingListItem) -> ParsedIngredient:
    """
    Reduce a stored list item back to parsed form.

    Items that carry a name use their stored quantity/unit as-is; text-only
    items are parsed from their display text. A repeat marker and any amounts
    or mentions joined onto a named item's text are carried along so a later
    merge keeps them.
    """
    if not item.name:
        return parse_line(item.text)

    primary, duplicate_count, rest = split_display_text(item.text)
    return ParsedIngredient(
        name=item.name,
        quantity=parse_quantity(item.quantity),
        unit=item.unit,
        confidence=1.0 if item.quantity else 0.3,
        text=primary,
        duplicate_count=duplicate_count,
        extras=[parse_line(part) for part in rest],
    )


def to_list_item(
    consolidated: ConsolidatedItem,
    position: int,
    item_id: str | None = None,
    now: datetime | None = None,
) -> ShoppingListItem:
    """Convert a consolidated ingredient into a shopping list item."""
    timestamp = now or datetime.utcnow()
    return ShoppingListItem(
        id=item_id or new_item_id(),
        text=consolidated.text,
        quantity=serialize_quantity(consolidated.quantity),
        unit=consolidated.unit,
        name=consolidated.name,
        is_checked=False,
        position=position,
        aisle=classify(consolidated.name),
        created_at=timestamp,
        updated_at=timestamp,
    )


def build_shopping_list(
    ingredients: Iterable[Any],
    pantry: Iterable[PantryEntry] | None = None,
) -> ShoppingListBuild:
    """
    Turn raw ingredients into a consolidated, aisle-tagged shopping list.

    Args:
        ingredients: Ingredient lines, structured rows or RawIngredient values,
            possibly from many recipes.
        pantry: Optional pantry stock; covered ingredients are left out.

    Returns:
        ShoppingListBuild with fresh items positioned 1..n.
    """
    parsed = parse_ingredients(ingredients)
    result = consolidate(parsed)

    kept = result.items
    excluded: list[ConsolidatedItem] = []
    if pantry is not None:
        filtered = filter_against_pantry(kept, pantry)
        kept, excluded = filtered.included, filtered.excluded

    now = datetime.utcnow()
    items = [to_list_item(item, position, now=now) for position, item in enumerate(kept, start=1)]

    logger.info(
        f"Built shopping list: {len(items)} items from {result.stats.original_count} "
        f"ingredients, {len(excluded)} covered by pantry"
    )

    return ShoppingListBuild(items=items, stats=result.stats, excluded=excluded)


def consolidate_list_items(
    items: Iterable[ShoppingListItem],
) -> tuple[list[ShoppingListItem], ConsolidationStats]:
    """
    Merge duplicate entries on an existing list.

    Each merged item keeps the id and creation time of the first entry in its
    group. It stays checked only if every merged entry was checked.
    Positions are reassigned 1..n in first-seen order.
    """
    originals = sorted(items, key=lambda item: item.position)
    result = consolidate(parsed_from_list_item(item) for item in originals)

    now = datetime.utcnow()
    merged: list[ShoppingListItem] = []
    for position, consolidated in enumerate(result.items, start=1):
        sources = [originals[index] for index in consolidated.source_indexes]
        first = sources[0]

        if len(sources) == 1:
            merged.append(
                replace(first, position=position, aisle=first.aisle or classify(consolidated.name))
            )
            continue

        item = to_list_item(consolidated, position, item_id=first.id, now=now)
        item.created_at = first.created_at
        item.is_checked = all(source.is_checked for source in sources)
        merged.append(item)

    return merged, result.stats


def import_recipe(
    items: Iterable[ShoppingListItem],
    recipe_ingredients: Iterable[Any],
) -> tuple[list[ShoppingListItem], ConsolidationStats]:
    """
    Add a recipe's ingredients to a list, then consolidate.

    Existing items come first; the recipe's ingredients are appended after
    them before merging.
    """
    existing = sorted(items, key=lambda item: item.position)
    next_position = max((item.position for item in existing), default=0) + 1

    added = build_shopping_list(recipe_ingredients).items
    for offset, item in enumerate(added):
        item.position = next_position + offset

    return consolidate_list_items([*existing, *added])
