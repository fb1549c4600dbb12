"""Store aisle classification by keyword table."""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

from pantryplan.normalize.names import normalize_name

T = TypeVar("T")


class AisleCategory(str, Enum):
    """Store section an item is shelved in."""

    PRODUCE = "produce"
    DAIRY = "dairy"
    MEAT = "meat"
    BAKERY = "bakery"
    FROZEN = "frozen"
    CANNED = "canned"
    DRY_GOODS = "dry_goods"
    BEVERAGES = "beverages"
    SNACKS = "snacks"
    HOUSEHOLD = "household"
    OTHER = "other"


@dataclass(frozen=True)
class AisleRule:
    """A category paired with the keywords that select it."""

    category: AisleCategory
    keywords: tuple[str, ...]

    def matches(self, normalized_name: str) -> bool:
        return any(keyword in normalized_name for keyword in self.keywords)


# Evaluated top to bottom, first match wins. Order is part of the contract:
# "chicken soup" is meat because meat is checked before canned.
AISLE_RULES: tuple[AisleRule, ...] = (
    AisleRule(
        AisleCategory.PRODUCE,
        (
            "apple",
            "banana",
            "lettuce",
            "tomato",
            "carrot",
            "onion",
            "potato",
            "vegetable",
            "fruit",
            "salad",
            "spinach",
            "broccoli",
        ),
    ),
    AisleRule(
        AisleCategory.DAIRY,
        ("milk", "cheese", "yogurt", "butter", "cream", "sour cream", "cottage cheese"),
    ),
    AisleRule(
        AisleCategory.MEAT,
        ("chicken", "beef", "pork", "fish", "turkey", "sausage", "bacon", "steak"),
    ),
    AisleRule(
        AisleCategory.BAKERY,
        ("bread", "bagel", "muffin", "croissant", "roll", "bun", "tortilla"),
    ),
    AisleRule(
        AisleCategory.FROZEN,
        ("frozen", "ice cream", "pizza", "waffle", "pancake"),
    ),
    AisleRule(
        AisleCategory.CANNED,
        ("canned", "soup", "beans", "corn", "peas", "tomato sauce"),
    ),
    AisleRule(
        AisleCategory.DRY_GOODS,
        ("pasta", "rice", "flour", "sugar", "salt", "pepper", "spice", "cereal", "oatmeal"),
    ),
    AisleRule(
        AisleCategory.BEVERAGES,
        ("water", "juice", "soda", "coffee", "tea", "beer", "wine"),
    ),
    AisleRule(
        AisleCategory.SNACKS,
        ("chips", "cracker", "cookie", "nut", "granola", "popcorn"),
    ),
    AisleRule(
        AisleCategory.HOUSEHOLD,
        ("paper", "cleaner", "soap", "detergent", "foil", "wrap"),
    ),
)

# Display order for grouped lists
AISLE_ORDER: tuple[AisleCategory, ...] = tuple(rule.category for rule in AISLE_RULES) + (
    AisleCategory.OTHER,
)


def classify(name: str | None, rules: Iterable[AisleRule] = AISLE_RULES) -> AisleCategory:
    """
    Assign a store aisle to an ingredient name.

    The name is normalized, then checked against each rule in order.
    Returns AisleCategory.OTHER when no keyword matches.
    """
    normalized = normalize_name(name)
    if not normalized:
        return AisleCategory.OTHER

    for rule in rules:
        if rule.matches(normalized):
            return rule.category
    return AisleCategory.OTHER


def group_by_aisle(
    items: Iterable[T],
    aisle_of: Callable[[T], AisleCategory | None],
) -> dict[AisleCategory, list[T]]:
    """
    Group items by aisle, in store order.

    Items keep their relative order inside each aisle. Items whose aisle is
    None land in OTHER. Empty aisles are omitted.
    """
    buckets: dict[AisleCategory, list[T]] = {}
    for item in items:
        aisle = aisle_of(item) or AisleCategory.OTHER
        buckets.setdefault(aisle, []).append(item)

    return {aisle: buckets[aisle] for aisle in AISLE_ORDER if aisle in buckets}
