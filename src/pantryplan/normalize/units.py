"""Unit vocabulary and normalization utilities."""

import re

from pantryplan.logging_config import get_logger

logger = get_logger(__name__)


# =============================================================================
# Unit Vocabulary
# =============================================================================

# Canonical unit -> accepted spellings (case-insensitive, trailing "." ignored)
CANONICAL_UNITS: dict[str, tuple[str, ...]] = {
    # Volume
    "cups": ("cup", "cups", "c"),
    "tablespoons": ("tablespoon", "tablespoons", "tbsp", "tbsps", "tbs", "tbl", "tbls"),
    "teaspoons": ("teaspoon", "teaspoons", "tsp", "tsps"),
    "milliliters": (
        "milliliter",
        "milliliters",
        "millilitre",
        "millilitres",
        "ml",
        "mls",
    ),
    "liters": ("liter", "liters", "litre", "litres", "l"),
    "fluid ounces": ("fluid ounce", "fluid ounces", "fl oz", "fl. oz"),
    "pints": ("pint", "pints", "pt"),
    "quarts": ("quart", "quarts", "qt"),
    "gallons": ("gallon", "gallons", "gal"),
    # Weight
    "grams": ("gram", "grams", "g", "gr"),
    "kilograms": ("kilogram", "kilograms", "kg", "kgs"),
    "ounces": ("ounce", "ounces", "oz"),
    "pounds": ("pound", "pounds", "lb", "lbs"),
    # Count
    "pieces": ("piece", "pieces", "pc", "pcs"),
    "sticks": ("stick", "sticks"),
    "cloves": ("clove", "cloves"),
    "heads": ("head", "heads"),
    "slices": ("slice", "slices"),
    "cans": ("can", "cans"),
    "packages": ("package", "packages", "pkg", "pkgs"),
    "bunches": ("bunch", "bunches"),
    "sprigs": ("sprig", "sprigs"),
    "pinches": ("pinch", "pinches"),
    "dashes": ("dash", "dashes"),
    "handfuls": ("handful", "handfuls"),
}

# Flattened spelling -> canonical lookup
UNIT_SYNONYMS: dict[str, str] = {
    spelling: canonical
    for canonical, spellings in CANONICAL_UNITS.items()
    for spelling in spellings
}

VOLUME_UNITS = frozenset(
    {"cups", "tablespoons", "teaspoons", "milliliters", "liters", "fluid ounces", "pints",
     "quarts", "gallons"}
)
WEIGHT_UNITS = frozenset({"grams", "kilograms", "ounces", "pounds"})
COUNT_UNITS = frozenset(
    {"pieces", "sticks", "cloves", "heads", "slices", "cans", "packages", "bunches", "sprigs",
     "pinches", "dashes", "handfuls"}
)

# Longest spellings first so "fl oz" wins over a bare "fl"
_UNIT_ALTERNATION = "|".join(
    re.escape(spelling).replace(r"\ ", r"\s+")
    for spelling in sorted(UNIT_SYNONYMS, key=len, reverse=True)
)

# Unit at the start of text, as a whole word, optionally followed by "."
LEADING_UNIT_RE = re.compile(rf"^(?P<unit>{_UNIT_ALTERNATION})\.?(?=\s|$|,|\))", re.IGNORECASE)


# =============================================================================
# Normalization
# =============================================================================


def normalize_unit(unit: str | None) -> str | None:
    """
    Normalize a unit to its canonical spelling.

    "Tbsp" -> "tablespoons", "cup" -> "cups", "lb." -> "pounds".
    Unknown units pass through case-folded; blank input yields None.
    """
    if unit is None:
        return None

    folded = " ".join(unit.lower().split()).rstrip(".")
    if not folded:
        return None

    canonical = UNIT_SYNONYMS.get(folded)
    if canonical is None:
        logger.debug(f"Unrecognized unit passed through: {folded!r}")
        return folded
    return canonical


def is_known_unit(unit: str | None) -> bool:
    """Check whether a unit belongs to the fixed vocabulary."""
    if not unit:
        return False
    return " ".join(unit.lower().split()).rstrip(".") in UNIT_SYNONYMS


def unit_type(unit: str | None) -> str:
    """
    Identify the unit family.

    Returns:
        One of "volume", "weight", "count", "none" (no unit) or "unknown".
    """
    canonical = normalize_unit(unit)
    if canonical is None:
        return "none"
    if canonical in VOLUME_UNITS:
        return "volume"
    if canonical in WEIGHT_UNITS:
        return "weight"
    if canonical in COUNT_UNITS:
        return "count"
    return "unknown"


def units_compatible(unit1: str | None, unit2: str | None) -> bool:
    """
    Check if two amounts can be summed without conversion.

    Units are compatible when they normalize to the same spelling or when at
    least one side carries no unit.
    """
    canonical1 = normalize_unit(unit1)
    canonical2 = normalize_unit(unit2)
    if canonical1 is None or canonical2 is None:
        return True
    return canonical1 == canonical2
