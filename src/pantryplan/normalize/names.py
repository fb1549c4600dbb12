"""Ingredient name normalization for grouping and equality."""

import re

_NON_KEY_CHARS = re.compile(r"[^a-z0-9 ]")

# Irregular or ambiguous plurals folded by explicit lookup
PLURAL_MAP: dict[str, str] = {
    "tomatoes": "tomato",
    "potatoes": "potato",
    "leaves": "leaf",
    "loaves": "loaf",
    "halves": "half",
    "knives": "knife",
    "berries": "berry",
    "cherries": "cherry",
    "anchovies": "anchovy",
    "chilies": "chili",
    "chillies": "chilli",
    "peaches": "peach",
    "radishes": "radish",
    "sandwiches": "sandwich",
    "mangoes": "mango",
    "geese": "goose",
    "mice": "mouse",
}

# Words that end in "s" but are not plurals
NON_PLURALS = frozenset(
    {
        "asparagus",
        "bass",
        "brussels",
        "citrus",
        "couscous",
        "grits",
        "hummus",
        "molasses",
        "oats",
        "swiss",
        "watercress",
        "schnapps",
        "hibiscus",
        "octopus",
        "gas",
        "glass",
        "peas",
        "chips",
        "greens",
        "lentils",
        "noodles",
        "sprinkles",
    }
)


def normalize_name(name: str | None) -> str:
    """
    Normalize an ingredient name for comparison.

    - Lowercase
    - Strip everything outside [a-z0-9 ]
    - Collapse whitespace and trim
    """
    if not name:
        return ""

    lowered = " ".join(name.lower().split())
    stripped = _NON_KEY_CHARS.sub("", lowered)
    return " ".join(stripped.split())


def singularize(word: str) -> str:
    """Fold a single lowercase word to its singular form (simple heuristics)."""
    if word in PLURAL_MAP:
        return PLURAL_MAP[word]
    if word in NON_PLURALS or len(word) <= 3:
        return word
    if word.endswith("ies"):
        return word[:-3] + "y"
    if word.endswith(("ches", "shes", "sses", "xes", "zes")):
        return word[:-2]
    if word.endswith("s") and not word.endswith(("ss", "us", "is")):
        return word[:-1]
    return word


def ingredient_key(name: str | None) -> str:
    """
    Compute the grouping key for an ingredient name.

    The name is normalized and its final word folded to singular, so that
    "Eggs" and "egg" group together while "egg noodles" stays distinct.
    """
    normalized = normalize_name(name)
    if not normalized:
        return ""

    words = normalized.split(" ")
    words[-1] = singularize(words[-1])
    return " ".join(words)
