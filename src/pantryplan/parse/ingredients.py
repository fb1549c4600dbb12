"""Ingredient line parsing.

Turns free-text lines ("2 cups flour", "3 eggs (beaten)") and structured
recipe rows into ``ParsedIngredient`` values. Parsing is best-effort: bad
input degrades to a low-confidence result instead of raising.
"""

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Any

from pantryplan.logging_config import get_logger
from pantryplan.normalize.names import ingredient_key
from pantryplan.normalize.quantities import (
    QUANTITY_TERM,
    coerce_quantity,
    format_quantity,
    parse_quantity,
    replace_unicode_fractions,
)
from pantryplan.normalize.units import LEADING_UNIT_RE, normalize_unit

logger = get_logger(__name__)


# Confidence scores by how much of the expected grammar matched
CONFIDENCE_FULL = 1.0  # quantity + unit + name
CONFIDENCE_NO_UNIT = 0.8  # quantity + name
CONFIDENCE_NO_QUANTITY = 0.3  # name only
CONFIDENCE_NO_NAME = 0.2  # quantity/unit with nothing left for a name

_LIST_MARKER_RE = re.compile(r"^(?:\d+[.)]\s+|[-*•●◦]\s*)")
_TRAILING_NOTES_RE = re.compile(r"\s*\(([^()]*)\)\s*$")
_LEADING_QUANTITY_RE = re.compile(
    rf"^(?P<qty>{QUANTITY_TERM}(?:\s*-\s*{QUANTITY_TERM})?)(?=\s|[a-zA-Z]|$)\s*(?P<rest>.*)$"
)
_OF_PREFIX_RE = re.compile(r"^of\s+", re.IGNORECASE)


# =============================================================================
# Raw Ingredient Inputs
# =============================================================================


@dataclass(frozen=True)
class TextIngredient:
    """A free-text ingredient line."""

    text: str


@dataclass(frozen=True)
class StructuredIngredient:
    """An ingredient row with quantity, unit and name already separated."""

    name: str
    quantity: Any = None
    unit: str | None = None
    notes: str | None = None


RawIngredient = TextIngredient | StructuredIngredient


@dataclass
class ParsedIngredient:
    """Result of parsing a raw ingredient."""

    name: str
    quantity: Fraction | None = None
    unit: str | None = None
    notes: str | None = None
    confidence: float = 0.0
    text: str = ""
    # Carried over when a consolidated item is reduced back to parsed form
    duplicate_count: int = 1
    extras: list["ParsedIngredient"] = field(default_factory=list)

    @property
    def key(self) -> str:
        """Grouping key used for consolidation and pantry lookup."""
        return ingredient_key(self.name or self.text)

    @property
    def display_text(self) -> str:
        """Display text, generated from the parts when no text was captured."""
        return self.text or compose_text(self.quantity, self.unit, self.name)


def compose_text(quantity: Fraction | None, unit: str | None, name: str) -> str:
    """Build "{quantity} {unit} {name}", skipping missing parts."""
    parts = [format_quantity(quantity), unit, name]
    return " ".join(part for part in parts if part)


def to_raw_ingredient(value: Any) -> RawIngredient:
    """
    Coerce a loosely-typed input into a RawIngredient.

    Accepts RawIngredient values, plain strings and mappings with either a
    ``name`` (structured) or a ``text``/``item_text`` (free text) field.
    """
    if isinstance(value, (TextIngredient, StructuredIngredient)):
        return value
    if isinstance(value, str):
        return TextIngredient(value)
    if isinstance(value, Mapping):
        name = value.get("name")
        if name:
            return StructuredIngredient(
                name=str(name),
                quantity=value.get("quantity"),
                unit=value.get("unit") or value.get("measure"),
                notes=value.get("notes"),
            )
        text = value.get("text") or value.get("item_text") or ""
        return TextIngredient(str(text))
    return TextIngredient(str(value))


# =============================================================================
# Parsing
# =============================================================================


def clean_line(line: str) -> str:
    """Trim, rewrite unicode fractions and drop a leading list marker."""
    cleaned = replace_unicode_fractions(line.strip())
    cleaned = _LIST_MARKER_RE.sub("", cleaned, count=1)
    return " ".join(cleaned.split())


def _split_notes(text: str) -> tuple[str, str | None]:
    match = _TRAILING_NOTES_RE.search(text)
    if not match:
        return text, None
    notes = match.group(1).strip() or None
    return text[: match.start()].strip(), notes


def parse_line(line: str) -> ParsedIngredient:
    """
    Parse a free-text ingredient line.

    Examples:
        "2 cups flour"     -> quantity 2, unit "cups", name "flour"
        "3 eggs (beaten)"  -> quantity 3, name "eggs", notes "beaten"
        "salt"             -> name "salt", low confidence
    """
    text = clean_line(line or "")
    if not text:
        return ParsedIngredient(name="", confidence=0.0, text="")

    body, notes = _split_notes(text)

    quantity: Fraction | None = None
    unit: str | None = None
    rest = body

    quantity_match = _LEADING_QUANTITY_RE.match(body)
    if quantity_match:
        quantity = parse_quantity(quantity_match.group("qty"))
        if quantity is not None:
            rest = quantity_match.group("rest")

    if quantity is None:
        logger.debug(f"No quantity found in ingredient line: {text!r}")
        return ParsedIngredient(
            name=body,
            notes=notes,
            confidence=CONFIDENCE_NO_QUANTITY if body else 0.0,
            text=text,
        )

    unit_match = LEADING_UNIT_RE.match(rest)
    if unit_match:
        unit = normalize_unit(unit_match.group("unit"))
        rest = rest[unit_match.end() :].strip()

    name = _OF_PREFIX_RE.sub("", rest).strip(" ,;")

    if not name:
        return ParsedIngredient(name=body, notes=notes, confidence=CONFIDENCE_NO_NAME, text=text)

    return ParsedIngredient(
        name=name,
        quantity=quantity,
        unit=unit,
        notes=notes,
        confidence=CONFIDENCE_FULL if unit else CONFIDENCE_NO_UNIT,
        text=text,
    )


def parse_structured(ingredient: StructuredIngredient) -> ParsedIngredient:
    """Normalize an already-structured ingredient without text parsing."""
    name = " ".join((ingredient.name or "").split())
    quantity = coerce_quantity(ingredient.quantity)
    unit = normalize_unit(ingredient.unit)
    notes = ingredient.notes.strip() if ingredient.notes else None

    if not name:
        confidence = 0.0
    elif quantity is not None:
        confidence = CONFIDENCE_FULL
    else:
        confidence = CONFIDENCE_NO_UNIT

    return ParsedIngredient(
        name=name,
        quantity=quantity,
        unit=unit,
        notes=notes or None,
        confidence=confidence,
        text=compose_text(quantity, unit, name),
    )


def parse_ingredient(raw: RawIngredient) -> ParsedIngredient:
    """Parse a single RawIngredient, dispatching on its variant."""
    if isinstance(raw, StructuredIngredient):
        return parse_structured(raw)
    return parse_line(raw.text)


def parse_ingredients(values: Iterable[Any]) -> list[ParsedIngredient]:
    """
    Parse a sequence of ingredient inputs.

    Entries that yield no name at all (blank lines, empty rows) are dropped.
    """
    parsed = []
    for value in values:
        ingredient = parse_ingredient(to_raw_ingredient(value))
        if ingredient.name:
            parsed.append(ingredient)
    return parsed
