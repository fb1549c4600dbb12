"""Extract ingredient lines from a recipe's free-text instructions."""

import re
from dataclasses import dataclass, field

from pantryplan.logging_config import get_logger
from pantryplan.parse.ingredients import ParsedIngredient, clean_line, parse_line

logger = get_logger(__name__)


_INGREDIENTS_HEADER_RE = re.compile(r"^\s*ingredients\s*:?\s*$", re.IGNORECASE)
_SECTION_HEADER_RE = re.compile(r"^\s*[A-Za-z][A-Za-z &/-]{0,40}:\s*$")
_NUMBERED_STEP_RE = re.compile(r"^\s*\d+\.")


@dataclass
class InstructionsParseResult:
    """Ingredient lines found in an instructions blob."""

    lines: list[str] = field(default_factory=list)
    ingredients: list[ParsedIngredient] = field(default_factory=list)
    found_section: bool = False
    confidence: float = 0.0


def extract_ingredient_lines(text: str) -> tuple[bool, list[str]]:
    """
    Collect the lines of the "Ingredients:" section.

    Returns:
        Tuple of (section_found, lines). Collection stops at a numbered step
        ("1. Preheat ...") or at the next section header ("Instructions:").
    """
    lines: list[str] = []
    in_section = False
    found = False

    for raw_line in (text or "").splitlines():
        if not in_section:
            if _INGREDIENTS_HEADER_RE.match(raw_line):
                in_section = True
                found = True
            continue

        if _NUMBERED_STEP_RE.match(raw_line) or _SECTION_HEADER_RE.match(raw_line):
            break

        if raw_line.strip():
            lines.append(raw_line.strip())

    return found, lines


def parse_instructions(text: str) -> InstructionsParseResult:
    """
    Parse the ingredients section of a recipe's instructions.

    The aggregate confidence is the mean of per-line confidences, or 0.0 when
    no ingredients section (or no line inside it) was found. Callers treat a
    zero-confidence result as "unparsed" and fabricate nothing.
    """
    found, lines = extract_ingredient_lines(text)
    if not found:
        logger.debug("No ingredients section found in instructions")
        return InstructionsParseResult()

    ingredients = []
    kept_lines = []
    for line in lines:
        parsed = parse_line(line)
        if parsed.name:
            ingredients.append(parsed)
            kept_lines.append(clean_line(line))

    confidence = 0.0
    if ingredients:
        confidence = sum(item.confidence for item in ingredients) / len(ingredients)

    logger.debug(
        f"Extracted {len(ingredients)} ingredient lines from instructions "
        f"(confidence={confidence:.2f})"
    )

    return InstructionsParseResult(
        lines=kept_lines,
        ingredients=ingredients,
        found_section=True,
        confidence=confidence,
    )
