"""Parse ingredient lines and recipe instructions."""

from pantryplan.parse.ingredients import (
    ParsedIngredient,
    RawIngredient,
    StructuredIngredient,
    TextIngredient,
    compose_text,
    parse_ingredient,
    parse_ingredients,
    parse_line,
    to_raw_ingredient,
)
from pantryplan.parse.instructions import InstructionsParseResult, parse_instructions

__all__ = [
    "InstructionsParseResult",
    "ParsedIngredient",
    "RawIngredient",
    "StructuredIngredient",
    "TextIngredient",
    "compose_text",
    "parse_ingredient",
    "parse_ingredients",
    "parse_instructions",
    "parse_line",
    "to_raw_ingredient",
]
