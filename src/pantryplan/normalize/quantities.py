"""Quantity parsing and formatting with exact rational arithmetic."""

import re
from fractions import Fraction

from pantryplan.logging_config import get_logger

logger = get_logger(__name__)


# Unicode vulgar fractions mapped to their ASCII spelling
UNICODE_FRACTIONS: dict[str, str] = {
    "½": "1/2",
    "⅓": "1/3",
    "⅔": "2/3",
    "¼": "1/4",
    "¾": "3/4",
    "⅛": "1/8",
    "⅜": "3/8",
    "⅝": "5/8",
    "⅞": "7/8",
}

_UNICODE_FRACTION_RE = re.compile(rf"(?:(\d)\s*)?([{''.join(UNICODE_FRACTIONS)}])")

# One quantity term: mixed number, simple fraction, or integer/decimal
QUANTITY_TERM = r"(?:\d+\s+\d+\s*/\s*\d+|\d+\s*/\s*\d+|\d+(?:\.\d+)?|\.\d+)"

_MIXED_RE = re.compile(r"^(\d+)\s+(\d+)\s*/\s*(\d+)$")
_FRACTION_RE = re.compile(r"^(\d+)\s*/\s*(\d+)$")
_DECIMAL_RE = re.compile(r"^(?:\d+(?:\.\d+)?|\.\d+)$")
_RANGE_RE = re.compile(rf"^({QUANTITY_TERM})\s*-\s*({QUANTITY_TERM})$")

# Denominators rendered as kitchen fractions rather than decimals
_DISPLAY_DENOMINATORS = {2, 3, 4, 8}


def replace_unicode_fractions(text: str) -> str:
    """
    Rewrite unicode vulgar fractions as ASCII.

    "1½ cups" -> "1 1/2 cups", "¾ tsp" -> "3/4 tsp"
    """

    def _sub(match: re.Match) -> str:
        whole, symbol = match.group(1), match.group(2)
        fraction = UNICODE_FRACTIONS[symbol]
        return f"{whole} {fraction}" if whole else fraction

    return _UNICODE_FRACTION_RE.sub(_sub, text)


def _parse_term(term: str) -> Fraction | None:
    mixed = _MIXED_RE.match(term)
    if mixed:
        whole, num, denom = (int(g) for g in mixed.groups())
        if denom == 0:
            return None
        return whole + Fraction(num, denom)

    frac = _FRACTION_RE.match(term)
    if frac:
        num, denom = (int(g) for g in frac.groups())
        if denom == 0:
            return None
        return Fraction(num, denom)

    if _DECIMAL_RE.match(term):
        return Fraction(term)

    return None


def parse_quantity(token: str | None) -> Fraction | None:
    """
    Parse a quantity token into an exact rational number.

    Handles formats like:
    - "2"
    - "0.5" / ".5"
    - "1/2"
    - "1 1/2" (one and a half)
    - "½", "1½" (unicode fractions)
    - "2-3" (range, returns the mean)

    Anything else, including "two" and "1/0", yields None. Never raises.
    """
    if token is None:
        return None

    text = replace_unicode_fractions(str(token)).strip()
    if not text:
        return None

    range_match = _RANGE_RE.match(text)
    if range_match:
        low = _parse_term(range_match.group(1))
        high = _parse_term(range_match.group(2))
        if low is None or high is None:
            return None
        return (low + high) / 2

    value = _parse_term(text)
    if value is None:
        logger.debug(f"Unparseable quantity token: {token!r}")
    return value


def coerce_quantity(value: object) -> Fraction | None:
    """Convert a structured quantity (number, Fraction, numeric string) to a Fraction."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Fraction):
        return value if value >= 0 else None
    if isinstance(value, int):
        return Fraction(value) if value >= 0 else None
    if isinstance(value, float):
        if value != value or value < 0 or value in (float("inf"), float("-inf")):
            return None
        return Fraction(str(value))
    return parse_quantity(str(value))


def format_quantity(value: Fraction | None) -> str | None:
    """
    Render a quantity for display.

    3 -> "3", 3/2 -> "1 1/2", 1/3 -> "1/3", 0.125 -> "1/8", 0.3 -> "0.3"
    """
    if value is None:
        return None

    if value.denominator == 1:
        return str(value.numerator)

    if value.denominator in _DISPLAY_DENOMINATORS:
        whole, remainder = divmod(value.numerator, value.denominator)
        fraction = f"{remainder}/{value.denominator}"
        return f"{whole} {fraction}" if whole else fraction

    return f"{float(value):.3f}".rstrip("0").rstrip(".")


def serialize_quantity(value: Fraction | None) -> str | None:
    """
    Render a quantity exactly, for storage.

    Same as format_quantity for whole numbers and kitchen fractions; any other
    value is written as a fraction so parse_quantity reads it back unchanged.
    1/7 -> "1/7", 22/7 -> "3 1/7", 3/10 -> "3/10"
    """
    if value is None or value.denominator == 1 or value.denominator in _DISPLAY_DENOMINATORS:
        return format_quantity(value)

    whole, remainder = divmod(value.numerator, value.denominator)
    fraction = f"{remainder}/{value.denominator}"
    return f"{whole} {fraction}" if whole else fraction
