"""Normalize quantities, units and ingredient names."""

from pantryplan.normalize.names import ingredient_key, normalize_name, singularize
from pantryplan.normalize.quantities import (
    coerce_quantity,
    format_quantity,
    parse_quantity,
    replace_unicode_fractions,
    serialize_quantity,
)
from pantryplan.normalize.units import (
    is_known_unit,
    normalize_unit,
    unit_type,
    units_compatible,
)

__all__ = [
    "coerce_quantity",
    "format_quantity",
    "ingredient_key",
    "is_known_unit",
    "normalize_name",
    "normalize_unit",
    "parse_quantity",
    "replace_unicode_fractions",
    "serialize_quantity",
    "singularize",
    "unit_type",
    "units_compatible",
]
