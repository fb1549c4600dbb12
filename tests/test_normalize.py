"""Unit tests for quantity, unit and name normalization."""

from fractions import Fraction

from pantryplan.normalize.names import ingredient_key, normalize_name, singularize
from pantryplan.normalize.quantities import (
    coerce_quantity,
    format_quantity,
    parse_quantity,
    replace_unicode_fractions,
    serialize_quantity,
)
from pantryplan.normalize.units import (
    LEADING_UNIT_RE,
    is_known_unit,
    normalize_unit,
    unit_type,
    units_compatible,
)

# =============================================================================
# Quantity Tests
# =============================================================================


class TestParseQuantity:
    """Tests for parse_quantity function."""

    def test_parse_integer(self):
        """Test parsing simple integers."""
        assert parse_quantity("2") == 2
        assert parse_quantity("10") == 10

    def test_parse_decimal(self):
        """Test parsing decimal numbers."""
        assert parse_quantity("1.5") == Fraction(3, 2)
        assert parse_quantity(".5") == Fraction(1, 2)

    def test_parse_fraction(self):
        """Test parsing simple fractions."""
        assert parse_quantity("1/2") == Fraction(1, 2)
        assert parse_quantity("3/4") == Fraction(3, 4)

    def test_parse_mixed_fraction(self):
        """Test parsing mixed numbers like '1 1/2'."""
        assert parse_quantity("1 1/2") == Fraction(3, 2)
        assert parse_quantity("1 1/2") == 1.5
        assert parse_quantity("2 1/4") == Fraction(9, 4)

    def test_parse_unicode_fraction(self):
        """Test parsing unicode vulgar fractions."""
        assert parse_quantity("½") == Fraction(1, 2)
        assert parse_quantity("1½") == Fraction(3, 2)
        assert parse_quantity("2 ¾") == Fraction(11, 4)

    def test_parse_range_returns_mean(self):
        """Test parsing ranges like '2-3'."""
        assert parse_quantity("2-3") == Fraction(5, 2)
        assert parse_quantity("1/2 - 1") == Fraction(3, 4)

    def test_division_by_zero_is_no_quantity(self):
        """Test that a zero denominator yields None instead of raising."""
        assert parse_quantity("1/0") is None
        assert parse_quantity("1 1/0") is None

    def test_words_are_no_quantity(self):
        """Test that number words and junk yield None."""
        assert parse_quantity("two") is None
        assert parse_quantity("to taste") is None
        assert parse_quantity("1/2/3") is None

    def test_empty_input(self):
        """Test parsing empty or missing tokens."""
        assert parse_quantity("") is None
        assert parse_quantity("   ") is None
        assert parse_quantity(None) is None


class TestCoerceQuantity:
    """Tests for coerce_quantity function."""

    def test_numbers(self):
        assert coerce_quantity(2) == 2
        assert coerce_quantity(1.5) == Fraction(3, 2)
        assert coerce_quantity(Fraction(1, 3)) == Fraction(1, 3)

    def test_numeric_string(self):
        assert coerce_quantity("1 1/2") == Fraction(3, 2)

    def test_rejects_negative_and_bool(self):
        """Test that negative amounts and booleans are not quantities."""
        assert coerce_quantity(-1) is None
        assert coerce_quantity(-0.5) is None
        assert coerce_quantity(True) is None
        assert coerce_quantity(None) is None

    def test_rejects_nan(self):
        assert coerce_quantity(float("nan")) is None


class TestFormatQuantity:
    """Tests for format_quantity function."""

    def test_whole_numbers(self):
        assert format_quantity(Fraction(3)) == "3"

    def test_kitchen_fractions(self):
        """Test that common kitchen fractions render as fractions."""
        assert format_quantity(Fraction(3, 2)) == "1 1/2"
        assert format_quantity(Fraction(1, 3)) == "1/3"
        assert format_quantity(Fraction(1, 8)) == "1/8"
        assert format_quantity(Fraction(7, 3)) == "2 1/3"

    def test_other_fractions_render_as_decimals(self):
        assert format_quantity(Fraction(3, 10)) == "0.3"
        assert format_quantity(Fraction(1, 7)) == "0.143"

    def test_none(self):
        assert format_quantity(None) is None


class TestSerializeQuantity:
    """Tests for serialize_quantity function."""

    def test_matches_display_for_kitchen_values(self):
        assert serialize_quantity(Fraction(3)) == "3"
        assert serialize_quantity(Fraction(3, 2)) == "1 1/2"

    def test_other_fractions_stay_exact(self):
        assert serialize_quantity(Fraction(1, 7)) == "1/7"
        assert serialize_quantity(Fraction(22, 7)) == "3 1/7"
        assert serialize_quantity(Fraction(3, 10)) == "3/10"

    def test_reads_back_unchanged(self):
        for value in (Fraction(1, 7), Fraction(22, 7), Fraction(3, 10), Fraction(5, 6)):
            assert parse_quantity(serialize_quantity(value)) == value

    def test_none(self):
        assert serialize_quantity(None) is None


class TestReplaceUnicodeFractions:
    """Tests for replace_unicode_fractions function."""

    def test_attached_to_whole_number(self):
        assert replace_unicode_fractions("1½ cups") == "1 1/2 cups"

    def test_standalone(self):
        """Test that surrounding spacing is preserved."""
        assert replace_unicode_fractions("add ½ cup") == "add 1/2 cup"
        assert replace_unicode_fractions("¾ tsp") == "3/4 tsp"


# =============================================================================
# Unit Tests
# =============================================================================


class TestNormalizeUnit:
    """Tests for normalize_unit function."""

    def test_synonyms_fold_to_canonical(self):
        assert normalize_unit("Tbsp") == "tablespoons"
        assert normalize_unit("cup") == "cups"
        assert normalize_unit("lb.") == "pounds"
        assert normalize_unit("fl oz") == "fluid ounces"

    def test_unknown_unit_passes_through(self):
        """Test that unknown units are kept, case-folded."""
        assert normalize_unit("Jar") == "jar"

    def test_blank_is_none(self):
        assert normalize_unit(None) is None
        assert normalize_unit("  ") is None


class TestUnitClassification:
    """Tests for unit vocabulary helpers."""

    def test_is_known_unit(self):
        assert is_known_unit("tsp")
        assert is_known_unit("Fl  Oz")
        assert not is_known_unit("jar")
        assert not is_known_unit(None)

    def test_unit_type(self):
        assert unit_type("cup") == "volume"
        assert unit_type("kg") == "weight"
        assert unit_type("clove") == "count"
        assert unit_type(None) == "none"
        assert unit_type("jar") == "unknown"

    def test_units_compatible(self):
        """Test that only identical normalized units (or a missing one) are compatible."""
        assert units_compatible("cup", "cups")
        assert units_compatible("cup", None)
        assert units_compatible(None, None)
        assert not units_compatible("cup", "lb")
        assert not units_compatible("ml", "l")

    def test_leading_unit_matches_whole_words(self):
        """Test that unit spellings only match as whole words."""
        assert LEADING_UNIT_RE.match("fl oz milk").group("unit") == "fl oz"
        assert LEADING_UNIT_RE.match("cloves garlic").group("unit") == "cloves"
        assert LEADING_UNIT_RE.match("garlic") is None
        assert LEADING_UNIT_RE.match("cheddar") is None


# =============================================================================
# Name Tests
# =============================================================================


class TestNormalizeName:
    """Tests for normalize_name function."""

    def test_lowercase_and_collapse(self):
        assert normalize_name("  Fresh   BASIL ") == "fresh basil"

    def test_strips_punctuation(self):
        assert normalize_name("Flour, all-purpose!") == "flour allpurpose"

    def test_empty(self):
        assert normalize_name(None) == ""
        assert normalize_name("!!!") == ""


class TestIngredientKey:
    """Tests for singularize and ingredient_key."""

    def test_singularize(self):
        assert singularize("eggs") == "egg"
        assert singularize("tomatoes") == "tomato"
        assert singularize("berries") == "berry"
        assert singularize("boxes") == "box"

    def test_singularize_leaves_non_plurals(self):
        assert singularize("peas") == "peas"
        assert singularize("hummus") == "hummus"
        assert singularize("glass") == "glass"

    def test_key_folds_last_word(self):
        """Test that the key groups singular and plural spellings."""
        assert ingredient_key("Eggs") == ingredient_key("egg") == "egg"
        assert ingredient_key("Cherry Tomatoes") == "cherry tomato"

    def test_key_keeps_distinct_ingredients(self):
        assert ingredient_key("egg noodles") != ingredient_key("eggs")
