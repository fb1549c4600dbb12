"""Unit tests for ingredient consolidation."""

from fractions import Fraction

from pantryplan.parse.ingredients import StructuredIngredient, parse_ingredients
from pantryplan.plan.aisles import AisleCategory, classify
from pantryplan.plan.consolidator import consolidate, split_display_text


def consolidate_lines(*lines):
    return consolidate(parse_ingredients(lines))


class TestConsolidateSums:
    """Tests for summing compatible quantities."""

    def test_plural_names_sum(self):
        """Test that "1 egg" and "2 eggs" merge into one item of 3."""
        result = consolidate_lines("1 egg", "2 eggs")

        assert len(result.items) == 1
        assert result.items[0].quantity == 3
        assert result.stats.combined_count == 1
        assert result.stats.original_count == 2
        assert result.stats.final_count == 1

    def test_same_unit_sums_and_rewrites_text(self):
        result = consolidate_lines("2 cups flour", "1 cup flour")

        item = result.items[0]
        assert item.quantity == 3
        assert item.unit == "cups"
        assert item.text == "3 cups flour"

    def test_missing_unit_adopts_other_side(self):
        result = consolidate_lines("2 flour", "1 cup flour")
        assert result.items[0].unit == "cups"
        assert result.items[0].quantity == 3

    def test_fractions_stay_exact(self):
        result = consolidate_lines("1/3 cup sugar", "1/3 cup sugar", "1/3 cup sugar")
        assert result.items[0].quantity == Fraction(1)

    def test_names_compare_normalized(self):
        result = consolidate_lines("2 cups Flour", "1 cup flour!")
        assert len(result.items) == 1

    def test_structured_and_text_inputs_merge(self):
        parsed = parse_ingredients(
            [StructuredIngredient(name="milk", quantity=1, unit="cup"), "2 cups milk"]
        )
        result = consolidate(parsed)
        assert result.items[0].quantity == 3


class TestConsolidateIncompatible:
    """Tests for amounts that cannot be summed."""

    def test_incompatible_units_keep_both_amounts(self):
        """Test that no quantity is dropped when units differ."""
        result = consolidate_lines("2 cups flour", "1 lb flour")

        assert len(result.items) == 1
        item = result.items[0]
        assert "2 cups flour" in item.text
        assert "1 lb flour" in item.text
        assert item.needs_review

    def test_extra_amounts_sum_within_their_unit(self):
        result = consolidate_lines("2 cups flour", "1 lb flour", "1 lb flour")

        item = result.items[0]
        assert item.quantity == 2
        assert len(item.extra_amounts) == 1
        assert item.extra_amounts[0].quantity == 2
        assert item.text == "2 cups flour + 2 pounds flour"
        assert item.amounts == [(2, "cups"), (2, "pounds")]

    def test_quantified_entry_supersedes_bare_mention(self):
        result = consolidate_lines("salt", "1 tsp salt")

        item = result.items[0]
        assert item.quantity == 1
        assert item.text == "1 tsp salt"

    def test_bare_mention_after_quantity_is_absorbed(self):
        result = consolidate_lines("1 tsp salt", "salt")
        assert result.items[0].text == "1 tsp salt"
        assert result.stats.combined_count == 1

    def test_repeated_bare_mentions_get_marker(self):
        """Test that identical quantity-less entries show a repeat count."""
        result = consolidate_lines("salt", "Salt", "salt")
        assert result.items[0].text == "salt (x3)"

    def test_different_bare_mentions_are_concatenated(self):
        result = consolidate_lines("salt", "salt (to taste)", "Salt (to taste)")
        assert len(result.items) == 1
        assert result.items[0].text == "salt + salt (to taste)"


class TestConsolidateOrderAndStats:
    """Tests for ordering, stats and idempotence."""

    def test_first_seen_order(self):
        result = consolidate_lines("1 onion", "2 cups flour", "2 onions", "3 eggs")
        assert [item.key for item in result.items] == ["onion", "flour", "egg"]
        assert result.items[0].source_indexes == [0, 2]

    def test_combined_items_names(self):
        result = consolidate_lines("1 onion", "2 onions", "3 onions", "1 egg", "1 egg")
        assert result.stats.combined_count == 2
        assert result.stats.combined_items == ["onion", "egg"]

    def test_blank_entries_are_skipped(self):
        result = consolidate(parse_ingredients(["", "2 cups flour"]))
        assert len(result.items) == 1

    def test_empty_input(self):
        result = consolidate([])
        assert result.items == []
        assert result.stats.to_dict() == {
            "original_count": 0,
            "final_count": 0,
            "combined_count": 0,
            "combined_items": [],
        }

    def test_idempotent(self):
        """Test that consolidating the output again changes nothing."""
        first = consolidate_lines(
            "1 egg", "2 eggs", "2 cups flour", "1 lb flour", "salt", "salt", "pepper"
        )
        second = consolidate(item.to_parsed() for item in first.items)

        assert second.stats.combined_count == 0
        assert second.stats.final_count == first.stats.final_count
        assert [item.text for item in second.items] == [item.text for item in first.items]

    def test_new_entries_keep_incompatible_amounts(self):
        """Test that merging into a consolidated item keeps its concatenated amounts."""
        first = consolidate_lines("2 cups flour", "1 lb flour")
        second = consolidate(
            [*(item.to_parsed() for item in first.items), *parse_ingredients(["1 cup flour"])]
        )

        item = second.items[0]
        assert item.text == "3 cups flour + 1 lb flour"
        assert item.amounts == [(3, "cups"), (1, "pounds")]

    def test_new_entries_sum_into_carried_amount(self):
        first = consolidate_lines("2 cups flour", "1 lb flour")
        second = consolidate(
            [*(item.to_parsed() for item in first.items), *parse_ingredients(["1 lb flour"])]
        )
        assert second.items[0].text == "2 cups flour + 2 pounds flour"

    def test_new_mention_raises_repeat_count(self):
        first = consolidate_lines("salt", "salt")
        second = consolidate(
            [*(item.to_parsed() for item in first.items), *parse_ingredients(["salt"])]
        )
        assert second.items[0].text == "salt (x3)"

    def test_consolidated_item_merged_into_earlier_entry(self):
        """Test that a carried amount survives when its item is not the first seen."""
        first = consolidate_lines("2 cups flour", "1 lb flour")
        second = consolidate(
            [*parse_ingredients(["1 cup flour"]), *(item.to_parsed() for item in first.items)]
        )
        assert second.items[0].text == "3 cups flour + 1 lb flour"


class TestSplitDisplayText:
    """Tests for split_display_text function."""

    def test_plain_text(self):
        assert split_display_text("3 eggs") == ("3 eggs", 1, [])

    def test_repeat_marker(self):
        assert split_display_text("salt (x2)") == ("salt", 2, [])

    def test_joined_parts(self):
        assert split_display_text("2 cups flour + 1 lb flour") == (
            "2 cups flour",
            1,
            ["1 lb flour"],
        )

    def test_notes_are_not_a_marker(self):
        assert split_display_text("salt (to taste)") == ("salt (to taste)", 1, [])


class TestEndToEnd:
    """Two recipes through parse, consolidate and classify."""

    def test_flour_from_two_recipes(self):
        recipe_one = ["2 cups flour", "3 eggs"]
        recipe_two = ["1 cup flour"]

        result = consolidate(parse_ingredients([*recipe_one, *recipe_two]))
        flour = next(item for item in result.items if item.key == "flour")

        assert flour.text == "3 cups flour"
        assert classify(flour.name) == AisleCategory.DRY_GOODS
