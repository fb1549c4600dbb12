"""Consolidation, aisle grouping and shopping list synthesis."""

from pantryplan.plan.aisles import AisleCategory, classify, group_by_aisle
from pantryplan.plan.consolidator import (
    ConsolidatedItem,
    ConsolidationResult,
    ConsolidationStats,
    consolidate,
)
from pantryplan.plan.pantry_filter import PantryEntry, PantryFilterResult, filter_against_pantry
from pantryplan.plan.shopping_list import (
    ShoppingListBuild,
    ShoppingListItem,
    build_shopping_list,
    consolidate_list_items,
    import_recipe,
)
from pantryplan.plan.templates import BUILT_IN_TEMPLATES, Template, TemplateSeed, TemplateStore

__all__ = [
    "AisleCategory",
    "BUILT_IN_TEMPLATES",
    "ConsolidatedItem",
    "ConsolidationResult",
    "ConsolidationStats",
    "PantryEntry",
    "PantryFilterResult",
    "ShoppingListBuild",
    "ShoppingListItem",
    "Template",
    "TemplateSeed",
    "TemplateStore",
    "build_shopping_list",
    "classify",
    "consolidate",
    "consolidate_list_items",
    "filter_against_pantry",
    "group_by_aisle",
    "import_recipe",
]
