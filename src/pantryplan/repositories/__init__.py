"""Persistence interfaces and their SQLAlchemy implementations."""

from pantryplan.repositories.base import (
    GroceryListRecord,
    GroceryListRepository,
    MealPlanRepository,
    MealPlanSnapshot,
    PantryRepository,
    RecipeRepository,
    RecipeSnapshot,
    ShoppingListRepository,
    TemplateRepository,
)
from pantryplan.repositories.sql import (
    SqlGroceryListRepository,
    SqlMealPlanRepository,
    SqlPantryRepository,
    SqlRecipeRepository,
    SqlShoppingListRepository,
    SqlTemplateRepository,
)

__all__ = [
    "GroceryListRecord",
    "GroceryListRepository",
    "MealPlanRepository",
    "MealPlanSnapshot",
    "PantryRepository",
    "RecipeRepository",
    "RecipeSnapshot",
    "ShoppingListRepository",
    "SqlGroceryListRepository",
    "SqlMealPlanRepository",
    "SqlPantryRepository",
    "SqlRecipeRepository",
    "SqlShoppingListRepository",
    "SqlTemplateRepository",
    "TemplateRepository",
]
