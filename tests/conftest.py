"""Pytest configuration and shared fixtures."""

from datetime import datetime

import pytest

from pantryplan.exceptions import MealPlanNotFound, RecipeNotFound, ShoppingListNotFound
from pantryplan.parse.ingredients import StructuredIngredient
from pantryplan.plan.pantry_filter import PantryEntry
from pantryplan.plan.shopping_list import ShoppingListItem
from pantryplan.plan.templates import Template
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

# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (require external services)"
    )


# =============================================================================
# In-memory Repositories
# =============================================================================


class InMemoryShoppingListRepository(ShoppingListRepository):
    def __init__(self, lists: dict[str, list[ShoppingListItem]] | None = None):
        self.lists = lists if lists is not None else {}
        self.replace_calls = 0

    async def get_items(self, list_id: str) -> list[ShoppingListItem]:
        if list_id not in self.lists:
            raise ShoppingListNotFound(list_id)
        return sorted(self.lists[list_id], key=lambda item: item.position)

    async def replace_items(self, list_id: str, items: list[ShoppingListItem]) -> None:
        if list_id not in self.lists:
            raise ShoppingListNotFound(list_id)
        self.replace_calls += 1
        self.lists[list_id] = list(items)


class InMemoryTemplateRepository(TemplateRepository):
    def __init__(self):
        self.templates: dict[str, Template] = {}

    async def list_templates(self) -> list[Template]:
        return list(self.templates.values())

    async def get(self, template_id: str) -> Template | None:
        return self.templates.get(template_id)

    async def add(self, template: Template) -> None:
        self.templates[template.id] = template

    async def delete(self, template_id: str) -> bool:
        return self.templates.pop(template_id, None) is not None


class InMemoryRecipeRepository(RecipeRepository):
    def __init__(self, recipes: list[RecipeSnapshot] | None = None):
        self.recipes = {recipe.id: recipe for recipe in recipes or []}

    async def get_recipe(self, recipe_id: str) -> RecipeSnapshot:
        if recipe_id not in self.recipes:
            raise RecipeNotFound(recipe_id)
        return self.recipes[recipe_id]


class InMemoryMealPlanRepository(MealPlanRepository):
    def __init__(self, plans: dict[tuple[str, str], MealPlanSnapshot] | None = None):
        self.plans = plans or {}

    async def get_plan(self, user_id: str, meal_plan_id: str) -> MealPlanSnapshot:
        plan = self.plans.get((user_id, meal_plan_id))
        if plan is None:
            raise MealPlanNotFound(meal_plan_id)
        return plan


class InMemoryPantryRepository(PantryRepository):
    def __init__(self, entries: dict[str, list[PantryEntry]] | None = None):
        self.entries = entries or {}

    async def list_entries(self, user_id: str) -> list[PantryEntry]:
        return list(self.entries.get(user_id, []))


class InMemoryGroceryListRepository(GroceryListRepository):
    """Stages writes and only publishes them on commit."""

    def __init__(self):
        self.committed: dict[str, GroceryListRecord] = {}
        self._staged: dict[str, GroceryListRecord] = {}
        self.rolled_back = False

    async def create_list(self, user_id: str, name: str, meal_plan_id: str | None) -> str:
        grocery_list_id = f"grocery-{len(self.committed) + len(self._staged) + 1}"
        self._staged[grocery_list_id] = GroceryListRecord(
            id=grocery_list_id, name=name, meal_plan_id=meal_plan_id
        )
        return grocery_list_id

    async def add_item(self, grocery_list_id: str, item: ShoppingListItem) -> None:
        self._staged[grocery_list_id].items.append(item)

    async def commit(self) -> None:
        self.committed.update(self._staged)
        self._staged.clear()

    async def rollback(self) -> None:
        self._staged.clear()
        self.rolled_back = True


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def fixed_now():
    return datetime(2024, 3, 1, 12, 0, 0)


@pytest.fixture
def list_items(fixed_now):
    """A manually built list with duplicates."""
    return [
        ShoppingListItem(id="item-1", text="2 cups flour", position=1, created_at=fixed_now),
        ShoppingListItem(id="item-2", text="3 eggs", position=2, created_at=fixed_now),
        ShoppingListItem(id="item-3", text="1 cup flour", position=3, created_at=fixed_now),
        ShoppingListItem(id="item-4", text="salt", position=4, created_at=fixed_now),
    ]


@pytest.fixture
def shopping_lists(list_items):
    return InMemoryShoppingListRepository({"list-1": list_items, "empty-list": []})


@pytest.fixture
def template_repository():
    return InMemoryTemplateRepository()


@pytest.fixture
def pancake_recipe():
    return RecipeSnapshot(
        id="recipe-pancakes",
        name="Pancakes",
        ingredients=[
            StructuredIngredient(name="flour", quantity=2, unit="cups"),
            StructuredIngredient(name="eggs", quantity=2),
            StructuredIngredient(name="milk", quantity=1.5, unit="cup"),
        ],
    )


@pytest.fixture
def bread_recipe():
    return RecipeSnapshot(
        id="recipe-bread",
        name="Bread",
        ingredients=[],
        instructions=(
            "Ingredients:\n"
            "- 1 cup flour\n"
            "- 1 tsp salt\n"
            "- 1 cup water\n"
            "\n"
            "Instructions:\n"
            "1. Mix everything.\n"
        ),
    )


@pytest.fixture
def recipe_repository(pancake_recipe, bread_recipe):
    return InMemoryRecipeRepository([pancake_recipe, bread_recipe])


@pytest.fixture
def meal_plan_repository():
    return InMemoryMealPlanRepository(
        {
            ("user-1", "plan-1"): MealPlanSnapshot(
                id="plan-1",
                name="Week 9",
                recipe_ids=["recipe-pancakes", "recipe-bread"],
            )
        }
    )


@pytest.fixture
def pantry_repository():
    return InMemoryPantryRepository(
        {"user-1": [PantryEntry(name="milk", quantity=4, unit="cups")]}
    )


@pytest.fixture
def grocery_list_repository():
    return InMemoryGroceryListRepository()
