"""Repository interfaces passed explicitly into services."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from pantryplan.parse.ingredients import StructuredIngredient
from pantryplan.plan.pantry_filter import PantryEntry
from pantryplan.plan.shopping_list import ShoppingListItem
from pantryplan.plan.templates import Template


@dataclass
class MealPlanSnapshot:
    """The parts of a meal plan needed to build a grocery list."""

    id: str
    name: str
    recipe_ids: list[str] = field(default_factory=list)


@dataclass
class RecipeSnapshot:
    """A recipe's ingredient table and free-text instructions."""

    id: str
    name: str
    ingredients: list[StructuredIngredient] = field(default_factory=list)
    instructions: str | None = None


@dataclass
class GroceryListRecord:
    """A persisted grocery list and its items."""

    id: str
    name: str
    meal_plan_id: str | None
    items: list[ShoppingListItem] = field(default_factory=list)


class ShoppingListRepository(ABC):
    """Load and store shopping list contents."""

    @abstractmethod
    async def get_items(self, list_id: str) -> list[ShoppingListItem]:
        """
        Fetch a list's items ordered by position.

        Raises:
            ShoppingListNotFound: No list with this id.
        """
        pass

    @abstractmethod
    async def replace_items(self, list_id: str, items: list[ShoppingListItem]) -> None:
        """
        Replace a list's contents wholesale.

        Raises:
            ShoppingListNotFound: No list with this id.
        """
        pass


class TemplateRepository(ABC):
    """Persistence for user templates. Built-ins are not stored here."""

    @abstractmethod
    async def list_templates(self) -> list[Template]:
        pass

    @abstractmethod
    async def get(self, template_id: str) -> Template | None:
        pass

    @abstractmethod
    async def add(self, template: Template) -> None:
        pass

    @abstractmethod
    async def delete(self, template_id: str) -> bool:
        """Delete a template, returning False when it did not exist."""
        pass


class RecipeRepository(ABC):
    """Read access to recipes."""

    @abstractmethod
    async def get_recipe(self, recipe_id: str) -> RecipeSnapshot:
        """
        Raises:
            RecipeNotFound: No recipe with this id.
        """
        pass


class MealPlanRepository(ABC):
    """Read access to meal plans."""

    @abstractmethod
    async def get_plan(self, user_id: str, meal_plan_id: str) -> MealPlanSnapshot:
        """
        Raises:
            MealPlanNotFound: No plan with this id for the user.
        """
        pass


class PantryRepository(ABC):
    """Read access to pantry stock."""

    @abstractmethod
    async def list_entries(self, user_id: str) -> list[PantryEntry]:
        pass


class GroceryListRepository(ABC):
    """
    Writes for generated grocery lists.

    Nothing is visible to other sessions until commit() is called.
    """

    @abstractmethod
    async def create_list(self, user_id: str, name: str, meal_plan_id: str | None) -> str:
        """Stage a new grocery list and return its id."""
        pass

    @abstractmethod
    async def add_item(self, grocery_list_id: str, item: ShoppingListItem) -> None:
        """Stage one item of a grocery list."""
        pass

    @abstractmethod
    async def commit(self) -> None:
        pass

    @abstractmethod
    async def rollback(self) -> None:
        pass
