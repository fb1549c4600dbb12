"""FastAPI dependencies that wire repositories and services to a session."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from pantryplan.database import get_db
from pantryplan.plan.grocery import GroceryListGenerator
from pantryplan.plan.templates import TemplateStore
from pantryplan.repositories.base import (
    RecipeRepository,
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


# Placeholder until authentication exists
async def get_current_user_id() -> str:
    """Get current user ID."""
    return "default-user"


async def get_shopping_list_repository(
    db: AsyncSession = Depends(get_db),
) -> ShoppingListRepository:
    return SqlShoppingListRepository(db)


async def get_recipe_repository(db: AsyncSession = Depends(get_db)) -> RecipeRepository:
    return SqlRecipeRepository(db)


async def get_template_repository(
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> TemplateRepository:
    return SqlTemplateRepository(db, user_id)


async def get_template_store(
    templates: TemplateRepository = Depends(get_template_repository),
    lists: ShoppingListRepository = Depends(get_shopping_list_repository),
) -> TemplateStore:
    return TemplateStore(templates, lists)


async def get_grocery_list_generator(
    db: AsyncSession = Depends(get_db),
) -> GroceryListGenerator:
    """All repositories share one session so generation is a single transaction."""
    return GroceryListGenerator(
        meal_plans=SqlMealPlanRepository(db),
        recipes=SqlRecipeRepository(db),
        pantry=SqlPantryRepository(db),
        grocery_lists=SqlGroceryListRepository(db),
    )
