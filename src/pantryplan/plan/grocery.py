"""Generate persisted grocery lists from meal plans."""

from dataclasses import dataclass, field

from pantryplan.config import get_settings
from pantryplan.logging_config import LoggingContext, get_logger
from pantryplan.parse.ingredients import RawIngredient, TextIngredient
from pantryplan.parse.instructions import parse_instructions
from pantryplan.plan.consolidator import ConsolidatedItem, ConsolidationStats
from pantryplan.plan.shopping_list import build_shopping_list
from pantryplan.repositories.base import (
    GroceryListRecord,
    GroceryListRepository,
    MealPlanRepository,
    PantryRepository,
    RecipeRepository,
    RecipeSnapshot,
)

logger = get_logger(__name__)


@dataclass
class GroceryGenerationResult:
    """A generated grocery list with its consolidation summary."""

    grocery_list: GroceryListRecord
    stats: ConsolidationStats
    excluded: list[ConsolidatedItem] = field(default_factory=list)


def recipe_ingredients(recipe: RecipeSnapshot) -> list[RawIngredient]:
    """
    Ingredients of one recipe.

    Structured rows win. A recipe without rows falls back to the ingredients
    block of its instructions, when one can be found.
    """
    if recipe.ingredients:
        return list(recipe.ingredients)

    if not recipe.instructions:
        return []

    parsed = parse_instructions(recipe.instructions)
    if parsed.confidence <= 0:
        logger.debug(f"No ingredients section found in instructions of recipe {recipe.id}")
        return []

    logger.debug(
        f"Recipe {recipe.id} has no ingredient rows, parsed {len(parsed.lines)} lines "
        f"from instructions (confidence {parsed.confidence:.2f})"
    )
    return [TextIngredient(line) for line in parsed.lines]


class GroceryListGenerator:
    """
    Builds a grocery list for a meal plan and stores it.

    The list and all its items are written in a single transaction. A
    failure while inserting rolls everything back.
    """

    def __init__(
        self,
        meal_plans: MealPlanRepository,
        recipes: RecipeRepository,
        pantry: PantryRepository,
        grocery_lists: GroceryListRepository,
    ):
        self.meal_plans = meal_plans
        self.recipes = recipes
        self.pantry = pantry
        self.grocery_lists = grocery_lists

    async def collect_ingredients(self, recipe_ids: list[str]) -> list[RawIngredient]:
        """Raw ingredients of every recipe, in plan order."""
        ingredients: list[RawIngredient] = []
        for recipe_id in recipe_ids:
            recipe = await self.recipes.get_recipe(recipe_id)
            ingredients.extend(recipe_ingredients(recipe))
        return ingredients

    async def generate(
        self,
        user_id: str,
        meal_plan_id: str,
        name: str | None = None,
    ) -> GroceryGenerationResult:
        """
        Generate a grocery list from a meal plan.

        Args:
            user_id: Owner of the meal plan and pantry.
            meal_plan_id: Meal plan to shop for.
            name: List name; defaults to the configured name template.

        Returns:
            GroceryGenerationResult with the stored list and its stats.

        Raises:
            MealPlanNotFound: The plan does not exist for this user.
            RecipeNotFound: The plan references a missing recipe.
        """
        with LoggingContext(user_id=user_id, plan_id=meal_plan_id):
            plan = await self.meal_plans.get_plan(user_id, meal_plan_id)
            ingredients = await self.collect_ingredients(plan.recipe_ids)
            pantry = await self.pantry.list_entries(user_id)

            build = build_shopping_list(ingredients, pantry)
            list_name = name or get_settings().grocery_list_name_template.format(
                plan_name=plan.name
            )

            try:
                grocery_list_id = await self.grocery_lists.create_list(
                    user_id, list_name, meal_plan_id
                )
                for item in build.items:
                    await self.grocery_lists.add_item(grocery_list_id, item)
                await self.grocery_lists.commit()
            except Exception as e:
                await self.grocery_lists.rollback()
                logger.error(f"Failed to store grocery list for meal plan {meal_plan_id}: {e}")
                raise

            logger.info(
                f"Generated grocery list {grocery_list_id} with {len(build.items)} items "
                f"from {len(plan.recipe_ids)} recipes"
            )

            return GroceryGenerationResult(
                grocery_list=GroceryListRecord(
                    id=grocery_list_id,
                    name=list_name,
                    meal_plan_id=meal_plan_id,
                    items=build.items,
                ),
                stats=build.stats,
                excluded=build.excluded,
            )
