"""API routes for consolidating and filling shopping lists."""

from fastapi import APIRouter, Depends, HTTPException, status

from pantryplan.exceptions import NotFoundError
from pantryplan.logging_config import LoggingContext, get_logger
from pantryplan.parse.instructions import parse_instructions
from pantryplan.plan.grocery import recipe_ingredients
from pantryplan.plan.shopping_list import consolidate_list_items, import_recipe
from pantryplan.repositories.base import RecipeRepository, ShoppingListRepository
from pantryplan.routers.dependencies import get_recipe_repository, get_shopping_list_repository
from pantryplan.schemas import (
    ConsolidateResponse,
    ConsolidationStatsSchema,
    ParsedIngredientSchema,
    ParseInstructionsRequest,
    ParseInstructionsResponse,
    ShoppingListItemSchema,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/shopping-lists", tags=["shopping-lists"])


@router.post("/parse-instructions", response_model=ParseInstructionsResponse)
async def parse_recipe_instructions(request: ParseInstructionsRequest) -> ParseInstructionsResponse:
    """
    Extract ingredients from free-text recipe instructions.

    Looks for an "Ingredients:" block. Confidence is 0 when none is found.
    """
    result = parse_instructions(request.instructions)
    return ParseInstructionsResponse(
        lines=result.lines,
        ingredients=[ParsedIngredientSchema.from_parsed(parsed) for parsed in result.ingredients],
        found_section=result.found_section,
        confidence=result.confidence,
    )


@router.post("/{list_id}/consolidate", response_model=ConsolidateResponse)
async def consolidate_shopping_list(
    list_id: str,
    lists: ShoppingListRepository = Depends(get_shopping_list_repository),
) -> ConsolidateResponse:
    """Merge duplicate items on a list and save the result."""
    with LoggingContext(list_id=list_id):
        try:
            items = await lists.get_items(list_id)
            merged, stats = consolidate_list_items(items)
            await lists.replace_items(list_id, merged)
        except NotFoundError as e:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

        logger.info(
            f"Consolidated list {list_id}: {stats.original_count} -> {stats.final_count} items"
        )

    return ConsolidateResponse(
        list_id=list_id,
        items=[ShoppingListItemSchema.from_item(item) for item in merged],
        stats=ConsolidationStatsSchema.from_stats(stats),
    )


@router.post("/{list_id}/recipes/{recipe_id}", response_model=ConsolidateResponse)
async def import_recipe_to_list(
    list_id: str,
    recipe_id: str,
    lists: ShoppingListRepository = Depends(get_shopping_list_repository),
    recipes: RecipeRepository = Depends(get_recipe_repository),
) -> ConsolidateResponse:
    """Add a recipe's ingredients to a list, merging with what is already there."""
    with LoggingContext(list_id=list_id):
        try:
            recipe = await recipes.get_recipe(recipe_id)
            items = await lists.get_items(list_id)

            merged, stats = import_recipe(items, recipe_ingredients(recipe))
            await lists.replace_items(list_id, merged)
        except NotFoundError as e:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

        logger.info(f"Imported recipe {recipe_id} into list {list_id} ({stats.final_count} items)")

    return ConsolidateResponse(
        list_id=list_id,
        items=[ShoppingListItemSchema.from_item(item) for item in merged],
        stats=ConsolidationStatsSchema.from_stats(stats),
    )
