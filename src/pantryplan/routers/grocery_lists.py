"""API routes for generating grocery lists from meal plans."""

from typing import Annotated

from fastapi import APIRouter, Body, Depends, HTTPException, status

from pantryplan.exceptions import NotFoundError
from pantryplan.logging_config import get_logger
from pantryplan.plan.grocery import GroceryListGenerator
from pantryplan.routers.dependencies import get_current_user_id, get_grocery_list_generator
from pantryplan.schemas import GenerateGroceryListRequest, GroceryListResponse

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/grocery-lists", tags=["grocery-lists"])


@router.post(
    "/generate/{meal_plan_id}",
    response_model=GroceryListResponse,
    status_code=status.HTTP_201_CREATED,
)
async def generate_grocery_list(
    meal_plan_id: str,
    request: Annotated[GenerateGroceryListRequest | None, Body()] = None,
    user_id: str = Depends(get_current_user_id),
    generator: GroceryListGenerator = Depends(get_grocery_list_generator),
) -> GroceryListResponse:
    """
    Generate a grocery list for a meal plan.

    Ingredients from every recipe in the plan are consolidated, grouped by
    aisle and checked against the pantry. The list is stored atomically.
    """
    logger.info(f"Generating grocery list for meal plan {meal_plan_id}")

    try:
        result = await generator.generate(
            user_id, meal_plan_id, name=request.name if request else None
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    grocery_list = result.grocery_list
    return GroceryListResponse.build(
        grocery_list_id=grocery_list.id,
        name=grocery_list.name,
        meal_plan_id=grocery_list.meal_plan_id,
        items=grocery_list.items,
        stats=result.stats,
        excluded=result.excluded,
    )
