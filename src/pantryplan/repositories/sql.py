"""SQLAlchemy implementations of the repositories."""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from pantryplan import models
from pantryplan.exceptions import MealPlanNotFound, RecipeNotFound, ShoppingListNotFound
from pantryplan.logging_config import get_logger
from pantryplan.parse.ingredients import StructuredIngredient
from pantryplan.plan.aisles import AisleCategory
from pantryplan.plan.pantry_filter import PantryEntry
from pantryplan.plan.shopping_list import ShoppingListItem
from pantryplan.plan.templates import Template, TemplateSeed
from pantryplan.repositories.base import (
    GroceryListRepository,
    MealPlanRepository,
    MealPlanSnapshot,
    PantryRepository,
    RecipeRepository,
    RecipeSnapshot,
    ShoppingListRepository,
    TemplateRepository,
)

logger = get_logger(__name__)


def _item_from_row(row: models.ShoppingListItem) -> ShoppingListItem:
    return ShoppingListItem(
        id=row.id,
        text=row.item_text,
        quantity=row.quantity,
        unit=row.unit,
        name=row.name,
        is_checked=row.is_checked,
        position=row.position,
        aisle=AisleCategory(row.aisle) if row.aisle else None,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SqlShoppingListRepository(ShoppingListRepository):
    """Shopping lists stored in PostgreSQL."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _get_list(self, list_id: str) -> models.ShoppingList:
        result = await self.session.execute(
            select(models.ShoppingList)
            .where(models.ShoppingList.id == list_id)
            .options(selectinload(models.ShoppingList.items))
        )
        shopping_list = result.scalar_one_or_none()
        if shopping_list is None:
            raise ShoppingListNotFound(list_id)
        return shopping_list

    async def get_items(self, list_id: str) -> list[ShoppingListItem]:
        shopping_list = await self._get_list(list_id)
        rows = sorted(shopping_list.items, key=lambda row: (row.position, row.created_at))
        return [_item_from_row(row) for row in rows]

    async def replace_items(self, list_id: str, items: list[ShoppingListItem]) -> None:
        shopping_list = await self._get_list(list_id)

        try:
            await self.session.execute(
                delete(models.ShoppingListItem).where(
                    models.ShoppingListItem.shopping_list_id == list_id
                )
            )
            for item in items:
                self.session.add(
                    models.ShoppingListItem(
                        id=item.id,
                        shopping_list_id=list_id,
                        item_text=item.text,
                        quantity=item.quantity,
                        unit=item.unit,
                        name=item.name,
                        aisle=item.aisle.value if item.aisle else None,
                        is_checked=item.is_checked,
                        position=item.position,
                        created_at=item.created_at,
                        updated_at=item.updated_at,
                    )
                )
            shopping_list.updated_at = max(
                (item.updated_at for item in items), default=shopping_list.updated_at
            )
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        # Drop the stale relationship collection loaded before the bulk delete
        self.session.expire(shopping_list)
        logger.debug(f"Replaced contents of list {list_id} with {len(items)} items")


class SqlTemplateRepository(TemplateRepository):
    """User templates stored in PostgreSQL."""

    def __init__(self, session: AsyncSession, user_id: str):
        self.session = session
        self.user_id = user_id

    @staticmethod
    def _to_template(row: models.ListTemplate) -> Template:
        return Template(
            id=row.id,
            name=row.name,
            description=row.description or "",
            items=tuple(
                TemplateSeed(seed.get("text", ""), seed.get("quantity"), seed.get("unit"))
                for seed in row.items or []
            ),
            is_default=False,
        )

    async def list_templates(self) -> list[Template]:
        result = await self.session.execute(
            select(models.ListTemplate)
            .where(models.ListTemplate.user_id == self.user_id)
            .order_by(models.ListTemplate.created_at)
        )
        return [self._to_template(row) for row in result.scalars().all()]

    async def get(self, template_id: str) -> Template | None:
        result = await self.session.execute(
            select(models.ListTemplate).where(
                models.ListTemplate.id == template_id,
                models.ListTemplate.user_id == self.user_id,
            )
        )
        row = result.scalar_one_or_none()
        return self._to_template(row) if row else None

    async def add(self, template: Template) -> None:
        self.session.add(
            models.ListTemplate(
                id=template.id,
                user_id=self.user_id,
                name=template.name,
                description=template.description,
                items=[
                    {"text": seed.text, "quantity": seed.quantity, "unit": seed.unit}
                    for seed in template.items
                ],
            )
        )
        await self.session.commit()

    async def delete(self, template_id: str) -> bool:
        result = await self.session.execute(
            select(models.ListTemplate).where(
                models.ListTemplate.id == template_id,
                models.ListTemplate.user_id == self.user_id,
            )
        )
        row = result.scalar_one_or_none()
        if row is None:
            return False

        await self.session.delete(row)
        await self.session.commit()
        return True


class SqlRecipeRepository(RecipeRepository):
    """Recipes stored in PostgreSQL."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_recipe(self, recipe_id: str) -> RecipeSnapshot:
        result = await self.session.execute(
            select(models.Recipe)
            .where(models.Recipe.id == recipe_id)
            .options(selectinload(models.Recipe.ingredients))
        )
        recipe = result.scalar_one_or_none()
        if recipe is None:
            raise RecipeNotFound(recipe_id)

        return RecipeSnapshot(
            id=recipe.id,
            name=recipe.name,
            ingredients=[
                StructuredIngredient(
                    name=row.name, quantity=row.quantity, unit=row.unit, notes=row.notes
                )
                for row in recipe.ingredients
            ],
            instructions=recipe.instructions,
        )


class SqlMealPlanRepository(MealPlanRepository):
    """Meal plans stored in PostgreSQL."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_plan(self, user_id: str, meal_plan_id: str) -> MealPlanSnapshot:
        result = await self.session.execute(
            select(models.MealPlan)
            .where(models.MealPlan.id == meal_plan_id, models.MealPlan.user_id == user_id)
            .options(selectinload(models.MealPlan.entries))
        )
        plan = result.scalar_one_or_none()
        if plan is None:
            raise MealPlanNotFound(meal_plan_id)

        entries = sorted(plan.entries, key=lambda entry: (entry.meal_date, entry.id))
        return MealPlanSnapshot(
            id=plan.id,
            name=plan.name,
            recipe_ids=[entry.recipe_id for entry in entries],
        )


class SqlPantryRepository(PantryRepository):
    """Pantry stock stored in PostgreSQL."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_entries(self, user_id: str) -> list[PantryEntry]:
        result = await self.session.execute(
            select(models.PantryItem).where(models.PantryItem.user_id == user_id)
        )
        return [
            PantryEntry(
                name=row.name,
                quantity=row.quantity,
                unit=row.unit,
                category=row.category,
                expiration_date=row.expiration_date,
            )
            for row in result.scalars().all()
        ]


class SqlGroceryListRepository(GroceryListRepository):
    """Generated grocery lists, written inside one session transaction."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_list(self, user_id: str, name: str, meal_plan_id: str | None) -> str:
        grocery_list = models.GroceryList(user_id=user_id, name=name, meal_plan_id=meal_plan_id)
        self.session.add(grocery_list)
        await self.session.flush()
        return grocery_list.id

    async def add_item(self, grocery_list_id: str, item: ShoppingListItem) -> None:
        self.session.add(
            models.GroceryListItem(
                id=item.id,
                grocery_list_id=grocery_list_id,
                item_text=item.text,
                name=item.name,
                quantity=item.quantity,
                unit=item.unit,
                aisle=(item.aisle or AisleCategory.OTHER).value,
                position=item.position,
            )
        )
        await self.session.flush()

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()
