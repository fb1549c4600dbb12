"""API schemas shared by the routers."""

from datetime import datetime

from pydantic import BaseModel, Field

from pantryplan.normalize.quantities import serialize_quantity
from pantryplan.parse.ingredients import ParsedIngredient
from pantryplan.plan.aisles import AisleCategory, group_by_aisle
from pantryplan.plan.consolidator import ConsolidatedItem, ConsolidationStats
from pantryplan.plan.shopping_list import ShoppingListItem
from pantryplan.plan.templates import Template


class ShoppingListItemSchema(BaseModel):
    """Shopping list item as returned by the API."""

    id: str
    text: str
    quantity: str | None = None
    unit: str | None = None
    name: str | None = None
    is_checked: bool = False
    position: int
    aisle: AisleCategory | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_item(cls, item: ShoppingListItem) -> "ShoppingListItemSchema":
        return cls(
            id=item.id,
            text=item.text,
            quantity=item.quantity,
            unit=item.unit,
            name=item.name,
            is_checked=item.is_checked,
            position=item.position,
            aisle=item.aisle,
            created_at=item.created_at,
            updated_at=item.updated_at,
        )


class ConsolidationStatsSchema(BaseModel):
    """How much a consolidation pass merged."""

    original_count: int
    final_count: int
    combined_count: int
    combined_items: list[str] = Field(default_factory=list)

    @classmethod
    def from_stats(cls, stats: ConsolidationStats) -> "ConsolidationStatsSchema":
        return cls(**stats.to_dict())


class ConsolidateResponse(BaseModel):
    """Items of a list after consolidation."""

    list_id: str
    items: list[ShoppingListItemSchema]
    stats: ConsolidationStatsSchema


class ParsedIngredientSchema(BaseModel):
    name: str
    quantity: str | None = None
    unit: str | None = None
    notes: str | None = None
    confidence: float
    text: str

    @classmethod
    def from_parsed(cls, parsed: ParsedIngredient) -> "ParsedIngredientSchema":
        return cls(
            name=parsed.name,
            quantity=serialize_quantity(parsed.quantity),
            unit=parsed.unit,
            notes=parsed.notes,
            confidence=parsed.confidence,
            text=parsed.text,
        )


class ParseInstructionsRequest(BaseModel):
    """Free-text recipe instructions to pull ingredients from."""

    instructions: str = Field(description="Recipe text containing an 'Ingredients:' block")


class ParseInstructionsResponse(BaseModel):
    lines: list[str]
    ingredients: list[ParsedIngredientSchema]
    found_section: bool
    confidence: float = Field(ge=0.0, le=1.0)


# =============================================================================
# Templates
# =============================================================================


class TemplateItemSchema(BaseModel):
    text: str
    quantity: str | None = None
    unit: str | None = None


class TemplateSchema(BaseModel):
    """Shopping list template."""

    id: str
    name: str
    description: str = ""
    items: list[TemplateItemSchema] = Field(default_factory=list)
    is_default: bool = False

    @classmethod
    def from_template(cls, template: Template) -> "TemplateSchema":
        return cls(
            id=template.id,
            name=template.name,
            description=template.description,
            items=[
                TemplateItemSchema(text=seed.text, quantity=seed.quantity, unit=seed.unit)
                for seed in template.items
            ],
            is_default=template.is_default,
        )


class TemplateListResponse(BaseModel):
    templates: list[TemplateSchema]
    total: int


class SaveTemplateRequest(BaseModel):
    """Save the current list as a template."""

    name: str = Field(min_length=1, max_length=255)
    description: str = ""


class ApplyTemplateResponse(BaseModel):
    list_id: str
    template_id: str
    items: list[ShoppingListItemSchema]


# =============================================================================
# Grocery lists
# =============================================================================


class GenerateGroceryListRequest(BaseModel):
    """Optional overrides for grocery list generation."""

    name: str | None = Field(None, max_length=255, description="Defaults to the plan's name")


class AisleGroupSchema(BaseModel):
    aisle: AisleCategory
    items: list[ShoppingListItemSchema]


class GroceryListResponse(BaseModel):
    """Generated grocery list, flat and grouped by aisle."""

    id: str
    name: str
    meal_plan_id: str | None = None
    items: list[ShoppingListItemSchema]
    items_by_aisle: list[AisleGroupSchema]
    stats: ConsolidationStatsSchema
    in_pantry: list[str] = Field(
        default_factory=list, description="Ingredients left off because the pantry covers them"
    )

    @classmethod
    def build(
        cls,
        grocery_list_id: str,
        name: str,
        meal_plan_id: str | None,
        items: list[ShoppingListItem],
        stats: ConsolidationStats,
        excluded: list[ConsolidatedItem],
    ) -> "GroceryListResponse":
        grouped = group_by_aisle(items, lambda item: item.aisle)
        return cls(
            id=grocery_list_id,
            name=name,
            meal_plan_id=meal_plan_id,
            items=[ShoppingListItemSchema.from_item(item) for item in items],
            items_by_aisle=[
                AisleGroupSchema(
                    aisle=aisle,
                    items=[ShoppingListItemSchema.from_item(item) for item in aisle_items],
                )
                for aisle, aisle_items in grouped.items()
            ],
            stats=ConsolidationStatsSchema.from_stats(stats),
            in_pantry=[item.text for item in excluded],
        )
