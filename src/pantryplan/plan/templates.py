"""Reusable shopping list templates."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

from pantryplan.exceptions import TemplateNotFound, TemplateProtected
from pantryplan.logging_config import get_logger
from pantryplan.plan.aisles import classify
from pantryplan.plan.shopping_list import ShoppingListItem, new_item_id, parsed_from_list_item

if TYPE_CHECKING:
    from pantryplan.repositories.base import ShoppingListRepository, TemplateRepository

logger = get_logger(__name__)


@dataclass(frozen=True)
class TemplateSeed:
    """Item blueprint stored in a template."""

    text: str
    quantity: str | None = None
    unit: str | None = None


@dataclass(frozen=True)
class Template:
    """Named seed list that can replace a shopping list's contents."""

    id: str
    name: str
    description: str = ""
    items: tuple[TemplateSeed, ...] = field(default_factory=tuple)
    is_default: bool = False


BUILT_IN_TEMPLATES: tuple[Template, ...] = (
    Template(
        id="builtin-weekly-essentials",
        name="Weekly Essentials",
        description="Staples most households restock every week",
        items=(
            TemplateSeed("1 gallon milk", "1", "gallons"),
            TemplateSeed("12 eggs", "12", None),
            TemplateSeed("1 loaf bread"),
            TemplateSeed("1 lb butter", "1", "pounds"),
            TemplateSeed("6 bananas", "6", None),
            TemplateSeed("1 bag salad greens"),
        ),
        is_default=True,
    ),
    Template(
        id="builtin-breakfast-basics",
        name="Breakfast Basics",
        description="Everything for a week of breakfasts",
        items=(
            TemplateSeed("1 box cereal"),
            TemplateSeed("32 ounces yogurt", "32", "ounces"),
            TemplateSeed("1 lb coffee", "1", "pounds"),
            TemplateSeed("1 bottle orange juice"),
            TemplateSeed("2 cups oatmeal", "2", "cups"),
        ),
        is_default=True,
    ),
    Template(
        id="builtin-taco-night",
        name="Taco Night",
        description="Tacos for four",
        items=(
            TemplateSeed("1 lb ground beef", "1", "pounds"),
            TemplateSeed("12 tortillas", "12", None),
            TemplateSeed("8 ounces cheddar cheese", "8", "ounces"),
            TemplateSeed("1 head lettuce", "1", "heads"),
            TemplateSeed("2 tomatoes", "2", None),
            TemplateSeed("1 cup sour cream", "1", "cups"),
        ),
        is_default=True,
    ),
    Template(
        id="builtin-cleaning-supplies",
        name="Cleaning Supplies",
        description="Household restock",
        items=(
            TemplateSeed("paper towels"),
            TemplateSeed("dish soap"),
            TemplateSeed("laundry detergent"),
            TemplateSeed("aluminum foil"),
        ),
        is_default=True,
    ),
)


def instantiate_template(template: Template, now: datetime | None = None) -> list[ShoppingListItem]:
    """Create fresh, unchecked list items from a template's seeds."""
    timestamp = now or datetime.utcnow()
    items = []
    for position, seed in enumerate(template.items, start=1):
        parsed = parsed_from_list_item(ShoppingListItem(text=seed.text))
        items.append(
            ShoppingListItem(
                id=new_item_id(),
                text=seed.text,
                quantity=seed.quantity,
                unit=seed.unit,
                name=parsed.name or None,
                is_checked=False,
                position=position,
                aisle=classify(parsed.name or seed.text),
                created_at=timestamp,
                updated_at=timestamp,
            )
        )
    return items


def snapshot_items(items: Iterable[ShoppingListItem]) -> tuple[TemplateSeed, ...]:
    """Capture display text, quantity and unit of list items, in list order."""
    ordered = sorted(items, key=lambda item: item.position)
    return tuple(TemplateSeed(item.text, item.quantity, item.unit) for item in ordered)


class TemplateStore:
    """
    Built-in and user templates, applied against shopping lists.

    Built-in templates are seeded at construction and never change. User
    templates are persisted through the template repository.
    """

    def __init__(
        self,
        templates: "TemplateRepository",
        lists: "ShoppingListRepository",
        built_ins: Iterable[Template] = BUILT_IN_TEMPLATES,
    ):
        self.templates = templates
        self.lists = lists
        self._built_ins: dict[str, Template] = {template.id: template for template in built_ins}

    async def list_templates(self) -> list[Template]:
        """All templates, built-ins first."""
        user_templates = await self.templates.list_templates()
        return [*self._built_ins.values(), *user_templates]

    async def get(self, template_id: str) -> Template:
        """Look up a template by id."""
        if template_id in self._built_ins:
            return self._built_ins[template_id]

        template = await self.templates.get(template_id)
        if template is None:
            raise TemplateNotFound(template_id)
        return template

    async def apply(self, list_id: str, template_id: str) -> list[ShoppingListItem]:
        """
        Replace a list's contents with the template's seed items.

        Raises:
            TemplateNotFound: Unknown template id; the list is left untouched.
        """
        template = await self.get(template_id)
        items = instantiate_template(template)
        await self.lists.replace_items(list_id, items)

        logger.info(f"Applied template '{template.name}' to list {list_id} ({len(items)} items)")
        return items

    async def save_as_template(self, list_id: str, name: str, description: str = "") -> Template:
        """Snapshot the current list into a new user template."""
        items = await self.lists.get_items(list_id)
        template = Template(
            id=new_item_id(),
            name=name,
            description=description,
            items=snapshot_items(items),
            is_default=False,
        )
        await self.templates.add(template)

        logger.info(f"Saved list {list_id} as template '{name}' ({len(template.items)} items)")
        return template

    async def delete(self, template_id: str) -> None:
        """
        Delete a user template.

        Raises:
            TemplateProtected: The template is built in.
            TemplateNotFound: No template with this id exists.
        """
        if template_id in self._built_ins:
            raise TemplateProtected(template_id)

        deleted = await self.templates.delete(template_id)
        if not deleted:
            raise TemplateNotFound(template_id)

        logger.info(f"Deleted template {template_id}")
