"""Domain exceptions raised by services and translated by the routers."""


class PantryPlanError(Exception):
    """Base exception for pantryplan errors."""


class NotFoundError(PantryPlanError):
    """Raised when a referenced record does not exist."""

    entity = "Record"

    def __init__(self, entity_id: str, message: str | None = None):
        super().__init__(message or f"{self.entity} {entity_id} not found")
        self.entity_id = entity_id


class TemplateNotFound(NotFoundError):
    """Raised when applying or deleting an unknown template."""

    entity = "Template"


class ShoppingListNotFound(NotFoundError):
    entity = "Shopping list"


class MealPlanNotFound(NotFoundError):
    entity = "Meal plan"


class RecipeNotFound(NotFoundError):
    entity = "Recipe"


class TemplateProtected(PantryPlanError):
    """Raised when deleting a built-in template."""

    def __init__(self, template_id: str):
        super().__init__(f"Template {template_id} is built in and cannot be deleted")
        self.template_id = template_id
