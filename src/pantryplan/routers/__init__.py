"""API routers for the pantryplan application."""

from pantryplan.routers.grocery_lists import router as grocery_lists_router
from pantryplan.routers.shopping_lists import router as shopping_lists_router
from pantryplan.routers.templates import router as templates_router

__all__ = [
    "grocery_lists_router",
    "shopping_lists_router",
    "templates_router",
]
