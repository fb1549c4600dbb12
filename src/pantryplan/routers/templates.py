"""API routes for shopping list templates."""

from fastapi import APIRouter, Depends, HTTPException, status

from pantryplan.exceptions import NotFoundError, TemplateProtected
from pantryplan.logging_config import get_logger
from pantryplan.plan.templates import TemplateStore
from pantryplan.routers.dependencies import get_template_store
from pantryplan.schemas import (
    ApplyTemplateResponse,
    SaveTemplateRequest,
    ShoppingListItemSchema,
    TemplateListResponse,
    TemplateSchema,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1", tags=["templates"])


@router.get("/templates", response_model=TemplateListResponse)
async def list_templates(
    store: TemplateStore = Depends(get_template_store),
) -> TemplateListResponse:
    """List built-in and saved templates, built-ins first."""
    templates = await store.list_templates()
    return TemplateListResponse(
        templates=[TemplateSchema.from_template(template) for template in templates],
        total=len(templates),
    )


@router.post(
    "/shopping-lists/{list_id}/templates/{template_id}/apply",
    response_model=ApplyTemplateResponse,
)
async def apply_template(
    list_id: str,
    template_id: str,
    store: TemplateStore = Depends(get_template_store),
) -> ApplyTemplateResponse:
    """Replace a list's contents with a template's items."""
    try:
        items = await store.apply(list_id, template_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    return ApplyTemplateResponse(
        list_id=list_id,
        template_id=template_id,
        items=[ShoppingListItemSchema.from_item(item) for item in items],
    )


@router.post(
    "/shopping-lists/{list_id}/templates",
    response_model=TemplateSchema,
    status_code=status.HTTP_201_CREATED,
)
async def save_list_as_template(
    list_id: str,
    request: SaveTemplateRequest,
    store: TemplateStore = Depends(get_template_store),
) -> TemplateSchema:
    """Save the current contents of a list as a reusable template."""
    try:
        template = await store.save_as_template(list_id, request.name, request.description)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    return TemplateSchema.from_template(template)


@router.delete("/templates/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_template(
    template_id: str,
    store: TemplateStore = Depends(get_template_store),
) -> None:
    """Delete a saved template. Built-in templates cannot be deleted."""
    try:
        await store.delete(template_id)
    except TemplateProtected as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
