"""
Shopping list management API endpoints.

This module provides REST API endpoints for shopping list operations,
including manual items, copying recipe ingredients and bulk clearing.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Query

from agent.session import ChefSession
from domain.events import (
    AddManualShoppingItem,
    AddRecipeIngredientsToShoppingList,
    ClearShoppingList,
    ConfirmationRequired,
    RemoveShoppingItem,
    ToggleShoppingItem,
)

from .dependencies import get_session
from .models import ShoppingItemCreate
from .views import serialize_state

logger = logging.getLogger(__name__)

# Create router
router = APIRouter(prefix="/api/v1/shopping", tags=["shopping"])


@router.get(
    "/items",
    response_model=Dict[str, Any],
    summary="Get shopping list",
)
async def get_shopping_list(
    session: ChefSession = Depends(get_session),
) -> Dict[str, Any]:
    items = session.state.shopping_list
    return {
        "items": [item.to_dict() for item in items],
        "total": len(items),
        "unchecked": session.state.unchecked_count,
    }


@router.post(
    "/items",
    response_model=Dict[str, Any],
    summary="Add item to shopping list",
    description="Add a manual item to the top of the shopping list",
)
async def add_item(
    payload: ShoppingItemCreate, session: ChefSession = Depends(get_session)
) -> Dict[str, Any]:
    await session.dispatch(AddManualShoppingItem(payload.name))
    return serialize_state(session.state)


@router.post(
    "/from-recipe",
    response_model=Dict[str, Any],
    summary="Add recipe ingredients",
    description="Copy every ingredient of the current recipe to the list",
)
async def add_recipe_ingredients(
    session: ChefSession = Depends(get_session),
) -> Dict[str, Any]:
    await session.dispatch(AddRecipeIngredientsToShoppingList())
    return serialize_state(session.state)


@router.post(
    "/items/{item_id}/toggle",
    response_model=Dict[str, Any],
    summary="Toggle shopping item",
)
async def toggle_item(
    item_id: str, session: ChefSession = Depends(get_session)
) -> Dict[str, Any]:
    await session.dispatch(ToggleShoppingItem(item_id))
    return serialize_state(session.state)


@router.delete(
    "/items/{item_id}",
    response_model=Dict[str, Any],
    summary="Remove shopping item",
)
async def remove_item(
    item_id: str, session: ChefSession = Depends(get_session)
) -> Dict[str, Any]:
    await session.dispatch(RemoveShoppingItem(item_id))
    return serialize_state(session.state)


@router.delete(
    "/items",
    response_model=Dict[str, Any],
    summary="Clear shopping list",
    description="Remove every item. Requires confirm=true.",
)
async def clear_items(
    confirm: bool = Query(
        False, description="Confirm the irreversible bulk delete"
    ),
    session: ChefSession = Depends(get_session),
) -> Dict[str, Any]:
    """
    Clear the whole shopping list.

    Without confirmation nothing is deleted and 409 is returned with the
    question the user has to confirm.
    """
    transition = await session.dispatch(ClearShoppingList(confirmed=confirm))

    for effect in transition.effects:
        if isinstance(effect, ConfirmationRequired):
            raise HTTPException(status_code=409, detail=effect.message)

    logger.info("Shopping list cleared")
    return serialize_state(session.state)
