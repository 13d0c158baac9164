"""
Cookbook API endpoints.

This module provides REST API endpoints for saving, loading and deleting
recipes in the user's cookbook.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends

from agent.session import ChefSession
from domain.events import DeleteSavedRecipe, LoadSavedRecipe, SaveCurrentRecipe

from .dependencies import get_session
from .views import serialize_state

logger = logging.getLogger(__name__)

# Create router
router = APIRouter(prefix="/api/v1/cookbook", tags=["cookbook"])


@router.get(
    "/",
    response_model=Dict[str, Any],
    summary="List saved recipes",
)
async def list_saved_recipes(
    session: ChefSession = Depends(get_session),
) -> Dict[str, Any]:
    saved = session.state.saved_recipes
    return {
        "recipes": [s.to_dict() for s in saved],
        "total": len(saved),
    }


@router.post(
    "/",
    response_model=Dict[str, Any],
    summary="Save current recipe",
    description="Save the displayed recipe unless one with its title exists",
)
async def save_current_recipe(
    session: ChefSession = Depends(get_session),
) -> Dict[str, Any]:
    await session.dispatch(SaveCurrentRecipe())
    return serialize_state(session.state)


@router.delete(
    "/{saved_id}",
    response_model=Dict[str, Any],
    summary="Delete saved recipe",
)
async def delete_saved_recipe(
    saved_id: str, session: ChefSession = Depends(get_session)
) -> Dict[str, Any]:
    await session.dispatch(DeleteSavedRecipe(saved_id))
    return serialize_state(session.state)


@router.post(
    "/{saved_id}/load",
    response_model=Dict[str, Any],
    summary="Open saved recipe",
    description="Show a saved recipe with its image on the home view",
)
async def load_saved_recipe(
    saved_id: str, session: ChefSession = Depends(get_session)
) -> Dict[str, Any]:
    await session.dispatch(LoadSavedRecipe(saved_id))
    return serialize_state(session.state)
