"""
Pantry and generation API endpoints.

This module provides REST API endpoints for editing the pantry, choosing
preferences and starting a generation cycle.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException

from agent.session import ChefSession
from domain.events import (
    AddIngredient,
    GenerateRecipe,
    RemoveIngredient,
    SetCookingTime,
    ToggleDietaryRestriction,
)
from domain.state import DIETARY_OPTIONS

from .dependencies import get_session
from .models import CookingTimeUpdate, IngredientCreate
from .views import serialize_state

logger = logging.getLogger(__name__)

# Create router
router = APIRouter(prefix="/api/v1/pantry", tags=["pantry"])


@router.post(
    "/ingredients",
    response_model=Dict[str, Any],
    summary="Add ingredient",
    description="Add an ingredient to the pantry (trimmed and lowercased)",
)
async def add_ingredient(
    payload: IngredientCreate, session: ChefSession = Depends(get_session)
) -> Dict[str, Any]:
    await session.dispatch(AddIngredient(payload.name))
    return serialize_state(session.state)


@router.delete(
    "/ingredients/{name}",
    response_model=Dict[str, Any],
    summary="Remove ingredient",
    description="Remove an ingredient from the pantry",
)
async def remove_ingredient(
    name: str, session: ChefSession = Depends(get_session)
) -> Dict[str, Any]:
    await session.dispatch(RemoveIngredient(name))
    return serialize_state(session.state)


@router.post(
    "/dietary/{tag}/toggle",
    response_model=Dict[str, Any],
    summary="Toggle dietary preference",
    description="Toggle one of the fixed dietary options",
)
async def toggle_dietary(
    tag: str, session: ChefSession = Depends(get_session)
) -> Dict[str, Any]:
    if tag not in DIETARY_OPTIONS:
        raise HTTPException(
            status_code=422,
            detail=(
                f"Invalid dietary preference. Must be one of: "
                f"{', '.join(DIETARY_OPTIONS)}"
            ),
        )
    await session.dispatch(ToggleDietaryRestriction(tag))
    return serialize_state(session.state)


@router.put(
    "/cooking-time",
    response_model=Dict[str, Any],
    summary="Set cooking time",
)
async def set_cooking_time(
    payload: CookingTimeUpdate, session: ChefSession = Depends(get_session)
) -> Dict[str, Any]:
    await session.dispatch(SetCookingTime(payload.cooking_time))
    return serialize_state(session.state)


@router.post(
    "/generate",
    response_model=Dict[str, Any],
    summary="Generate recipe",
    description=(
        "Generate a recipe from the pantry. Returns once the recipe is "
        "ready; the illustration keeps generating in the background."
    ),
)
async def generate(
    session: ChefSession = Depends(get_session),
) -> Dict[str, Any]:
    """
    Run one generation cycle.

    Failures are reported through the ``error`` field of the state rather
    than as HTTP errors.
    """
    logger.info(
        f"Generating recipe from {len(session.state.ingredients)} ingredients"
    )
    await session.dispatch(GenerateRecipe())
    return serialize_state(session.state)
