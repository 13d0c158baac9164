"""
Domain package for LittleChef.

This package contains the core business logic, entities and the
application state machine, independent of external technologies.
"""

from .entities import (
    Difficulty,
    Ingredient,
    NutritionalInfo,
    Recipe,
    SavedRecipe,
    ShoppingItem,
    Step,
)
from .reducer import reduce
from .state import AppState, GenerationPhase, View

__all__ = [
    "AppState",
    "Difficulty",
    "GenerationPhase",
    "Ingredient",
    "NutritionalInfo",
    "Recipe",
    "SavedRecipe",
    "ShoppingItem",
    "Step",
    "View",
    "reduce",
]
