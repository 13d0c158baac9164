"""
Application state aggregate.

``AppState`` is a single immutable snapshot of everything the user sees.
The reducer in ``domain.reducer`` produces new snapshots; nothing else
mutates state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from .entities import Recipe, SavedRecipe, ShoppingItem

DIETARY_OPTIONS: Tuple[str, ...] = (
    "Vegan",
    "Vegetarian",
    "Gluten-Free",
    "Keto",
    "Dairy-Free",
)
TIME_OPTIONS: Tuple[str, ...] = (
    "Quick (15 min)",
    "30 mins",
    "1 Hour",
    "Show-stopper",
)
DEFAULT_COOKING_TIME = "30 mins"

EMPTY_PANTRY_ERROR = "Please add at least one ingredient!"
GENERATION_FAILED_ERROR = "The chef is busy... please try again in a moment."
INGREDIENTS_ADDED_NOTICE = "Ingredients added to your shopping list!"
CLEAR_LIST_CONFIRMATION = "Are you sure you want to clear your entire list?"


class View(str, Enum):
    """Screens the user can switch between."""

    HOME = "home"
    SAVED = "saved"
    SHOPPING = "shopping"


class GenerationPhase(str, Enum):
    """Where the current generation cycle stands.

    IDLE -> RECIPE_PENDING -> {IMAGE_PENDING, RECIPE_FAILED}
    IMAGE_PENDING -> {READY, IMAGE_FAILED}
    """

    IDLE = "idle"
    RECIPE_PENDING = "recipe_pending"
    RECIPE_FAILED = "recipe_failed"
    IMAGE_PENDING = "image_pending"
    IMAGE_FAILED = "image_failed"
    READY = "ready"


@dataclass(frozen=True)
class AppState:
    """Snapshot of the whole application."""

    ingredients: Tuple[str, ...] = field(default_factory=tuple)
    dietary_restrictions: Tuple[str, ...] = field(default_factory=tuple)
    cooking_time: str = DEFAULT_COOKING_TIME
    recipe: Optional[Recipe] = None
    food_image_url: Optional[str] = None
    is_loading: bool = False
    is_generating_image: bool = False
    error: Optional[str] = None
    notice: Optional[str] = None
    saved_recipes: Tuple[SavedRecipe, ...] = field(default_factory=tuple)
    shopping_list: Tuple[ShoppingItem, ...] = field(default_factory=tuple)
    current_view: View = View.HOME
    generation_token: int = 0
    phase: GenerationPhase = GenerationPhase.IDLE

    @property
    def is_current_recipe_saved(self) -> bool:
        """True when the displayed recipe already sits in the cookbook."""
        if self.recipe is None:
            return False
        return any(
            saved.recipe.title == self.recipe.title
            for saved in self.saved_recipes
        )

    @property
    def unchecked_count(self) -> int:
        return sum(1 for item in self.shopping_list if not item.checked)

    @property
    def can_generate(self) -> bool:
        return bool(self.ingredients) and not self.is_loading

    def find_saved_recipe(self, saved_id: str) -> Optional[SavedRecipe]:
        for saved in self.saved_recipes:
            if saved.id == saved_id:
                return saved
        return None
