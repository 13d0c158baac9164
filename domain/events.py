"""
Events and effects for the application state machine.

Events are user intents or completions of asynchronous requests. Effects
are the side effects a transition asks the session runtime to perform.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple, Union

from .entities import Recipe, SavedRecipe, ShoppingItem
from .state import AppState, View


# User intents


@dataclass(frozen=True)
class AddIngredient:
    raw: str


@dataclass(frozen=True)
class RemoveIngredient:
    name: str


@dataclass(frozen=True)
class ToggleDietaryRestriction:
    tag: str


@dataclass(frozen=True)
class SetCookingTime:
    bucket: str


@dataclass(frozen=True)
class GenerateRecipe:
    pass


@dataclass(frozen=True)
class SaveCurrentRecipe:
    pass


@dataclass(frozen=True)
class AddRecipeIngredientsToShoppingList:
    pass


@dataclass(frozen=True)
class AddManualShoppingItem:
    name: str


@dataclass(frozen=True)
class ToggleShoppingItem:
    item_id: str


@dataclass(frozen=True)
class RemoveShoppingItem:
    item_id: str


@dataclass(frozen=True)
class ClearShoppingList:
    """Bulk delete; only applied once the user has confirmed it."""

    confirmed: bool = False


@dataclass(frozen=True)
class DeleteSavedRecipe:
    saved_id: str


@dataclass(frozen=True)
class LoadSavedRecipe:
    saved_id: str


@dataclass(frozen=True)
class SetView:
    view: View


@dataclass(frozen=True)
class DismissNotice:
    pass


# Completions and lifecycle


@dataclass(frozen=True)
class CollectionsLoaded:
    saved_recipes: Tuple[SavedRecipe, ...] = field(default_factory=tuple)
    shopping_list: Tuple[ShoppingItem, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class RecipeGenerated:
    token: int
    recipe: Recipe


@dataclass(frozen=True)
class RecipeGenerationFailed:
    token: int
    reason: str


@dataclass(frozen=True)
class ImageGenerated:
    token: int
    image_url: str


@dataclass(frozen=True)
class ImageGenerationFailed:
    token: int
    reason: str


Event = Union[
    AddIngredient,
    RemoveIngredient,
    ToggleDietaryRestriction,
    SetCookingTime,
    GenerateRecipe,
    SaveCurrentRecipe,
    AddRecipeIngredientsToShoppingList,
    AddManualShoppingItem,
    ToggleShoppingItem,
    RemoveShoppingItem,
    ClearShoppingList,
    DeleteSavedRecipe,
    LoadSavedRecipe,
    SetView,
    DismissNotice,
    CollectionsLoaded,
    RecipeGenerated,
    RecipeGenerationFailed,
    ImageGenerated,
    ImageGenerationFailed,
]


# Effects


@dataclass(frozen=True)
class RequestRecipe:
    token: int
    ingredients: Tuple[str, ...]
    restrictions: Tuple[str, ...]
    time_bucket: str


@dataclass(frozen=True)
class RequestImage:
    token: int
    title: str
    description: str


@dataclass(frozen=True)
class ConfirmationRequired:
    message: str


Effect = Union[RequestRecipe, RequestImage, ConfirmationRequired]


@dataclass(frozen=True)
class Transition:
    """Result of applying one event: the next state and its effects."""

    state: AppState
    effects: List[Effect] = field(default_factory=list)
