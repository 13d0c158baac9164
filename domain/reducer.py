"""
Application state machine.

``reduce`` is a pure transition function: it takes the current ``AppState``
and one event and returns a ``Transition`` holding the next state plus the
effects the runtime must carry out. Identifier and clock sources are
injectable so transitions stay deterministic under test.
"""

import logging
from dataclasses import replace
from typing import Callable, Dict, Iterable, Optional

from .entities import (
    SavedRecipe,
    ShoppingItem,
    generate_id,
    get_current_timestamp,
)
from .errors import ValidationError, normalize_ingredient, normalize_item_name
from .events import (
    AddIngredient,
    AddManualShoppingItem,
    AddRecipeIngredientsToShoppingList,
    ClearShoppingList,
    CollectionsLoaded,
    ConfirmationRequired,
    DeleteSavedRecipe,
    DismissNotice,
    Event,
    GenerateRecipe,
    ImageGenerated,
    ImageGenerationFailed,
    LoadSavedRecipe,
    RecipeGenerated,
    RecipeGenerationFailed,
    RemoveIngredient,
    RemoveShoppingItem,
    RequestImage,
    RequestRecipe,
    SaveCurrentRecipe,
    SetCookingTime,
    SetView,
    ToggleDietaryRestriction,
    ToggleShoppingItem,
    Transition,
)
from .state import (
    CLEAR_LIST_CONFIRMATION,
    EMPTY_PANTRY_ERROR,
    GENERATION_FAILED_ERROR,
    INGREDIENTS_ADDED_NOTICE,
    AppState,
    GenerationPhase,
    View,
)

logger = logging.getLogger(__name__)

IdFactory = Callable[[], str]
Clock = Callable[[], int]


class _Context:
    """Sources of fresh ids and timestamps for one transition."""

    def __init__(self, id_factory: IdFactory, clock: Clock):
        self.id_factory = id_factory
        self.clock = clock

    def fresh_id(self, taken: Iterable[str]) -> str:
        taken = set(taken)
        new_id = self.id_factory()
        while new_id in taken:
            new_id = self.id_factory()
        return new_id


def _unchanged(state: AppState) -> Transition:
    return Transition(state=state)


# Pantry and preferences


def _add_ingredient(state, event: AddIngredient, ctx) -> Transition:
    try:
        value = normalize_ingredient(event.raw)
    except ValidationError:
        return _unchanged(state)
    if value in state.ingredients:
        return _unchanged(state)
    return Transition(
        state=replace(state, ingredients=state.ingredients + (value,))
    )


def _remove_ingredient(state, event: RemoveIngredient, ctx) -> Transition:
    if event.name not in state.ingredients:
        return _unchanged(state)
    return Transition(
        state=replace(
            state,
            ingredients=tuple(i for i in state.ingredients if i != event.name),
        )
    )


def _toggle_dietary(state, event: ToggleDietaryRestriction, ctx) -> Transition:
    current = state.dietary_restrictions
    if event.tag in current:
        updated = tuple(t for t in current if t != event.tag)
    else:
        updated = current + (event.tag,)
    return Transition(state=replace(state, dietary_restrictions=updated))


def _set_cooking_time(state, event: SetCookingTime, ctx) -> Transition:
    return Transition(state=replace(state, cooking_time=event.bucket))


# Generation cycle


def _generate_recipe(state, event: GenerateRecipe, ctx) -> Transition:
    if not state.ingredients:
        return Transition(state=replace(state, error=EMPTY_PANTRY_ERROR))

    token = state.generation_token + 1
    next_state = replace(
        state,
        generation_token=token,
        phase=GenerationPhase.RECIPE_PENDING,
        is_loading=True,
        is_generating_image=False,
        error=None,
        recipe=None,
        food_image_url=None,
        current_view=View.HOME,
    )
    request = RequestRecipe(
        token=token,
        ingredients=state.ingredients,
        restrictions=state.dietary_restrictions,
        time_bucket=state.cooking_time,
    )
    return Transition(state=next_state, effects=[request])


def _is_stale(state: AppState, token: int, expected: GenerationPhase) -> bool:
    if token != state.generation_token or state.phase != expected:
        logger.info(
            f"Discarding stale completion for cycle {token} "
            f"(current cycle {state.generation_token}, phase {state.phase.value})"
        )
        return True
    return False


def _recipe_generated(state, event: RecipeGenerated, ctx) -> Transition:
    if _is_stale(state, event.token, GenerationPhase.RECIPE_PENDING):
        return _unchanged(state)
    next_state = replace(
        state,
        recipe=event.recipe,
        is_loading=False,
        is_generating_image=True,
        phase=GenerationPhase.IMAGE_PENDING,
    )
    request = RequestImage(
        token=event.token,
        title=event.recipe.title,
        description=event.recipe.description,
    )
    return Transition(state=next_state, effects=[request])


def _recipe_failed(state, event: RecipeGenerationFailed, ctx) -> Transition:
    if _is_stale(state, event.token, GenerationPhase.RECIPE_PENDING):
        return _unchanged(state)
    logger.error(f"Recipe generation failed: {event.reason}")
    return Transition(
        state=replace(
            state,
            is_loading=False,
            error=GENERATION_FAILED_ERROR,
            phase=GenerationPhase.RECIPE_FAILED,
        )
    )


def _image_generated(state, event: ImageGenerated, ctx) -> Transition:
    if _is_stale(state, event.token, GenerationPhase.IMAGE_PENDING):
        return _unchanged(state)
    return Transition(
        state=replace(
            state,
            food_image_url=event.image_url,
            is_generating_image=False,
            phase=GenerationPhase.READY,
        )
    )


def _image_failed(state, event: ImageGenerationFailed, ctx) -> Transition:
    if _is_stale(state, event.token, GenerationPhase.IMAGE_PENDING):
        return _unchanged(state)
    logger.warning(f"Image generation failed: {event.reason}")
    return Transition(
        state=replace(
            state,
            is_generating_image=False,
            phase=GenerationPhase.IMAGE_FAILED,
        )
    )


# Cookbook


def _save_current_recipe(state, event: SaveCurrentRecipe, ctx) -> Transition:
    if state.recipe is None or state.is_current_recipe_saved:
        return _unchanged(state)
    saved = SavedRecipe(
        id=ctx.fresh_id(s.id for s in state.saved_recipes),
        recipe=state.recipe,
        image_url=state.food_image_url,
        timestamp=ctx.clock(),
    )
    return Transition(
        state=replace(state, saved_recipes=(saved,) + state.saved_recipes)
    )


def _delete_saved_recipe(state, event: DeleteSavedRecipe, ctx) -> Transition:
    if state.find_saved_recipe(event.saved_id) is None:
        return _unchanged(state)
    return Transition(
        state=replace(
            state,
            saved_recipes=tuple(
                s for s in state.saved_recipes if s.id != event.saved_id
            ),
        )
    )


def _load_saved_recipe(state, event: LoadSavedRecipe, ctx) -> Transition:
    saved = state.find_saved_recipe(event.saved_id)
    if saved is None:
        return _unchanged(state)
    next_state = replace(
        state,
        recipe=saved.recipe,
        food_image_url=saved.image_url,
        current_view=View.HOME,
    )
    if state.phase == GenerationPhase.IMAGE_PENDING:
        # The pending image belongs to a recipe that is no longer shown
        next_state = replace(
            next_state,
            is_generating_image=False,
            phase=GenerationPhase.IDLE,
        )
    return Transition(state=next_state)


# Shopping list


def _add_recipe_ingredients(
    state, event: AddRecipeIngredientsToShoppingList, ctx
) -> Transition:
    if state.recipe is None:
        return _unchanged(state)
    taken = {item.id for item in state.shopping_list}
    new_items = []
    for ingredient in state.recipe.ingredients:
        item_id = ctx.fresh_id(taken)
        taken.add(item_id)
        new_items.append(ShoppingItem.from_ingredient(ingredient, item_id))
    return Transition(
        state=replace(
            state,
            shopping_list=state.shopping_list + tuple(new_items),
            notice=INGREDIENTS_ADDED_NOTICE,
        )
    )


def _add_manual_item(state, event: AddManualShoppingItem, ctx) -> Transition:
    try:
        name = normalize_item_name(event.name)
    except ValidationError:
        return _unchanged(state)
    item = ShoppingItem(
        id=ctx.fresh_id(i.id for i in state.shopping_list), name=name
    )
    return Transition(
        state=replace(state, shopping_list=(item,) + state.shopping_list)
    )


def _toggle_item(state, event: ToggleShoppingItem, ctx) -> Transition:
    if not any(i.id == event.item_id for i in state.shopping_list):
        return _unchanged(state)
    return Transition(
        state=replace(
            state,
            shopping_list=tuple(
                replace(i, checked=not i.checked)
                if i.id == event.item_id
                else i
                for i in state.shopping_list
            ),
        )
    )


def _remove_item(state, event: RemoveShoppingItem, ctx) -> Transition:
    if not any(i.id == event.item_id for i in state.shopping_list):
        return _unchanged(state)
    return Transition(
        state=replace(
            state,
            shopping_list=tuple(
                i for i in state.shopping_list if i.id != event.item_id
            ),
        )
    )


def _clear_list(state, event: ClearShoppingList, ctx) -> Transition:
    if not event.confirmed:
        return Transition(
            state=state,
            effects=[ConfirmationRequired(CLEAR_LIST_CONFIRMATION)],
        )
    if not state.shopping_list:
        return _unchanged(state)
    return Transition(state=replace(state, shopping_list=()))


# Navigation and lifecycle


def _set_view(state, event: SetView, ctx) -> Transition:
    return Transition(state=replace(state, current_view=View(event.view)))


def _dismiss_notice(state, event: DismissNotice, ctx) -> Transition:
    if state.notice is None:
        return _unchanged(state)
    return Transition(state=replace(state, notice=None))


def _collections_loaded(state, event: CollectionsLoaded, ctx) -> Transition:
    return Transition(
        state=replace(
            state,
            saved_recipes=tuple(event.saved_recipes),
            shopping_list=tuple(event.shopping_list),
        )
    )


_HANDLERS: Dict[type, Callable] = {
    AddIngredient: _add_ingredient,
    RemoveIngredient: _remove_ingredient,
    ToggleDietaryRestriction: _toggle_dietary,
    SetCookingTime: _set_cooking_time,
    GenerateRecipe: _generate_recipe,
    RecipeGenerated: _recipe_generated,
    RecipeGenerationFailed: _recipe_failed,
    ImageGenerated: _image_generated,
    ImageGenerationFailed: _image_failed,
    SaveCurrentRecipe: _save_current_recipe,
    DeleteSavedRecipe: _delete_saved_recipe,
    LoadSavedRecipe: _load_saved_recipe,
    AddRecipeIngredientsToShoppingList: _add_recipe_ingredients,
    AddManualShoppingItem: _add_manual_item,
    ToggleShoppingItem: _toggle_item,
    RemoveShoppingItem: _remove_item,
    ClearShoppingList: _clear_list,
    SetView: _set_view,
    DismissNotice: _dismiss_notice,
    CollectionsLoaded: _collections_loaded,
}


def reduce(
    state: AppState,
    event: Event,
    id_factory: Optional[IdFactory] = None,
    clock: Optional[Clock] = None,
) -> Transition:
    """Apply one event to the state.

    Args:
        state: Current application state
        event: User intent or request completion
        id_factory: Source of new collection ids (defaults to random ids)
        clock: Source of epoch-millisecond timestamps

    Returns:
        Transition with the next state and effects to run

    Raises:
        TypeError: If the event type is not known to the state machine
    """
    handler = _HANDLERS.get(type(event))
    if handler is None:
        raise TypeError(f"Unsupported event: {type(event).__name__}")
    ctx = _Context(id_factory or generate_id, clock or get_current_timestamp)
    return handler(state, event, ctx)
