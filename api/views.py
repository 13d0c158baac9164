"""
State rendering for API responses.

Turns an ``AppState`` snapshot into the JSON document the browser renders,
including the derived values the page needs (badges, saved marker).
"""

from typing import Any, Dict

from domain.state import DIETARY_OPTIONS, TIME_OPTIONS, AppState


def serialize_state(state: AppState) -> Dict[str, Any]:
    """Serialize the application state to a dictionary."""
    return {
        "ingredients": list(state.ingredients),
        "dietary_restrictions": list(state.dietary_restrictions),
        "cooking_time": state.cooking_time,
        "recipe": state.recipe.to_dict() if state.recipe else None,
        "food_image_url": state.food_image_url,
        "is_loading": state.is_loading,
        "is_generating_image": state.is_generating_image,
        "error": state.error,
        "notice": state.notice,
        "saved_recipes": [saved.to_dict() for saved in state.saved_recipes],
        "shopping_list": [item.to_dict() for item in state.shopping_list],
        "current_view": state.current_view.value,
        "phase": state.phase.value,
        "generation_token": state.generation_token,
        "is_current_recipe_saved": state.is_current_recipe_saved,
        "saved_count": len(state.saved_recipes),
        "unchecked_count": state.unchecked_count,
        "can_generate": state.can_generate,
    }


def serialize_options() -> Dict[str, Any]:
    """Static choices offered by the preference controls."""
    return {
        "dietary_options": list(DIETARY_OPTIONS),
        "time_options": list(TIME_OPTIONS),
    }
