"""
Build the generation adapter selected by configuration.
"""

from typing import Any, Dict, Optional

from .base import BaseRecipeGenerator, LLMProvider
from .gemini_adapter import GeminiAdapter

_ADAPTERS: Dict[LLMProvider, type] = {
    LLMProvider.GEMINI: GeminiAdapter,
}


def create_generator_from_config(
    app_settings: Optional[Any] = None,
) -> BaseRecipeGenerator:
    """Create the configured adapter.

    Args:
        app_settings: Settings object; the global ``config.settings`` when
            omitted

    Raises:
        ValueError: If the provider is unknown or no API key is set
    """
    if app_settings is None:
        from config import settings as app_settings

    try:
        provider = LLMProvider(app_settings.llm_provider.lower())
    except ValueError:
        raise ValueError(
            f"Unsupported LLM provider: {app_settings.llm_provider}"
        ) from None

    if not app_settings.gemini_api_key:
        raise ValueError(f"API key not found for provider: {provider.value}")

    return _ADAPTERS[provider](
        api_key=app_settings.gemini_api_key,
        model=app_settings.recipe_model_name,
        image_model=app_settings.image_model_name,
        aspect_ratio=app_settings.image_aspect_ratio,
    )
