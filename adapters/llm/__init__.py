"""
Generation adapters package.

This package provides a unified interface for generative model providers
producing structured recipes and food illustrations.
"""

from .base import (
    BaseRecipeGenerator,
    GenerationEmpty,
    GenerationError,
    GenerationFailed,
    GenerationRefused,
    GenerationTransportError,
    LLMProvider,
)
from .factory import create_generator_from_config
from .gemini_adapter import GeminiAdapter

__all__ = [
    "BaseRecipeGenerator",
    "GeminiAdapter",
    "GenerationEmpty",
    "GenerationError",
    "GenerationFailed",
    "GenerationRefused",
    "GenerationTransportError",
    "LLMProvider",
    "create_generator_from_config",
]
