"""
Base generator interface, provider enum and failure taxonomy.

This module defines the abstract base class for generation adapters,
the supported provider types and the errors adapters raise.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Sequence

from domain.entities import Recipe


class LLMProvider(str, Enum):
    """Supported generation providers."""

    GEMINI = "gemini"


class GenerationError(Exception):
    """Base class for all generation failures."""


class GenerationTransportError(GenerationError):
    """The request never produced a usable response (network, HTTP, quota)."""


class GenerationFailed(GenerationError):
    """The model answered but the payload did not parse or match the schema."""


class GenerationRefused(GenerationError):
    """The model declined to render and explained why in text."""

    def __init__(self, explanation: str):
        super().__init__(f"Model declined the request: {explanation}")
        self.explanation = explanation


class GenerationEmpty(GenerationError):
    """The response carried neither image data nor text."""


class BaseRecipeGenerator(ABC):
    """Abstract base class for recipe and image generation adapters."""

    def __init__(self, api_key: str, model: str, **kwargs):
        """Initialize the generator adapter."""
        if not api_key:
            raise ValueError("API key cannot be empty")
        if not model:
            raise ValueError("Model cannot be empty")

        self.api_key = api_key
        self.model = model
        self.kwargs = kwargs
        self._client = None

    @abstractmethod
    def _create_client(self) -> Any:
        """Create the underlying SDK client."""
        pass

    @property
    def client(self) -> Any:
        """Get the SDK client, creating it on first use."""
        if self._client is None:
            self._client = self._create_client()
        return self._client

    @abstractmethod
    async def request_recipe(
        self,
        ingredients: Sequence[str],
        restrictions: Sequence[str],
        time_bucket: str,
    ) -> Recipe:
        """Generate a structured recipe.

        Raises:
            GenerationTransportError: If the request could not be completed
            GenerationFailed: If the response is not a valid recipe
        """
        pass

    @abstractmethod
    async def request_image(self, title: str, description: str) -> str:
        """Generate an illustration and return it as a data URI.

        Raises:
            GenerationTransportError: If the request could not be completed
            GenerationRefused: If the model answered with text only
            GenerationEmpty: If the response had no usable content
        """
        pass

    @abstractmethod
    def get_model_info(self) -> Dict[str, Any]:
        """Get information about the models in use."""
        pass

    def close(self) -> None:
        """Drop the client and clean up resources."""
        self._client = None
