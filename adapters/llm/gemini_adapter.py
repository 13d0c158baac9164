"""
Gemini generation adapter.

This module provides the Google Gemini implementation of the
BaseRecipeGenerator interface, using the ``google-genai`` SDK.
"""

import base64
import logging
from typing import Any, Dict, Optional, Sequence

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types
from pydantic import ValidationError as PydanticValidationError

from domain.entities import Recipe
from prompts.loader import PromptLoader, prompt_loader

from .base import (
    BaseRecipeGenerator,
    GenerationEmpty,
    GenerationFailed,
    GenerationRefused,
    GenerationTransportError,
)
from .schemas import RECIPE_RESPONSE_SCHEMA, RecipePayload

logger = logging.getLogger(__name__)

DEFAULT_RECIPE_MODEL = "gemini-3-flash-preview"
DEFAULT_IMAGE_MODEL = "gemini-2.5-flash-image"
DEFAULT_ASPECT_RATIO = "16:9"

_TRANSPORT_ERRORS = (genai_errors.APIError, httpx.HTTPError, OSError)


class GeminiAdapter(BaseRecipeGenerator):
    """Gemini adapter for structured recipes and food illustrations."""

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_RECIPE_MODEL,
        image_model: str = DEFAULT_IMAGE_MODEL,
        aspect_ratio: str = DEFAULT_ASPECT_RATIO,
        prompts: Optional[PromptLoader] = None,
        **kwargs,
    ):
        """Initialize Gemini adapter."""
        super().__init__(api_key, model, **kwargs)
        if not image_model:
            raise ValueError("Image model cannot be empty")
        self.image_model = image_model
        self.aspect_ratio = aspect_ratio
        self.prompts = prompts or prompt_loader

    def _create_client(self) -> genai.Client:
        """Create Gemini SDK client."""
        return genai.Client(api_key=self.api_key, **self.kwargs)

    def build_recipe_prompt(
        self,
        ingredients: Sequence[str],
        restrictions: Sequence[str],
        time_bucket: str,
    ) -> str:
        return self.prompts.render(
            "recipe",
            ingredients=", ".join(ingredients),
            preferences=". ".join(restrictions) or "none",
            time_limit=time_bucket,
        )

    def build_image_prompt(self, title: str, description: str) -> str:
        return self.prompts.render(
            "image", title=title, description=description
        )

    async def request_recipe(
        self,
        ingredients: Sequence[str],
        restrictions: Sequence[str],
        time_bucket: str,
    ) -> Recipe:
        """Ask the text model for a recipe matching the response schema."""
        prompt = self.build_recipe_prompt(
            ingredients, restrictions, time_bucket
        )
        config = types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=RECIPE_RESPONSE_SCHEMA,
        )

        logger.info(
            f"Requesting recipe from {self.model} for "
            f"{len(ingredients)} ingredients"
        )
        try:
            response = await self.client.aio.models.generate_content(
                model=self.model, contents=prompt, config=config
            )
        except _TRANSPORT_ERRORS as e:
            raise GenerationTransportError(
                f"Recipe request failed: {e}"
            ) from e

        text = response.text
        if not text:
            raise GenerationFailed("Recipe response contained no text")

        try:
            payload = RecipePayload.model_validate_json(text)
            return payload.to_recipe()
        except (PydanticValidationError, ValueError) as e:
            raise GenerationFailed(f"Recipe response is invalid: {e}") from e

    async def request_image(self, title: str, description: str) -> str:
        """Ask the image model for an illustration of a dish."""
        prompt = self.build_image_prompt(title, description)
        config = types.GenerateContentConfig(
            image_config=types.ImageConfig(aspect_ratio=self.aspect_ratio)
        )

        logger.info(f"Requesting image from {self.image_model} for '{title}'")
        try:
            response = await self.client.aio.models.generate_content(
                model=self.image_model,
                contents=[types.Part.from_text(text=prompt)],
                config=config,
            )
        except _TRANSPORT_ERRORS as e:
            raise GenerationTransportError(f"Image request failed: {e}") from e

        return self._extract_image(response)

    @staticmethod
    def _extract_image(response: Any) -> str:
        """Return the first inline image as a data URI."""
        candidates = getattr(response, "candidates", None) or []
        parts = []
        if candidates and candidates[0].content is not None:
            parts = candidates[0].content.parts or []

        explanations = []
        for part in parts:
            inline = getattr(part, "inline_data", None)
            if inline is not None and inline.data:
                data = inline.data
                if isinstance(data, bytes):
                    data = base64.b64encode(data).decode("ascii")
                mime_type = inline.mime_type or "image/png"
                return f"data:{mime_type};base64,{data}"
            text = getattr(part, "text", None)
            if text:
                explanations.append(text.strip())

        if explanations:
            raise GenerationRefused(" ".join(explanations))
        raise GenerationEmpty("Image response contained no image or text")

    def get_model_info(self) -> Dict[str, Any]:
        """Get Gemini model information."""
        return {
            "provider": "gemini",
            "model": self.model,
            "image_model": self.image_model,
            "aspect_ratio": self.aspect_ratio,
            "supports_structured_output": True,
            "supports_images": True,
        }
