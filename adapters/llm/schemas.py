"""
Structured output schema for recipe generation.

``RECIPE_RESPONSE_SCHEMA`` is sent to the model to constrain its output;
``RecipePayload`` validates what comes back before it becomes a domain
``Recipe``.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from domain.entities import (
    Difficulty,
    Ingredient,
    NutritionalInfo,
    Recipe,
    Step,
)

RECIPE_RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "title": {
            "type": "STRING",
            "description": (
                "The name of the dish in the format: "
                "'French Name - English Name'."
            ),
        },
        "description": {"type": "STRING"},
        "prepTime": {"type": "STRING"},
        "cookTime": {"type": "STRING"},
        "difficulty": {
            "type": "STRING",
            "enum": [d.value for d in Difficulty],
        },
        "servings": {"type": "NUMBER"},
        "ingredients": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "item": {"type": "STRING"},
                    "amount": {"type": "STRING"},
                },
                "required": ["item", "amount"],
            },
        },
        "instructions": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "stepNumber": {"type": "NUMBER"},
                    "instruction": {"type": "STRING"},
                    "tip": {"type": "STRING"},
                },
                "required": ["stepNumber", "instruction"],
            },
        },
        "nutritionalInfo": {
            "type": "OBJECT",
            "properties": {
                "calories": {"type": "NUMBER"},
                "protein": {"type": "STRING"},
                "carbs": {"type": "STRING"},
                "fat": {"type": "STRING"},
            },
            "required": ["calories", "protein", "carbs", "fat"],
        },
    },
    "required": [
        "title",
        "description",
        "prepTime",
        "cookTime",
        "difficulty",
        "servings",
        "ingredients",
        "instructions",
        "nutritionalInfo",
    ],
}


class IngredientPayload(BaseModel):
    item: str
    amount: str


class StepPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    step_number: int = Field(..., alias="stepNumber")
    instruction: str
    tip: Optional[str] = None


class NutritionPayload(BaseModel):
    calories: float = Field(..., ge=0)
    protein: str
    carbs: str
    fat: str


class RecipePayload(BaseModel):
    """Validated model output for a recipe request."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., min_length=1)
    description: str
    prep_time: str = Field(..., alias="prepTime")
    cook_time: str = Field(..., alias="cookTime")
    difficulty: Difficulty
    servings: int = Field(..., ge=1)
    ingredients: List[IngredientPayload]
    instructions: List[StepPayload]
    nutritional_info: NutritionPayload = Field(..., alias="nutritionalInfo")

    def to_recipe(self) -> Recipe:
        """Convert the payload to an immutable domain recipe."""
        return Recipe(
            title=self.title,
            description=self.description,
            prep_time=self.prep_time,
            cook_time=self.cook_time,
            difficulty=self.difficulty,
            servings=self.servings,
            ingredients=tuple(
                Ingredient(item=i.item, amount=i.amount)
                for i in self.ingredients
            ),
            instructions=tuple(
                Step(
                    step_number=s.step_number,
                    instruction=s.instruction,
                    tip=s.tip,
                )
                for s in self.instructions
            ),
            nutritional_info=NutritionalInfo(
                calories=self.nutritional_info.calories,
                protein=self.nutritional_info.protein,
                carbs=self.nutritional_info.carbs,
                fat=self.nutritional_info.fat,
            ),
        )
