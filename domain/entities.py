"""
Domain entities for the LittleChef application.

These classes represent the core business concepts and contain only business
logic. They are independent of external technologies (storage, API, etc.).

All entities are immutable. Their ``to_dict``/``from_dict`` helpers use the
camelCase wire names shared by the generation schema and local storage.
"""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


def get_current_timestamp() -> int:
    """Get current timestamp in epoch milliseconds."""
    return int(time.time() * 1000)


def generate_id() -> str:
    """Generate a unique identifier for collection entries."""
    return uuid.uuid4().hex[:12]


class Difficulty(str, Enum):
    """Difficulty levels a generated recipe may declare."""

    EASY = "Easy"
    MEDIUM = "Medium"
    ADVANCED = "Advanced"


@dataclass(frozen=True)
class Ingredient:
    """Represents a recipe ingredient with a free-text amount."""

    item: str
    amount: str

    def __str__(self) -> str:
        return f"{self.amount} {self.item}"

    def to_dict(self) -> Dict[str, Any]:
        return {"item": self.item, "amount": self.amount}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Ingredient:
        return cls(item=data["item"], amount=data["amount"])


@dataclass(frozen=True)
class Step:
    """A single numbered instruction, optionally with a chef's tip."""

    step_number: int
    instruction: str
    tip: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "stepNumber": self.step_number,
            "instruction": self.instruction,
        }
        if self.tip is not None:
            data["tip"] = self.tip
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Step:
        return cls(
            step_number=int(data["stepNumber"]),
            instruction=data["instruction"],
            tip=data.get("tip"),
        )


@dataclass(frozen=True)
class NutritionalInfo:
    """Estimated nutrition per serving."""

    calories: float
    protein: str
    carbs: str
    fat: str

    def __post_init__(self):
        if self.calories < 0:
            raise ValueError("calories cannot be negative")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fat": self.fat,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> NutritionalInfo:
        return cls(
            calories=data["calories"],
            protein=data["protein"],
            carbs=data["carbs"],
            fat=data["fat"],
        )


@dataclass(frozen=True)
class Recipe:
    """Represents a generated recipe with ingredients, steps and nutrition."""

    title: str
    description: str
    prep_time: str
    cook_time: str
    difficulty: Difficulty
    servings: int
    ingredients: Tuple[Ingredient, ...] = field(default_factory=tuple)
    instructions: Tuple[Step, ...] = field(default_factory=tuple)
    nutritional_info: Optional[NutritionalInfo] = None

    def __post_init__(self):
        # Validate title
        if not self.title or not self.title.strip():
            raise ValueError("title cannot be empty")

        if self.servings <= 0:
            raise ValueError("servings must be positive")

        # Normalize sequences so callers may pass lists
        object.__setattr__(self, "ingredients", tuple(self.ingredients))
        object.__setattr__(self, "instructions", tuple(self.instructions))
        object.__setattr__(self, "difficulty", Difficulty(self.difficulty))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "prepTime": self.prep_time,
            "cookTime": self.cook_time,
            "difficulty": self.difficulty.value,
            "servings": self.servings,
            "ingredients": [i.to_dict() for i in self.ingredients],
            "instructions": [s.to_dict() for s in self.instructions],
            "nutritionalInfo": (
                self.nutritional_info.to_dict()
                if self.nutritional_info
                else None
            ),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Recipe:
        nutrition = data.get("nutritionalInfo")
        return cls(
            title=data["title"],
            description=data["description"],
            prep_time=data["prepTime"],
            cook_time=data["cookTime"],
            difficulty=Difficulty(data["difficulty"]),
            servings=int(data["servings"]),
            ingredients=tuple(
                Ingredient.from_dict(i) for i in data["ingredients"]
            ),
            instructions=tuple(
                Step.from_dict(s) for s in data["instructions"]
            ),
            nutritional_info=(
                NutritionalInfo.from_dict(nutrition) if nutrition else None
            ),
        )

    def __str__(self) -> str:
        return f"Recipe: {self.title}"


@dataclass(frozen=True)
class SavedRecipe:
    """A recipe kept in the cookbook together with its image."""

    id: str
    recipe: Recipe
    image_url: Optional[str] = None
    timestamp: int = field(default_factory=get_current_timestamp)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "recipe": self.recipe.to_dict(),
            "imageUrl": self.image_url,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> SavedRecipe:
        return cls(
            id=str(data["id"]),
            recipe=Recipe.from_dict(data["recipe"]),
            image_url=data.get("imageUrl"),
            timestamp=int(data["timestamp"]),
        )


@dataclass(frozen=True)
class ShoppingItem:
    """Represents an item in the shopping list."""

    id: str
    name: str
    amount: str = ""
    checked: bool = False

    def __str__(self) -> str:
        status = "✓" if self.checked else "○"
        if not self.amount:
            return f"{status} {self.name}"
        return f"{status} {self.amount} {self.name}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "amount": self.amount,
            "checked": self.checked,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ShoppingItem:
        return cls(
            id=str(data["id"]),
            name=data["name"],
            amount=data.get("amount") or "",
            checked=bool(data.get("checked", False)),
        )

    @classmethod
    def from_ingredient(
        cls, ingredient: Ingredient, item_id: str
    ) -> ShoppingItem:
        """Create an unchecked shopping item from a recipe ingredient."""
        return cls(id=item_id, name=ingredient.item, amount=ingredient.amount)
