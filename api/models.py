"""
Pydantic models for API validation.
"""

from pydantic import BaseModel, Field, field_validator

from domain.state import TIME_OPTIONS, View


class IngredientCreate(BaseModel):
    """Model for adding a pantry ingredient."""

    name: str = Field(
        ..., max_length=100, description="Ingredient name as typed"
    )


class CookingTimeUpdate(BaseModel):
    """Model for selecting a cooking-time bucket."""

    cooking_time: str = Field(..., description="One of the time options")

    @field_validator("cooking_time")
    @classmethod
    def validate_cooking_time(cls, v):
        """Validate the bucket against the fixed options."""
        if v not in TIME_OPTIONS:
            raise ValueError(
                f"Invalid cooking time. Must be one of: "
                f"{', '.join(TIME_OPTIONS)}"
            )
        return v


class ShoppingItemCreate(BaseModel):
    """Model for manually adding a shopping item."""

    name: str = Field(..., max_length=200, description="Item name")


class ViewUpdate(BaseModel):
    """Model for switching the active view."""

    view: View = Field(..., description="home, saved or shopping")
