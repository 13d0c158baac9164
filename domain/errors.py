"""
Domain-level errors.
"""


class ValidationError(ValueError):
    """User input rejected locally before any request is made."""


def normalize_ingredient(raw: str) -> str:
    """Trim and lowercase a pantry entry.

    Raises:
        ValidationError: If nothing is left after trimming.
    """
    value = (raw or "").strip().lower()
    if not value:
        raise ValidationError("Ingredient name cannot be empty")
    return value


def normalize_item_name(raw: str) -> str:
    """Trim a manually entered shopping item name."""
    value = (raw or "").strip()
    if not value:
        raise ValidationError("Shopping item name cannot be empty")
    return value
