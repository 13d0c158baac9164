"""
API package for LittleChef.

This package contains FastAPI endpoints that turn browser intents into
state machine events and render the resulting state.
"""

from .cookbook import router as cookbook_router
from .health import router as health_router
from .navigation import router as navigation_router
from .pantry import router as pantry_router
from .shopping import router as shopping_router

__all__ = [
    "cookbook_router",
    "health_router",
    "navigation_router",
    "pantry_router",
    "shopping_router",
]
