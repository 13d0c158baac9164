"""
LittleChef agent package.

This package contains the session runtime that drives the application
state machine and its generation requests.
"""

from .session import ChefSession

__all__ = ["ChefSession"]
