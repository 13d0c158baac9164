"""
Shared FastAPI dependencies.
"""

from typing import Optional

from fastapi import HTTPException

from agent.session import ChefSession

# Global session instance, installed by the application lifespan
_session: Optional[ChefSession] = None


def set_session(session: Optional[ChefSession]) -> None:
    """Install (or remove) the process-wide session."""
    global _session
    _session = session


def get_session() -> ChefSession:
    """Get the process-wide session."""
    if _session is None:
        raise HTTPException(status_code=503, detail="Session not initialized")
    return _session
