"""
State and navigation API endpoints.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from agent.session import ChefSession
from domain.events import DismissNotice, SetView

from .dependencies import get_session
from .models import ViewUpdate
from .views import serialize_options, serialize_state

# Create router
router = APIRouter(prefix="/api/v1", tags=["state"])


@router.get(
    "/state",
    response_model=Dict[str, Any],
    summary="Current application state",
)
async def get_state(
    session: ChefSession = Depends(get_session),
) -> Dict[str, Any]:
    return serialize_state(session.state)


@router.get(
    "/options",
    response_model=Dict[str, Any],
    summary="Preference options",
)
async def get_options() -> Dict[str, Any]:
    return serialize_options()


@router.put(
    "/view",
    response_model=Dict[str, Any],
    summary="Switch view",
)
async def set_view(
    payload: ViewUpdate, session: ChefSession = Depends(get_session)
) -> Dict[str, Any]:
    await session.dispatch(SetView(payload.view))
    return serialize_state(session.state)


@router.delete(
    "/notice",
    response_model=Dict[str, Any],
    summary="Dismiss notice",
)
async def dismiss_notice(
    session: ChefSession = Depends(get_session),
) -> Dict[str, Any]:
    await session.dispatch(DismissNotice())
    return serialize_state(session.state)
