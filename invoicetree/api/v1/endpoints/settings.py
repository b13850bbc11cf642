"""
Settings endpoints.

Preferences are validated and echoed back; they are not stored.
"""

import logging

from fastapi import APIRouter

from invoicetree.api.deps import CurrentUser
from invoicetree.schemas.preferences import Preferences


logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=Preferences,
    summary="Default preferences",
)
async def get_preferences(
    current_user: CurrentUser,
) -> Preferences:
    """Return the default preferences."""
    return Preferences()


@router.put(
    "",
    response_model=Preferences,
    summary="Save preferences",
    description="Validates the preferences; nothing is persisted",
)
async def save_preferences(
    data: Preferences,
    current_user: CurrentUser,
) -> Preferences:
    """Validate and echo the submitted preferences."""
    logger.info(f"Preferences submitted by user {current_user.id} (not persisted)")
    return data
