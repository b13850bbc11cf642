"""
Session gate schemas.
"""

from enum import Enum

from invoicetree.schemas.base import BaseSchema
from invoicetree.schemas.auth import UserResponse


class SessionState(str, Enum):
    """Where an incoming user should be routed."""
    UNAUTHENTICATED = "unauthenticated"
    NEEDS_ONBOARDING = "needs_onboarding"
    READY = "ready"


class SessionResponse(BaseSchema):
    """Resolved session gate."""

    state: SessionState
    user: UserResponse | None = None
