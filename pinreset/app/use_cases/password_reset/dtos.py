"""
Password Reset Use Case DTOs (Data Transfer Objects)

Result contracts returned to callers of the reset flow.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from pinreset.domain.entities import ForgotPasswordAction


class ForgotPasswordResult(BaseModel):
    """
    Response for forgot password use cases

    The PIN itself is never part of this result; it reaches the user
    through a side channel.
    """

    action: ForgotPasswordAction
    pin_expiration_date: Optional[datetime] = None


class PinRedeemResult(BaseModel):
    """Response for redeem password reset PIN use case"""

    success: bool
    users_reset: List[str] = Field(default_factory=list)
