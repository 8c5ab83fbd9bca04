"""
Authentication Use Case DTOs (Data Transfer Objects)
"""

from pydantic import BaseModel


class LoginResponse(BaseModel):
    """Response for user login use case"""

    access_token: str
    user_id: str
    username: str
    used_transient_credential: bool
