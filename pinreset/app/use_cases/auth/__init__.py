"""
Authentication Use Cases
"""

from .login_use_case import LoginUseCase
from .dtos import LoginResponse

__all__ = [
    "LoginUseCase",
    "LoginResponse",
]
