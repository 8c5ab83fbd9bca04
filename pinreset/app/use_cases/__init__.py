"""
Use Cases

Organized into domain folders:
- auth/: Authentication flows
- password_reset/: PIN based password reset

Import from subdirectories for better organization.
"""

from .auth import LoginUseCase
from .password_reset import (
    ForgotPasswordUseCase,
    StartPasswordResetUseCase,
    RedeemPasswordResetPinUseCase,
)

__all__ = [
    # Auth
    "LoginUseCase",
    # Password reset
    "ForgotPasswordUseCase",
    "StartPasswordResetUseCase",
    "RedeemPasswordResetPinUseCase",
]
