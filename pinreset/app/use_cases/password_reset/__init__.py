"""
Password Reset Use Cases

PIN based password reset flow.
"""

from .forgot_password_use_case import ForgotPasswordUseCase
from .start_password_reset_use_case import StartPasswordResetUseCase
from .redeem_password_reset_pin_use_case import RedeemPasswordResetPinUseCase
from .dtos import ForgotPasswordResult, PinRedeemResult

__all__ = [
    # Use Cases
    "ForgotPasswordUseCase",
    "StartPasswordResetUseCase",
    "RedeemPasswordResetPinUseCase",
    # DTOs - Responses
    "ForgotPasswordResult",
    "PinRedeemResult",
]
