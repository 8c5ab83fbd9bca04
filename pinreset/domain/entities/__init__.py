"""
PIN Reset Service Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import ForgotPasswordAction

# Export all entities
from .user import User
from .reset_record import (
    PIN_LIFETIME,
    RESET_RECORD_PREFIX,
    ResetRecord,
    generate_pin,
    normalize_pin,
    pins_match,
    reset_record_key,
)

__all__ = [
    # Enums
    "ForgotPasswordAction",
    # Entities
    "User",
    "ResetRecord",
    # Reset PIN rules
    "PIN_LIFETIME",
    "RESET_RECORD_PREFIX",
    "generate_pin",
    "normalize_pin",
    "pins_match",
    "reset_record_key",
]
