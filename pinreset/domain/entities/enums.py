"""
PIN Reset Service Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class ForgotPasswordAction(str, Enum):
    """What the caller must do next after a forgot-password request"""

    pin_code = "pin_code"
    in_network_required = "in_network_required"
