"""
ResetRecord Entity

One outstanding password reset request, persisted as a standalone record.
"""

import secrets
from datetime import UTC, datetime, timedelta
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

RESET_RECORD_PREFIX = "passwordreset"
PIN_LIFETIME = timedelta(minutes=30)
PIN_BYTES = 4
PIN_SEPARATOR = "-"


class ResetRecord(BaseModel):
    """
    ResetRecord entity - a live PIN waiting to be redeemed.

    Business Rules:
    - Stored under pin_file, one key per user (a new request overwrites the old one)
    - Expires 30 minutes after creation
    - Single-use: deleted on redemption or when found expired
    - Persisted as JSON with camelCase keys
    """

    model_config = ConfigDict(populate_by_name=True)

    expiration_date: datetime = Field(alias="expirationDate")
    pin: str
    pin_file: str = Field(alias="pinFile")
    user_name: str = Field(alias="userName")

    @field_validator("expiration_date")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def is_expired(self, now: datetime) -> bool:
        return self.expiration_date < now

    def to_bytes(self) -> bytes:
        return self.model_dump_json(by_alias=True).encode("utf-8")

    @classmethod
    def from_bytes(cls, data: bytes) -> "ResetRecord":
        return cls.model_validate_json(data)


def reset_record_key(user_id: UUID) -> str:
    """Storage key for a user's reset record"""
    return f"{RESET_RECORD_PREFIX}{user_id.hex}"


def generate_pin() -> str:
    """Render 4 secure random bytes as hyphen-joined hex pairs, e.g. 'AB-12-CD-34'"""
    return PIN_SEPARATOR.join(f"{b:02X}" for b in secrets.token_bytes(PIN_BYTES))


def normalize_pin(pin: str) -> str:
    return pin.replace(PIN_SEPARATOR, "").casefold()


def pins_match(stored: str, supplied: str) -> bool:
    return secrets.compare_digest(
        normalize_pin(stored).encode("utf-8"), normalize_pin(supplied).encode("utf-8")
    )
