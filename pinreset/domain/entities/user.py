"""
User Entity

Represents an account whose password can be reset with a PIN.
"""

from datetime import UTC, datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel


class User(SQLModel, table=True):
    """
    User entity - an account in the user directory.

    Business Rules:
    - Username must be unique across all users
    - Password stored as bcrypt hash (cost factor 12)
    - easy_password_hash holds the transient credential issued with a
      reset PIN; it is cleared once the password is changed
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    username: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    easy_password_hash: Optional[str] = Field(default=None, max_length=60)

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(DateTime(timezone=True)),
    )
