"""
Start Password Reset Use Case

Issues a reset PIN for a user and stores it as a standalone record.
"""

import logging
from datetime import UTC, datetime
from typing import Callable

from pinreset.libs.result import Error, Result, Return
from pinreset.app.repositories.reset_record_storage import StorageError
from pinreset.app.services.credentials import set_transient_credential
from pinreset.app.services.unit_of_work import PersistenceError, UnitOfWork
from pinreset.domain.entities import (
    PIN_LIFETIME,
    ForgotPasswordAction,
    ResetRecord,
    User,
    generate_pin,
    reset_record_key,
)
from .dtos import ForgotPasswordResult

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(UTC)


class StartPasswordResetUseCase:
    """
    Use case for starting a PIN based password reset.

    Business Rules:
    - PIN is 4 cryptographically secure random bytes, rendered 'AB-12-CD-34'
    - PIN expires in 30 minutes
    - One record per user: a new request overwrites the previous one
    - The PIN also becomes the user's transient credential until reset completes
    - The PIN is never returned; it is delivered through a side channel
    - Trusted and untrusted networks are treated identically (PIN code challenge)
    """

    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = utc_now):
        self.uow = uow
        self.clock = clock

    async def execute(self, user: User, is_in_network: bool) -> Result[ForgotPasswordResult]:
        """
        Execute start password reset use case.

        Args:
            user: User record owned by the caller
            is_in_network: Whether the request came from a trusted network

        Returns:
            Result with ForgotPasswordResult, or Error

        Errors:
            - IO_FAILURE: Reset record could not be written
            - USER_UPDATE_FAILURE: Transient credential could not be persisted;
              the written record is left to expire
        """
        async with self.uow:
            pin = generate_pin()
            expires_at = self.clock() + PIN_LIFETIME
            key = reset_record_key(user.id)

            record = ResetRecord(
                expiration_date=expires_at,
                pin=pin,
                pin_file=key,
                user_name=user.username,
            )

            try:
                await self.uow.reset_records.write(key, record.to_bytes())
            except StorageError as exc:
                logger.error(f"Failed to write reset record {key}: {exc}")
                return Return.err(
                    Error("IO_FAILURE", "Password reset request could not be stored")
                )

            set_transient_credential(user, pin)

            try:
                await self.uow.users.update(user)
                await self.uow.commit()
            except PersistenceError as exc:
                logger.error(f"Failed to persist transient credential for {user.username}: {exc}")
                await self.uow.rollback()
                return Return.err(
                    Error("USER_UPDATE_FAILURE", "User could not be updated")
                )

            logger.info(
                f"Password reset started for {user.username} "
                f"(in_network={is_in_network}), expires {expires_at.isoformat()}"
            )

            return Return.ok(
                ForgotPasswordResult(
                    action=ForgotPasswordAction.pin_code,
                    pin_expiration_date=expires_at,
                )
            )
