"""
Redeem Password Reset PIN Use Case

Matches a PIN against outstanding reset records and resets the password
of every account it belongs to.
"""

import logging
from datetime import datetime
from typing import Callable, List, Optional

from pinreset.libs.result import Error, Result, Return
from pinreset.app.repositories.reset_record_storage import StorageError
from pinreset.app.services.credentials import change_password
from pinreset.app.services.unit_of_work import PersistenceError, UnitOfWork
from pinreset.domain.entities import RESET_RECORD_PREFIX, ResetRecord, pins_match
from .dtos import PinRedeemResult
from .start_password_reset_use_case import utc_now

logger = logging.getLogger(__name__)


class RedeemPasswordResetPinUseCase:
    """
    Use case for redeeming a password reset PIN.

    Business Rules:
    - Every record is scanned on each attempt; expired ones are purged as found
    - PINs match ignoring '-' separators and letter case
    - A record is claimed (deleted) before the password changes, so two
      concurrent redemptions cannot both use it
    - The password becomes the PIN exactly as the user typed it
    - If the user update fails the claimed record is written back, unless
      a newer request for the same user has taken its place
    - Expired and unknown PINs fail identically (NO_MATCHING_REQUEST)
    - One malformed record never aborts the scan
    """

    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = utc_now):
        self.uow = uow
        self.clock = clock

    async def _load(self, key: str) -> Optional[ResetRecord]:
        try:
            data = await self.uow.reset_records.read(key)
        except StorageError as exc:
            logger.warning(f"Skipping unreadable reset record {key}: {exc}")
            return None

        if data is None:
            # Removed by a concurrent redemption between enumerate and read
            return None

        try:
            return ResetRecord.from_bytes(data)
        except ValueError as exc:
            # pydantic ValidationError and UnicodeDecodeError are both ValueErrors
            logger.warning(f"Skipping malformed reset record {key}: {type(exc).__name__}")
            return None

    async def execute(self, pin: str) -> Result[PinRedeemResult]:
        """
        Execute redeem password reset PIN use case.

        Args:
            pin: PIN as entered by the user, separators and case not normalized

        Returns:
            Result with PinRedeemResult listing the reset usernames, or Error

        Errors:
            - IO_FAILURE: Record storage could not be listed or modified
            - USER_NOT_FOUND: A matching record references a missing user
            - USER_UPDATE_FAILURE: Password change could not be persisted
            - NO_MATCHING_REQUEST: No live record matches the PIN
        """
        async with self.uow:
            users_reset: List[str] = []

            try:
                keys = await self.uow.reset_records.enumerate(RESET_RECORD_PREFIX)
            except StorageError as exc:
                logger.error(f"Failed to list reset records: {exc}")
                return Return.err(
                    Error("IO_FAILURE", "Password reset requests could not be read")
                )

            for key in keys:
                record = await self._load(key)
                if record is None:
                    continue

                try:
                    if record.is_expired(self.clock()):
                        await self.uow.reset_records.delete(key)
                        logger.info(f"Purged expired reset record {key}")
                        continue

                    if not pins_match(record.pin, pin):
                        continue

                    user = await self.uow.users.get_by_name(record.user_name)
                    if user is None:
                        return Return.err(
                            Error(
                                "USER_NOT_FOUND",
                                f"User with a username of {record.user_name} not found",
                            )
                        )

                    claimed = await self.uow.reset_records.delete(key)
                except StorageError as exc:
                    logger.error(f"Failed to update reset record {key}: {exc}")
                    return Return.err(
                        Error("IO_FAILURE", "Password reset requests could not be updated")
                    )

                if not claimed:
                    # Another redemption consumed this record first
                    continue

                change_password(user, pin)

                try:
                    await self.uow.users.update(user)
                    await self.uow.commit()
                except PersistenceError as exc:
                    logger.error(f"Failed to persist password reset for {user.username}: {exc}")
                    await self.uow.rollback()
                    await self._restore(key, record)
                    return Return.err(
                        Error("USER_UPDATE_FAILURE", "User could not be updated")
                    )

                logger.info(f"Password reset PIN redeemed for {user.username}")
                users_reset.append(user.username)

            if not users_reset:
                return Return.err(
                    Error(
                        "NO_MATCHING_REQUEST",
                        "No password reset request matches the given PIN",
                    )
                )

            return Return.ok(PinRedeemResult(success=True, users_reset=users_reset))

    async def _restore(self, key: str, record: ResetRecord) -> None:
        try:
            restored = await self.uow.reset_records.create(key, record.to_bytes())
        except StorageError as exc:
            logger.error(f"Failed to restore reset record {key}, PIN is lost: {exc}")
            return

        if not restored:
            logger.info(f"Not restoring reset record {key}, a newer request replaced it")
