"""
Forgot Password Use Case

Entry point of the reset flow: resolves the entered username and decides
whether a PIN may be issued.
"""

import logging
from datetime import datetime
from typing import Callable

from pinreset.libs.result import Result, Return
from pinreset.app.services.unit_of_work import UnitOfWork
from pinreset.domain.entities import ForgotPasswordAction
from .dtos import ForgotPasswordResult
from .start_password_reset_use_case import StartPasswordResetUseCase, utc_now

logger = logging.getLogger(__name__)


class ForgotPasswordUseCase:
    """
    Use case for a forgot-password request by username.

    Business Rules:
    - Unknown usernames get the same answer as refused requests
      (InNetworkRequired), so usernames cannot be enumerated
    - When require_in_network is set, only trusted networks get a PIN
    - Otherwise delegates to StartPasswordResetUseCase
    """

    def __init__(
        self,
        uow: UnitOfWork,
        require_in_network: bool = True,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.uow = uow
        self.require_in_network = require_in_network
        self.clock = clock

    async def execute(self, entered_username: str, is_in_network: bool) -> Result[ForgotPasswordResult]:
        """
        Execute forgot password use case.

        Args:
            entered_username: Username typed by the requester
            is_in_network: Whether the request came from a trusted network

        Returns:
            Result with ForgotPasswordResult, or Error from StartPasswordResetUseCase
        """
        async with self.uow:
            user = None
            if entered_username and entered_username.strip():
                user = await self.uow.users.get_by_name(entered_username.strip())

            if user is None or (self.require_in_network and not is_in_network):
                logger.info(f"Forgot password refused (in_network={is_in_network})")
                return Return.ok(
                    ForgotPasswordResult(action=ForgotPasswordAction.in_network_required)
                )

            start_reset = StartPasswordResetUseCase(self.uow, clock=self.clock)
            return await start_reset.execute(user, is_in_network)
