"""
Login Use Case

Authenticates a user with the account password or the transient
credential issued with a reset PIN.
"""

from pinreset.libs.result import Error, Result, Return
from pinreset.app.services.credentials import (
    burn_constant_time,
    check_password,
    check_transient_credential,
)
from pinreset.app.services.unit_of_work import UnitOfWork
from pinreset.api.utils.jwt import generate_jwt
from .dtos import LoginResponse


class LoginUseCase:
    """
    Use case for user login and JWT issuance.

    Business Rules:
    - Constant-time password comparison to prevent timing attacks
    - The account password is tried first, then the transient credential
    - The transient credential stops working once the PIN is redeemed
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, username: str, password: str) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            username: Account name
            password: Plain text password or reset PIN

        Returns:
            Result with LoginResponse containing an access token, or Error
        """
        async with self.uow:
            user = await self.uow.users.get_by_name(username)

            # Always perform hash check even if user not found
            if user is None:
                burn_constant_time()
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid username or password")
                )

            used_transient_credential = False
            if not check_password(user, password):
                if not check_transient_credential(user, password):
                    return Return.err(
                        Error("INVALID_CREDENTIALS", "Invalid username or password")
                    )
                used_transient_credential = True

            return Return.ok(
                LoginResponse(
                    access_token=generate_jwt(user.id, user.username),
                    user_id=str(user.id),
                    username=user.username,
                    used_transient_credential=used_transient_credential,
                )
            )
