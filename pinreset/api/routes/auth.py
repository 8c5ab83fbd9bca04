from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, Field, field_validator

from pinreset.api.error import ClientError, ServerError
from pinreset.api.utils.network import is_in_network
from pinreset.app.services.unit_of_work import UnitOfWork
from pinreset.app.use_cases.auth import LoginResponse, LoginUseCase
from pinreset.app.use_cases.password_reset import (
    ForgotPasswordResult,
    ForgotPasswordUseCase,
    PinRedeemResult,
    RedeemPasswordResetPinUseCase,
)
from pinreset.depends import get_config, get_unit_of_work
from pinreset.domain.entities import normalize_pin

router = APIRouter(prefix="/auth", tags=["Authentication"])

MAX_PIN_LENGTH = 64


class ForgotPasswordRequest(BaseModel):
    """
    Forgot password HTTP request payload

    Validates incoming forgot password request.
    """

    entered_username: str = Field(..., max_length=255, description="Username entered by the requester")


@router.post("/forgot-password", status_code=status.HTTP_200_OK, response_model=ForgotPasswordResult)
async def forgot_password(
    payload: ForgotPasswordRequest,
    request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
    config=Depends(get_config),
):
    """
    Forgot Password

    Issues a reset PIN valid for 30 minutes. The PIN is not part of the
    response; it is delivered out of band.

    Security:
        - No username enumeration (unknown users get InNetworkRequired)
        - Only trusted networks get a PIN unless PASSWORD_RESET_REQUIRE_IN_NETWORK is off

    Raises:
        - 500 Internal Server Error: Record storage or user update failed
    """
    client_host = request.client.host if request.client else None
    in_network = is_in_network(client_host, config.TRUSTED_NETWORKS)

    use_case = ForgotPasswordUseCase(
        uow, require_in_network=config.PASSWORD_RESET_REQUIRE_IN_NETWORK
    )
    result = await use_case.execute(payload.entered_username, in_network)

    # Handle errors
    if result.is_err():
        error = result.error
        raise ServerError(error)

    # Return Pydantic model directly (FastAPI auto-serializes)
    return result.value


class RedeemPinRequest(BaseModel):
    """
    Redeem PIN HTTP request payload

    Separators and letter case in the PIN are ignored, so the length limit
    applies to the PIN with its separators removed.
    """

    pin: str = Field(..., min_length=1, max_length=1024, description="Password reset PIN")

    @field_validator("pin")
    @classmethod
    def check_pin_length(cls, value: str) -> str:
        significant = len(normalize_pin(value))
        if significant == 0:
            raise ValueError("PIN must contain at least one character besides separators")
        if significant > MAX_PIN_LENGTH:
            raise ValueError(f"PIN must be at most {MAX_PIN_LENGTH} characters without separators")
        return value


@router.post("/forgot-password/pin", status_code=status.HTTP_200_OK, response_model=PinRedeemResult)
async def redeem_pin(payload: RedeemPinRequest, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Redeem Password Reset PIN

    Resets the password of every account whose live record matches the PIN.
    The new password is the PIN itself.

    Raises:
        - 404 Not Found: PIN incorrect or expired
        - 500 Internal Server Error: Storage failure, missing user or user update failure
    """
    use_case = RedeemPasswordResetPinUseCase(uow)
    result = await use_case.execute(payload.pin)

    # Handle errors
    if result.is_err():
        error = result.error
        if error.code == "NO_MATCHING_REQUEST":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    # Return Pydantic model directly (FastAPI auto-serializes)
    return result.value


class LoginRequest(BaseModel):
    """
    Login HTTP request payload

    The password may be the account password or an outstanding reset PIN.
    """

    username: str = Field(..., description="Username")
    password: str = Field(..., description="Password or reset PIN")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(payload: LoginRequest, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    User Login

    Raises:
        - 401 Unauthorized: Invalid credentials
        - 500 Internal Server Error: Server error
    """
    use_case = LoginUseCase(uow)
    result = await use_case.execute(payload.username, payload.password)

    # Handle errors
    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    return result.value
