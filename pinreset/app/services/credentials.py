"""
User credential operations

Password and transient credential handling for the user directory.
All secrets are stored as bcrypt hashes (cost factor 12).
"""

import bcrypt

from pinreset.domain.entities import User

BCRYPT_ROUNDS = 12


def hash_secret(secret: str) -> str:
    return bcrypt.hashpw(secret.encode(), bcrypt.gensalt(BCRYPT_ROUNDS)).decode()


def set_transient_credential(user: User, value: str) -> None:
    """
    Set the one-time login secret issued alongside a reset PIN.

    In-memory only; the caller persists the user.
    """
    user.easy_password_hash = hash_secret(value)


def change_password(user: User, new_password: str) -> None:
    """
    Replace the account password and drop any transient credential.

    In-memory only; the caller persists the user.
    """
    user.password_hash = hash_secret(new_password)
    user.easy_password_hash = None


def check_password(user: User, password: str) -> bool:
    return bcrypt.checkpw(password.encode(), user.password_hash.encode())


def check_transient_credential(user: User, value: str) -> bool:
    if not user.easy_password_hash:
        return False
    return bcrypt.checkpw(value.encode(), user.easy_password_hash.encode())


def burn_constant_time() -> None:
    """Hash a dummy secret so unknown users cost as much as known ones"""
    bcrypt.checkpw(b"dummy_password", bcrypt.gensalt(BCRYPT_ROUNDS))
