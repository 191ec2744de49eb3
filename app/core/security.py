"""Password hashing, session tokens and one-time passcodes.

Passwords are hashed with bcrypt. Sessions are HS256 JWTs carrying the
principal id and role; the API layer transports them in an HTTP-only cookie.
"""

import secrets
import uuid
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import bcrypt
import jwt

from app.core.config import Config, get_config
from app.core.exceptions import AuthenticationError


@dataclass(frozen=True)
class TokenClaims:
    """Decoded session token.

    Attributes:
        subject: Principal id
        role: Role claim at issue time
        expires_at: Expiry instant
    """

    subject: uuid.UUID
    role: str
    expires_at: datetime


def hash_password(password: str) -> str:
    """Hash a plaintext password with a fresh bcrypt salt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str | None) -> bool:
    """Check a plaintext password against a stored bcrypt hash."""
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


def create_access_token(
    subject: uuid.UUID,
    role: str,
    config: Config | None = None,
    now: datetime | None = None,
) -> str:
    """Issue a signed session token.

    Args:
        subject: Principal id
        role: Principal role
        config: Settings holding the signing key and lifetime
        now: Issue time (defaults to the current UTC time)

    Returns:
        Encoded JWT
    """
    config = config or get_config()
    issued_at = now or datetime.now(tz=UTC)
    payload = {
        "sub": str(subject),
        "role": role,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=config.access_token_expire_minutes),
    }
    return jwt.encode(payload, config.jwt_secret_key, algorithm=config.jwt_algorithm)


def decode_access_token(token: str, config: Config | None = None) -> TokenClaims:
    """Verify and decode a session token.

    Raises:
        AuthenticationError: If the token is expired, tampered with or malformed
    """
    config = config or get_config()
    try:
        payload = jwt.decode(
            token,
            config.jwt_secret_key,
            algorithms=[config.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
        subject = uuid.UUID(payload["sub"])
    except (jwt.PyJWTError, ValueError) as e:
        raise AuthenticationError("Not authorized to access this route") from e

    return TokenClaims(
        subject=subject,
        role=str(payload.get("role", "")),
        expires_at=datetime.fromtimestamp(payload["exp"], tz=UTC),
    )


def generate_otp(length: int = 6) -> str:
    """Generate a numeric one-time passcode."""
    return "".join(secrets.choice("0123456789") for _ in range(length))


def otp_expiry(minutes: int, now: datetime | None = None) -> datetime:
    """Expiry instant for an OTP issued ``now``."""
    return (now or datetime.now(tz=UTC)) + timedelta(minutes=minutes)


__all__ = [
    "TokenClaims",
    "create_access_token",
    "decode_access_token",
    "generate_otp",
    "hash_password",
    "otp_expiry",
    "verify_password",
]
