"""Authentication, sessions and password reset.

Login issues an HS256 session token. Password reset is a three-step flow:
send a one-time passcode by e-mail, verify it, then set a new password once.
"""

import secrets
from dataclasses import dataclass
from datetime import UTC, datetime

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Config
from app.core.exceptions import (
    AuthenticationError,
    InputValidationError,
    MailDeliveryError,
    PermissionDeniedError,
    RecordNotFoundError,
)
from app.core.logging import get_logger
from app.core.security import (
    create_access_token,
    decode_access_token,
    generate_otp,
    hash_password,
    otp_expiry,
    verify_password,
)
from app.core.types import SessionFactory
from app.infrastructure.mailer import Mailer
from app.models.principal import Principal, Role
from app.services.identity.base import AccountService
from app.services.notifications import EmailTemplateManager

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"
DEACTIVATED = "Your account is deactivated. Please contact support."
NOT_AUTHORIZED = "Not authorized to access this route"
INVALID_OTP = "Invalid or expired OTP"
OTP_NOT_VERIFIED = (
    "OTP must be verified first. Please verify your OTP before resetting password."
)
SAME_PASSWORD = "New password must be different from current password"


@dataclass
class Session:
    """Authenticated session.

    Attributes:
        principal: Logged-in principal
        token: Signed session token
    """

    principal: Principal
    token: str


class AuthService(AccountService):
    """Login, token resolution and OTP password reset.

    Example:
        >>> auth = AuthService(session_factory, config, mailer, templates)
        >>> session = await auth.login("dj@seagulls.fm", "secret", Role.USER)
        >>> principal = await auth.principal_from_token(session.token)
    """

    def __init__(
        self,
        db_session_factory: SessionFactory,
        config: Config,
        mailer: Mailer,
        templates: EmailTemplateManager,
    ) -> None:
        super().__init__(db_session_factory, config)
        self.mailer = mailer
        self.templates = templates

    def issue_token(self, principal: Principal) -> str:
        return create_access_token(principal.id, Role(principal.role).value, self.config)

    async def login(self, email: str, password: str, *roles: Role) -> Session:
        """Check credentials and open a session.

        Args:
            email: Login e-mail
            password: Plaintext password
            *roles: Roles allowed to log in through this entry point

        Raises:
            AuthenticationError: Unknown e-mail, wrong role or wrong password
            PermissionDeniedError: If the account is deactivated
        """
        async with self.db_session_factory() as session:
            principal = await self._find_by_email(session, email)
            if principal is None or (roles and not principal.has_role(*roles)):
                raise AuthenticationError(INVALID_CREDENTIALS)
            if not principal.is_active:
                raise PermissionDeniedError(DEACTIVATED)
            if not verify_password(password, principal.password_hash):
                logger.info("Login rejected", principal_id=str(principal.id))
                raise AuthenticationError(INVALID_CREDENTIALS)

            principal.last_login = datetime.now(tz=UTC)
            await session.commit()
            logger.info("Login", principal_id=str(principal.id), role=principal.role)
            return Session(principal=principal, token=self.issue_token(principal))

    async def principal_from_token(self, token: str | None) -> Principal:
        """Resolve a session token to its principal.

        Raises:
            AuthenticationError: Missing, invalid or stale token
        """
        if not token:
            raise AuthenticationError(NOT_AUTHORIZED)
        claims = decode_access_token(token, self.config)
        if claims.role not in {role.value for role in Role}:
            raise AuthenticationError("Invalid role in token")

        async with self.db_session_factory() as session:
            principal = await session.get(Principal, claims.subject)
            if principal is None:
                raise AuthenticationError("User not found")
            return principal

    # ============================================
    # Password reset
    # ============================================

    async def _user_by_email(self, session: AsyncSession, email: str) -> Principal:
        principal = await self._find_by_email(session, email)
        if principal is None or not principal.has_role(Role.USER):
            raise RecordNotFoundError("User", email, message="User not found")
        return principal

    async def send_otp(self, email: str) -> None:
        """E-mail a fresh passcode to a user.

        Raises:
            RecordNotFoundError: If no user has this e-mail
            MailDeliveryError: If the passcode e-mail cannot be sent
        """
        async with self.db_session_factory() as session:
            user = await self._user_by_email(session, email)
            otp = generate_otp(self.config.otp_length)
            user.otp = otp
            user.otp_expires_at = otp_expiry(self.config.otp_expire_minutes)
            user.otp_verified = False
            await session.commit()

            message = self.templates.password_otp(
                to=user.email,
                name=user.name,
                otp=otp,
                expire_minutes=self.config.otp_expire_minutes,
            )
            try:
                await self.mailer.send(message)
            except MailDeliveryError as e:
                logger.error("OTP e-mail failed", user_id=str(user.id), error=e.message)
                error = MailDeliveryError("Error sending OTP")
                error.details = {"error": e.message}
                raise error from e
            logger.info("OTP sent", user_id=str(user.id))

    async def verify_otp(self, email: str, otp: str, now: datetime | None = None) -> None:
        """Mark a user's passcode as verified, allowing one password reset.

        Raises:
            RecordNotFoundError: If no user has this e-mail
            AuthenticationError: Wrong or expired passcode
        """
        now = now or datetime.now(tz=UTC)
        async with self.db_session_factory() as session:
            user = await self._user_by_email(session, email)
            valid = (
                user.otp is not None
                and user.otp_expires_at is not None
                and secrets.compare_digest(user.otp, otp)
                and user.otp_expires_at >= now
            )
            if not valid:
                raise AuthenticationError(INVALID_OTP)
            user.otp_verified = True
            await session.commit()
            logger.info("OTP verified", user_id=str(user.id))

    async def reset_password(self, email: str, new_password: str) -> None:
        """Set a new password after a verified passcode, then forget the passcode.

        Raises:
            RecordNotFoundError: If no user has this e-mail
            AuthenticationError: If no passcode was verified
            InputValidationError: If the new password equals the current one
        """
        async with self.db_session_factory() as session:
            user = await self._user_by_email(session, email)
            if not user.otp_verified:
                raise AuthenticationError(OTP_NOT_VERIFIED)
            if verify_password(new_password, user.password_hash):
                raise InputValidationError(SAME_PASSWORD, field="newPassword")

            user.password_hash = hash_password(new_password)
            user.clear_otp()
            await session.commit()
            logger.info("Password reset", user_id=str(user.id))


__all__ = [
    "AuthService",
    "DEACTIVATED",
    "INVALID_CREDENTIALS",
    "INVALID_OTP",
    "NOT_AUTHORIZED",
    "OTP_NOT_VERIFIED",
    "SAME_PASSWORD",
    "Session",
]
