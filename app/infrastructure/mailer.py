"""SMTP mail delivery.

This module provides a small async mailer built on aiosmtplib. Messages are
HTML ``EmailMessage`` objects with a plain-text fallback.
"""

from dataclasses import dataclass
from email.message import EmailMessage

import aiosmtplib

from app.core.exceptions import MailDeliveryError
from app.core.logging import get_logger
from app.core.types import BestEffortResult

logger = get_logger(__name__)


@dataclass(frozen=True)
class MailMessage:
    """Rendered e-mail.

    Attributes:
        to: Recipient address
        subject: Subject line
        html: HTML body
        text: Plain-text fallback
    """

    to: str
    subject: str
    html: str
    text: str = ""


class Mailer:
    """Async SMTP mailer.

    Example:
        >>> mailer = Mailer("smtp.gmail.com", 465, "user", "secret", '"SeagullsFM" <a@b.c>')
        >>> await mailer.send(MailMessage(to="x@y.z", subject="Hi", html="<p>Hi</p>"))
    """

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        sender: str,
        use_tls: bool = True,
        timeout: float = 30.0,
    ) -> None:
        """Initialize mailer.

        Args:
            host: SMTP server host
            port: SMTP server port
            username: Login user
            password: Login password
            sender: Formatted From header
            use_tls: Implicit TLS (port 465); STARTTLS is used otherwise
            timeout: Connection timeout in seconds
        """
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender = sender
        self.use_tls = use_tls
        self.timeout = timeout

    def build(self, message: MailMessage) -> EmailMessage:
        """Convert a MailMessage into a MIME message."""
        email = EmailMessage()
        email["From"] = self.sender
        email["To"] = message.to
        email["Subject"] = message.subject
        email.set_content(message.text or message.subject)
        email.add_alternative(message.html, subtype="html")
        return email

    async def send(self, message: MailMessage) -> None:
        """Send a message.

        Raises:
            MailDeliveryError: If the SMTP server cannot be reached or refuses it
        """
        try:
            await aiosmtplib.send(
                self.build(message),
                hostname=self.host,
                port=self.port,
                username=self.username or None,
                password=self.password or None,
                use_tls=self.use_tls,
                start_tls=not self.use_tls,
                timeout=self.timeout,
            )
        except (aiosmtplib.SMTPException, OSError) as e:
            raise MailDeliveryError(
                f"Error sending email: {e}",
                context={"to": message.to, "subject": message.subject},
            ) from e
        logger.info("Email sent", to=message.to, subject=message.subject)

    async def send_quietly(self, message: MailMessage) -> BestEffortResult:
        """Send a message, logging instead of raising on failure."""
        try:
            await self.send(message)
        except MailDeliveryError as e:
            logger.error("Email delivery failed", to=message.to, error=str(e))
            return BestEffortResult.failure(e)
        return BestEffortResult.success()


__all__ = [
    "MailMessage",
    "Mailer",
]
