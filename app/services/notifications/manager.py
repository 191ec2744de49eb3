"""E-mail template manager.

Loads e-mail templates from YAML files and renders them with Mako.
Each template carries a subject, an HTML body and a plain-text fallback.
"""

from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from mako.template import Template
from pydantic import BaseModel, ConfigDict

from app.core.logging import get_logger
from app.infrastructure.mailer import MailMessage

logger = get_logger(__name__)


class EmailType(str, Enum):
    """Available e-mail templates."""

    TRACK_APPROVED = "track_approved"
    PASSWORD_OTP = "password_otp"


class EmailTemplate(BaseModel):
    """E-mail template metadata and sources."""

    model_config = ConfigDict(frozen=True)

    name: str
    version: str
    description: str
    subject: str
    html: str
    text: str = ""
    example_variables: dict[str, Any] = {}


def long_date(value: date) -> str:
    """Format a date as e.g. "Monday, October 19, 2026"."""
    return f"{value:%A, %B} {value.day}, {value.year}"


class EmailTemplateManager:
    """Manages e-mail templates with Mako rendering.

    Usage:
        >>> manager = EmailTemplateManager()
        >>> message = manager.render(
        ...     EmailType.PASSWORD_OTP,
        ...     to="listener@example.com",
        ...     name="Rami",
        ...     otp="482913",
        ...     expire_minutes=10,
        ... )
    """

    def __init__(self, templates_dir: Path | None = None):
        """Initialize template manager.

        Args:
            templates_dir: Directory containing template YAML files
                (defaults to app/services/notifications/templates/)
        """
        if templates_dir is None:
            templates_dir = Path(__file__).parent / "templates"

        self.templates_dir = templates_dir
        self._cache: dict[EmailType, EmailTemplate] = {}

    def load(self, email_type: EmailType) -> EmailTemplate:
        """Load an e-mail template from its YAML file.

        Raises:
            FileNotFoundError: If the template file doesn't exist
            ValueError: If the YAML is invalid or incomplete
        """
        if email_type in self._cache:
            return self._cache[email_type]

        yaml_file = self.templates_dir / f"{email_type.value}.yaml"
        if not yaml_file.exists():
            raise FileNotFoundError(f"E-mail template not found: {yaml_file}")

        try:
            with open(yaml_file, encoding="utf-8") as f:
                data = yaml.safe_load(f)

            template = EmailTemplate(
                name=data["name"],
                version=data["version"],
                description=data["description"],
                subject=data["subject"],
                html=data["html"],
                text=data.get("text", ""),
                example_variables=data.get("example_variables", {}),
            )
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {yaml_file}: {e}") from e
        except KeyError as e:
            raise ValueError(f"Missing required field in {yaml_file}: {e}") from e

        self._cache[email_type] = template
        logger.debug("Loaded e-mail template", type=email_type.value, version=template.version)
        return template

    def render(self, email_type: EmailType, to: str, **variables: Any) -> MailMessage:
        """Render a template into a message ready for the mailer.

        Args:
            email_type: Template to render
            to: Recipient address
            **variables: Variables injected into subject and bodies

        Returns:
            Rendered MailMessage

        Raises:
            ValueError: If rendering fails
        """
        template = self.load(email_type)
        try:
            subject = Template(template.subject).render(**variables)
            html = Template(template.html).render(**variables)
            text = Template(template.text).render(**variables) if template.text else ""
        except Exception as e:
            raise ValueError(f"Failed to render {email_type.value} e-mail: {e}") from e

        return MailMessage(to=to, subject=str(subject).strip(), html=str(html), text=str(text))

    def track_approved(
        self,
        to: str,
        user_name: str,
        song_name: str,
        channel_name: str,
        broadcast_date: date,
        time: str,
    ) -> MailMessage:
        return self.render(
            EmailType.TRACK_APPROVED,
            to=to,
            user_name=user_name,
            song_name=song_name,
            channel_name=channel_name,
            date_label=long_date(broadcast_date),
            time=time,
        )

    def password_otp(self, to: str, name: str, otp: str, expire_minutes: int) -> MailMessage:
        return self.render(
            EmailType.PASSWORD_OTP,
            to=to,
            name=name,
            otp=otp,
            expire_minutes=expire_minutes,
        )

    def clear_cache(self) -> None:
        self._cache.clear()


__all__ = [
    "EmailTemplate",
    "EmailTemplateManager",
    "EmailType",
    "long_date",
]
