"""E-mail notifications.

Templates live as YAML files under ``templates/`` and are rendered with Mako
into MailMessage objects for the Mailer.
"""

from app.services.notifications.manager import (
    EmailTemplate,
    EmailTemplateManager,
    EmailType,
    long_date,
)

__all__ = [
    "EmailTemplate",
    "EmailTemplateManager",
    "EmailType",
    "long_date",
]
