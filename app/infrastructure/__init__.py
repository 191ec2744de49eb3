"""Infrastructure layer components.

This module provides clients for external systems: the shared HTTP client,
the hosted media service and SMTP mail delivery.
"""

from app.infrastructure.http_client import HTTPClient
from app.infrastructure.mailer import Mailer, MailMessage
from app.infrastructure.media import MediaAsset, MediaClient

__all__ = [
    "HTTPClient",
    "MailMessage",
    "Mailer",
    "MediaAsset",
    "MediaClient",
]
