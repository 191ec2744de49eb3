"""Identity services.

This module provides account and session services:
- AuthService: Login, token resolution and OTP password reset
- UserService: Listener registration, profile and moderation
- StaffService: Admin and superadmin accounts
"""

from app.services.identity.auth import AuthService, Session
from app.services.identity.staff import StaffService
from app.services.identity.users import UserService

__all__ = [
    "AuthService",
    "Session",
    "StaffService",
    "UserService",
]
