"""HTTP layer.

This package contains:
- deps: Service providers and authentication dependencies
- errors: Exception handlers producing the error envelope
- uploads: Multipart file staging
- forms: Multipart form validation
- responses: Success envelope helpers
- routes: Route modules
"""

from app.api.errors import register_exception_handlers
from app.api.routes import ROUTERS

__all__ = ["ROUTERS", "register_exception_handlers"]
